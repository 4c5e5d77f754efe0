# situation_game/routers/custom_themes.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..ai.genai_client import GenerationClient, get_generation_client
from ..ai.scenario_author import ScenarioAuthor
from ..schemas.custom_theme import CustomThemeCreate, CustomThemeSummary, AuthoringResult
from ..services import custom_theme_service

router = APIRouter(prefix="/api/custom-themes", tags=["custom-themes"])


# 문제 상황 설명 → 시나리오 10개 + 테마 이름 생성 후 저장
@router.post("", response_model=AuthoringResult)
def create_custom_theme(
    body: CustomThemeCreate,
    db: Session = Depends(get_db),
    generator: GenerationClient = Depends(get_generation_client),
):
    return custom_theme_service.create_custom_theme(db, ScenarioAuthor(generator), body.problemDescription.strip())


# 비밀 미션 목록 (최신순, 시나리오 개수 포함)
@router.get("", response_model=list[CustomThemeSummary])
def list_custom_themes(db: Session = Depends(get_db)):
    return custom_theme_service.list_custom_themes(db)
