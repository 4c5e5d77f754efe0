from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..ai.genai_client import GenerationClient, get_generation_client
from ..ai.scenario_author import ScenarioAuthor
from ..ai.difficulty_adjuster import DifficultyAdjuster
from ..schemas.scenario import AdjustRequest, AdjustResponse
from ..schemas.custom_theme import AuthoringResult
from ..services import custom_theme_service

router = APIRouter(prefix="/api/scenarios", tags=["scenarios"])

# 1. 생성 서비스로 난이도 조정 (바뀐 문장은 DB에 덮어쓴다)
@router.post("/adjust-difficulty", response_model=AdjustResponse)
def adjust_difficulty(
    body: AdjustRequest,
    db: Session = Depends(get_db),
    generator: GenerationClient = Depends(get_generation_client),
):
    adjusted = DifficultyAdjuster(generator).adjust(db, body.scenarios, body.difficulty)
    return AdjustResponse(adjusted_scenarios=adjusted, count=len(adjusted), difficulty=body.difficulty)

# 2. 메인 테마 시나리오 20개 새로 만들기 (기존 메인 시나리오는 삭제)
@router.post("/main/{theme}/generate", response_model=AuthoringResult)
def regenerate_main(
    theme: str,
    db: Session = Depends(get_db),
    generator: GenerationClient = Depends(get_generation_client),
):
    return custom_theme_service.regenerate_main_theme(db, ScenarioAuthor(generator), theme)
