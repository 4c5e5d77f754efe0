# situation_game/routers/literacy.py
from fastapi import APIRouter, Depends

from ..ai.genai_client import GenerationClient, get_generation_client
from ..ai.scenario_author import ScenarioAuthor
from ..schemas.literacy import (
    LiteracyQuizResponse,
    PretestSubmit,
    PretestResult,
    SettingsOut,
    DifficultySelect,
    MainMenuGate,
)
from ..services import literacy_service
from ..services.session_service import get_user_session
from ..services.settings_store import SettingsStore, SessionCache, get_settings_store, get_session_cache

router = APIRouter(prefix="/api", tags=["literacy"])


# 사전 테스트 문항 (세션 캐시 → 생성 서비스 → 기본 문항)
@router.get("/literacy/questions", response_model=LiteracyQuizResponse)
def literacy_questions(
    user_session: str = Depends(get_user_session),
    cache: SessionCache = Depends(get_session_cache),
    generator: GenerationClient = Depends(get_generation_client),
):
    return literacy_service.load_questions(cache, user_session, ScenarioAuthor(generator))


# 채점 후 레벨 저장
@router.post("/literacy/result", response_model=PretestResult)
def literacy_result(
    body: PretestSubmit,
    user_session: str = Depends(get_user_session),
    store: SettingsStore = Depends(get_settings_store),
    cache: SessionCache = Depends(get_session_cache),
):
    return literacy_service.submit_pretest(store, cache, user_session, body.answers, body.scheme)


@router.get("/settings", response_model=SettingsOut)
def read_settings(
    user_session: str = Depends(get_user_session),
    store: SettingsStore = Depends(get_settings_store),
):
    return literacy_service.get_settings(store, user_session)


# 난이도 직접 선택 (분류기 거치지 않음)
@router.put("/settings/difficulty", response_model=SettingsOut)
def select_difficulty(
    body: DifficultySelect,
    user_session: str = Depends(get_user_session),
    store: SettingsStore = Depends(get_settings_store),
):
    return literacy_service.select_difficulty(store, user_session, body.level)


@router.get("/main-menu", response_model=MainMenuGate)
def main_menu(
    user_session: str = Depends(get_user_session),
    store: SettingsStore = Depends(get_settings_store),
):
    return literacy_service.main_menu_gate(store, user_session)
