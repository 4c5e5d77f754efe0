# situation_game/routers/games.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.common import Level
from ..schemas.scenario import ScenarioSetResponse, ThemeInfo
from ..services import scenario_loader, scenario_service, literacy_service
from ..services.seed_catalog import MAIN_THEMES
from ..services.session_service import get_user_session
from ..services.settings_store import SettingsStore, get_settings_store

router = APIRouter(prefix="/api", tags=["games"])

SECRET_MISSION_ROUTE = "/secret-mission"


@router.get("/themes", response_model=list[ThemeInfo])
def list_themes(db: Session = Depends(get_db)):
    return [
        t.model_copy(update={"scenario_count": scenario_service.count_scenarios(db, "main", t.theme)})
        for t in MAIN_THEMES
    ]


# 메인 테마 게임
@router.get("/games/{theme}", response_model=ScenarioSetResponse)
def main_game(
    theme: str,
    level: Level | None = None,
    db: Session = Depends(get_db),
    user_session: str = Depends(get_user_session),
    store: SettingsStore = Depends(get_settings_store),
):
    level = level or literacy_service.current_level(store, user_session)
    scenarios = scenario_loader.load(db, theme, "main", level)
    return ScenarioSetResponse(theme=theme, category="main", level=level, scenarios=scenarios)


# 비밀 미션(사용자 생성) 게임. 경로 변수는 프레임워크가 퍼센트 디코딩해서 넘겨준다.
@router.get("/custom-games/{theme_name}", response_model=ScenarioSetResponse)
def custom_game(
    theme_name: str,
    level: Level | None = None,
    db: Session = Depends(get_db),
    user_session: str = Depends(get_user_session),
    store: SettingsStore = Depends(get_settings_store),
):
    level = level or literacy_service.current_level(store, user_session)
    scenarios = scenario_loader.load(db, theme_name, "custom", level)
    if not scenarios:
        return ScenarioSetResponse(
            theme=theme_name,
            category="custom",
            level=level,
            scenarios=[],
            message="이 미션에는 아직 문제가 없어요.",
            exit=SECRET_MISSION_ROUTE,
        )
    return ScenarioSetResponse(theme=theme_name, category="custom", level=level, scenarios=scenarios)
