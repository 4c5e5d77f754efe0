# situation_game/services/scenario_loader.py
import logging
import random

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from ..config import settings
from ..errors import NotFoundError, ScenarioLoadError
from ..schemas.scenario import ScenarioOut, ScenarioOptionOut
from ..ai.difficulty_rules import rewrite_scenario
from . import scenario_service
from .seed_catalog import MAIN_THEME_KEYS

log = logging.getLogger("loader")


def _to_out(row) -> ScenarioOut:
    options = sorted(
        (ScenarioOptionOut.model_validate(o) for o in row.options),
        key=lambda o: o.option_order,
    )
    return ScenarioOut(
        id=row.id,
        title=row.title,
        situation=row.situation,
        category=row.category,
        theme=row.theme,
        options=options,
    )


def load(
    db: Session,
    theme: str,
    category: str,
    level: str,
    rng: random.Random | None = None,
) -> list[ScenarioOut]:
    """
    (category, theme) 시나리오를 읽어 선택지 정렬 → 순서 섞기 → 난이도 변환.
    main 테마는 카탈로그에 있는 것만 받고, 비어 있으면 기본 시나리오를 넣고 한 번만 다시 읽는다.
    저장소 오류는 부분 결과 없이 ScenarioLoadError 로 끝난다.
    """
    if category == "main" and theme not in MAIN_THEME_KEYS:
        # 카탈로그 밖 테마로는 기본 시나리오를 만들지 않는다
        raise NotFoundError(f"theme {theme}", exit_to="/main-game")
    rng = rng or random.Random()
    limit = settings.scenario_load_limit
    try:
        rows = scenario_service.get_scenarios(db, category, theme, limit)
        if not rows and category == "main":
            log.info("[LOADER] theme=%s 비어 있음, 기본 시나리오 생성", theme)
            scenario_service.seed_theme(db, theme)
            rows = scenario_service.get_scenarios(db, category, theme, limit)
        scenarios = [_to_out(r) for r in rows]
    except SQLAlchemyError as e:
        db.rollback()
        log.error("[LOADER] category=%s theme=%s 로드 실패: %s", category, theme, e)
        raise ScenarioLoadError(str(e)) from e

    rng.shuffle(scenarios)
    return [rewrite_scenario(s, level) for s in scenarios]
