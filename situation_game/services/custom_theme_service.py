# situation_game/services/custom_theme_service.py
import logging

from sqlalchemy.orm import Session
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from ..errors import StorageError, NotFoundError
from ..models.scenario import Scenario
from ..models.custom_theme import CustomTheme
from ..schemas.custom_theme import AuthoringResult, SavedScenario, CustomThemeSummary
from ..ai.scenario_author import ScenarioAuthor
from . import scenario_service
from .seed_catalog import MAIN_THEME_KEYS

log = logging.getLogger("authoring")


def _save_batch(db: Session, items, category: str, theme: str) -> list[SavedScenario]:
    """한 건씩 순서대로 저장. 중간 실패는 건너뛰고 앞에서 저장된 건 그대로 둔다."""
    saved: list[SavedScenario] = []
    for i, item in enumerate(items):
        try:
            row = scenario_service.create_scenario_with_options(db, item, category, theme)
        except SQLAlchemyError as e:
            db.rollback()
            log.warning("[AUTHORING] %s/%s %d번 저장 실패: %s", category, theme, i, e)
            continue
        saved.append(SavedScenario.model_validate(row))
    return saved


def create_custom_theme(db: Session, author: ScenarioAuthor, problem_description: str) -> AuthoringResult:
    # 생성 서비스 실패는 여기서 그대로 올려보낸다 (중단 후 안내)
    items = author.generate(problem_description)
    theme_name = author.name_theme(problem_description)

    try:
        db.add(CustomTheme(theme_name=theme_name, description=problem_description))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        log.error("[AUTHORING] 테마 저장 실패: %s", e)
        raise StorageError(str(e)) from e

    saved = _save_batch(db, items, "custom", theme_name)
    log.info("[AUTHORING] theme=%r generated=%d saved=%d", theme_name, len(items), len(saved))
    return AuthoringResult(theme=theme_name, scenarios=saved, count=len(saved))


def list_custom_themes(db: Session) -> list[CustomThemeSummary]:
    # scenarios.theme 문자열로 개수를 센다 (FK 아님)
    counts = dict(
        db.query(Scenario.theme, func.count(Scenario.id))
          .filter(Scenario.category == "custom")
          .group_by(Scenario.theme)
          .all()
    )
    themes = db.query(CustomTheme).order_by(CustomTheme.created_at.desc(), CustomTheme.id.desc()).all()
    return [
        CustomThemeSummary(
            id=t.id,
            theme_name=t.theme_name,
            description=t.description,
            created_at=t.created_at,
            scenario_count=counts.get(t.theme_name, 0),
        )
        for t in themes
    ]


def regenerate_main_theme(db: Session, author: ScenarioAuthor, theme: str) -> AuthoringResult:
    if theme not in MAIN_THEME_KEYS:
        raise NotFoundError(f"theme {theme}")
    items = author.generate_main(theme)

    try:
        removed = scenario_service.delete_scenarios(db, "main", theme)
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(str(e)) from e

    saved = _save_batch(db, items, "main", theme)
    log.info("[AUTHORING] main theme=%s removed=%d saved=%d", theme, removed, len(saved))
    return AuthoringResult(theme=theme, scenarios=saved, count=len(saved))
