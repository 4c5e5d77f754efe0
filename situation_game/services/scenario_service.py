import logging
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import func

from ..models.scenario import Scenario, ScenarioOption
from ..schemas.scenario import GeneratedScenario
from .seed_catalog import seed_for

log = logging.getLogger("loader")

# 카테고리/테마별 시나리오 조회 (선택지 포함)
def get_scenarios(db: Session, category: str, theme: str, limit: int | None = None) -> list[Scenario]:
    query = (db.query(Scenario)
               .options(selectinload(Scenario.options))
               .filter(Scenario.category == category, Scenario.theme == theme)
               .order_by(Scenario.id.asc()))
    if limit:
        query = query.limit(limit)
    return query.all()

# 특정 시나리오 조회
def get_scenario(db: Session, scenario_id: int) -> Scenario | None:
    return (db.query(Scenario)
              .options(selectinload(Scenario.options))
              .filter(Scenario.id == scenario_id)
              .first())

def count_scenarios(db: Session, category: str, theme: str) -> int:
    return (db.query(func.count(Scenario.id))
              .filter(Scenario.category == category, Scenario.theme == theme)
              .scalar()) or 0

def create_scenario_with_options(db: Session, item: GeneratedScenario, category: str, theme: str) -> Scenario:
    """시나리오 1건 저장 후 선택지 저장. 선택지 저장이 실패해도 시나리오 행은 남는다."""
    row = Scenario(title=item.title, situation=item.situation, category=category, theme=theme)
    db.add(row)
    db.commit()
    db.refresh(row)

    for i, text in enumerate(item.options):
        db.add(ScenarioOption(
            scenario_id=row.id,
            text=text,
            option_order=i,
            is_correct=(i == item.correct_option),
        ))
    db.commit()
    db.refresh(row)
    return row

def seed_theme(db: Session, theme: str) -> int:
    created = 0
    for item in seed_for(theme):
        create_scenario_with_options(db, item, "main", theme)
        created += 1
    log.info("[LOADER] seeded theme=%s count=%d", theme, created)
    return created

def delete_scenarios(db: Session, category: str, theme: str) -> int:
    # 선택지/진행기록/오답노트는 ORM cascade 로 함께 삭제
    rows = db.query(Scenario).filter(Scenario.category == category, Scenario.theme == theme).all()
    for row in rows:
        db.delete(row)
    db.commit()
    return len(rows)
