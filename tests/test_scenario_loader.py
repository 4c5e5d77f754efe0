import random

import pytest
from sqlalchemy.exc import OperationalError

from situation_game.ai.difficulty_rules import count_sentences
from situation_game.errors import NotFoundError, ScenarioLoadError
from situation_game.models.scenario import Scenario, ScenarioOption
from situation_game.services import scenario_loader, scenario_service
from situation_game.services.seed_catalog import SEED_SCENARIOS


def _add_custom(db, theme, n=3):
    for i in range(n):
        sc = Scenario(title=f"미션 {i}", situation=f"상황 {i} 이에요.", category="custom", theme=theme)
        db.add(sc)
        db.flush()
        # 일부러 순서를 섞어서 저장
        for order in (2, 0, 1):
            db.add(ScenarioOption(scenario_id=sc.id, text=f"보기 {order}", option_order=order, is_correct=(order == 1)))
    db.commit()


def test_empty_main_theme_is_seeded_once(db):
    out = scenario_loader.load(db, "library", "main", "intermediate")
    assert len(out) == len(SEED_SCENARIOS["library"])
    assert {s.title for s in out} == {s.title for s in SEED_SCENARIOS["library"]}

    scenario_loader.load(db, "library", "main", "intermediate")
    assert scenario_service.count_scenarios(db, "main", "library") == len(SEED_SCENARIOS["library"])


def test_empty_custom_theme_is_not_seeded(db):
    assert scenario_loader.load(db, "없는 미션", "custom", "intermediate") == []
    assert db.query(Scenario).count() == 0


def test_options_are_sorted_by_option_order(db):
    _add_custom(db, "친구 사귀기")
    out = scenario_loader.load(db, "친구 사귀기", "custom", "intermediate")
    for sc in out:
        assert [o.option_order for o in sc.options] == [0, 1, 2]
        assert [o.is_correct for o in sc.options] == [False, True, False]


def test_shuffle_uses_given_rng(db):
    _add_custom(db, "순서", n=8)
    a = scenario_loader.load(db, "순서", "custom", "intermediate", rng=random.Random(7))
    b = scenario_loader.load(db, "순서", "custom", "intermediate", rng=random.Random(7))
    assert [s.id for s in a] == [s.id for s in b]
    assert sorted(s.id for s in a) == sorted(r.id for r in db.query(Scenario).all())


def test_level_rewrite_is_applied(db):
    out = scenario_loader.load(db, "school", "main", "beginner")
    assert out
    assert all(count_sentences(s.situation) == 1 for s in out)

    advanced = scenario_loader.load(db, "school", "main", "advanced")
    assert all(count_sentences(s.situation) == 2 for s in advanced)


def test_storage_error_aborts_load(db, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("db down"))

    monkeypatch.setattr(scenario_service, "get_scenarios", broken)
    with pytest.raises(ScenarioLoadError) as exc:
        scenario_loader.load(db, "school", "main", "intermediate")
    assert exc.value.exit_to == "/main-game"


def test_unknown_main_theme_is_rejected_without_seeding(db):
    with pytest.raises(NotFoundError) as exc:
        scenario_loader.load(db, "anything-at-all", "main", "intermediate")
    assert exc.value.exit_to == "/main-game"
    assert db.query(Scenario).count() == 0
