import json

import pytest

from situation_game.ai.scenario_author import ScenarioAuthor, parse_scenarios
from situation_game.errors import MalformedResponseError, NotFoundError, UpstreamServiceError
from situation_game.models.custom_theme import CustomTheme
from situation_game.models.scenario import Scenario, ScenarioOption
from situation_game.services import custom_theme_service, progress_service, scenario_service


def _scenarios(n, prefix="상황"):
    return [
        {"title": f"{prefix} {i}", "situation": f"{prefix} {i} 설명이에요.",
         "options": ["가", "나", "다"], "correct_option": i % 3}
        for i in range(n)
    ]


def test_parse_skips_invalid_items():
    raw = _scenarios(3)
    raw.insert(1, {"title": "옵션 부족", "situation": "s", "options": ["하나"], "correct_option": 0})
    raw.append({"title": "범위 밖", "situation": "s", "options": ["a", "b", "c"], "correct_option": 5})
    items = parse_scenarios(raw)
    assert [i.title for i in items] == ["상황 0", "상황 1", "상황 2"]


def test_parse_rejects_non_list():
    with pytest.raises(MalformedResponseError):
        parse_scenarios({"foo": "bar"})
    with pytest.raises(MalformedResponseError):
        parse_scenarios([{"title": "x"}])


def test_theme_name_is_unquoted_and_truncated(generator, fake_genai):
    fake_genai.queue('"친구와 갈등을 슬기롭게 해결하는 방법 배우기"')
    name = ScenarioAuthor(generator).name_theme("친구와 자주 싸워요")
    assert '"' not in name
    assert len(name) <= 15


def test_theme_name_plain_text_reply(generator, fake_genai):
    fake_genai.queue("'학교 예절'")
    assert ScenarioAuthor(generator).name_theme("설명") == "학교 예절"


def test_authoring_saves_theme_and_scenarios(db, generator, fake_genai):
    fake_genai.queue(json.dumps(_scenarios(10), ensure_ascii=False), '"친구 사귀기"')
    result = custom_theme_service.create_custom_theme(db, ScenarioAuthor(generator), "친구를 잘 못 사귀어요")

    assert result.theme == "친구 사귀기"
    assert result.count == 10
    theme = db.query(CustomTheme).one()
    assert theme.description == "친구를 잘 못 사귀어요"

    rows = scenario_service.get_scenarios(db, "custom", "친구 사귀기")
    assert len(rows) == 10
    for i, row in enumerate(rows):
        assert [o.option_order for o in row.options] == [0, 1, 2]
        assert [o.is_correct for o in row.options] == [j == i % 3 for j in range(3)]


def test_authoring_aborts_on_upstream_failure(db, generator, fake_genai):
    fake_genai.queue(ConnectionError("unreachable"))
    with pytest.raises(UpstreamServiceError):
        custom_theme_service.create_custom_theme(db, ScenarioAuthor(generator), "설명")
    assert db.query(CustomTheme).count() == 0
    assert db.query(Scenario).count() == 0


def test_listing_counts_by_theme_name(db, generator, fake_genai):
    fake_genai.queue(json.dumps(_scenarios(2), ensure_ascii=False), '"첫 미션"')
    custom_theme_service.create_custom_theme(db, ScenarioAuthor(generator), "하나")
    fake_genai.queue(json.dumps(_scenarios(3), ensure_ascii=False), '"두번째 미션"')
    custom_theme_service.create_custom_theme(db, ScenarioAuthor(generator), "둘")

    listing = custom_theme_service.list_custom_themes(db)
    assert [t.theme_name for t in listing] == ["두번째 미션", "첫 미션"]
    assert [t.scenario_count for t in listing] == [3, 2]

    # 이름을 바꾸면 시나리오와의 연결이 끊긴다 (FK 아님)
    theme = db.query(CustomTheme).filter(CustomTheme.theme_name == "첫 미션").one()
    theme.theme_name = "새 이름"
    db.commit()
    counts = {t.theme_name: t.scenario_count for t in custom_theme_service.list_custom_themes(db)}
    assert counts["새 이름"] == 0


def test_main_theme_regeneration_replaces_rows(db, generator, fake_genai):
    scenario_service.seed_theme(db, "hospital")
    old_ids = {r.id for r in scenario_service.get_scenarios(db, "main", "hospital")}

    fake_genai.queue(json.dumps(_scenarios(20, "병원"), ensure_ascii=False))
    result = custom_theme_service.regenerate_main_theme(db, ScenarioAuthor(generator), "hospital")

    assert result.count == 20
    rows = scenario_service.get_scenarios(db, "main", "hospital", limit=50)
    assert len(rows) == 20
    assert not old_ids & {r.id for r in rows}
    assert db.query(ScenarioOption).filter(ScenarioOption.scenario_id.in_(old_ids)).count() == 0

    # 옛 id 로 들어온 답안은 새 시나리오에 붙지 않는다
    with pytest.raises(NotFoundError):
        progress_service.record_answer(db, "session_" + "a" * 32, max(old_ids), 0)


def test_unknown_main_theme_is_rejected(db, generator, fake_genai):
    with pytest.raises(NotFoundError):
        custom_theme_service.regenerate_main_theme(db, ScenarioAuthor(generator), "space")
    assert fake_genai.calls == []
