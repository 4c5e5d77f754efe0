import pytest

from situation_game.ai.difficulty_rules import (
    BANNED_PHRASES,
    check_contract,
    count_sentences,
    count_word_groups,
    rewrite,
    rewrite_scenario,
)
from situation_game.schemas.scenario import ScenarioOut, ScenarioOptionOut

SITUATIONS = [
    "지우는 숙제를 깜빡하고 못 해왔어요. 선생님이 숙제를 보여달라고 하셨어요.",
    "쉬는 시간에 친구가 다른 아이들에게 놀림을 받고 있어요.",
    "미끄럼틀에 많은 친구들이 줄을 서 있어요. 빨리 타고 싶어요.",
    "지우는 어제 밤 가족 행사로 인해 숙제를 완성하지 못했습니다. 선생님께서 과제 제출을 요청하셨을 때 어떻게 대응하는 것이 가장 적절할까요?",
    "좋아하는 친구와 사소한 일로 싸웠어요.",
    "그네를 타고 싶은데, 한 친구가 계속 타고 있어요.",
    "이러한 복잡한 상황에서 지우는 도서관에서 책을 찾고 있어요. 그런데 책이 없어요!",
    "비가 와요.",
]


@pytest.mark.parametrize("field", ["title", "situation", "option"])
@pytest.mark.parametrize("text", SITUATIONS + ["", "  ", "선생님께 말씀드린다."])
def test_intermediate_is_identity(text, field):
    assert rewrite(text, field, "intermediate") == text


@pytest.mark.parametrize("text", SITUATIONS)
def test_beginner_situation_has_one_sentence(text):
    out = rewrite(text, "situation", "beginner")
    assert count_sentences(out) == 1
    assert 4 <= count_word_groups(out) <= 6
    assert check_contract(out, "beginner") == []


@pytest.mark.parametrize("text", SITUATIONS)
def test_advanced_situation_has_two_sentences(text):
    out = rewrite(text, "situation", "advanced")
    assert count_sentences(out) == 2
    assert 12 <= count_word_groups(out) <= 18


@pytest.mark.parametrize("level", ["beginner", "advanced"])
@pytest.mark.parametrize("text", SITUATIONS)
def test_no_meta_phrases_after_rewrite(text, level):
    out = rewrite(text, "situation", level)
    assert not any(p in out for p in BANNED_PHRASES)


def test_short_beginner_text_is_padded_to_four_groups():
    out = rewrite("비가 와요.", "situation", "beginner")
    assert out == "오늘 여기에서 비가 와요."
    assert check_contract(out, "beginner") == []

    out = rewrite("오늘 지우가 울어요.", "situation", "beginner")
    assert out.split().count("오늘") == 1
    assert count_word_groups(out) == 4


def test_beginner_drops_connectives_and_formal_endings():
    out = rewrite("지우는 그래서 교실에서 숙제를 열심히 했습니다.", "situation", "beginner")
    assert "그래서" not in out
    assert out.endswith("했어요.")
    assert check_contract(out, "beginner") == []


def test_beginner_option_is_capped():
    out = rewrite("숙제를 못 한 이유를 솔직히 말씀드리고, 다음 시간에 해오겠다고 약속한다.", "option", "beginner")
    assert len(out) <= 20


def test_advanced_option_elaborates_action():
    out = rewrite("선생님께 말씀드린다.", "option", "advanced")
    assert "정중하게 설명드리고 이해를 구한다" in out


def test_rule_memo_is_kept_and_ignored_by_counts():
    text = "지우가 복도에서 빠르게 달렸어요. [규칙 메모] 복도에서 뛰지 않기"
    out = rewrite(text, "situation", "beginner")
    assert out.endswith("[규칙 메모] 복도에서 뛰지 않기")
    assert count_sentences(out) == 1


def test_unknown_level_or_field_is_rejected():
    with pytest.raises(ValueError):
        rewrite("문장", "situation", "expert")
    with pytest.raises(ValueError):
        rewrite("문장", "body", "beginner")


def test_rewrite_scenario_keeps_option_order_and_correctness():
    sc = ScenarioOut(
        id=1,
        title="친구가 괴롭힘을 당할 때",
        situation="쉬는 시간에 친구가 다른 아이들에게 놀림을 받고 있어요.",
        options=[
            ScenarioOptionOut(id=10, text="모른 척하고 지나간다.", option_order=0, is_correct=False),
            ScenarioOptionOut(id=11, text="선생님께 말씀드린다.", option_order=1, is_correct=True),
            ScenarioOptionOut(id=12, text="같이 놀림에 참여한다.", option_order=2, is_correct=False),
        ],
    )
    out = rewrite_scenario(sc, "beginner")
    assert [o.option_order for o in out.options] == [0, 1, 2]
    assert [o.is_correct for o in out.options] == [False, True, False]
    assert out.options[1].text == "선생님께 말해요."
    assert rewrite_scenario(sc, "intermediate") is sc
