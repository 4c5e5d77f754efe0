import pytest
from sqlalchemy.exc import OperationalError

from situation_game.ai.difficulty_rules import check_contract, count_sentences
from situation_game.errors import StorageError
from situation_game.models.quiz_set import QuizSet, QuizQuestion
from situation_game.schemas.common import QUIZ_LEVEL_TO_LEVEL
from situation_game.services import quiz_set_service
from situation_game.services.quiz_set_service import (
    TEMPLATES,
    SeededRandom,
    levelize,
    make_deterministic_quiz,
)


def _dump(questions):
    return [(q.idx, q.title, q.situation, list(q.options), q.correct_option) for q in questions]


def test_seeded_random_is_reproducible():
    a, b = SeededRandom("school|혼합|20|seed-A"), SeededRandom("school|혼합|20|seed-A")
    seq_a = [a.random() for _ in range(50)]
    seq_b = [b.random() for _ in range(50)]
    assert seq_a == seq_b
    assert all(0 <= x < 1 for x in seq_a)
    c = SeededRandom("school|혼합|20|seed-B")
    assert [c.random() for _ in range(50)] != seq_a


@pytest.mark.parametrize("level", ["하", "중", "상"])
@pytest.mark.parametrize("template", TEMPLATES, ids=[t["title"] for t in TEMPLATES])
def test_levelize_follows_complexity_contract(template, level):
    text = levelize(template["base"], level)
    assert check_contract(text, QUIZ_LEVEL_TO_LEVEL[level]) == []
    assert f"[규칙 메모] {template['base']['rule']}" in text


def test_template_catalog_cycles_and_theme_suffix():
    items = make_deterministic_quiz("school", len(TEMPLATES) + 2, "하", "x")
    assert items[0]["title"] == f"{TEMPLATES[0]['title']} (school)"
    assert items[len(TEMPLATES)]["title"] == items[0]["title"]
    assert all(len(i["options"]) == 3 and i["correct_option"] in (0, 1, 2) for i in items)

    untitled = make_deterministic_quiz("  ", 1, "하", "x")
    assert untitled[0]["title"] == TEMPLATES[0]["title"]


def test_mixed_difficulty_resolves_per_item():
    items = make_deterministic_quiz("school", 30, "혼합", "mix")
    sentence_counts = {count_sentences(i["situation"]) for i in items}
    # 상(2문장)과 하/중(1문장)이 섞여 나온다
    assert sentence_counts == {1, 2}


def test_get_or_create_is_idempotent(db):
    first_set, first_q, created = quiz_set_service.get_or_create(db, "school", "혼합", 20, "seed-A", 1)
    assert created is True
    assert len(first_q) == 20
    first_dump = _dump(first_q)

    again_set, again_q, created_again = quiz_set_service.get_or_create(db, "school", "혼합", 20, "seed-A", 1)
    assert created_again is False
    assert again_set.id == first_set.id
    assert _dump(again_q) == first_dump
    assert db.query(QuizSet).count() == 1


def test_different_seed_gives_different_sequence(db):
    _, a, _ = quiz_set_service.get_or_create(db, "school", "혼합", 20, "seed-A", 1)
    dump_a = _dump(a)
    _, b, _ = quiz_set_service.get_or_create(db, "school", "혼합", 20, "seed-B", 1)
    assert _dump(b) != dump_a


def test_version_is_part_of_the_key(db):
    s1, _, _ = quiz_set_service.get_or_create(db, "school", "하", 3, "v", 1)
    s1_id = s1.id
    s2, _, created = quiz_set_service.get_or_create(db, "school", "하", 3, "v", 2)
    assert created is True
    assert s2.id != s1_id


def test_empty_set_is_refilled_deterministically(db):
    db.add(QuizSet(theme="home", difficulty="혼합", count=5, seed="broken", version=1, published=True))
    db.commit()

    quiz_set, questions, created = quiz_set_service.get_or_create(db, "home", "혼합", 5, "broken", 1)
    assert created is False
    assert len(questions) == 5
    expected = make_deterministic_quiz("home", 5, "혼합", "broken")
    assert [q.situation for q in questions] == [e["situation"] for e in expected]
    assert db.query(QuizQuestion).filter(QuizQuestion.quiz_set_id == quiz_set.id).count() == 5


def test_unique_conflict_falls_back_to_existing_row(db, monkeypatch):
    first, _, _ = quiz_set_service.get_or_create(db, "school", "하", 5, "race", 1)
    first_id = first.id

    real_find = quiz_set_service._find
    calls = {"n": 0}

    def racing_find(*args, **kwargs):
        # 첫 조회는 다른 요청이 아직 커밋하기 전인 것처럼
        calls["n"] += 1
        if calls["n"] == 1:
            return None
        return real_find(*args, **kwargs)

    monkeypatch.setattr(quiz_set_service, "_find", racing_find)
    again, questions, created = quiz_set_service.get_or_create(db, "school", "하", 5, "race", 1)
    assert created is False
    assert again.id == first_id
    assert len(questions) == 5
    assert db.query(QuizSet).count() == 1


def test_concurrent_refill_keeps_a_single_copy(db, monkeypatch):
    db.add(QuizSet(theme="home", difficulty="하", count=5, seed="gap", version=1, published=True))
    db.commit()
    set_id = db.query(QuizSet).one().id
    real_make = quiz_set_service.make_deterministic_quiz

    def other_request_fills_first(theme, count, difficulty, seed):
        items = real_make(theme, count, difficulty, seed)
        # 빈 세트를 본 직후 다른 요청이 같은 문제를 먼저 커밋
        for idx, q in enumerate(items):
            db.add(QuizQuestion(quiz_set_id=set_id, idx=idx, title=q["title"], situation=q["situation"],
                                options=q["options"], correct_option=q["correct_option"]))
        db.commit()
        return items

    monkeypatch.setattr(quiz_set_service, "make_deterministic_quiz", other_request_fills_first)
    quiz_set, questions, created = quiz_set_service.get_or_create(db, "home", "하", 5, "gap", 1)

    assert created is False
    assert [q.idx for q in questions] == [0, 1, 2, 3, 4]
    assert db.query(QuizQuestion).filter(QuizQuestion.quiz_set_id == set_id).count() == 5

    monkeypatch.setattr(quiz_set_service, "make_deterministic_quiz", real_make)
    _, again, _ = quiz_set_service.get_or_create(db, "home", "하", 5, "gap", 1)
    assert _dump(again) == _dump(questions)


def test_failed_create_leaves_no_partial_set(db, monkeypatch):
    def broken_commit():
        raise OperationalError("INSERT", {}, Exception("disk full"))

    monkeypatch.setattr(db, "commit", broken_commit)
    with pytest.raises(StorageError):
        quiz_set_service.get_or_create(db, "school", "하", 5, "partial", 1)
    monkeypatch.undo()

    assert db.query(QuizSet).count() == 0
    assert db.query(QuizQuestion).count() == 0
