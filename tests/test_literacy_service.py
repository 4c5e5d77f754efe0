import json

from situation_game.ai.level_classifier import FALLBACK_QUESTIONS
from situation_game.ai.scenario_author import ScenarioAuthor, normalize_quiz
from situation_game.services import literacy_service
from situation_game.services.settings_store import SessionCache, SettingsStore

SESSION = "session_" + "c" * 32

QUIZ = [
    {"id": 1, "question": "고양이가 자요.", "options": ["잔다", "뛴다", "먹는다"], "correctAnswer": 0, "level": "easy"},
    {"id": 2, "question": "지우는 공원에서 친구와 공을 찼어요.", "options": ["책", "공", "연필"], "correctAnswer": 1, "level": "medium"},
    {"id": 3, "question": "비가 와서 지우는 우산을 챙겼어요. 그래서 옷이 젖지 않았어요.",
     "options": ["우산", "모자", "신발", "가방"], "correctAnswer": 0, "level": "hard"},
]


def test_service_questions_are_cached_per_session(generator, fake_genai, cache):
    fake_genai.queue(json.dumps(QUIZ, ensure_ascii=False))
    author = ScenarioAuthor(generator)

    first = literacy_service.load_questions(cache, SESSION, author)
    assert first.source == "service"
    assert [q.level for q in first.questions] == ["easy", "medium", "hard"]

    second = literacy_service.load_questions(cache, SESSION, author)
    assert second.source == "cache"
    assert len(fake_genai.calls) == 1

    # 다른 세션은 캐시를 공유하지 않는다
    fake_genai.queue(json.dumps(QUIZ, ensure_ascii=False))
    other = literacy_service.load_questions(cache, "session_" + "d" * 32, author)
    assert other.source == "service"


def test_upstream_failure_uses_fallback(generator, fake_genai, cache):
    fake_genai.queue(ConnectionError("unreachable"))
    out = literacy_service.load_questions(cache, SESSION, ScenarioAuthor(generator))
    assert out.source == "fallback"
    assert out.questions == FALLBACK_QUESTIONS


def test_missing_tier_uses_fallback(generator, fake_genai, cache):
    quiz = [dict(q, level="easy") for q in QUIZ]
    fake_genai.queue(json.dumps(quiz, ensure_ascii=False))
    out = literacy_service.load_questions(cache, SESSION, ScenarioAuthor(generator))
    assert out.source == "fallback"


def test_quiz_normalization():
    raw = [{
        "id": "x",
        "question": "문장",
        "options": ["1", "2", "3", "4", "5"],
        "correctAnswer": "2",
        "level": "expert",
    }]
    q = normalize_quiz(raw)[0]
    assert q.id == 1
    assert q.options == ["1", "2", "3", "4"]
    assert q.correctAnswer == 2
    assert q.level == "medium"


def test_quiz_count_is_at_least_three(generator, fake_genai):
    fake_genai.queue(json.dumps(QUIZ, ensure_ascii=False))
    ScenarioAuthor(generator).generate_quiz(1)
    assert "총 3문항" in fake_genai.calls[0]["config"].system_instruction


def test_pretest_without_cache_grades_against_fallback(store, cache):
    result = literacy_service.submit_pretest(store, cache, SESSION, [1, 1, 1])
    assert result.level == "advanced"
    assert result.correct_by_tier == {"easy": 1, "medium": 1, "hard": 1}
    assert store.get_level(SESSION) == "advanced"
    assert store.is_test_completed(SESSION) is True


def test_pretest_grades_against_cached_questions(generator, fake_genai, store, cache):
    fake_genai.queue(json.dumps(QUIZ, ensure_ascii=False))
    literacy_service.load_questions(cache, SESSION, ScenarioAuthor(generator))
    result = literacy_service.submit_pretest(store, cache, SESSION, [0, 1, 2])
    # hard 오답, medium 1개 정답 → beginner
    assert result.level == "beginner"


def test_gate_and_direct_selection(store):
    gate = literacy_service.main_menu_gate(store, SESSION)
    assert gate.allowed is False and gate.redirect == "/literacy-test"

    out = literacy_service.select_difficulty(store, SESSION, "intermediate")
    assert out.literacyLevel == "intermediate" and out.literacyTestCompleted is True

    gate = literacy_service.main_menu_gate(store, SESSION)
    assert gate.allowed is True and gate.literacyLevel == "intermediate"


def test_settings_store_persists_across_restarts(tmp_path):
    path = str(tmp_path / "settings.json")
    SettingsStore(path).save_pretest_result(SESSION, "beginner")

    reloaded = SettingsStore(path)
    assert reloaded.get_level(SESSION) == "beginner"
    assert reloaded.is_test_completed(SESSION) is True
    assert reloaded.get_level("session_" + "e" * 32) is None


def test_broken_settings_file_starts_empty(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    assert SettingsStore(str(path)).get_level(SESSION) is None


def test_session_cache_clear(cache):
    cache.set(SESSION, "tag", [1])
    cache.set("other", "tag", [2])
    cache.clear(SESSION)
    assert cache.get(SESSION, "tag") is None
    assert cache.get("other", "tag") == [2]


def test_session_cache_entries_expire():
    now = [0.0]
    cache = SessionCache(ttl=60, timer=lambda: now[0])
    cache.set(SESSION, "tag", [1])

    now[0] = 59
    assert cache.get(SESSION, "tag") == [1]
    now[0] = 61
    assert cache.get(SESSION, "tag") is None
    assert len(cache) == 0
