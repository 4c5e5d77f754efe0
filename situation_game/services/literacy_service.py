# situation_game/services/literacy_service.py
import logging
from typing import List

from ..config import settings
from ..errors import UpstreamServiceError, MalformedResponseError
from ..schemas.literacy import (
    LiteracyQuestion,
    LiteracyQuizResponse,
    PretestResult,
    SettingsOut,
    MainMenuGate,
)
from ..ai.level_classifier import TIERS, FALLBACK_QUESTIONS, classify, count_correct_by_tier
from ..ai.scenario_author import ScenarioAuthor
from .settings_store import SettingsStore, SessionCache

log = logging.getLogger("literacy")

PRETEST_SIZE = 3
LITERACY_TEST_ROUTE = "/literacy-test"


def _usable(questions: List[LiteracyQuestion]) -> bool:
    """난이도별 1문항씩, 정답 인덱스가 보기 범위 안인지"""
    if len(questions) < PRETEST_SIZE:
        return False
    if {q.level for q in questions} != set(TIERS):
        return False
    return all(q.options and 0 <= q.correctAnswer < len(q.options) for q in questions)


def load_questions(cache: SessionCache, user_session: str, author: ScenarioAuthor) -> LiteracyQuizResponse:
    tag = settings.literacy_quiz_cache_tag
    cached = cache.get(user_session, tag)
    if cached:
        return LiteracyQuizResponse(questions=cached, source="cache")

    try:
        questions = author.generate_quiz(PRETEST_SIZE)[:PRETEST_SIZE]
    except (UpstreamServiceError, MalformedResponseError) as e:
        log.warning("[LITERACY] 퀴즈 생성 실패, 기본 문항 사용: %s", e)
        return LiteracyQuizResponse(questions=FALLBACK_QUESTIONS, source="fallback")

    if not _usable(questions):
        log.warning("[LITERACY] 생성 문항이 난이도를 다 채우지 못함 levels=%s", [q.level for q in questions])
        return LiteracyQuizResponse(questions=FALLBACK_QUESTIONS, source="fallback")

    cache.set(user_session, tag, questions)
    return LiteracyQuizResponse(questions=questions, source="service")


def submit_pretest(
    store: SettingsStore,
    cache: SessionCache,
    user_session: str,
    answers: List[int],
    scheme: str = "tiered",
) -> PretestResult:
    # 이 세션에 내려간 문항으로 채점. 캐시가 없으면 기본 문항이 나갔던 것
    questions = cache.get(user_session, settings.literacy_quiz_cache_tag) or FALLBACK_QUESTIONS
    level = classify(answers, questions, scheme=scheme)
    store.save_pretest_result(user_session, level)
    return PretestResult(level=level, correct_by_tier=count_correct_by_tier(answers, questions))


def get_settings(store: SettingsStore, user_session: str) -> SettingsOut:
    return SettingsOut(
        literacyLevel=store.get_level(user_session),
        literacyTestCompleted=store.is_test_completed(user_session),
    )


def select_difficulty(store: SettingsStore, user_session: str, level: str) -> SettingsOut:
    store.set_level(user_session, level)
    return get_settings(store, user_session)


def main_menu_gate(store: SettingsStore, user_session: str) -> MainMenuGate:
    if store.is_test_completed(user_session):
        return MainMenuGate(allowed=True, literacyLevel=store.get_level(user_session))
    return MainMenuGate(allowed=False, redirect=LITERACY_TEST_ROUTE)


def current_level(store: SettingsStore, user_session: str) -> str:
    # 레벨이 없으면 원문(중) 그대로
    return store.get_level(user_session) or "intermediate"
