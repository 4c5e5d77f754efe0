# situation_game/services/progress_service.py
import logging
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone

from cachetools import TTLCache
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.exc import SQLAlchemyError

from ..config import settings
from ..errors import NotFoundError, StorageError, InvalidReviewTransition
from ..models.scenario import Scenario
from ..models.progress import UserProgress, WrongAnswer
from ..schemas.progress import AnswerResult, ReviewStateOut
from . import scenario_service

log = logging.getLogger("progress")

# 복습에서 이만큼 맞히면 오답노트에서 빠진다
REVIEW_THRESHOLD = 3

LISTING = "listing"
REVIEWING = "reviewing"
ANSWERED_CORRECT = "answered-correct"
ANSWERED_INCORRECT = "answered-incorrect"


def _correct_order(scenario: Scenario) -> int | None:
    for opt in sorted(scenario.options, key=lambda o: o.option_order):
        if opt.is_correct:
            return opt.option_order
    return None


# ---------------------------
# 답안 기록
# ---------------------------
def record_answer(db: Session, user_session: str, scenario_id: int, selected_index: int) -> AnswerResult:
    scenario = scenario_service.get_scenario(db, scenario_id)
    if scenario is None:
        raise NotFoundError(f"scenario {scenario_id}")

    correct_index = _correct_order(scenario)
    is_correct = correct_index is not None and selected_index == correct_index

    # 기록 실패는 게임 진행을 막지 않는다
    saved = True
    try:
        db.add(UserProgress(
            scenario_id=scenario_id,
            user_session=user_session,
            is_correct=is_correct,
            attempts=1,
            completed_at=datetime.now(timezone.utc) if is_correct else None,
        ))
        if not is_correct:
            # 같은 시나리오라도 틀릴 때마다 새 행
            db.add(WrongAnswer(scenario_id=scenario_id, user_session=user_session, correct_count=0))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        saved = False
        log.error("[PROGRESS] scenario=%s session=%s 기록 실패: %s", scenario_id, user_session, e)

    return AnswerResult(
        scenario_id=scenario_id,
        is_correct=is_correct,
        correct_index=correct_index,
        progress_saved=saved,
    )


# ---------------------------
# 오답노트
# ---------------------------
def list_wrong_answers(db: Session, user_session: str | None = None) -> list[WrongAnswer]:
    query = (db.query(WrongAnswer)
               .options(selectinload(WrongAnswer.scenario).selectinload(Scenario.options)))
    if user_session:
        query = query.filter(WrongAnswer.user_session == user_session)
    return query.order_by(WrongAnswer.created_at.desc(), WrongAnswer.id.desc()).all()


def get_wrong_answer(db: Session, wrong_answer_id: int) -> WrongAnswer:
    row = (db.query(WrongAnswer)
             .options(selectinload(WrongAnswer.scenario).selectinload(Scenario.options))
             .filter(WrongAnswer.id == wrong_answer_id)
             .first())
    if row is None:
        raise NotFoundError(f"wrong answer {wrong_answer_id}")
    return row


def delete_wrong_answer(db: Session, registry: "ReviewRegistry", wrong_answer_id: int) -> None:
    row = get_wrong_answer(db, wrong_answer_id)
    try:
        db.delete(row)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(str(e)) from e
    registry.discard(wrong_answer_id)
    log.info("[PROGRESS] wrong answer %s 삭제", wrong_answer_id)


# ---------------------------
# 복습 상태 머신
# ---------------------------
@dataclass
class ReviewSession:
    wrong_answer_id: int
    correct_index: int | None
    state: str = REVIEWING
    selected_index: int | None = None


class ReviewRegistry:
    """
    (user_session, wrong_answer_id) 별 복습 상태.
    complete 는 answered-correct 에서만 가능하고 인스턴스를 지우므로
    같은 정답을 두 번 제출해도 한 번만 올라간다.
    마지막 단계 이후 ttl 이 지난 복습은 버려지고 listing 으로 돌아간다.
    """

    def __init__(self, ttl: float | None = None, maxsize: int | None = None, timer=time.monotonic):
        self._lock = threading.Lock()
        self._sessions: TTLCache = TTLCache(
            maxsize=maxsize or settings.session_cache_maxsize,
            ttl=ttl or settings.session_ttl_seconds,
            timer=timer,
        )

    def current(self, user_session: str, wrong_answer_id: int) -> ReviewSession | None:
        with self._lock:
            return self._sessions.get((user_session, wrong_answer_id))

    def state_of(self, user_session: str, wrong_answer_id: int) -> str:
        rs = self.current(user_session, wrong_answer_id)
        return rs.state if rs else LISTING

    def start(self, user_session: str, wrong_answer_id: int, correct_index: int | None) -> ReviewSession:
        with self._lock:
            rs = ReviewSession(wrong_answer_id=wrong_answer_id, correct_index=correct_index)
            self._sessions[(user_session, wrong_answer_id)] = rs
            return rs

    def _require(self, user_session: str, wrong_answer_id: int, expected: str) -> ReviewSession:
        rs = self._sessions.get((user_session, wrong_answer_id))
        current = rs.state if rs else LISTING
        if current != expected:
            raise InvalidReviewTransition(f"{current} -> expected {expected}")
        return rs

    def select(self, user_session: str, wrong_answer_id: int, option_index: int) -> ReviewSession:
        with self._lock:
            rs = self._require(user_session, wrong_answer_id, REVIEWING)
            rs.selected_index = option_index
            correct = rs.correct_index is not None and option_index == rs.correct_index
            rs.state = ANSWERED_CORRECT if correct else ANSWERED_INCORRECT
            # 다시 넣어서 만료 시각을 늦춘다
            self._sessions[(user_session, wrong_answer_id)] = rs
            return rs

    def retry(self, user_session: str, wrong_answer_id: int) -> ReviewSession:
        with self._lock:
            rs = self._require(user_session, wrong_answer_id, ANSWERED_INCORRECT)
            rs.state = REVIEWING
            rs.selected_index = None
            self._sessions[(user_session, wrong_answer_id)] = rs
            return rs

    def complete(self, user_session: str, wrong_answer_id: int) -> ReviewSession:
        with self._lock:
            rs = self._require(user_session, wrong_answer_id, ANSWERED_CORRECT)
            del self._sessions[(user_session, wrong_answer_id)]
            return rs

    def restore(self, user_session: str, rs: ReviewSession) -> None:
        with self._lock:
            self._sessions[(user_session, rs.wrong_answer_id)] = rs

    def discard(self, wrong_answer_id: int) -> None:
        with self._lock:
            self._sessions.expire()
            for key in [k for k in list(self._sessions.keys()) if k[1] == wrong_answer_id]:
                self._sessions.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            self._sessions.expire()
            return len(self._sessions)


review_registry = ReviewRegistry()


def get_review_registry() -> ReviewRegistry:
    return review_registry


def _state_out(row: WrongAnswer, rs: ReviewSession | None, state: str) -> ReviewStateOut:
    is_correct = None
    if rs is not None and state in (ANSWERED_CORRECT, ANSWERED_INCORRECT):
        is_correct = state == ANSWERED_CORRECT
    return ReviewStateOut(
        wrong_answer_id=row.id,
        state=state,
        correct_count=row.correct_count,
        selected_index=rs.selected_index if rs else None,
        is_correct=is_correct,
        remaining=REVIEW_THRESHOLD - row.correct_count,
    )


def review_status(db: Session, registry: ReviewRegistry, user_session: str, wrong_answer_id: int) -> ReviewStateOut:
    """새로고침 후 화면을 복원할 때 쓰는 현재 복습 단계"""
    row = get_wrong_answer(db, wrong_answer_id)
    return _state_out(row, registry.current(user_session, row.id), registry.state_of(user_session, row.id))


def start_review(db: Session, registry: ReviewRegistry, user_session: str, wrong_answer_id: int) -> ReviewStateOut:
    row = get_wrong_answer(db, wrong_answer_id)
    rs = registry.start(user_session, row.id, _correct_order(row.scenario))
    return _state_out(row, rs, rs.state)


def select_review_option(
    db: Session, registry: ReviewRegistry, user_session: str, wrong_answer_id: int, option_index: int
) -> ReviewStateOut:
    row = get_wrong_answer(db, wrong_answer_id)
    rs = registry.select(user_session, row.id, option_index)
    return _state_out(row, rs, rs.state)


def retry_review(db: Session, registry: ReviewRegistry, user_session: str, wrong_answer_id: int) -> ReviewStateOut:
    row = get_wrong_answer(db, wrong_answer_id)
    rs = registry.retry(user_session, row.id)
    return _state_out(row, rs, rs.state)


def complete_review(db: Session, registry: ReviewRegistry, user_session: str, wrong_answer_id: int) -> ReviewStateOut:
    row = get_wrong_answer(db, wrong_answer_id)
    rs = registry.complete(user_session, row.id)

    new_count = row.correct_count + 1
    removed = new_count >= REVIEW_THRESHOLD
    try:
        if removed:
            db.delete(row)
        else:
            row.correct_count = new_count
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        # 저장 못 했으면 다시 완료할 수 있게 되돌린다
        registry.restore(user_session, rs)
        log.error("[PROGRESS] wrong answer %s 복습 저장 실패: %s", wrong_answer_id, e)
        raise StorageError(str(e)) from e

    if removed:
        registry.discard(wrong_answer_id)
        log.info("[PROGRESS] wrong answer %s 복습 %d회 달성, 삭제", wrong_answer_id, REVIEW_THRESHOLD)
    return ReviewStateOut(
        wrong_answer_id=wrong_answer_id,
        state=LISTING,
        correct_count=new_count,
        selected_index=rs.selected_index,
        is_correct=True,
        remaining=max(REVIEW_THRESHOLD - new_count, 0),
        removed=removed,
    )
