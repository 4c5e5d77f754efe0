# situation_game/routers/wrong_answers.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.progress import (
    AnswerSubmit,
    AnswerResult,
    WrongAnswerOut,
    WrongAnswerList,
    ReviewSelect,
    ReviewStateOut,
)
from ..services import progress_service
from ..services.progress_service import ReviewRegistry, get_review_registry
from ..services.session_service import get_user_session

router = APIRouter(prefix="/api", tags=["progress"])


# ---------------------------
# 답안 제출
# ---------------------------
@router.post("/answers", response_model=AnswerResult)
def submit_answer(
    body: AnswerSubmit,
    db: Session = Depends(get_db),
    user_session: str = Depends(get_user_session),
):
    return progress_service.record_answer(db, user_session, body.scenario_id, body.selected_index)


# ---------------------------
# 오답노트
# ---------------------------
@router.get("/wrong-answers", response_model=WrongAnswerList)
def list_wrong_answers(
    mine: bool = False,
    db: Session = Depends(get_db),
    user_session: str = Depends(get_user_session),
):
    rows = progress_service.list_wrong_answers(db, user_session if mine else None)
    items = [WrongAnswerOut.model_validate(r) for r in rows]
    return WrongAnswerList(items=items, total=len(items))


@router.delete("/wrong-answers/{wrong_answer_id}")
def delete_wrong_answer(
    wrong_answer_id: int,
    db: Session = Depends(get_db),
    registry: ReviewRegistry = Depends(get_review_registry),
):
    progress_service.delete_wrong_answer(db, registry, wrong_answer_id)
    return {"ok": True, "deleted": wrong_answer_id}


# ---------------------------
# 복습: reviewing → answered-correct/incorrect → (retry | complete)
# ---------------------------
@router.get("/wrong-answers/{wrong_answer_id}/review", response_model=ReviewStateOut)
def review_status(
    wrong_answer_id: int,
    db: Session = Depends(get_db),
    user_session: str = Depends(get_user_session),
    registry: ReviewRegistry = Depends(get_review_registry),
):
    return progress_service.review_status(db, registry, user_session, wrong_answer_id)


@router.post("/wrong-answers/{wrong_answer_id}/review", response_model=ReviewStateOut)
def start_review(
    wrong_answer_id: int,
    db: Session = Depends(get_db),
    user_session: str = Depends(get_user_session),
    registry: ReviewRegistry = Depends(get_review_registry),
):
    return progress_service.start_review(db, registry, user_session, wrong_answer_id)


@router.post("/wrong-answers/{wrong_answer_id}/review/select", response_model=ReviewStateOut)
def select_option(
    wrong_answer_id: int,
    body: ReviewSelect,
    db: Session = Depends(get_db),
    user_session: str = Depends(get_user_session),
    registry: ReviewRegistry = Depends(get_review_registry),
):
    return progress_service.select_review_option(db, registry, user_session, wrong_answer_id, body.option_index)


@router.post("/wrong-answers/{wrong_answer_id}/review/retry", response_model=ReviewStateOut)
def retry_review(
    wrong_answer_id: int,
    db: Session = Depends(get_db),
    user_session: str = Depends(get_user_session),
    registry: ReviewRegistry = Depends(get_review_registry),
):
    return progress_service.retry_review(db, registry, user_session, wrong_answer_id)


@router.post("/wrong-answers/{wrong_answer_id}/review/complete", response_model=ReviewStateOut)
def complete_review(
    wrong_answer_id: int,
    db: Session = Depends(get_db),
    user_session: str = Depends(get_user_session),
    registry: ReviewRegistry = Depends(get_review_registry),
):
    return progress_service.complete_review(db, registry, user_session, wrong_answer_id)
