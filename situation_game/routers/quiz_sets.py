# situation_game/routers/quiz_sets.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.quiz_set import QuizSetRequest, QuizSetResponse, QuizSetOut, QuizQuestionOut
from ..services import quiz_set_service

router = APIRouter(prefix="/api/quiz-sets", tags=["quiz-sets"])


# 같은 키면 저장된 세트를 그대로, 없으면 시드 기반으로 생성
@router.post("", response_model=QuizSetResponse)
def create_or_get_quiz_set(body: QuizSetRequest, db: Session = Depends(get_db)):
    quiz_set, questions, created = quiz_set_service.get_or_create(
        db,
        theme=body.theme,
        difficulty=body.difficulty,
        count=body.count,
        seed=body.seed,
        version=body.version,
    )
    return QuizSetResponse(
        quiz_set=QuizSetOut.model_validate(quiz_set),
        questions=[QuizQuestionOut.model_validate(q) for q in questions],
        created=created,
    )
