from typing import Literal
from pydantic import BaseModel

Level = Literal["beginner", "intermediate", "advanced"]

# 결정적 퀴즈 세트 생성기에서 쓰는 난이도 표기
QuizDifficulty = Literal["하", "중", "상", "혼합"]
QUIZ_LEVEL_TO_LEVEL = {"하": "beginner", "중": "intermediate", "상": "advanced"}

Category = Literal["main", "custom"]
TEXT_FIELDS: tuple[str, ...] = ("title", "situation", "option")


class ErrorBody(BaseModel):
    ok: bool = False
    error: str
    message: str
    exit: str
