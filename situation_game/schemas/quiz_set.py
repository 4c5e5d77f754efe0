from pydantic import BaseModel, ConfigDict, Field
from typing import List

from .common import QuizDifficulty

class QuizSetRequest(BaseModel):
    theme: str = ""
    difficulty: QuizDifficulty = "혼합"
    count: int = Field(default=20, ge=1, le=50)
    seed: str = "default"
    version: int = 1

class QuizSetOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    theme: str
    difficulty: QuizDifficulty
    count: int
    seed: str
    version: int
    published: bool

class QuizQuestionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    idx: int
    title: str
    situation: str
    options: List[str]
    correct_option: int

class QuizSetResponse(BaseModel):
    quiz_set: QuizSetOut
    questions: List[QuizQuestionOut]
    created: bool
