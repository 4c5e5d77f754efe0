from pydantic import BaseModel, ConfigDict, Field
from typing import List

from .scenario import ScenarioOut

class AnswerSubmit(BaseModel):
    scenario_id: int
    selected_index: int = Field(ge=0)

class AnswerResult(BaseModel):
    scenario_id: int
    is_correct: bool
    correct_index: int | None
    progress_saved: bool = True

class WrongAnswerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    correct_count: int
    scenario: ScenarioOut

class ReviewSelect(BaseModel):
    option_index: int = Field(ge=0)

class ReviewStateOut(BaseModel):
    wrong_answer_id: int
    state: str
    correct_count: int
    selected_index: int | None = None
    is_correct: bool | None = None
    remaining: int | None = None    # 오답노트에서 빠지기까지 남은 정답 횟수
    removed: bool = False

class WrongAnswerList(BaseModel):
    items: List[WrongAnswerOut]
    total: int
