from pydantic import BaseModel, Field
from typing import List, Literal, Dict

from .common import Level

Tier = Literal["easy", "medium", "hard"]

class LiteracyQuestion(BaseModel):
    id: int
    question: str
    options: List[str]
    correctAnswer: int
    level: Tier

class LiteracyQuizResponse(BaseModel):
    questions: List[LiteracyQuestion]
    source: Literal["cache", "service", "fallback"]

class PretestSubmit(BaseModel):
    answers: List[int] = Field(min_length=1)
    scheme: Literal["tiered", "simple"] = "tiered"

class PretestResult(BaseModel):
    level: Level
    correct_by_tier: Dict[str, int]
    literacyTestCompleted: bool = True

class SettingsOut(BaseModel):
    literacyLevel: Level | None = None
    literacyTestCompleted: bool = False

class DifficultySelect(BaseModel):
    level: Level

class MainMenuGate(BaseModel):
    allowed: bool
    redirect: str | None = None
    literacyLevel: Level | None = None
