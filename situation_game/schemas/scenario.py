from pydantic import BaseModel, ConfigDict, Field
from typing import List

from .common import Level, Category

# 선택지 (option_order 기준으로 정렬되어 내려감)
class ScenarioOptionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    text: str
    option_order: int
    is_correct: bool

# 게임 화면에 그대로 쓰이는 시나리오
class ScenarioOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    situation: str
    category: Category | None = None
    theme: str | None = None
    options: List[ScenarioOptionOut]

# 생성 서비스가 만들어 주는 시나리오 한 건
class GeneratedScenario(BaseModel):
    title: str
    situation: str
    options: List[str] = Field(min_length=2, max_length=4)
    correct_option: int = Field(ge=0)

class ScenarioSetResponse(BaseModel):
    ok: bool = True
    theme: str
    category: Category
    level: Level
    scenarios: List[ScenarioOut]
    message: str | None = None
    exit: str | None = None

class AdjustRequest(BaseModel):
    scenarios: List[ScenarioOut]
    difficulty: Level

class AdjustedScenario(BaseModel):
    id: int
    title: str
    situation: str
    options: List[str]
    adjusted: bool = True   # False면 서비스 장애로 원문 그대로 반환된 것

class AdjustResponse(BaseModel):
    success: bool = True
    adjusted_scenarios: List[AdjustedScenario]
    count: int
    difficulty: Level

class ThemeInfo(BaseModel):
    theme: str
    title: str
    description: str
    scenario_count: int = 0     # 아직 한 번도 안 열었으면 0 (첫 로드 때 기본 시나리오 생성)
