from pydantic import BaseModel, ConfigDict, Field
from typing import List
from datetime import datetime

class CustomThemeCreate(BaseModel):
    problemDescription: str = Field(min_length=1, max_length=2000)

class CustomThemeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    theme_name: str
    description: str | None = None
    created_at: datetime

class CustomThemeSummary(CustomThemeOut):
    scenario_count: int

class SavedScenario(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    situation: str

class AuthoringResult(BaseModel):
    success: bool = True
    theme: str
    scenarios: List[SavedScenario]
    count: int
