from .scenario import Scenario, ScenarioOption
from .custom_theme import CustomTheme
from .progress import UserProgress, WrongAnswer
from .quiz_set import QuizSet, QuizQuestion

__all__ = [
    "Scenario",
    "ScenarioOption",
    "CustomTheme",
    "UserProgress",
    "WrongAnswer",
    "QuizSet",
    "QuizQuestion",
]
