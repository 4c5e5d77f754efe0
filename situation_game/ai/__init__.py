from .difficulty_rules import rewrite, rewrite_scenario, check_contract, COMPLEXITY_CONTRACT
from .level_classifier import classify, classify_simple, classify_tiered, FALLBACK_QUESTIONS
from .genai_client import GenerationClient, get_generation_client
from .scenario_author import ScenarioAuthor
from .difficulty_adjuster import DifficultyAdjuster

__all__ = [
    "rewrite",
    "rewrite_scenario",
    "check_contract",
    "COMPLEXITY_CONTRACT",
    "classify",
    "classify_simple",
    "classify_tiered",
    "FALLBACK_QUESTIONS",
    "GenerationClient",
    "get_generation_client",
    "ScenarioAuthor",
    "DifficultyAdjuster",
]
