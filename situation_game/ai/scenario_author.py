# situation_game/ai/scenario_author.py
import logging
import re
from typing import Any, List

from pydantic import ValidationError

from ..errors import MalformedResponseError
from ..schemas.scenario import GeneratedScenario
from ..schemas.literacy import LiteracyQuestion
from .genai_client import GenerationClient, load_json
from .level_classifier import TIERS
from .prompts import (
    THEME_DESCRIPTIONS,
    THEME_NAME_SYSTEM,
    custom_scenarios_system,
    main_scenarios_system,
    literacy_quiz_system,
)

log = logging.getLogger("authoring")

THEME_NAME_MAX = 15


def parse_scenarios(data: Any) -> List[GeneratedScenario]:
    """항목별로 검증해서 깨진 항목만 버린다. 하나도 안 남으면 응답 전체가 불량."""
    if isinstance(data, dict):
        data = data.get("scenarios")
    if not isinstance(data, list):
        raise MalformedResponseError("시나리오 배열이 아님")

    items: List[GeneratedScenario] = []
    for i, raw in enumerate(data):
        try:
            item = GeneratedScenario.model_validate(raw)
        except ValidationError as e:
            log.warning("[AUTHORING] %d번 시나리오 형식 오류: %s", i, e.errors()[:1])
            continue
        if item.correct_option >= len(item.options):
            log.warning("[AUTHORING] %d번 시나리오 correct_option 범위 밖: %d", i, item.correct_option)
            continue
        items.append(item)
    if not items:
        raise MalformedResponseError("유효한 시나리오 없음")
    return items


def normalize_quiz(data: Any) -> List[LiteracyQuestion]:
    if isinstance(data, dict):
        data = data.get("questions")
    if not isinstance(data, list):
        raise MalformedResponseError("퀴즈 배열이 아님")

    questions: List[LiteracyQuestion] = []
    for idx, q in enumerate(data):
        if not isinstance(q, dict):
            continue
        try:
            qid = int(q.get("id") or idx + 1)
        except (TypeError, ValueError):
            qid = idx + 1
        try:
            correct = int(q.get("correctAnswer") or 0)
        except (TypeError, ValueError):
            correct = 0
        level = q.get("level") if q.get("level") in TIERS else "medium"
        options = [str(o) for o in (q.get("options") or [])][:4]
        questions.append(LiteracyQuestion(
            id=qid,
            question=str(q.get("question", "")),
            options=options,
            correctAnswer=correct,
            level=level,
        ))
    return questions


class ScenarioAuthor:
    """시나리오/테마 이름/문해력 퀴즈 생성"""

    def __init__(self, generator: GenerationClient | None = None):
        self.generator = generator or GenerationClient()

    def generate(self, problem_description: str) -> List[GeneratedScenario]:
        data = self.generator.generate_json(
            custom_scenarios_system(),
            f"다음 문제 상황에 대한 교육 시나리오 10개를 만들어주세요: {problem_description}",
            temperature=0.7,
            max_output_tokens=4096,
        )
        return parse_scenarios(data)

    def generate_main(self, theme: str) -> List[GeneratedScenario]:
        description = THEME_DESCRIPTIONS.get(theme, theme)
        data = self.generator.generate_json(
            main_scenarios_system(),
            f"다음 테마에 대한 교육 시나리오 20개를 만들어주세요: {description}",
            temperature=0.7,
            max_output_tokens=8192,
        )
        return parse_scenarios(data)

    def name_theme(self, problem_description: str) -> str:
        raw = self.generator.generate_text(
            THEME_NAME_SYSTEM,
            f"다음 상황에 대한 테마 이름을 만들어주세요: {problem_description}",
            temperature=0.3,
            max_output_tokens=100,
        )
        try:
            value = load_json(raw)
            name = value if isinstance(value, str) else raw
        except MalformedResponseError:
            name = raw
        name = re.sub(r"['\"]", "", name).strip()[:THEME_NAME_MAX].strip()
        return name or problem_description.strip()[:THEME_NAME_MAX]

    def generate_quiz(self, count: int = 3) -> List[LiteracyQuestion]:
        count = max(3, count)
        data = self.generator.generate_json(
            literacy_quiz_system(count),
            f"문해력 퀴즈 {count}문항을 만들어주세요. easy/medium/hard를 고르게 포함하세요.",
            temperature=0.2,
            max_output_tokens=1200,
        )
        return normalize_quiz(data)
