# situation_game/ai/level_classifier.py
import logging
from typing import Dict, List, Sequence

from ..schemas.literacy import LiteracyQuestion

log = logging.getLogger("literacy")

TIERS = ("easy", "medium", "hard")

# 생성 서비스를 못 쓸 때 쓰는 고정 문항 (난이도별 1문항)
FALLBACK_QUESTIONS: List[LiteracyQuestion] = [
    LiteracyQuestion(
        id=1,
        question="친구가 울고 있어요. 어떻게 해야 할까요?",
        options=["그냥 지나간다", "달려가서 도와준다", "다른 친구와 논다", "모르는 척한다"],
        correctAnswer=1,
        level="easy",
    ),
    LiteracyQuestion(
        id=2,
        question="민수가 교실에서 책을 읽고 있는데 친구들이 시끄럽게 떠들고 있습니다. 민수는 어떻게 해야 할까요?",
        options=["같이 떠든다", "조용히 해달라고 말한다", "화를 낸다", "그냥 참는다"],
        correctAnswer=1,
        level="medium",
    ),
    LiteracyQuestion(
        id=3,
        question="수업 시간에 짝꿍이 지우개를 빌려달라고 했는데, 내가 가져온 지우개는 새 것이고 하나밖에 없습니다. "
                 "하지만 짝꿍은 평소에 물건을 잘 잃어버리는 편이에요. 어떻게 하는 것이 가장 좋을까요?",
        options=["절대 빌려주지 않는다", "조건을 정하고 빌려준다", "선생님께 말씀드린다", "다른 친구에게 부탁한다"],
        correctAnswer=1,
        level="hard",
    ),
]


def count_correct_by_tier(answers: Sequence[int], questions: Sequence[LiteracyQuestion]) -> Dict[str, int]:
    if len(answers) != len(questions):
        # 빠진 답은 오답으로 처리
        log.warning("[LITERACY] answers=%d questions=%d mismatch", len(answers), len(questions))
    counts = {tier: 0 for tier in TIERS}
    for answer, q in zip(answers, questions):
        if answer == q.correctAnswer:
            counts[q.level] += 1
    return counts


def classify_simple(answers: Sequence[int], questions: Sequence[LiteracyQuestion]) -> str:
    correct = sum(count_correct_by_tier(answers, questions).values())
    if correct >= 3:
        return "advanced"
    if correct == 2:
        return "intermediate"
    return "beginner"


def classify_tiered(answers: Sequence[int], questions: Sequence[LiteracyQuestion]) -> str:
    counts = count_correct_by_tier(answers, questions)
    hard, medium = counts["hard"], counts["medium"]
    if hard == 0 and medium <= 1:
        return "beginner"
    if hard >= 1 and medium >= 1:
        return "advanced"
    return "intermediate"


def classify(answers: Sequence[int], questions: Sequence[LiteracyQuestion], scheme: str = "tiered") -> str:
    if scheme == "simple":
        return classify_simple(answers, questions)
    return classify_tiered(answers, questions)
