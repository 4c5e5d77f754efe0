# situation_game/ai/difficulty_rules.py
"""
난이도별 규칙 기반 문장 변환기 (네트워크 호출 없음).

- intermediate 는 항상 원문 그대로 반환한다.
- beginner : 1문장, 4~6어절, 연결어/종속절 없음, '~해요' 체, 선택지 길이 제한
- advanced : 정확히 2문장, 12~18어절, 시간/장소 수식어 + 부사 1개 + 이유/배경 1개, 메타 문구 금지

패턴 치환 표를 순서대로 적용한 뒤, 상황(situation) 필드는 구조 규칙을 거치고
check_contract() 로 사후 검증한다.
"""
import re
import logging
from typing import Dict, List, Tuple

from ..schemas.common import TEXT_FIELDS
from ..schemas.scenario import ScenarioOut

log = logging.getLogger("rewrite")

COMPLEXITY_CONTRACT: Dict[str, Dict[str, Tuple[int, int]]] = {
    "beginner":     {"sentences": (1, 1), "words": (4, 6)},
    "intermediate": {"sentences": (1, 1), "words": (7, 11)},
    "advanced":     {"sentences": (2, 2), "words": (12, 18)},
}

# 어떤 난이도에서도 나오면 안 되는 메타 문구
BANNED_PHRASES = (
    "이러한 복잡한 상황에서",
    "이런 복잡한 상황에서",
    "가장 적절한 대응 방법",
    "가장 적절할까요",
    "이런 상황에서 여러분은",
    "어떤 선택을 하시겠습니까",
    "신중히 고려해보세요",
    "각 선택지의 결과",
)

CONNECTIVES = (
    "그리고", "그래서", "그런데", "하지만", "그러나", "또한",
    "왜냐하면", "그러면", "그러니까", "그래도", "그러자", "게다가",
)

OPTION_CHAR_LIMIT = 20

# 상(advanced) 두 번째 문장: 이유/배경 절 + 부사(조금)
_REASON_SHORT = "처음 겪는 일이라서 마음이 조금 떨렸어요."
_REASON_LONG = "처음 겪는 일이라서 마음이 조금 떨리고 어떻게 할지 고민됐어요."
_TIME_PREFIX = ["어느", "날"]
_BEGINNER_PADS = ("오늘", "여기에서", "갑자기")

_PATTERNS: Dict[Tuple[str, str], List[Tuple[str, str]]] = {
    ("title", "beginner"): [
        (r"\s*[-–:(].*$", ""),                       # 부제 제거
        (r"에서의\s*", "에서 "),
        (r"\s*상황에서\s*", " "),
    ],
    ("situation", "beginner"): [
        (r"했습니다", "했어요"),
        (r"합니다", "해요"),
        (r"입니다", "이에요"),
        (r"습니다", "어요"),
        (r"하세요", "해요"),
        (r"하셨어요", "했어요"),
        (r"선생님께서", "선생님이"),
        (r"보여\s*달라고\s*(?:하셨어요|했어요|해요)", "보여달래요"),
        (r"받고 있어요", "당해요"),
    ],
    ("option", "beginner"): [
        (r"합니다", "해요"),
        (r"하세요", "해요"),
        (r"말씀드린다", "말해요"),
        (r"약속한다", "약속해요"),
    ],
    ("title", "advanced"): [
        (r"(\S)\s*때$", r"\1 때의 선택"),
    ],
    ("option", "advanced"): [
        (r"말씀드린다", "정중하게 설명드리고 이해를 구한다"),
        (r"(?<!진심으로 )사과한다", "진심으로 사과하고 앞으로 조심하겠다고 약속한다"),
        (r"(?<!기꺼이 )양보해드린다", "기꺼이 양보해드린다"),
    ],
}

_COMPILED = {
    key: [(re.compile(p), repl) for p, repl in rules]
    for key, rules in _PATTERNS.items()
}

_SENTENCE = re.compile(r"[^.!?]+[.!?]*")
_TERMINALS = re.compile(r"[.!?]+")
_RULE_MEMO = re.compile(r"\s*\[규칙 메모\].*$", re.S)
_TIME_PLACE = re.compile(
    r"(에서|시간에|아침|점심|저녁|오늘|어제|내일|방과\s*후|날|뒤에|후에|전에|중에|동안|그때)"
)


# ---------- 문장/어절 유틸 ----------
def split_memo(text: str) -> Tuple[str, str]:
    """'[규칙 메모] ...' 꼬리는 복잡도 계산에서 뺀다."""
    m = _RULE_MEMO.search(text or "")
    if not m:
        return text or "", ""
    return text[: m.start()], m.group(0)


def sentences(text: str) -> List[str]:
    return [s.strip() for s in _SENTENCE.findall(text or "") if s.strip(" .!?")]


def count_sentences(text: str) -> int:
    body, _ = split_memo(text)
    return len(_TERMINALS.findall(body))


def count_word_groups(text: str) -> int:
    body, _ = split_memo(text)
    return len(body.split())


def _bare(sentence: str) -> str:
    return sentence.rstrip(" .!?").strip()


def scrub_banned(text: str) -> str:
    """메타 문구가 들어간 문장을 통째로 뺀다. 전부 빠지면 문구만 지운다."""
    parts = sentences(text)
    kept = [s for s in parts if not any(p in s for p in BANNED_PHRASES)]
    if kept:
        return " ".join(kept)
    for p in BANNED_PHRASES:
        text = text.replace(p, "")
    return re.sub(r"\s+", " ", text).strip()


def _first_sentence(text: str) -> str:
    parts = sentences(text)
    if not parts:
        return ""
    # 질문형보다 서술형 문장을 우선
    for s in parts:
        if not s.endswith("?"):
            return _bare(s)
    return _bare(parts[0])


def _cap_words(words: List[str], limit: int) -> List[str]:
    """주어(첫 어절)와 서술어(끝 어절)를 살리면서 어절 수를 줄인다."""
    if len(words) <= limit:
        return words
    return words[:1] + words[-(limit - 1):]


def _cap_chars(text: str, limit: int) -> str:
    """글자 수 제한. 뒤쪽(서술어 쪽) 어절부터 채운다."""
    if len(text) <= limit:
        return text
    words = text.split()
    if len(words) == 1:
        return text[:limit]
    kept: List[str] = []
    for w in reversed(words):
        if kept and len(" ".join([w] + kept)) > limit:
            break
        kept.insert(0, w)
    return " ".join(kept)


def _apply_rules(text: str, field: str, level: str) -> str:
    for rx, repl in _COMPILED.get((field, level), []):
        text = rx.sub(repl, text)
    return text.strip()


# ---------- 구조 규칙 ----------
def _beginner_situation(text: str) -> str:
    first = _first_sentence(scrub_banned(text))
    if not first:
        return text
    if "," in first:
        main = first.rsplit(",", 1)[1].strip()
        # 종속절(쉼표 앞)을 버리고 주절만 남김
        first = main if len(main.split()) >= 3 else first.replace(",", " ")
    words = [w for w in first.split() if w not in CONNECTIVES]
    if not words:
        return text
    lo, hi = COMPLEXITY_CONTRACT["beginner"]["words"]
    words = _cap_words(words, hi)
    # 너무 짧으면 때/장소 어절을 앞에 붙여 4어절을 맞춘다
    pads = [p for p in _BEGINNER_PADS if p not in words][: max(0, lo - len(words))]
    return " ".join(pads + words) + "."


def _advanced_situation(text: str) -> str:
    first = _first_sentence(scrub_banned(text))
    if not first:
        return text
    lo, hi = COMPLEXITY_CONTRACT["advanced"]["words"]
    short_n = len(_REASON_SHORT.split())
    words = _cap_words(first.split(), hi - short_n)
    if not _TIME_PLACE.search(" ".join(words)):
        words = _TIME_PREFIX + _cap_words(words, hi - short_n - len(_TIME_PREFIX))

    reason = _REASON_SHORT if len(words) + short_n >= lo else _REASON_LONG
    while len(words) + len(reason.split()) < lo:
        words.insert(0, "그때")
    return " ".join(words) + ". " + reason


def check_contract(text: str, level: str) -> List[str]:
    """상황 문장이 난이도 규칙을 어기는 항목을 돌려준다 (빈 리스트 = 통과)."""
    rule = COMPLEXITY_CONTRACT[level]
    problems: List[str] = []
    n_sent = count_sentences(text)
    n_words = count_word_groups(text)
    s_lo, s_hi = rule["sentences"]
    w_lo, w_hi = rule["words"]
    if not s_lo <= n_sent <= s_hi:
        problems.append(f"sentences={n_sent} (expected {s_lo}~{s_hi})")
    if not w_lo <= n_words <= w_hi:
        problems.append(f"word_groups={n_words} (expected {w_lo}~{w_hi})")
    if any(p in text for p in BANNED_PHRASES):
        problems.append("meta phrase")
    body, _ = split_memo(text)
    if level == "beginner" and any(w in CONNECTIVES for w in body.split()):
        problems.append("connective")
    if level == "advanced" and not _TIME_PLACE.search(body):
        problems.append("no time/place modifier")
    return problems


# ---------- 공개 API ----------
def rewrite(text: str, field: str, level: str) -> str:
    if level not in COMPLEXITY_CONTRACT:
        raise ValueError(f"unknown level: {level}")
    if field not in TEXT_FIELDS:
        raise ValueError(f"unknown field: {field}")
    if level == "intermediate" or not text or not text.strip():
        return text

    body, memo = split_memo(text)
    out = _apply_rules(body, field, level)

    if field == "situation":
        out = _beginner_situation(out) if level == "beginner" else _advanced_situation(out)
        problems = check_contract(out, level)
        if problems:
            log.debug("[REWRITE] %s situation misses contract: %s | %r", level, problems, out)
    elif field == "option" and level == "beginner":
        out = _cap_chars(out, OPTION_CHAR_LIMIT)

    return out + memo if memo else out


def rewrite_scenario(scenario: ScenarioOut, level: str) -> ScenarioOut:
    """제목/상황/선택지를 각각 독립적으로 변환. option_order/is_correct 는 건드리지 않는다."""
    if level == "intermediate":
        return scenario
    options = [
        opt.model_copy(update={"text": rewrite(opt.text, "option", level)})
        for opt in scenario.options
    ]
    return scenario.model_copy(update={
        "title": rewrite(scenario.title, "title", level),
        "situation": rewrite(scenario.situation, "situation", level),
        "options": options,
    })
