# situation_game/services/quiz_set_service.py
"""
(theme, difficulty, count, seed, version) 키로 재현 가능한 퀴즈 세트를 만든다.
생성 서비스는 부르지 않는다. 같은 키면 저장된 세트를 그대로 돌려준다.
"""
import logging
from typing import Dict, List, Tuple

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..errors import StorageError
from ..models.quiz_set import QuizSet, QuizQuestion

log = logging.getLogger("quizset")

_MASK = 0xFFFFFFFF
DISCRETE_LEVELS = ("하", "중", "상")


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK


class SeededRandom:
    """문자열 해시로 32비트 상태를 만드는 난수기. 같은 seed 면 같은 수열."""

    def __init__(self, seed: str):
        h = (1779033703 ^ len(seed)) & _MASK
        for ch in seed:
            h = _imul(h ^ ord(ch), 3432918353)
            h = ((h << 13) | (h >> 19)) & _MASK
        self._state = h

    def random(self) -> float:
        h = self._state
        h = _imul(h ^ (h >> 16), 2246822507)
        h = _imul(h ^ (h >> 13), 3266489909)
        h ^= h >> 16
        self._state = h
        return h / 4294967296

    def pick(self, seq):
        return seq[int(self.random() * len(seq))]


# who/place/time/action/rule 슬롯. action 은 과거형 어간 (뒤에 '어요'가 붙는다)
TEMPLATES: List[Dict] = [
    {"title": "복도에서 뛰었을 때",
     "base": {"who": "지우", "place": "복도", "time": "쉬는 시간", "action": "빠르게 달렸", "rule": "복도에서 뛰지 않기"},
     "options": ["천천히 걸어간다", "더 빨리 달린다", "벽을 짚고 달린다"], "correct": 0},
    {"title": "급식 줄 새치기",
     "base": {"who": "지우", "place": "급식실", "time": "점심 시간", "action": "줄 앞에 먼저 섰", "rule": "줄 새치기 금지"},
     "options": ["앞에서 그대로 기다린다", "자기 자리로 돌아가 줄을 선다", "옆으로 가서 먼저 받는다"], "correct": 1},
    {"title": "수업 중 전자기기",
     "base": {"who": "지우", "place": "", "time": "수업 시간", "action": "폰을 몰래 켰", "rule": "수업 시간 전자기기 사용 금지"},
     "options": ["몰래 계속 본다", "친구와 같이 본다", "폰을 꺼서 가방에 넣는다"], "correct": 2},
    {"title": "공유 색연필 사용",
     "base": {"who": "지우", "place": "미술실", "time": "미술 시간", "action": "친구 것부터 집었", "rule": "공유물은 차례대로 사용"},
     "options": ["순서를 기다려 사용한다", "먼저 가져가 계속 쓴다", "숨겨 두고 혼자 쓴다"], "correct": 0},
    {"title": "도서관 소음",
     "base": {"who": "지우", "place": "도서관", "time": "점심 시간", "action": "큰 소리로 움직였", "rule": "도서관에서는 조용히 하기"},
     "options": ["의자를 세게 끈다", "발을 천천히 옮긴다", "책상을 두드린다"], "correct": 1},
    {"title": "운동장 공 안전",
     "base": {"who": "지우", "place": "운동장", "time": "체육 시간", "action": "공을 사람 쪽으로 찼", "rule": "사람을 향해 공 차지 않기"},
     "options": ["빈 공간으로 공을 찬다", "친구 쪽으로 세게 찬다", "창문 쪽으로 찬다"], "correct": 0},
    {"title": "버스 노약자석",
     "base": {"who": "지우", "place": "버스", "time": "등교 시간", "action": "노약자석에 먼저 앉았", "rule": "노약자석은 양보하기"},
     "options": ["가방을 옆자리에 둔다", "모른 척 계속 앉아 있는다", "할머니께 자리를 양보한다"], "correct": 2},
    {"title": "병원 대기실",
     "base": {"who": "지우", "place": "대기실", "time": "진료 시간", "action": "소리 내며 뛰어다녔", "rule": "병원에서는 조용히 기다리기"},
     "options": ["자리에 앉아 차례를 기다린다", "복도를 뛰어다닌다", "큰 소리로 노래한다"], "correct": 0},
    {"title": "미끄럼틀 거꾸로 오르기",
     "base": {"who": "지우", "place": "놀이터", "time": "놀이 시간", "action": "미끄럼틀을 거꾸로 올라갔", "rule": "미끄럼틀은 차례대로 타기"},
     "options": ["거꾸로 계속 올라간다", "계단으로 올라가 차례를 기다린다", "친구를 밀고 먼저 탄다"], "correct": 1},
    {"title": "밥 먹기 전 손 씻기",
     "base": {"who": "지우", "place": "", "time": "저녁 시간", "action": "손을 씻지 않았", "rule": "밥 먹기 전에 손 씻기"},
     "options": ["그냥 계속 먹는다", "옷에 손을 닦는다", "화장실에 가서 손을 씻는다"], "correct": 2},
]


def levelize(base: Dict[str, str], level: str) -> str:
    """
    슬롯을 채워 난이도별 상황 문장을 만든다. 끝의 [규칙 메모] 는 어절 수 계산에서 빠진다.
    하: 1문장 4~6어절 / 중: 1문장 7~11어절 / 상: 2문장 12~18어절
    """
    who = base.get("who") or "지우"
    place = base.get("place") or ""
    time = base.get("time") or "어느 날"
    action = base["action"]
    where = f"{place}에서" if place else f"{time}에"

    if level == "하":
        core = f"{who}가 {where} {action}어요."
    elif level == "중":
        core = f"{who}는 {where} 친구들과 함께 있다가 {action}어요."
    else:
        lead = f"{time}에 {who}는 {place}에서" if place else f"{time}에 {who}는"
        core = f"{lead} 서둘러 {action}어요. 빨리 끝내고 싶은 마음이 들어서 그랬어요."
    return f"{core} [규칙 메모] {base['rule']}"


def make_deterministic_quiz(theme: str, count: int, difficulty: str, seed: str) -> List[Dict]:
    rng = SeededRandom(f"{theme}|{difficulty}|{count}|{seed}")
    items: List[Dict] = []
    for i in range(count):
        t = TEMPLATES[i % len(TEMPLATES)]
        level = rng.pick(DISCRETE_LEVELS) if difficulty == "혼합" else difficulty
        items.append({
            "title": f"{t['title']} ({theme})" if theme and theme.strip() else t["title"],
            "situation": levelize(t["base"], level),
            "options": list(t["options"]),
            "correct_option": t["correct"],
        })
    return items


def _find(db: Session, theme: str, difficulty: str, count: int, seed: str, version: int) -> QuizSet | None:
    return (db.query(QuizSet)
              .filter(QuizSet.theme == theme,
                      QuizSet.difficulty == difficulty,
                      QuizSet.count == count,
                      QuizSet.seed == seed,
                      QuizSet.version == version)
              .first())


def _attach_questions(quiz_set: QuizSet, items: List[Dict]) -> None:
    for idx, q in enumerate(items):
        quiz_set.questions.append(QuizQuestion(
            idx=idx,
            title=q["title"],
            situation=q["situation"],
            options=q["options"],
            correct_option=q["correct_option"],
        ))


def _ensure_questions(db: Session, quiz_set: QuizSet) -> None:
    if quiz_set.questions:
        return
    log.warning("[QUIZSET] set=%s 문제 없음, 같은 시드로 다시 채움", quiz_set.id)
    items = make_deterministic_quiz(quiz_set.theme, quiz_set.count, quiz_set.difficulty, quiz_set.seed)
    _attach_questions(quiz_set, items)
    try:
        db.commit()
    except IntegrityError:
        # (quiz_set_id, idx) 충돌: 다른 요청이 먼저 채웠다
        db.rollback()
        log.info("[QUIZSET] set=%s 이미 채워짐, 다시 읽음", quiz_set.id)
    except SQLAlchemyError as e:
        db.rollback()
        log.error("[QUIZSET] set=%s 문제 저장 실패: %s", quiz_set.id, e)
        raise StorageError(str(e)) from e
    db.refresh(quiz_set)


def get_or_create(
    db: Session,
    theme: str = "",
    difficulty: str = "혼합",
    count: int = 20,
    seed: str = "default",
    version: int = 1,
) -> Tuple[QuizSet, List[QuizQuestion], bool]:
    try:
        existing = _find(db, theme, difficulty, count, seed, version)
    except SQLAlchemyError as e:
        raise StorageError(str(e)) from e

    if existing is not None:
        _ensure_questions(db, existing)
        log.debug("[QUIZSET] hit set=%s", existing.id)
        return existing, list(existing.questions), False

    # 세트 행과 문제는 한 트랜잭션으로 커밋한다
    items = make_deterministic_quiz(theme, count, difficulty, seed)
    quiz_set = QuizSet(theme=theme, difficulty=difficulty, count=count, seed=seed, version=version, published=True)
    _attach_questions(quiz_set, items)
    db.add(quiz_set)
    try:
        db.commit()
    except IntegrityError:
        # 같은 키로 먼저 들어간 세트를 다시 읽는다
        db.rollback()
        log.info("[QUIZSET] 키 충돌, 기존 세트 재조회 theme=%r seed=%r", theme, seed)
        existing = _find(db, theme, difficulty, count, seed, version)
        if existing is None:
            raise StorageError("quiz set conflict without existing row")
        _ensure_questions(db, existing)
        return existing, list(existing.questions), False
    except SQLAlchemyError as e:
        db.rollback()
        log.error("[QUIZSET] 세트 저장 실패 theme=%r seed=%r: %s", theme, seed, e)
        raise StorageError(str(e)) from e

    db.refresh(quiz_set)
    log.info("[QUIZSET] created set=%s theme=%r difficulty=%s count=%d", quiz_set.id, theme, difficulty, count)
    return quiz_set, list(quiz_set.questions), True
