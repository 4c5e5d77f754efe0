# situation_game/ai/prompts.py
from .difficulty_rules import BANNED_PHRASES

COMPLEXITY_RULES = """문장 복잡도 규칙:
- easy/beginner(하): 1문장, 4~6어절, 연결어/종속절 없음, 단순 동사, '~해요' 체. 예) "친구와 놀았어요"
- medium/intermediate(중): 1문장, 7~11어절, 장소/시간 수식어 1개 허용, 간단 연결어 1개 이내. 예) "나는 친구와 같이 놀이터에서 놀았어요"
- hard/advanced(상): 정확히 2문장, 총 12~18어절, 시간/장소 + 부사 1개 + 이유/배경 1개. 예) "학교가 끝난 뒤, 나는 친구와 놀이터에서 신나게 놀았어요. 집에 가기 전이라서 더 신났어요."
"""

BANNED_RULE = "금지: " + ", ".join(f"'{p}'" for p in BANNED_PHRASES) + " 등 메타 문구, 해설형 문장, 문제 외 설명."

SCENARIO_JSON_FORMAT = """JSON 배열만 반환하세요:
[
  {
    "title": "간단한 상황 제목",
    "situation": "구체적인 상황 설명 (아동 관점에서 이해하기 쉽게)",
    "options": ["첫 번째 선택지", "두 번째 선택지", "세 번째 선택지"],
    "correct_option": 0
  }
]
correct_option 은 0, 1, 2 중 하나입니다. 코드 블록이나 추가 설명은 포함하지 마세요."""

# 메인 테마별 상황 설명
THEME_DESCRIPTIONS = {
    "school": "학교에서 일어날 수 있는 다양한 상황들 (친구 관계, 수업 시간, 선생님과의 소통, 규칙 준수 등)",
    "playground": "놀이터에서 일어날 수 있는 다양한 상황들 (놀이기구 사용, 친구들과의 놀이, 안전 수칙, 예의 지키기 등)",
    "transport": "버스나 지하철에서 일어날 수 있는 상황들 (자리 양보, 공공장소 예절, 교통 안전 등)",
    "hospital": "병원에서 일어날 수 있는 상황들 (진료 받기, 대기실 예절, 약 먹기 등)",
    "library": "도서관에서 일어날 수 있는 상황들 (조용히 하기, 책 빌리기, 책 아껴 쓰기 등)",
    "home": "집에서 일어날 수 있는 다양한 상황들 (가족과의 관계, 집안일 도움, 개인 위생, 책임감 등)",
}


def custom_scenarios_system() -> str:
    return f"""당신은 경계선 지능 아동을 위한 교육 시나리오를 만드는 전문가입니다.
사용자가 제공한 문제 상황을 바탕으로 아동이 상황 판단력과 사회성을 기를 수 있는 시나리오 10개를 만들어주세요.
각 시나리오는 명확한 올바른 선택이 하나만 있어야 합니다.

{BANNED_RULE}

{SCENARIO_JSON_FORMAT}"""


def main_scenarios_system() -> str:
    return f"""당신은 경계선 지능 아동(5~10세)을 위한 교육 시나리오를 만드는 전문가입니다.
주어진 테마에 맞는 현실적이고 교육적인 시나리오 20개를 만들어주세요.

각 시나리오는 다음 조건을 만족해야 합니다:
1. 아동이 실제로 경험할 수 있는 상황
2. 명확한 올바른 선택이 있는 상황
3. 도덕적, 사회적 가치를 배울 수 있는 내용

{BANNED_RULE}

{SCENARIO_JSON_FORMAT}"""


THEME_NAME_SYSTEM = (
    "주어진 문제 상황을 바탕으로 아이들이 이해하기 쉬운 테마 이름을 만들어주세요. "
    "15글자 이내의 간단하고 친근한 제목으로 만드세요. "
    '예: "친구와 갈등 해결하기", "학교에서 예의 지키기" 등. '
    'JSON 문자열 하나만 반환하세요. 예: "친구와 갈등 해결하기"'
)


def literacy_quiz_system(count: int) -> str:
    return f"""당신은 경계선 지능 아동을 위한 문해력 퀴즈 출제 전문가입니다. 이 퀴즈는 메인 시나리오 게임의 난이도 측정만을 위한 간단한 읽기 이해 문제로 구성합니다.

설계 원칙:
- 초등학교 1-2학년 수준. 게임 목적과 무관한 어려운 어휘/지문 금지.
- 짧은 문장 읽기 이해만 확인.
- 상/중/하(= hard/medium/easy) 3단계 문장 복잡도 규칙을 엄격히 준수.

{COMPLEXITY_RULES}
{BANNED_RULE}

문제 형식(JSON 배열):
[
  {{
    "id": 1,
    "question": "문장(레벨 규칙 반영)",
    "options": ["보기1", "보기2", "보기3", "보기4"],
    "correctAnswer": 0,
    "level": "easy" | "medium" | "hard"
  }}
]

요구사항:
- 총 {count}문항, 각 레벨 최소 1문항씩 포함(easy/medium/hard).
- 오답은 정답과 혼동되지 않게 단순·명확.
- 반드시 유효한 JSON 배열만 출력. 코드블록/설명 금지."""


ADJUST_GUIDE = {
    "beginner": {
        "title": "초등학교 1학년 수준으로 매우 쉬운 단어를 사용하여 짧은 제목으로 만드세요.",
        "situation": "easy(하) 규칙을 지키세요: 1문장, 4~6어절, 연결어/종속절 없음, '~해요' 체.",
        "options": "아주 간단한 단어와 짧은 문장으로 작성하세요. 각 선택지는 20글자 이내로 하세요.",
    },
    "intermediate": {
        "title": "초등학교 2학년 수준의 어휘로 적절한 길이의 제목으로 만드세요.",
        "situation": "medium(중) 규칙을 지키세요: 1문장, 7~11어절, 장소/시간 수식어 1개, 연결어 1개 이내.",
        "options": "초등학교 2학년이 읽을 수 있는 기본 어휘로 작성하세요.",
    },
    "advanced": {
        "title": "초등학교 3학년 수준의 조금 더 구체적인 제목으로 만드세요.",
        "situation": "hard(상) 규칙을 지키세요: 정확히 2문장, 총 12~18어절, 시간/장소 수식어 + 부사 1개 + 이유/배경 1개.",
        "options": "초등학교 3학년 수준으로, 행동을 여러 단계로 구체적으로 풀어 쓰세요.",
    },
}


def adjust_system(level: str) -> str:
    guide = ADJUST_GUIDE[level]
    return f"""당신은 경계선 지능 아동을 위한 교육 시나리오의 난이도를 조정하는 전문가입니다.
주어진 시나리오를 {level} 난이도에 맞게 수정해주세요. 정답이 바뀌지 않도록 선택지의 의미와 순서는 유지하세요.

난이도별 지침:
- 제목: {guide['title']}
- 상황: {guide['situation']}
- 선택지: {guide['options']}

{COMPLEXITY_RULES}
{BANNED_RULE}

다음 JSON 형식으로 반환해주세요:
{{
  "title": "수정된 제목",
  "situation": "수정된 상황 설명",
  "options": ["수정된 선택지1", "수정된 선택지2", "수정된 선택지3"]
}}"""
