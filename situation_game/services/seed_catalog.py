# situation_game/services/seed_catalog.py
# 메인 테마 목록과, 테마에 시나리오가 하나도 없을 때 넣는 기본 시나리오
from typing import Dict, List

from ..schemas.scenario import GeneratedScenario, ThemeInfo

MAIN_THEMES: List[ThemeInfo] = [
    ThemeInfo(theme="school", title="학교", description="친구들과 선생님과의 상황"),
    ThemeInfo(theme="playground", title="놀이터/키즈카페", description="놀이하며 생기는 상황들"),
    ThemeInfo(theme="transport", title="대중교통", description="버스나 지하철에서의 상황"),
    ThemeInfo(theme="hospital", title="병원", description="의사선생님과 병원에서"),
    ThemeInfo(theme="library", title="도서관", description="조용히 공부하는 공간에서"),
    ThemeInfo(theme="home", title="가정", description="집에서 가족과 함께"),
]

MAIN_THEME_KEYS = tuple(t.theme for t in MAIN_THEMES)


def _s(title: str, situation: str, options: List[str], correct: int = 1) -> GeneratedScenario:
    return GeneratedScenario(title=title, situation=situation, options=options, correct_option=correct)


SEED_SCENARIOS: Dict[str, List[GeneratedScenario]] = {
    "school": [
        _s("숙제를 깜빡했을 때", "지우는 숙제를 깜빡하고 못 해왔어요. 선생님이 숙제를 보여달라고 하셨어요.",
           ["친구 숙제를 빌려서 그대로 베낀다.", "못 한 이유를 솔직히 말씀드린다.", "숙제장을 집에 두고 왔다고 거짓말한다."]),
        _s("친구가 괴롭힘을 당할 때", "쉬는 시간에 친구가 다른 아이들에게 놀림을 받고 있어요.",
           ["모른 척하고 지나간다.", "선생님께 말씀드린다.", "같이 놀림에 참여한다."]),
        _s("교실에서 떠들 때", "수업 시간에 친구가 재미있는 농담을 해서 웃음이 나와요.",
           ["큰 소리로 웃는다.", "입을 가리고 조용히 웃거나 참는다.", "친구에게도 큰 소리로 이야기한다."]),
        _s("친구와 싸웠을 때", "좋아하는 친구와 사소한 일로 싸웠어요.",
           ["다시는 말을 걸지 않는다.", "먼저 사과하고 화해한다.", "다른 친구들에게 그 친구 흉을 본다."]),
    ],
    "playground": [
        _s("놀이기구를 기다릴 때", "미끄럼틀에 많은 친구들이 줄을 서 있어요. 빨리 타고 싶어요.",
           ["줄을 새치기한다.", "차례대로 기다린다.", "다른 친구들을 밀어낸다."]),
        _s("그네를 타고 싶을 때", "그네를 타고 싶은데 한 친구가 계속 타고 있어요.",
           ["그네를 흔들어서 내려오게 한다.", "잠깐 바꿔달라고 정중하게 부탁한다.", "그 친구를 밀어서 떨어뜨린다."]),
        _s("친구가 놀이기구에서 다쳤을 때", "미끄럼틀에서 친구가 넘어져서 무릎을 다쳤어요.",
           ["재미있다며 웃는다.", "괜찮은지 확인하고 어른에게 알려준다.", "다친 것은 자기 잘못이라고 말한다."]),
        _s("쓰레기를 봤을 때", "놀이터 바닥에 과자봉지가 떨어져 있어요.",
           ["누군가 치울 거라고 생각하고 그냥 둔다.", "주워서 쓰레기통에 버린다.", "발로 차서 더 멀리 보낸다."]),
    ],
    "transport": [
        _s("지하철에서 자리를 양보할 때", "지하철에 할머니가 타셨는데 빈 자리가 없어요.",
           ["모른 척한다.", "자리를 양보해드린다.", "다른 사람이 양보하기를 기다린다."]),
        _s("버스에서 큰 소리로 이야기할 때", "버스에서 친구와 재미있는 이야기를 하고 싶어요.",
           ["큰 소리로 이야기한다.", "작은 목소리로 이야기한다.", "핸드폰으로 큰 소리로 통화한다."]),
        _s("지하철에서 밀려서 부딪혔을 때", "지하철이 갑자기 멈춰서 옆 사람에게 부딪혔어요.",
           ["모른 척하고 딴 곳을 본다.", "죄송하다고 사과한다.", "지하철 탓이라고 말한다."]),
        _s("지하철 출입문에서", "지하철 문이 열렸는데 내리는 사람들이 많아요.",
           ["사람들을 밀치고 먼저 탄다.", "내리는 사람들이 다 내린 후에 탄다.", "문 앞에서 기다리지 않고 끝에서 탄다."]),
    ],
    "hospital": [
        _s("병원에서 주사를 맞을 때", "의사선생님이 주사를 놓으려고 하는데 무서워요.",
           ["소리를 지르며 도망간다.", "무서워도 참고 주사를 맞는다.", "의사선생님을 때린다."]),
        _s("병원 대기실에서 기다릴 때", "병원 대기실에서 오래 기다려야 해서 지루해요.",
           ["큰 소리로 떠들며 뛰어다닌다.", "조용히 책을 읽는다.", "다른 환자들에게 계속 말을 건다."]),
        _s("의사선생님이 진료할 때", "의사선생님이 어디가 아픈지 물어보세요.",
           ["아픈 곳이 없다고 거짓말한다.", "아픈 곳을 정확하게 설명해드린다.", "다른 이야기만 계속한다."]),
        _s("병원에서 약을 받을 때", "약국에서 쓴 약을 받았는데 먹고 싶지 않아요.",
           ["약을 먹지 않겠다고 떼를 쓴다.", "빨리 낫기 위해 참고 먹는다.", "약을 몰래 버린다."]),
    ],
    "library": [
        _s("도서관에서 조용히 해야 할 때", "도서관에서 친구와 재미있는 이야기를 하고 싶어요.",
           ["큰 소리로 이야기한다.", "속삭이거나 밖에 나가서 이야기한다.", "다른 사람들에게 시끄럽다고 불평한다."]),
        _s("도서관에서 책을 찾을 때", "읽고 싶은 책을 찾고 있는데 어디 있는지 모르겠어요.",
           ["책장을 마구 뒤진다.", "사서 선생님께 도움을 요청한다.", "다른 사람이 읽는 책을 뺏어서 본다."]),
        _s("도서관에서 책을 손상시켰을 때", "실수로 빌린 책에 물을 쏟아서 젖게 했어요.",
           ["모른 척하고 그냥 반납한다.", "사서 선생님께 사과하고 여쭤본다.", "다른 같은 책으로 바꿔치기한다."]),
        _s("도서관에서 책을 고를 때", "책장에서 책을 꺼내보고 있는데 원하는 책이 아니에요.",
           ["책을 아무 곳에나 꽂아둔다.", "원래 있던 자리에 정확히 꽂아둔다.", "바닥에 놓고 간다."]),
    ],
    "home": [
        _s("집에서 식사 시간에", "저녁 식사 시간인데 게임을 더 하고 싶어요.",
           ["게임을 계속한다.", "게임을 끄고 가족과 함께 식사한다.", "밥을 먹으면서 게임을 한다."]),
        _s("집에서 숙제할 시간에", "숙제를 해야 하는데 TV에서 재미있는 프로그램이 나와요.",
           ["TV를 보고 숙제는 나중에 한다.", "숙제를 먼저 끝내고 TV를 본다.", "TV를 보면서 숙제를 대충한다."]),
        _s("동생과 장난감을 나눠 쓸 때", "동생이 내가 가지고 놀던 장난감을 갖고 싶어해요.",
           ["절대 안 준다고 거절한다.", "조금 더 놀고 나서 나눠서 논다.", "동생 장난감을 빼앗아온다."]),
        _s("청소를 도와달라고 할 때", "엄마가 방 정리를 도와달라고 하셨어요.",
           ["나중에 하겠다고 미룬다.", "지금 바로 도와드린다.", "동생이 하라고 한다."]),
    ],
}


def seed_for(theme: str) -> List[GeneratedScenario]:
    return SEED_SCENARIOS[theme]
