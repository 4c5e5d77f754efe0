# situation_game/ai/difficulty_adjuster.py
import logging
from typing import List

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from ..errors import UpstreamServiceError, MalformedResponseError
from ..models.scenario import Scenario, ScenarioOption
from ..schemas.scenario import ScenarioOut, AdjustedScenario
from .genai_client import GenerationClient
from .difficulty_rules import scrub_banned
from .prompts import adjust_system

log = logging.getLogger("rewrite")


class DifficultyAdjuster:
    """
    생성 서비스에 시나리오 단위로 난이도 조정을 맡긴다.
    - intermediate: 호출 없이 원문 그대로
    - 서비스 장애: 해당 시나리오는 원문 유지 (adjusted=False), 저장하지 않음
    - 응답 형식 불량: 해당 시나리오만 건너뜀
    """

    def __init__(self, generator: GenerationClient | None = None):
        self.generator = generator or GenerationClient()

    def adjust(self, db: Session, scenarios: List[ScenarioOut], level: str) -> List[AdjustedScenario]:
        if level == "intermediate":
            return [self._unchanged(s, adjusted=True) for s in scenarios]

        results: List[AdjustedScenario] = []
        for sc in scenarios:
            try:
                data = self.generator.generate_json(
                    adjust_system(level),
                    self._prompt(sc),
                    temperature=0.3,
                    max_output_tokens=1000,
                )
            except UpstreamServiceError as e:
                log.warning("[ADJUST] scenario=%s 서비스 장애, 원문 유지: %s", sc.id, e)
                results.append(self._unchanged(sc, adjusted=False))
                continue
            except MalformedResponseError:
                log.warning("[ADJUST] scenario=%s 응답 파싱 실패, 건너뜀", sc.id)
                continue

            adjusted = self._validate(sc, data)
            if adjusted is None:
                log.warning("[ADJUST] scenario=%s 응답 형식 불량, 건너뜀", sc.id)
                continue

            if not self._persist(db, sc, adjusted):
                continue
            results.append(adjusted)

        log.info("[ADJUST] level=%s requested=%d adjusted=%d", level, len(scenarios), len(results))
        return results

    @staticmethod
    def _prompt(sc: ScenarioOut) -> str:
        options = "\n".join(f"{i + 1}. {o.text}" for i, o in enumerate(sc.options))
        return f"""다음 시나리오를 수정해주세요:
제목: {sc.title}
상황: {sc.situation}
선택지:
{options}"""

    @staticmethod
    def _unchanged(sc: ScenarioOut, adjusted: bool) -> AdjustedScenario:
        return AdjustedScenario(
            id=sc.id,
            title=sc.title,
            situation=sc.situation,
            options=[o.text for o in sc.options],
            adjusted=adjusted,
        )

    @staticmethod
    def _validate(sc: ScenarioOut, data) -> AdjustedScenario | None:
        if not isinstance(data, dict):
            return None
        title, situation, options = data.get("title"), data.get("situation"), data.get("options")
        if not isinstance(title, str) or not isinstance(situation, str) or not isinstance(options, list):
            return None
        # 선택지 수가 바뀌면 정답 위치가 어긋난다
        if len(options) != len(sc.options) or not all(isinstance(o, str) for o in options):
            return None
        return AdjustedScenario(
            id=sc.id,
            title=title.strip() or sc.title,
            situation=scrub_banned(situation.strip()) or sc.situation,
            options=[o.strip() for o in options],
        )

    @staticmethod
    def _persist(db: Session, sc: ScenarioOut, adjusted: AdjustedScenario) -> bool:
        try:
            row = db.get(Scenario, sc.id)
            if row is not None:
                row.title = adjusted.title
                row.situation = adjusted.situation
            for opt, text in zip(sc.options, adjusted.options):
                option_row = db.get(ScenarioOption, opt.id)
                if option_row is not None:
                    option_row.text = text
            db.commit()
            return True
        except SQLAlchemyError as e:
            db.rollback()
            log.warning("[ADJUST] scenario=%s 저장 실패, 건너뜀: %s", sc.id, e)
            return False
