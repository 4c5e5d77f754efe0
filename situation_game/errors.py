# situation_game/errors.py
# 모든 실패는 아이에게 보여줄 메시지와 돌아갈 경로(exit)를 함께 가진다.

from .schemas.common import ErrorBody


class GameError(Exception):
    status_code = 500
    code = "internal_error"
    message = "문제가 생겼어요. 처음 화면으로 돌아가 볼까요?"
    exit_to = "/"

    def __init__(self, detail: str | None = None, *, message: str | None = None, exit_to: str | None = None):
        super().__init__(detail or self.message)
        self.detail = detail
        if message:
            self.message = message
        if exit_to:
            self.exit_to = exit_to

    def to_dict(self) -> dict:
        return ErrorBody(error=self.code, message=self.message, exit=self.exit_to).model_dump()


class UpstreamServiceError(GameError):
    """생성 서비스 호출 실패 (네트워크/비정상 응답)"""
    status_code = 502
    code = "upstream_unavailable"
    message = "지금은 문제를 만들 수 없어요. 잠시 후 다시 해 볼까요?"


class MalformedResponseError(GameError):
    """생성 서비스 응답이 JSON으로 해석되지 않음"""
    status_code = 502
    code = "malformed_response"
    message = "문제를 만드는 중에 오류가 발생했어요."


class StorageError(GameError):
    status_code = 503
    code = "storage_failure"
    message = "저장하는 중 오류가 발생했습니다."


class ScenarioLoadError(StorageError):
    code = "scenario_load_failed"
    message = "시나리오를 불러오는 중 오류가 발생했습니다."
    exit_to = "/main-game"


class NotFoundError(GameError):
    status_code = 404
    code = "not_found"
    message = "찾는 내용이 없어요."


class InvalidReviewTransition(GameError):
    status_code = 409
    code = "invalid_review_step"
    message = "이미 처리된 복습이에요. 오답노트로 돌아가요."
    exit_to = "/wrong-answers"
