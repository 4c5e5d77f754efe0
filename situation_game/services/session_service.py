# situation_game/services/session_service.py
# 익명 세션 식별자. 클라이언트가 X-User-Session 헤더로 계속 돌려보내는 한 유지된다.
import re
import uuid

from fastapi import Header, Response

SESSION_HEADER = "X-User-Session"
_SESSION_RE = re.compile(r"^session_[0-9a-f]{32}$")


def new_session_id() -> str:
    return f"session_{uuid.uuid4().hex}"


def is_valid_session(value: str | None) -> bool:
    return bool(value and _SESSION_RE.match(value))


def get_user_session(
    response: Response,
    x_user_session: str | None = Header(default=None, alias=SESSION_HEADER),
) -> str:
    """헤더가 없거나 형식이 틀리면 새로 발급. 응답 헤더로 항상 돌려준다."""
    session = x_user_session if is_valid_session(x_user_session) else new_session_id()
    response.headers[SESSION_HEADER] = session
    return session
