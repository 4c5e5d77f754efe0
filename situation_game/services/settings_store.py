# situation_game/services/settings_store.py
"""
세션별 문해력 레벨 저장소.

- load-on-start: 생성 시 settings_store_path 의 JSON 을 읽는다.
- persist-on-write: 값이 바뀔 때마다 문서 전체를 다시 쓴다.
- 만료 없음. 다음 사전 테스트나 직접 선택으로만 덮어쓴다.
"""
import json
import logging
import os
import threading
import time
from typing import Any, Dict

from cachetools import TTLCache

from ..config import settings
from ..errors import StorageError

log = logging.getLogger("literacy")


class SettingsStore:
    def __init__(self, path: str | None = None):
        self.path = path
        self._lock = threading.Lock()
        self._data: Dict[str, Dict[str, Any]] = {}
        self._load()

    def _load(self) -> None:
        if not self.path or not os.path.exists(self.path):
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            # 깨진 파일이면 빈 상태로 시작
            log.warning("[SETTINGS] %s 읽기 실패: %s", self.path, e)
            return
        if isinstance(data, dict):
            self._data = {k: v for k, v in data.items() if isinstance(v, dict)}

    def _persist(self) -> None:
        if not self.path:
            return
        tmp = f"{self.path}.tmp"
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(self._data, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except OSError as e:
            log.error("[SETTINGS] %s 저장 실패: %s", self.path, e)
            raise StorageError(str(e)) from e

    def get_level(self, session: str) -> str | None:
        return self._data.get(session, {}).get("literacyLevel")

    def is_test_completed(self, session: str) -> bool:
        return bool(self._data.get(session, {}).get("literacyTestCompleted"))

    def _write(self, session: str, level: str) -> None:
        with self._lock:
            entry = self._data.setdefault(session, {})
            entry["literacyLevel"] = level
            entry["literacyTestCompleted"] = True
            self._persist()

    def save_pretest_result(self, session: str, level: str) -> None:
        self._write(session, level)
        log.info("[SETTINGS] session=%s pretest level=%s", session, level)

    def set_level(self, session: str, level: str) -> None:
        # 직접 선택도 사전 테스트 완료로 본다
        self._write(session, level)
        log.info("[SETTINGS] session=%s selected level=%s", session, level)


class SessionCache:
    """(session, tag) 단위 캐시. 마지막 쓰기 후 ttl 이 지나면 세션이 끝난 것으로 보고 사라진다."""

    def __init__(self, ttl: float | None = None, maxsize: int | None = None, timer=time.monotonic):
        self._lock = threading.Lock()
        self._items: TTLCache = TTLCache(
            maxsize=maxsize or settings.session_cache_maxsize,
            ttl=ttl or settings.session_ttl_seconds,
            timer=timer,
        )

    def get(self, session: str, tag: str) -> Any:
        with self._lock:
            return self._items.get((session, tag))

    def set(self, session: str, tag: str, value: Any) -> None:
        with self._lock:
            self._items[(session, tag)] = value

    def clear(self, session: str) -> None:
        with self._lock:
            self._items.expire()
            for key in [k for k in list(self._items.keys()) if k[0] == session]:
                self._items.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            self._items.expire()
            return len(self._items)


settings_store = SettingsStore(settings.settings_store_path or None)
session_cache = SessionCache()


def get_settings_store() -> SettingsStore:
    return settings_store


def get_session_cache() -> SessionCache:
    return session_cache
