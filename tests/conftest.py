import os

# 앱 import 전에 파일 DB / 설정 파일을 쓰지 않도록
os.environ.setdefault("DB_URL", "sqlite://")
os.environ.setdefault("SETTINGS_STORE_PATH", "")

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from situation_game.db import get_db, init_db
from situation_game.main import app
from situation_game.ai.genai_client import GenerationClient, get_generation_client
from situation_game.services.settings_store import (
    SettingsStore,
    SessionCache,
    get_settings_store,
    get_session_cache,
)
from situation_game.services.progress_service import ReviewRegistry, get_review_registry


class FakeModels:
    """models.generate_content 자리. 큐에 넣은 순서대로 text 를 돌려주거나 예외를 던진다."""

    def __init__(self):
        self.replies = []
        self.calls = []

    def generate_content(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        reply = self.replies.pop(0) if self.replies else ""
        if isinstance(reply, Exception):
            raise reply
        return SimpleNamespace(text=reply, candidates=[])


class FakeGenAI:
    def __init__(self):
        self.models = FakeModels()

    def queue(self, *replies):
        self.models.replies.extend(replies)
        return self

    @property
    def calls(self):
        return self.models.calls


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine):
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def fake_genai():
    return FakeGenAI()


@pytest.fixture
def generator(fake_genai):
    return GenerationClient(client=fake_genai, model_name="test-model")


@pytest.fixture
def store():
    return SettingsStore(path=None)


@pytest.fixture
def cache():
    return SessionCache()


@pytest.fixture
def registry():
    return ReviewRegistry()


@pytest.fixture
def client(engine, generator, store, cache, registry):
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def _get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_generation_client] = lambda: generator
    app.dependency_overrides[get_settings_store] = lambda: store
    app.dependency_overrides[get_session_cache] = lambda: cache
    app.dependency_overrides[get_review_registry] = lambda: registry
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
