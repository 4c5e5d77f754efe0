# situation_game/db.py
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from .config import settings

# sqlite 는 요청 스레드가 바뀌어도 같은 연결을 쓸 수 있어야 한다
_connect_args = {"check_same_thread": False} if settings.db_url.startswith("sqlite") else {}

engine = create_engine(settings.db_url, pool_pre_ping=True, echo=False, connect_args=_connect_args)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
Base = declarative_base()


def init_db(bind: Engine | None = None) -> None:
    """모델 모듈을 등록한 뒤 테이블 생성 (이미 있으면 그대로 둔다)"""
    from . import models  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
