from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, String, Boolean, DateTime, ForeignKey
from datetime import datetime
from ..db import Base
from .scenario import Scenario, _now

class UserProgress(Base):
    """답안 제출 1회 = 1행 (append-only)"""
    __tablename__ = "user_progress"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    scenario_id: Mapped[int] = mapped_column(ForeignKey("scenarios.id", ondelete="CASCADE"), index=True)
    user_session: Mapped[str] = mapped_column(String(64), index=True)
    is_correct: Mapped[bool] = mapped_column(Boolean)
    attempts: Mapped[int] = mapped_column(Integer, default=1)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_now)

    scenario: Mapped[Scenario] = relationship(back_populates="progress")


class WrongAnswer(Base):
    """오답노트 항목. correct_count 가 3이 되면 삭제된다."""
    __tablename__ = "wrong_answers"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    scenario_id: Mapped[int] = mapped_column(ForeignKey("scenarios.id", ondelete="CASCADE"), index=True)
    user_session: Mapped[str] = mapped_column(String(64), index=True)
    correct_count: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_now, onupdate=_now)

    scenario: Mapped[Scenario] = relationship(back_populates="wrong_answers")
