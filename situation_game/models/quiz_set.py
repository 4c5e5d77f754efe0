from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, String, Boolean, Text, JSON, DateTime, ForeignKey, UniqueConstraint
from datetime import datetime
from ..db import Base
from .scenario import _now

class QuizSet(Base):
    __tablename__ = "quiz_sets"
    __table_args__ = (
        UniqueConstraint("theme", "difficulty", "count", "seed", "version", name="uq_quiz_set_key"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    theme: Mapped[str] = mapped_column(String(255))
    difficulty: Mapped[str] = mapped_column(String(8))       # 하 | 중 | 상 | 혼합
    count: Mapped[int] = mapped_column(Integer)
    seed: Mapped[str] = mapped_column(String(255))
    version: Mapped[int] = mapped_column(Integer, default=1)
    published: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_now)

    questions: Mapped[list["QuizQuestion"]] = relationship(
        back_populates="quiz_set", cascade="all, delete-orphan", order_by="QuizQuestion.idx"
    )


class QuizQuestion(Base):
    __tablename__ = "quiz_questions"
    __table_args__ = (
        UniqueConstraint("quiz_set_id", "idx", name="uq_quiz_question_idx"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    quiz_set_id: Mapped[int] = mapped_column(ForeignKey("quiz_sets.id", ondelete="CASCADE"), index=True)
    idx: Mapped[int] = mapped_column(Integer)
    title: Mapped[str] = mapped_column(String(255))
    situation: Mapped[str] = mapped_column(Text)
    options: Mapped[list] = mapped_column(JSON)               # 선택지 3개
    correct_option: Mapped[int] = mapped_column(Integer)      # 0 | 1 | 2

    quiz_set: Mapped[QuizSet] = relationship(back_populates="questions")
