from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, String, Text, Boolean, DateTime, ForeignKey, UniqueConstraint
from datetime import datetime, timezone
from ..db import Base

def _now() -> datetime:
    return datetime.now(timezone.utc)

class Scenario(Base):
    __tablename__ = "scenarios"
    # 삭제된 id 는 다시 쓰지 않는다
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255))
    situation: Mapped[str] = mapped_column(Text)
    category: Mapped[str] = mapped_column(String(16), index=True)          # 'main' | 'custom'
    theme: Mapped[str] = mapped_column(String(255), index=True)            # custom_themes.theme_name 과 문자열로 연결 (FK 아님)
    difficulty_level: Mapped[int | None] = mapped_column(Integer, nullable=True)  # 예약 컬럼, 사용하지 않음
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_now, onupdate=_now)

    options: Mapped[list["ScenarioOption"]] = relationship(
        back_populates="scenario", cascade="all, delete-orphan", order_by="ScenarioOption.option_order"
    )
    progress: Mapped[list["UserProgress"]] = relationship(back_populates="scenario", cascade="all, delete-orphan")
    wrong_answers: Mapped[list["WrongAnswer"]] = relationship(back_populates="scenario", cascade="all, delete-orphan")


class ScenarioOption(Base):
    __tablename__ = "scenario_options"
    __table_args__ = (
        UniqueConstraint("scenario_id", "option_order", name="uq_scenario_option_order"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    scenario_id: Mapped[int] = mapped_column(ForeignKey("scenarios.id", ondelete="CASCADE"), index=True)
    text: Mapped[str] = mapped_column(Text)
    option_order: Mapped[int] = mapped_column(Integer)     # 0부터, 시나리오 내에서 연속
    is_correct: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_now)

    scenario: Mapped[Scenario] = relationship(back_populates="options")
