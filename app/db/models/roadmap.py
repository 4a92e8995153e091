## Adding roadmap table
import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Roadmap(Base):
    __tablename__ = "roadmaps"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    client_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    topic: Mapped[str] = mapped_column(String(200), nullable=False)
    exam: Mapped[str | None] = mapped_column(String(200), nullable=True)

    time_value: Mapped[int] = mapped_column(Integer, nullable=False)
    time_unit: Mapped[str] = mapped_column(String(20), nullable=False)  # days/weeks/months
    difficulty: Mapped[str] = mapped_column(String(20), nullable=False, default="intermediate")
    hour_budget: Mapped[int] = mapped_column(Integer, nullable=False)

    # legacy free-text deadline variant; always NULL for duration-based plans
    deadline_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
