import uuid

from sqlalchemy import JSON, Float, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Resource(Base):
    __tablename__ = "resources"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    milestone_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("milestones.id", ondelete="CASCADE"), index=True)
    client_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    source: Mapped[str] = mapped_column(String(30), nullable=False)  # youtube/books/github/wikipedia/stackexchange
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    meta: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    rank_score: Mapped[float] = mapped_column(Float, nullable=False)
