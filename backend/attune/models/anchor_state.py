"""AnchorState ORM — latest cross-device anchor snapshot, one row per user."""

from datetime import datetime

from sqlalchemy import Float, String, Text, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from attune.db.base import Base


class AnchorStateRow(Base):
    __tablename__ = "anchor_states"

    user_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    emotion_vector: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    friction_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    current_task: Mapped[str | None] = mapped_column(Text, nullable=True)
    clipboard_history: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
