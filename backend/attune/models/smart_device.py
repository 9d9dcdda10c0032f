"""SmartDevice ORM — last-known state of a user's controllable device.

Invariants:
    - (user_id, device_id) is unique — re-registration overwrites the row
    - state is an open JSON bag; command parameters merge into it shallowly
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from attune.db.base import Base


class SmartDeviceRow(Base):
    """Registered device per (user, device_id)."""
    __tablename__ = "smart_home_devices"
    __table_args__ = (
        UniqueConstraint("user_id", "device_id", name="uq_device_per_user"),
    )

    pk: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(255), nullable=False)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    device_id: Mapped[str] = mapped_column(String(255), nullable=False)
    device_name: Mapped[str] = mapped_column(String(255), nullable=False)
    device_type: Mapped[str] = mapped_column(String(50), nullable=False)
    state: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    last_synced_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
