"""Anchor Schemas — cross-device anchor state and sync requests."""

from datetime import datetime

from pydantic import Field

from attune.core.anchor_state import AnchorState
from attune.core.domain_types import UserId
from attune.core.environment import utc_now
from attune.schemas import CamelModel
from attune.schemas.signals import EmotionVector, UnitFloat, emotions_to_domain


class AnchorStateSchema(CamelModel):
    user_id: str = Field(min_length=1, max_length=255)
    emotion_vector: EmotionVector = Field(default_factory=dict)
    friction_score: UnitFloat = 0.0
    current_task: str | None = Field(None, max_length=2000)
    clipboard_history: list[str] = Field(default_factory=list, max_length=100)
    timestamp: datetime | None = None

    def to_domain(self) -> AnchorState:
        return AnchorState(
            user_id=UserId(self.user_id),
            emotion_vector=emotions_to_domain(self.emotion_vector) or {},
            friction_score=self.friction_score,
            current_task=self.current_task,
            clipboard_history=list(self.clipboard_history),
            timestamp=self.timestamp or utc_now(),
        )


class SyncRequest(CamelModel):
    user_id: str = Field(min_length=1, max_length=255)
    device_ids: list[str] = Field(default_factory=list)


class SyncResponse(CamelModel):
    synced: bool
