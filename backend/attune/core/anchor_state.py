"""Anchor State — per-user snapshot shared across the user's devices."""

from dataclasses import dataclass, field
from datetime import datetime

from attune.core.domain_types import UserId
from attune.core.environment import utc_now


@dataclass(frozen=True)
class AnchorState:
    user_id: UserId
    emotion_vector: dict[str, float] = field(default_factory=dict)
    friction_score: float = 0.0
    current_task: str | None = None
    clipboard_history: list[str] = field(default_factory=list)
    timestamp: datetime = field(default_factory=utc_now)
