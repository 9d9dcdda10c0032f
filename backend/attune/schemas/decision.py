"""Decision Schemas — collapse and friction-score request/response contracts.

Invariants:
    - features may be empty (documented boundary case: confidence 0)
    - friction metrics rates bounded [0, 1]; free_ram is non-negative bytes
"""

from datetime import datetime

from pydantic import Field

from attune.core.collapse_engine import DecisionContext
from attune.core.domain_types import (
    DecisionAction, DecisionOutcome, QuatState, Trit, UserId,
)
from attune.core.friction_model import FrictionMetrics
from attune.schemas import CamelModel
from attune.schemas.signals import EmotionVector, UnitFloat, emotions_to_domain


class DecideRequest(CamelModel):
    user_id: str = Field(min_length=1, max_length=255)
    features: list[float] = Field(default_factory=list, max_length=1024)
    emotion_vector: EmotionVector | None = None
    friction_score: UnitFloat | None = None
    multi_device_context: bool | None = None
    device_ids: list[str] | None = None

    def to_domain(self) -> DecisionContext:
        return DecisionContext(
            user_id=UserId(self.user_id),
            features=list(self.features),
            emotion_vector=emotions_to_domain(self.emotion_vector),
            friction_score=self.friction_score,
            multi_device_context=self.multi_device_context,
            device_ids=list(self.device_ids) if self.device_ids is not None else None,
        )


class DecisionResponse(CamelModel):
    action: DecisionAction
    confidence: float
    tri_state: Trit
    quat_state: QuatState | None = None
    rationale: str


class FrictionRequest(CamelModel):
    battery_entropy: UnitFloat
    free_ram: int = Field(ge=0)
    behavioral_auth_error_rate: UnitFloat
    typing_error_rate: UnitFloat
    emotion_vector: EmotionVector | None = None

    def to_domain(self) -> FrictionMetrics:
        return FrictionMetrics(
            battery_entropy=self.battery_entropy,
            free_ram=self.free_ram,
            behavioral_auth_error_rate=self.behavioral_auth_error_rate,
            typing_error_rate=self.typing_error_rate,
            emotion_vector=emotions_to_domain(self.emotion_vector),
        )


class FrictionResponse(CamelModel):
    friction_score: float


class DecisionRecordResponse(CamelModel):
    user_id: str
    tri_state: Trit
    quat_state: QuatState | None = None
    action: DecisionAction
    outcome: DecisionOutcome
    timestamp: datetime
