"""Signal Schemas — emotion vectors and unit-interval scores shared by all routes."""

from typing import Annotated

from pydantic import Field

from attune.core.domain_types import Emotion


UnitFloat = Annotated[float, Field(ge=0.0, le=1.0)]
EmotionVector = dict[Emotion, UnitFloat]


def emotions_to_domain(vector: EmotionVector | None) -> dict[str, float] | None:
    """Enum keys → plain str keys for the core and the JSON columns."""
    if vector is None:
        return None
    return {emotion.value: value for emotion, value in vector.items()}
