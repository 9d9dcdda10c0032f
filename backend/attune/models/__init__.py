"""ORM Models — SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every table is keyed by owning user_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from attune.models.smart_device import SmartDeviceRow  # noqa: F401
from attune.models.environmental_policy import EnvironmentalPolicyRow  # noqa: F401
from attune.models.orchestration_record import OrchestrationRecordRow  # noqa: F401
from attune.models.decision_log import DecisionLogRow  # noqa: F401
from attune.models.anchor_state import AnchorStateRow  # noqa: F401
