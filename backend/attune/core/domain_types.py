"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, DeviceId, PolicyId wrap str — never use bare str for identity in domain logic
    - FrictionScore and Confidence are bounded 0.0–1.0 (clamped by producers)
    - All closed vocabularies encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - Domain dicts (emotion vectors, state bags) hold plain str keys: schemas convert
      Enum keys to .value at the boundary so persisted JSON never carries Enum members
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
DeviceId = NewType("DeviceId", str)
PolicyId = NewType("PolicyId", str)


# ─── Value Types ─────────────────────────────────────────────────

FrictionScore = NewType("FrictionScore", float)   # 0.0–1.0
Confidence = NewType("Confidence", float)         # 0.0–1.0


# ─── Collapse ────────────────────────────────────────────────────

class Trit(str, Enum):
    """Quantized outcome of one stochastic observation.

    Declaration order is the tie-break priority for majority voting.
    """
    TRUE = "TRUE"
    FALSE = "FALSE"
    SUPERPOSITION = "SUPERPOSITION"


class QuatState(str, Enum):
    """Fourth state, only ever attached on top of a trit majority."""
    ENTANGLEMENT = "ENTANGLEMENT"


class DecisionAction(str, Enum):
    PROCEED_LOCAL = "PROCEED_LOCAL"
    SKIP_LOCAL = "SKIP_LOCAL"
    DEFER_UNTIL_COLLAPSE = "DEFER_UNTIL_COLLAPSE"
    ORCHESTRATE_SYNC = "ORCHESTRATE_SYNC"


class DecisionOutcome(str, Enum):
    """Audit outcome recorded alongside every emitted decision."""
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    DEFERRED = "DEFERRED"
    SKIPPED = "SKIPPED"


# ─── Signals ─────────────────────────────────────────────────────

class Emotion(str, Enum):
    """Closed emotion vocabulary accepted at the API boundary."""
    BORED = "bored"
    RUSHED = "rushed"
    PLAYFUL = "playful"
    LONELY = "lonely"
    FOCUSED = "focused"
    TIRED = "tired"
    HYPE = "hype"


# ─── Devices ─────────────────────────────────────────────────────

class DeviceType(str, Enum):
    LIGHT = "light"
    THERMOSTAT = "thermostat"
    SPEAKER = "speaker"
    LOCK = "lock"
    CAMERA = "camera"
    OTHER = "other"


class DeviceCommand(str, Enum):
    """Closed command vocabulary for policy actions."""
    TURN_ON = "turn_on"
    TURN_OFF = "turn_off"
    SET_BRIGHTNESS = "set_brightness"
    SET_COLOR = "set_color"
    SET_TEMPERATURE = "set_temperature"
    SET_MODE = "set_mode"
    SET_VOLUME = "set_volume"
    PLAY_PLAYLIST = "play_playlist"
    PAUSE = "pause"
    LOCK = "lock"
    UNLOCK = "unlock"
    START_RECORDING = "start_recording"
    STOP_RECORDING = "stop_recording"


class CommandStatus(str, Enum):
    """Tagged outcome of one device command within an orchestration."""
    SUCCESS = "success"
    DEVICE_NOT_FOUND = "device_not_found"
    EXECUTION_ERROR = "execution_error"
    TIMEOUT = "timeout"
