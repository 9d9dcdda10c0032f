"""Device Command State — pure state-bag transition for a dispatched command.

Invariants:
    - apply_command is PURE: returns a new dict, never mutates the input state
    - Parameters merge shallowly over the existing state (last write wins per key)
    - lastCommand and lastCommandTime (epoch ms) are always stamped after the merge
"""

from datetime import datetime
from typing import Any


LAST_COMMAND_KEY = "lastCommand"
LAST_COMMAND_TIME_KEY = "lastCommandTime"


def epoch_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def apply_command(
    state: dict[str, Any],
    command: str,
    parameters: dict[str, Any],
    now: datetime,
) -> dict[str, Any]:
    """State after a successful command."""
    return {
        **state,
        **parameters,
        LAST_COMMAND_KEY: command,
        LAST_COMMAND_TIME_KEY: epoch_ms(now),
    }
