"""Anchor Service — store, read, and fan out a user's cross-device anchor state.

Invariants:
    - store_state replaces the user's previous anchor
    - sync_across_devices returns False when the user has no anchor, True otherwise

Design Decisions:
    - Sync is logged, not transported: peer-to-peer delivery belongs to the device adapter
"""

import logging

from attune.core.anchor_state import AnchorState
from attune.core.domain_types import UserId
from attune.core.repository_protocols import AnchorRepository

logger = logging.getLogger(__name__)


class AnchorService:

    def __init__(self, anchors: AnchorRepository):
        self._anchors = anchors

    async def store_state(self, state: AnchorState) -> None:
        await self._anchors.put(state)

    async def get_state(self, user_id: UserId) -> AnchorState | None:
        return await self._anchors.get(user_id)

    async def sync_across_devices(
        self, user_id: UserId, device_ids: list[str],
    ) -> bool:
        state = await self._anchors.get(user_id)
        if state is None:
            logger.warning(
                "Anchor sync requested without stored state",
                extra={"user_id": user_id},
            )
            return False
        logger.info(
            f"Syncing anchor state across devices: {', '.join(device_ids)}",
            extra={"user_id": user_id},
        )
        return True
