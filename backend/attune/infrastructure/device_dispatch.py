"""Device Dispatch — command adapters with per-command deadline and retry budget.

Invariants:
    - StateMutationDispatcher performs no IO: it returns the state a real device would report
    - ResilientDeviceDispatcher bounds every attempt with asyncio.wait_for(timeout_ms)
    - Timeouts and adapter failures retried up to max_retries, then mapped to
      DeviceCommandTimeoutError / DeviceCommandError (core/errors.py)
    - CancelledError (BaseException) passes through uncaught

Design Decisions:
    - Wrapper over raw adapter: isolates retry logic from the executor (ADR: single responsibility)
    - ±25% jitter on backoff between attempts
"""

import asyncio
import logging
import random
from datetime import datetime
from typing import Any

from attune.core.device_commands import apply_command
from attune.core.environment import SmartDevice
from attune.core.errors import (
    AttuneError, DeviceCommandError, DeviceCommandTimeoutError, ErrorContext,
)
from attune.core.repository_protocols import DeviceCommandDispatcher

logger = logging.getLogger(__name__)


class StateMutationDispatcher:
    """Local stand-in for a hardware/cloud device API."""

    async def send(
        self, device: SmartDevice, command: str,
        parameters: dict[str, Any], now: datetime,
    ) -> dict[str, Any]:
        logger.info(
            f"Sending command to {device.device_name}: {command}",
            extra={
                "user_id": device.user_id, "device_id": device.device_id,
                "command": command,
            },
        )
        return apply_command(device.state, command, parameters, now)


class ResilientDeviceDispatcher:
    """Wraps a dispatcher with timeout, retry, backoff, and error mapping."""

    def __init__(
        self,
        inner: DeviceCommandDispatcher,
        timeout_ms: int = 200,
        max_retries: int = 1,
        base_delay_ms: int = 25,
    ):
        self.inner = inner
        self.timeout_ms = timeout_ms
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms

    async def send(
        self, device: SmartDevice, command: str,
        parameters: dict[str, Any], now: datetime,
    ) -> dict[str, Any]:
        context = ErrorContext(
            user_id=device.user_id, device_id=device.device_id,
        )
        last_error: AttuneError | None = None
        for attempt in range(self.max_retries + 1):
            try:
                return await asyncio.wait_for(
                    self.inner.send(device, command, parameters, now),
                    timeout=self.timeout_ms / 1000,
                )
            except asyncio.TimeoutError:
                last_error = DeviceCommandTimeoutError(self.timeout_ms, context)
            except AttuneError as e:
                last_error = e
            except Exception as e:
                last_error = DeviceCommandError(str(e), context)
            logger.warning(
                f"Device command attempt failed: {last_error.message}",
                extra={
                    "device_id": device.device_id, "command": command,
                    "attempt": attempt + 1, "error_code": last_error.code,
                },
            )
            if attempt < self.max_retries:
                await asyncio.sleep(self._backoff_seconds(attempt))
        raise last_error

    def _backoff_seconds(self, attempt: int) -> float:
        delay_ms = self.base_delay_ms * (2 ** attempt)
        jitter = delay_ms * 0.25 * (2 * random.random() - 1)
        return max(0.0, delay_ms + jitter) / 1000
