from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import ClassVar

from ..errors import ValidationError
from .context import DisconnectedContext, DisconnectSource

logger = logging.getLogger("mqtt_client")

DEFAULT_INITIAL_DELAY_MS = 1_000
DEFAULT_MAX_DELAY_MS = 120_000


@dataclass(frozen=True)
class AutoReconnect:
    """Reconnects with exponential backoff and jitter after unintended disconnects."""

    initial_delay_ms: int = DEFAULT_INITIAL_DELAY_MS
    max_delay_ms: int = DEFAULT_MAX_DELAY_MS
    backoff_multiplier: float = 2.0
    jitter_ms: int = 0

    DEFAULT: ClassVar[AutoReconnect]

    def __post_init__(self) -> None:
        if self.initial_delay_ms <= 0:
            raise ValidationError(
                f"Initial delay must be positive, but was {self.initial_delay_ms}ms."
            )
        if self.max_delay_ms < self.initial_delay_ms:
            raise ValidationError(
                f"Maximum delay {self.max_delay_ms}ms must not be less than "
                f"initial delay {self.initial_delay_ms}ms."
            )
        if self.backoff_multiplier < 1:
            raise ValidationError("Backoff multiplier must be at least 1.")
        if self.jitter_ms < 0:
            raise ValidationError("Jitter must not be negative.")

    def get_delay(self, attempt: int) -> float:
        """Return the delay in milliseconds before reconnect attempt ``attempt``."""
        base = self.initial_delay_ms * (self.backoff_multiplier**attempt)
        capped = min(base, self.max_delay_ms)
        jitter = random.random() * self.jitter_ms
        return capped + jitter

    def __call__(self, context: DisconnectedContext) -> None:
        if context.source is DisconnectSource.USER:
            return
        reconnector = context.reconnector
        delay = self.get_delay(reconnector.attempts)
        logger.info(
            "Reconnecting in %.0fms (attempt %d) after %s",
            delay,
            reconnector.attempts + 1,
            type(context.cause).__name__,
        )
        reconnector.reconnect(True).delay(delay)


AutoReconnect.DEFAULT = AutoReconnect()
