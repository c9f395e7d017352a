from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..config import ClientConfig


class DisconnectSource(enum.Enum):
    """Who triggered a disconnection."""

    USER = "user"
    CLIENT = "client"
    SERVER = "server"


class Reconnector(Protocol):
    """Handle the engine passes to disconnected listeners for reconnecting."""

    @property
    def attempts(self) -> int: ...

    def reconnect(self, reconnect: bool = True) -> Reconnector: ...

    def is_reconnect(self) -> bool: ...

    def delay(self, delay_ms: float) -> Reconnector: ...

    def get_delay(self) -> float: ...


@dataclass(frozen=True)
class ConnectedContext:
    client_config: ClientConfig


@dataclass(frozen=True)
class DisconnectedContext:
    """Context of a client that is now disconnected, and the means to reconnect it."""

    client_config: ClientConfig
    source: DisconnectSource
    cause: BaseException
    reconnector: Reconnector
