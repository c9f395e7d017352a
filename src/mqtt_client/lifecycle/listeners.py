from __future__ import annotations

from typing import TYPE_CHECKING, Callable, TypeAlias

from .. import checks
from .context import ConnectedContext, DisconnectedContext

if TYPE_CHECKING:
    from .reconnect import AutoReconnect

ConnectedListener: TypeAlias = Callable[[ConnectedContext], None]
DisconnectedListener: TypeAlias = Callable[[DisconnectedContext], None]


class ListenerChain:
    """Accumulates lifecycle listeners in registration order."""

    def __init__(self) -> None:
        self._connected: list[ConnectedListener] = []
        self._disconnected: list[DisconnectedListener] = []

    def add_connected(self, listener: ConnectedListener) -> None:
        self._connected.append(checks.listener(listener, "Connected listener"))

    def add_disconnected(self, listener: DisconnectedListener) -> None:
        self._disconnected.append(
            checks.listener(listener, "Disconnected listener")
        )

    def build_connected(self) -> tuple[ConnectedListener, ...]:
        return tuple(self._connected)

    def build_disconnected(
        self, auto_reconnect: AutoReconnect | None = None
    ) -> tuple[DisconnectedListener, ...]:
        """Snapshot the disconnected listeners.

        The automatic reconnect policy, when given, always comes first so it
        decides about reconnecting before any user listener runs.
        """
        if auto_reconnect is None:
            return tuple(self._disconnected)
        return (auto_reconnect, *self._disconnected)

    def copy(self) -> ListenerChain:
        chain = ListenerChain()
        chain._connected = list(self._connected)
        chain._disconnected = list(self._disconnected)
        return chain
