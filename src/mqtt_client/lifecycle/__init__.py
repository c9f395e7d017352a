from .context import ConnectedContext, DisconnectedContext, DisconnectSource, Reconnector
from .listeners import ConnectedListener, DisconnectedListener, ListenerChain
from .reconnect import AutoReconnect

__all__ = [
    "AutoReconnect",
    "ConnectedContext",
    "ConnectedListener",
    "DisconnectedContext",
    "DisconnectedListener",
    "DisconnectSource",
    "ListenerChain",
    "Reconnector",
]
