from .builder import ClientBuilder, Mqtt3ClientBuilder, Mqtt5ClientBuilder
from .config import (
    AdvancedConfig,
    ClientConfig,
    ClientIdentifier,
    ClientRuntime,
    ClientState,
    ConnectionConfig,
    ExecutorConfig,
    MqttVersion,
    SslConfig,
    WebSocketConfig,
)
from .endpoint import EndpointResolver, ExplicitAddress, HostPort, ServerAddress
from .errors import ConfigurationError, MqttClientError, ValidationError
from .lifecycle import (
    AutoReconnect,
    ConnectedContext,
    DisconnectedContext,
    DisconnectSource,
    ListenerChain,
    Reconnector,
)


def builder() -> ClientBuilder:
    """Start configuring a client."""
    return ClientBuilder()


__all__ = [
    "builder",
    "ClientBuilder",
    "Mqtt3ClientBuilder",
    "Mqtt5ClientBuilder",
    "ClientConfig",
    "ClientIdentifier",
    "ClientRuntime",
    "ClientState",
    "ConnectionConfig",
    "MqttVersion",
    "SslConfig",
    "WebSocketConfig",
    "ExecutorConfig",
    "AdvancedConfig",
    "ServerAddress",
    "ExplicitAddress",
    "HostPort",
    "EndpointResolver",
    "AutoReconnect",
    "ConnectedContext",
    "DisconnectedContext",
    "DisconnectSource",
    "ListenerChain",
    "Reconnector",
    "MqttClientError",
    "ValidationError",
    "ConfigurationError",
]
