from __future__ import annotations

import enum
import ssl
import threading
from concurrent.futures import Executor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from websockets.exceptions import InvalidURI
from websockets.typing import Subprotocol
from websockets.uri import WebSocketURI, parse_uri

from .errors import ValidationError

if TYPE_CHECKING:
    from .endpoint import ServerAddress
    from .lifecycle.listeners import ConnectedListener, DisconnectedListener
    from .lifecycle.reconnect import AutoReconnect

DEFAULT_SERVER_HOST = "localhost"
DEFAULT_SERVER_PORT = 1883
DEFAULT_SERVER_PORT_SSL = 8883
DEFAULT_SERVER_PORT_WEBSOCKET = 8000
DEFAULT_SERVER_PORT_WEBSOCKET_SSL = 8443

DEFAULT_HANDSHAKE_TIMEOUT_MS = 10_000
DEFAULT_WEBSOCKET_SERVER_PATH = "mqtt"
DEFAULT_WEBSOCKET_SUBPROTOCOL = Subprotocol("mqtt")

MAX_IDENTIFIER_BYTES = 65_535

_URI_HOST_DELIMITERS = frozenset("/?#@[]:\\")


class MqttVersion(enum.Enum):
    MQTT_3_1_1 = 4
    MQTT_5_0 = 5


class ClientState(enum.Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    DISCONNECTED_RECONNECT = "disconnected_reconnect"
    CONNECTING_RECONNECT = "connecting_reconnect"

    def is_connected(self) -> bool:
        return self is ClientState.CONNECTED

    def is_connected_or_reconnect(self) -> bool:
        return self in (
            ClientState.CONNECTED,
            ClientState.DISCONNECTED_RECONNECT,
            ClientState.CONNECTING_RECONNECT,
        )


@dataclass(frozen=True)
class ClientIdentifier:
    """Client identifier, or the empty sentinel asking the server to assign one."""

    value: str

    REQUEST_FROM_SERVER: ClassVar[ClientIdentifier]

    def __post_init__(self) -> None:
        value = self.value
        if not isinstance(value, str):
            raise ValidationError(
                f"Client identifier must be a string, got {type(value).__name__}."
            )
        if "\u0000" in value:
            raise ValidationError(
                "Client identifier must not contain the null character."
            )
        try:
            encoded = value.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise ValidationError(
                "Client identifier must be well-formed UTF-8."
            ) from exc
        if len(encoded) > MAX_IDENTIFIER_BYTES:
            raise ValidationError(
                f"Client identifier must not exceed {MAX_IDENTIFIER_BYTES} bytes, "
                f"but was {len(encoded)} bytes."
            )

    @classmethod
    def of(cls, value: object) -> ClientIdentifier:
        """Validate a caller-supplied identifier; the empty sentinel is refused."""
        if not isinstance(value, ClientIdentifier):
            value = cls(value)  # type: ignore[arg-type]
        if value.is_request_from_server():
            raise ValidationError("Client identifier must not be empty.")
        return value

    def is_request_from_server(self) -> bool:
        return not self.value

    def __str__(self) -> str:
        return self.value


ClientIdentifier.REQUEST_FROM_SERVER = ClientIdentifier("")


# ── Opaque sub-configurations ─────────────────────────────────────


@dataclass(frozen=True)
class SslConfig:
    context: ssl.SSLContext | None = None
    cipher_suites: tuple[str, ...] | None = None
    protocols: tuple[str, ...] | None = None
    handshake_timeout_ms: int = DEFAULT_HANDSHAKE_TIMEOUT_MS

    DEFAULT: ClassVar[SslConfig]


@dataclass(frozen=True)
class WebSocketConfig:
    server_path: str = DEFAULT_WEBSOCKET_SERVER_PATH
    query_string: str = ""
    subprotocol: Subprotocol = DEFAULT_WEBSOCKET_SUBPROTOCOL
    handshake_timeout_ms: int = DEFAULT_HANDSHAKE_TIMEOUT_MS

    DEFAULT: ClassVar[WebSocketConfig]

    def uri(self, address: ServerAddress, *, secure: bool) -> WebSocketURI:
        """Build the ws:// or wss:// URI the transport opens for ``address``.

        Hosts and path parts that would change how the URI parses are
        rejected rather than silently reinterpreted.
        """
        ip = address.ip_address
        if ip is not None:
            host = f"[{ip}]" if ip.version == 6 else str(ip)
        else:
            host = address.host_string
            if any(c in _URI_HOST_DELIMITERS or c.isspace() for c in host):
                raise ValidationError(
                    f"Server host {host!r} cannot be used in a WebSocket URI", host
                )
        if any(c in "?#" for c in self.server_path):
            raise ValidationError(
                f"WebSocket server path {self.server_path!r} must not contain '?' or '#'"
            )
        if "#" in self.query_string:
            raise ValidationError(
                f"WebSocket query string {self.query_string!r} must not contain '#'"
            )
        path = self.server_path.lstrip("/")
        raw = f"{'wss' if secure else 'ws'}://{host}:{address.port}/{path}"
        if self.query_string:
            raw += f"?{self.query_string}"
        try:
            return parse_uri(raw)
        except InvalidURI as exc:
            raise ValidationError(f"Invalid WebSocket URI {raw!r}", raw) from exc


@dataclass(frozen=True)
class ExecutorConfig:
    executor: Executor | None = None
    max_workers: int | None = None

    DEFAULT: ClassVar[ExecutorConfig]


@dataclass(frozen=True)
class AdvancedConfig:
    allow_server_reauth: bool = False
    validate_payload_format: bool = False

    DEFAULT: ClassVar[AdvancedConfig]


SslConfig.DEFAULT = SslConfig()
WebSocketConfig.DEFAULT = WebSocketConfig()
ExecutorConfig.DEFAULT = ExecutorConfig()
AdvancedConfig.DEFAULT = AdvancedConfig()


@dataclass(frozen=True)
class ConnectionConfig:
    """Session values negotiated with the server once a ConnAck is received."""

    keep_alive_s: int
    session_expiry_interval_s: int = 0
    receive_maximum: int = 65_535
    maximum_packet_size: int = 268_435_460
    has_will: bool = False


# ── Runtime state ─────────────────────────────────────────────────


class ClientRuntime:
    """Live state of a client, written by the connection engine."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state = ClientState.DISCONNECTED
        self._connection_config: ConnectionConfig | None = None
        self._assigned_identifier: ClientIdentifier | None = None

    @property
    def state(self) -> ClientState:
        return self._state

    @property
    def connection_config(self) -> ConnectionConfig | None:
        return self._connection_config

    @property
    def assigned_identifier(self) -> ClientIdentifier | None:
        return self._assigned_identifier

    def set_state(self, state: ClientState) -> None:
        with self._lock:
            self._state = state

    def compare_and_set_state(
        self, expected: ClientState, state: ClientState
    ) -> bool:
        with self._lock:
            if self._state is not expected:
                return False
            self._state = state
            return True

    def set_connection_config(self, config: ConnectionConfig | None) -> None:
        with self._lock:
            self._connection_config = config

    def assign_identifier(self, identifier: ClientIdentifier) -> None:
        with self._lock:
            self._assigned_identifier = identifier


# ── Client configuration ──────────────────────────────────────────


@dataclass(frozen=True)
class ClientConfig:
    """Immutable, fully resolved configuration consumed by the connection engine."""

    mqtt_version: MqttVersion
    identifier: ClientIdentifier
    server_address: ServerAddress
    executor_config: ExecutorConfig
    ssl_config: SslConfig | None
    websocket_config: WebSocketConfig | None
    advanced_config: AdvancedConfig
    auto_reconnect: AutoReconnect | None
    connected_listeners: tuple[ConnectedListener, ...]
    disconnected_listeners: tuple[DisconnectedListener, ...]
    runtime: ClientRuntime = field(
        default_factory=ClientRuntime, compare=False, repr=False
    )

    @property
    def client_identifier(self) -> ClientIdentifier | None:
        """The identifier, or None while the server has not assigned one yet."""
        if self.identifier.is_request_from_server():
            return self.runtime.assigned_identifier
        return self.identifier

    @property
    def server_host(self) -> str:
        return self.server_address.host_string

    @property
    def server_port(self) -> int:
        return self.server_address.port

    @property
    def state(self) -> ClientState:
        return self.runtime.state

    @property
    def connection_config(self) -> ConnectionConfig | None:
        return self.runtime.connection_config

    @property
    def websocket_uri(self) -> WebSocketURI | None:
        if self.websocket_config is None:
            return None
        return self.websocket_config.uri(
            self.server_address, secure=self.ssl_config is not None
        )
