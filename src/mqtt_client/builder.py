from __future__ import annotations

import logging
from typing import TypeVar

from . import checks
from .config import (
    AdvancedConfig,
    ClientConfig,
    ClientIdentifier,
    ExecutorConfig,
    MqttVersion,
    SslConfig,
    WebSocketConfig,
)
from .endpoint import EndpointResolver, Host, ServerAddress
from .lifecycle.listeners import (
    ConnectedListener,
    DisconnectedListener,
    ListenerChain,
)
from .lifecycle.reconnect import AutoReconnect

logger = logging.getLogger("mqtt_client")

B = TypeVar("B", bound="ClientBuilder")


class ClientBuilder:
    """Fluent, single-owner builder for an immutable :class:`ClientConfig`.

    Rejected arguments raise :class:`ValidationError` and leave the builder
    unchanged. Passing another builder copies its state; later changes to
    either builder do not affect the other.
    """

    def __init__(self, source: ClientBuilder | None = None) -> None:
        if source is None:
            self._identifier = ClientIdentifier.REQUEST_FROM_SERVER
            self._endpoint = EndpointResolver()
            self._ssl_config: SslConfig | None = None
            self._websocket_config: WebSocketConfig | None = None
            self._executor_config = ExecutorConfig.DEFAULT
            self._auto_reconnect: AutoReconnect | None = None
            self._listeners = ListenerChain()
        else:
            self._identifier = source._identifier
            self._endpoint = source._endpoint.copy()
            self._ssl_config = source._ssl_config
            self._websocket_config = source._websocket_config
            self._executor_config = source._executor_config
            self._auto_reconnect = source._auto_reconnect
            self._listeners = source._listeners.copy()

    # ── Identity ──────────────────────────────────────────────────

    def identifier(self: B, identifier: str | ClientIdentifier) -> B:
        self._identifier = ClientIdentifier.of(identifier)
        return self

    # ── Endpoint ──────────────────────────────────────────────────

    def server_address(self: B, address: ServerAddress | tuple[Host, int]) -> B:
        self._endpoint.set_explicit_address(address)
        return self

    def server_host(self: B, host: Host) -> B:
        self._endpoint.set_host(host)
        return self

    def server_port(self: B, port: int) -> B:
        self._endpoint.set_port(port)
        return self

    def resolve(self) -> ServerAddress:
        return self._endpoint.resolve(
            secure=self._ssl_config is not None,
            websocket=self._websocket_config is not None,
        )

    # ── Transports ────────────────────────────────────────────────

    def use_ssl_with_default_config(self: B) -> B:
        self._ssl_config = SslConfig.DEFAULT
        return self

    def use_ssl(self: B, ssl_config: SslConfig | None = SslConfig.DEFAULT) -> B:
        """Enable TLS, with the default config unless one is given.

        Passing None explicitly disables TLS again.
        """
        self._ssl_config = checks.instance_or_none(ssl_config, SslConfig, "SSL config")
        return self

    def use_websocket_with_default_config(self: B) -> B:
        self._websocket_config = WebSocketConfig.DEFAULT
        return self

    def use_websocket(
        self: B, websocket_config: WebSocketConfig | None = WebSocketConfig.DEFAULT
    ) -> B:
        """Enable WebSocket transport; None disables it."""
        self._websocket_config = checks.instance_or_none(
            websocket_config, WebSocketConfig, "WebSocket config"
        )
        return self

    def executor_config(self: B, executor_config: ExecutorConfig) -> B:
        self._executor_config = checks.instance(
            checks.not_null(executor_config, "Executor config"),
            ExecutorConfig,
            "Executor config",
        )
        return self

    # ── Lifecycle ─────────────────────────────────────────────────

    def automatic_reconnect_with_default_config(self: B) -> B:
        self._auto_reconnect = AutoReconnect.DEFAULT
        return self

    def automatic_reconnect(self: B, auto_reconnect: AutoReconnect | None) -> B:
        self._auto_reconnect = checks.instance_or_none(
            auto_reconnect, AutoReconnect, "Automatic reconnect"
        )
        return self

    def add_connected_listener(self: B, listener: ConnectedListener) -> B:
        self._listeners.add_connected(listener)
        return self

    def add_disconnected_listener(self: B, listener: DisconnectedListener) -> B:
        self._listeners.add_disconnected(listener)
        return self

    def build_connected_listeners(self) -> tuple[ConnectedListener, ...]:
        return self._listeners.build_connected()

    def build_disconnected_listeners(self) -> tuple[DisconnectedListener, ...]:
        return self._listeners.build_disconnected(self._auto_reconnect)

    # ── Building ──────────────────────────────────────────────────

    def copy(self: B) -> B:
        return type(self)(self)

    def use_mqtt_version_3(self) -> Mqtt3ClientBuilder:
        return Mqtt3ClientBuilder(self)

    def use_mqtt_version_5(self) -> Mqtt5ClientBuilder:
        return Mqtt5ClientBuilder(self)

    def build_config(
        self,
        mqtt_version: MqttVersion,
        advanced_config: AdvancedConfig = AdvancedConfig.DEFAULT,
    ) -> ClientConfig:
        checks.instance(mqtt_version, MqttVersion, "MQTT version")
        checks.instance(advanced_config, AdvancedConfig, "Advanced config")
        config = ClientConfig(
            mqtt_version=mqtt_version,
            identifier=self._identifier,
            server_address=self.resolve(),
            executor_config=self._executor_config,
            ssl_config=self._ssl_config,
            websocket_config=self._websocket_config,
            advanced_config=advanced_config,
            auto_reconnect=self._auto_reconnect,
            connected_listeners=self.build_connected_listeners(),
            disconnected_listeners=self.build_disconnected_listeners(),
        )
        logger.debug(
            "Built %s client config for %s:%d",
            mqtt_version.name,
            config.server_host,
            config.server_port,
        )
        return config


class Mqtt3ClientBuilder(ClientBuilder):
    def build(self) -> ClientConfig:
        return self.build_config(MqttVersion.MQTT_3_1_1)


class Mqtt5ClientBuilder(ClientBuilder):
    def __init__(self, source: ClientBuilder | None = None) -> None:
        super().__init__(source)
        self._advanced_config = (
            source._advanced_config
            if isinstance(source, Mqtt5ClientBuilder)
            else AdvancedConfig.DEFAULT
        )

    def advanced_config(self, advanced_config: AdvancedConfig) -> Mqtt5ClientBuilder:
        self._advanced_config = checks.instance(
            checks.not_null(advanced_config, "Advanced config"),
            AdvancedConfig,
            "Advanced config",
        )
        return self

    def build(self) -> ClientConfig:
        return self.build_config(MqttVersion.MQTT_5_0, self._advanced_config)
