from __future__ import annotations

from typing import Any, Callable

import pytest

from mqtt_client import (
    ClientBuilder,
    ClientConfig,
    DisconnectedContext,
    DisconnectSource,
)


class FakeReconnector:
    """Records what a disconnected listener asked the engine to do."""

    def __init__(self, attempts: int = 0) -> None:
        self._attempts = attempts
        self._reconnect = False
        self._delay_ms = 0.0

    @property
    def attempts(self) -> int:
        return self._attempts

    def reconnect(self, reconnect: bool = True) -> FakeReconnector:
        self._reconnect = reconnect
        return self

    def is_reconnect(self) -> bool:
        return self._reconnect

    def delay(self, delay_ms: float) -> FakeReconnector:
        self._delay_ms = delay_ms
        return self

    def get_delay(self) -> float:
        return self._delay_ms


def make_listener(calls: list[Any], name: str) -> Callable[[Any], None]:
    def listener(context: Any) -> None:
        calls.append((name, context))

    listener.__name__ = name
    return listener


@pytest.fixture
def builder() -> ClientBuilder:
    return ClientBuilder()


@pytest.fixture
def config(builder: ClientBuilder) -> ClientConfig:
    return builder.server_host("broker.example").use_mqtt_version_5().build()


@pytest.fixture
def disconnected_context(config: ClientConfig) -> Callable[..., DisconnectedContext]:
    def factory(
        source: DisconnectSource = DisconnectSource.SERVER,
        attempts: int = 0,
    ) -> DisconnectedContext:
        return DisconnectedContext(
            client_config=config,
            source=source,
            cause=ConnectionResetError("connection reset"),
            reconnector=FakeReconnector(attempts),
        )

    return factory
