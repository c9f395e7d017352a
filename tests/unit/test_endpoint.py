from __future__ import annotations

import ipaddress

import pytest

from mqtt_client.endpoint import (
    EndpointResolver,
    ExplicitAddress,
    HostPort,
    ServerAddress,
    default_port,
)
from mqtt_client.errors import ConfigurationError, ValidationError

FLAG_COMBINATIONS = [
    (False, False, 1883),
    (False, True, 8000),
    (True, False, 8883),
    (True, True, 8443),
]


def resolve(resolver: EndpointResolver, secure: bool = False, websocket: bool = False) -> ServerAddress:
    return resolver.resolve(secure=secure, websocket=websocket)


class TestDefaultPort:
    @pytest.mark.parametrize("secure,websocket,expected", FLAG_COMBINATIONS)
    def test_table(self, secure: bool, websocket: bool, expected: int) -> None:
        assert default_port(secure=secure, websocket=websocket) == expected

    @pytest.mark.parametrize("secure,websocket,expected", FLAG_COMBINATIONS)
    def test_applied_when_no_port_set(
        self, secure: bool, websocket: bool, expected: int
    ) -> None:
        resolver = EndpointResolver()
        resolver.set_host("broker.example")
        assert resolve(resolver, secure, websocket) == ("broker.example", expected)

    def test_defaults_to_localhost(self) -> None:
        assert resolve(EndpointResolver()) == ("localhost", 1883)


class TestSetPort:
    @pytest.mark.parametrize("port", [1, 80, 1883, 9001, 65535])
    @pytest.mark.parametrize("secure,websocket,default", FLAG_COMBINATIONS)
    def test_explicit_port_wins_over_defaults(
        self, port: int, secure: bool, websocket: bool, default: int
    ) -> None:
        resolver = EndpointResolver()
        resolver.set_port(port)
        assert resolve(resolver, secure, websocket).port == port

    @pytest.mark.parametrize("port", [0, -1, 65536, 1_000_000])
    def test_rejects_out_of_range(self, port: int) -> None:
        resolver = EndpointResolver()
        with pytest.raises(ValidationError):
            resolver.set_port(port)
        assert resolver.endpoint == HostPort("localhost")

    @pytest.mark.parametrize("port", [True, "1883", 1883.0, None])
    def test_rejects_non_int(self, port: object) -> None:
        with pytest.raises(ValidationError):
            EndpointResolver().set_port(port)  # type: ignore[arg-type]

    @pytest.mark.parametrize("secure,websocket,default", FLAG_COMBINATIONS)
    def test_every_valid_port_resolves_exactly(
        self, secure: bool, websocket: bool, default: int
    ) -> None:
        resolver = EndpointResolver()
        for port in range(1, 65_536):
            resolver.set_port(port)
            assert resolve(resolver, secure, websocket).port == port

    def test_converts_explicit_address_keeping_numeric_host(self) -> None:
        resolver = EndpointResolver()
        resolver.set_explicit_address(ServerAddress("10.0.0.5", 9001))
        resolver.set_port(9002)

        assert resolver.endpoint == HostPort("10.0.0.5", 9002)
        assert resolve(resolver) == ("10.0.0.5", 9002)
        assert resolve(resolver).ip_address == ipaddress.ip_address("10.0.0.5")

    def test_converts_explicit_address_keeping_ip_object(self) -> None:
        host = ipaddress.ip_address("10.0.0.5")
        resolver = EndpointResolver()
        resolver.set_explicit_address((host, 9001))
        resolver.set_port(9002)
        assert resolve(resolver).host is host
        assert resolve(resolver).port == 9002

    def test_converts_explicit_address_keeping_hostname(self) -> None:
        resolver = EndpointResolver()
        resolver.set_explicit_address(("broker.example", 9001))
        resolver.set_port(9002)
        assert resolve(resolver, secure=True) == ("broker.example", 9002)


class TestSetHost:
    def test_keeps_previously_set_port(self) -> None:
        resolver = EndpointResolver()
        resolver.set_port(1234)
        resolver.set_host("broker.example")
        assert resolve(resolver) == ("broker.example", 1234)

    def test_carries_port_of_explicit_address(self) -> None:
        resolver = EndpointResolver()
        resolver.set_explicit_address(("10.0.0.5", 1000))
        resolver.set_host("h")
        assert resolver.endpoint == HostPort("h", 1000)
        assert resolve(resolver, secure=True, websocket=True) == ("h", 1000)

    def test_accepts_ip_address(self) -> None:
        resolver = EndpointResolver()
        host = ipaddress.ip_address("::1")
        resolver.set_host(host)
        address = resolve(resolver)
        assert address.host is host
        assert address.ip_address == host

    @pytest.mark.parametrize("host", ["", None, 42])
    def test_rejects_invalid(self, host: object) -> None:
        resolver = EndpointResolver()
        resolver.set_port(1234)
        with pytest.raises(ValidationError):
            resolver.set_host(host)  # type: ignore[arg-type]
        assert resolver.endpoint == HostPort("localhost", 1234)


class TestExplicitAddress:
    def test_returned_verbatim(self) -> None:
        resolver = EndpointResolver()
        address = ServerAddress("10.0.0.5", 9001)
        resolver.set_explicit_address(address)
        for secure, websocket, _ in FLAG_COMBINATIONS:
            assert resolve(resolver, secure, websocket) == address

    def test_discards_host_and_port(self) -> None:
        resolver = EndpointResolver()
        resolver.set_host("old.example")
        resolver.set_port(1234)
        resolver.set_explicit_address(("new.example", 4321))
        assert resolver.endpoint == ExplicitAddress(ServerAddress("new.example", 4321))

    @pytest.mark.parametrize(
        "address",
        [None, ("h",), ("h", 1, 2), ("", 1883), ("h", 0), "h:1883"],
    )
    def test_rejects_invalid(self, address: object) -> None:
        resolver = EndpointResolver()
        with pytest.raises(ValidationError):
            resolver.set_explicit_address(address)  # type: ignore[arg-type]
        assert resolver.endpoint == HostPort("localhost")


class TestLastWriterWins:
    def test_switching_back_and_forth(self) -> None:
        resolver = EndpointResolver()
        resolver.set_host("a.example")
        resolver.set_explicit_address(("b.example", 2000))
        resolver.set_port(3000)
        resolver.set_host("c.example")
        assert resolve(resolver) == ("c.example", 3000)

        resolver.set_explicit_address(("d.example", 4000))
        assert resolve(resolver) == ("d.example", 4000)

    def test_resolve_is_idempotent(self) -> None:
        resolver = EndpointResolver()
        resolver.set_host("broker.example")
        assert resolve(resolver, True) == resolve(resolver, True)


class TestCopyAndClear:
    def test_copy_is_independent(self) -> None:
        resolver = EndpointResolver()
        resolver.set_host("a.example")
        copy = resolver.copy()
        resolver.set_port(1)
        assert resolve(copy) == ("a.example", 1883)
        assert resolve(resolver) == ("a.example", 1)

    def test_cleared_endpoint_fails_to_resolve(self) -> None:
        resolver = EndpointResolver()
        resolver.clear()
        with pytest.raises(ConfigurationError) as exc_info:
            resolve(resolver)
        assert exc_info.value.code == "CONFIGURATION"

    def test_set_port_after_clear_uses_default_host(self) -> None:
        resolver = EndpointResolver()
        resolver.clear()
        resolver.set_port(1234)
        assert resolve(resolver) == ("localhost", 1234)


class TestServerAddress:
    def test_ip_address_parsed_from_string(self) -> None:
        assert ServerAddress("192.168.1.1", 1).ip_address == ipaddress.ip_address(
            "192.168.1.1"
        )

    def test_hostname_has_no_ip_address(self) -> None:
        assert ServerAddress("broker.example", 1).ip_address is None
