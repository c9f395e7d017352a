from __future__ import annotations

import ipaddress
import logging
from dataclasses import dataclass
from typing import NamedTuple, TypeAlias, Union

from . import checks
from .config import (
    DEFAULT_SERVER_HOST,
    DEFAULT_SERVER_PORT,
    DEFAULT_SERVER_PORT_SSL,
    DEFAULT_SERVER_PORT_WEBSOCKET,
    DEFAULT_SERVER_PORT_WEBSOCKET_SSL,
)
from .errors import ConfigurationError, ValidationError

logger = logging.getLogger("mqtt_client")

IPAddress: TypeAlias = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
Host: TypeAlias = Union[str, IPAddress]


class ServerAddress(NamedTuple):
    """Socket address of the server: a hostname or numeric address plus a port."""

    host: Host
    port: int

    @property
    def host_string(self) -> str:
        return str(self.host)

    @property
    def ip_address(self) -> IPAddress | None:
        if isinstance(self.host, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
            return self.host
        try:
            return ipaddress.ip_address(self.host)
        except ValueError:
            return None


@dataclass(frozen=True)
class ExplicitAddress:
    address: ServerAddress


@dataclass(frozen=True)
class HostPort:
    host: Host
    port: int | None = None


Endpoint: TypeAlias = Union[ExplicitAddress, HostPort]


def default_port(*, secure: bool, websocket: bool) -> int:
    if not secure:
        if not websocket:
            return DEFAULT_SERVER_PORT
        return DEFAULT_SERVER_PORT_WEBSOCKET
    if not websocket:
        return DEFAULT_SERVER_PORT_SSL
    return DEFAULT_SERVER_PORT_WEBSOCKET_SSL


def _check_host(host: object) -> Host:
    if isinstance(host, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        return host
    if host is None:
        raise ValidationError("Server host must not be None.")
    return checks.not_empty(host, "Server host")  # type: ignore[arg-type]


def _check_address(address: object) -> ServerAddress:
    checks.not_null(address, "Server address")
    if not isinstance(address, tuple) or len(address) != 2:
        raise ValidationError(
            f"Server address must be a (host, port) pair, got {address!r}."
        )
    host, port = address
    return ServerAddress(_check_host(host), checks.port(port, "Server port"))


class EndpointResolver:
    """Tracks the current endpoint representation and resolves it to an address."""

    def __init__(self) -> None:
        self._endpoint: Endpoint | None = HostPort(DEFAULT_SERVER_HOST)

    @property
    def endpoint(self) -> Endpoint | None:
        return self._endpoint

    def set_explicit_address(self, address: ServerAddress | tuple[Host, int]) -> None:
        self._endpoint = ExplicitAddress(_check_address(address))

    def set_host(self, host: Host) -> None:
        host = _check_host(host)
        current = self._endpoint
        if isinstance(current, ExplicitAddress):
            logger.debug(
                "Server host set, keeping port %d of explicit address %s",
                current.address.port,
                current.address.host_string,
            )
            self._endpoint = HostPort(host, current.address.port)
        elif isinstance(current, HostPort):
            self._endpoint = HostPort(host, current.port)
        else:
            self._endpoint = HostPort(host)

    def set_port(self, port: int) -> None:
        port = checks.port(port, "Server port")
        current = self._endpoint
        if isinstance(current, ExplicitAddress):
            # the host keeps the form the caller gave: numeric string, ip object or name
            host = current.address.host
            logger.debug(
                "Server port set, keeping host %s of explicit address", host
            )
            self._endpoint = HostPort(host, port)
        elif isinstance(current, HostPort):
            self._endpoint = HostPort(current.host, port)
        else:
            self._endpoint = HostPort(DEFAULT_SERVER_HOST, port)

    def resolve(self, *, secure: bool, websocket: bool) -> ServerAddress:
        endpoint = self._endpoint
        if isinstance(endpoint, ExplicitAddress):
            return endpoint.address
        if isinstance(endpoint, HostPort):
            if endpoint.port is not None:
                return ServerAddress(endpoint.host, endpoint.port)
            return ServerAddress(
                endpoint.host, default_port(secure=secure, websocket=websocket)
            )
        raise ConfigurationError("No server endpoint is configured")

    def clear(self) -> None:
        """Drop the endpoint; resolving fails until a new one is set."""
        self._endpoint = None

    def copy(self) -> EndpointResolver:
        resolver = EndpointResolver()
        resolver._endpoint = self._endpoint
        return resolver
