from __future__ import annotations


class MqttClientError(Exception):
    """Base error for all MQTT client configuration errors."""

    def __init__(self, code: str, message: str, details: object = None) -> None:
        super().__init__(message)
        self.code = code
        self.details = details


class ValidationError(MqttClientError, ValueError):
    """A builder argument violated a precondition."""

    def __init__(self, message: str, details: object = None) -> None:
        super().__init__("VALIDATION", message, details)


class ConfigurationError(MqttClientError):
    """The builder state could not be assembled into a client config."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION", message)
