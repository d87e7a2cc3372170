"""Error types raised by the floodlight device client."""


class FloodlightError(Exception):
    """Base error for the floodlight bridge."""


class ValidationError(FloodlightError, ValueError):
    """Raised when configuration or a requested value is invalid."""


class TransportError(FloodlightError):
    """Base error for a failed device exchange."""


class RequestTimeoutError(TransportError, TimeoutError):
    """Raised when the device does not answer within the call's timeout."""


class DeviceConnectionError(TransportError):
    """Raised on socket, DNS or client-level failures."""


class HTTPStatusError(TransportError):
    """Raised when the device answers with a status outside [200, 400)."""

    def __init__(self, code: int, message: str = ""):
        self.code = code
        super().__init__(message or f"Device returned HTTP {code}")


class DecodeError(TransportError):
    """Raised when a device response is not the JSON that was expected."""
