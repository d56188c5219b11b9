"""Custom exceptions for trek."""

__all__ = [
    "TrekError",
    "PolylineDecodeError",
    "InvalidPathError",
    "SharePayloadError",
    "ConfigurationError",
]


class TrekError(Exception):
    """Base exception for all trek errors."""

    pass


class PolylineDecodeError(TrekError):
    """Raised when an encoded polyline string cannot be decoded."""

    def __init__(self, message: str, position: int = None):
        self.position = position
        if position is not None:
            message = f"{message} (Position: {position})"
        super().__init__(message)


class InvalidPathError(TrekError):
    """Raised when a path does not have the shape of a list of (lat, lng) pairs."""

    def __init__(self, message: str, index: int = None):
        self.index = index
        super().__init__(self._format_message(message))

    def _format_message(self, message: str) -> str:
        """Format error message with the offending point index."""
        if self.index is not None:
            return f"{message} (Point index: {self.index})"
        return message


class SharePayloadError(TrekError):
    """Raised when a shared run payload cannot be parsed."""

    def __init__(self, message: str, field: str = None):
        self.field = field
        if field:
            message = f"{message} (Field: {field})"
        super().__init__(message)


class ConfigurationError(TrekError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, config_key: str = None):
        self.config_key = config_key
        if config_key:
            message = f"{message} (Key: {config_key})"
        super().__init__(message)
