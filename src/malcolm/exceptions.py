"""Application exception classes."""


class MalcolmError(Exception):
    """Base class for viewer errors."""


class ConfigError(MalcolmError):
    """Raised when configuration is invalid or incomplete."""


class AddressError(MalcolmError, ValueError):
    """Raised when a host:port address string cannot be parsed."""
