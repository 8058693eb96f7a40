"""Exceptions raised by the generator core."""


class OnyxError(Exception):
    """Base class for all generator errors."""


class ConfigurationError(OnyxError, ValueError):
    """Run parameters are unusable; raised before any output is produced."""


class SinkError(OnyxError, OSError):
    """The output stream could not be opened, written or flushed."""
