"""Exception types shared across the dumpview package."""


class DumpViewError(Exception):
    """Base class for all dumpview errors."""


class FramingError(DumpViewError):
    """Bytes on a connection could not be split into JSON messages.

    Recorded by the deframer for diagnostics; never raised out of ``feed``.
    """


class DecodeError(DumpViewError, ValueError):
    """A complete message could not be turned into a log entry."""


class ListenerError(DumpViewError):
    """The TCP listener could not be started."""


class ConfigError(DumpViewError, ValueError):
    """Invalid command-line or environment configuration."""
