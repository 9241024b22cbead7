"""
Engine error taxonomy.

Every failure raised by the engine derives from LogScopeError so callers can
catch the whole family at the UI boundary.
"""


class LogScopeError(Exception):
    pass


class NotFoundError(LogScopeError):
    """A path on disk or a member inside an archive does not exist."""


class ArchiveReadError(LogScopeError):
    """An archive stream is corrupt or its format is not recognised."""


class UnsupportedOperationError(LogScopeError):
    """
    The requested operation is not available for the target.

    Tailing an archived file is reported as data rather than raised: the
    tail reader returns TAIL_MESSAGE as its only line.
    """

    TAIL_MESSAGE = "Tail is not available for files stored inside an archive"


class ConfigurationError(LogScopeError):
    """An unrecognised filter, sort or settings value."""


class FileAccessError(LogScopeError):
    """A path exists but cannot be opened, e.g. a directory or a file without read permission."""
