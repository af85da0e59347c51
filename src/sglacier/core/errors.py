"""
Exception hierarchy for sglacier.

Startup errors (loading and migrating the receipts file) are fatal. Service
errors are raised by the archive service implementations and are always
caught inside a command's action, where they are recorded into receipts.
"""


class SGlacierError(Exception):
    """Base class for all sglacier errors."""


class MigrationError(SGlacierError):
    """The receipts file could not be brought to the current schema version."""


class MalformedStoreError(MigrationError):
    """The receipts file is not valid JSON or has an unexpected shape."""


class FutureSchemaVersionError(MigrationError):
    """The receipts file was written by a newer schema version."""

    def __init__(self, version: int, supported: int):
        super().__init__(
            f"Incompatible receipts file version: {version} (this version supports up to {supported})"
        )
        self.version = version
        self.supported = supported


class UsageError(SGlacierError):
    """A command was given arguments or options it cannot work with."""


class FileOpenError(SGlacierError):
    """A file named for upload could not be opened."""


class ArchiveServiceError(SGlacierError):
    """Base class for failures reported while talking to the archive service."""

    def __init__(self, error: str, message: str):
        super().__init__(f"{error}: {message}")
        self.error = error
        self.message = message


class ServiceFailure(ArchiveServiceError):
    """The service answered, but reported an error (error is the AWS error code)."""


class TransportError(ArchiveServiceError):
    """The call did not complete (error is the exception class name)."""

    @classmethod
    def from_exception(cls, ex: Exception) -> "TransportError":
        return cls(type(ex).__name__, str(ex))
