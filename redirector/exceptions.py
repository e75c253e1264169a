"""Custom exceptions for the redirect server."""


class RedirectFileError(ValueError):
    """Raised when a record in the short url csv file is invalid."""

    def __init__(self, reason: str, record: list[str] | None = None):
        self.reason = reason
        self.record = record
        if record is None:
            super().__init__(reason)
        else:
            super().__init__(f"{reason}: {record}")


class ResourceDirectoryError(FileNotFoundError):
    """Raised when a live resource directory cannot be mounted."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"path {path} could not be mounted")


class ConfigError(ValueError):
    """Raised when command line or environment options are invalid."""
