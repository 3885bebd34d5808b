"""Error kinds raised by the obfuscation primitives and the secret store."""

from enum import Enum
from pathlib import Path
from typing import Iterable, Union


class ErrorCategory(Enum):
    """Categorize errors so callers know whether to keep going."""
    FATAL = "fatal"          # the requested operation cannot produce a value
    SKIPPABLE = "skippable"  # one artifact failed, the rest can proceed


class LazyEncryptError(Exception):
    """Base exception for all lazyencrypt errors."""
    category = ErrorCategory.FATAL


class InvalidKeyError(LazyEncryptError):
    """Raised when an empty obfuscation key is used."""

    def __init__(self, message: str = "Obfuscation key must not be empty"):
        super().__init__(message)


class MissingSecretError(LazyEncryptError):
    """Raised when a hash is requested without a usable secret."""

    def __init__(self, message: str = "Secret key is missing"):
        super().__init__(message)


class MissingFilesError(LazyEncryptError):
    """Raised when the key or secret file cannot be found."""

    def __init__(self, paths: Iterable[Union[str, Path]]):
        self.paths = [Path(p) for p in paths]
        names = ", ".join(str(p) for p in self.paths)
        super().__init__(f"Obfuscation key or secret file is missing: {names}")


class SourceUnavailableError(LazyEncryptError):
    """Raised when a source artifact does not exist during a sync."""
    category = ErrorCategory.SKIPPABLE

    def __init__(self, location: str):
        self.location = location
        super().__init__(f"{location} does not exist")


class RetrievalFailedError(LazyEncryptError):
    """Raised when fetching a bundled source artifact fails."""
    category = ErrorCategory.SKIPPABLE

    def __init__(self, location: str, reason: str, timed_out: bool = False):
        self.location = location
        self.reason = reason
        self.timed_out = timed_out
        prefix = "Timed out retrieving" if timed_out else "Failed to retrieve"
        super().__init__(f"{prefix} {location}: {reason}")


class CorruptArtifactError(LazyEncryptError):
    """Raised when an artifact file cannot be decoded as text."""

    def __init__(self, location: str, reason: str):
        self.location = location
        self.reason = reason
        super().__init__(f"{location} is not valid text: {reason}")
