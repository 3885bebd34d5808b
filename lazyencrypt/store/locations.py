"""Artifact names and where each copy of them lives."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Optional

DEFAULT_KEY_FILENAME = "lazy_enc_key.dat"
DEFAULT_SECRET_FILENAME = "lazy_enc.dat"


class Artifact(Enum):
    """The two files that make up a stored secret."""
    KEY = "key"
    SECRET = "secret"


@dataclass
class ArtifactLocations:
    """
    Runtime paths and file names for the key and secret artifacts.

    The runtime directory is the writable data root the game reads from.
    Source locations are resolved by a SourceReader using the same file
    names.
    """
    data_dir: Path
    key_filename: str = DEFAULT_KEY_FILENAME
    secret_filename: str = DEFAULT_SECRET_FILENAME

    def __post_init__(self):
        self.data_dir = Path(self.data_dir).expanduser()

    def filename(self, artifact: Artifact) -> str:
        """Get the file name used for an artifact."""
        if artifact is Artifact.KEY:
            return self.key_filename
        return self.secret_filename

    def runtime_path(self, artifact: Artifact) -> Path:
        """Get the writable runtime path for an artifact."""
        return self.data_dir / self.filename(artifact)

    @property
    def key_path(self) -> Path:
        return self.runtime_path(Artifact.KEY)

    @property
    def secret_path(self) -> Path:
        return self.runtime_path(Artifact.SECRET)

    @classmethod
    def from_filenames(
        cls,
        data_dir: Path,
        filenames: Optional[Dict[str, str]] = None
    ) -> 'ArtifactLocations':
        """
        Build locations from a ``files`` config section.

        Args:
            data_dir: Writable data root
            filenames: Optional mapping with 'key' and/or 'secret' entries

        Returns:
            ArtifactLocations instance
        """
        filenames = filenames or {}
        return cls(
            data_dir=data_dir,
            key_filename=filenames.get('key') or DEFAULT_KEY_FILENAME,
            secret_filename=filenames.get('secret') or DEFAULT_SECRET_FILENAME,
        )
