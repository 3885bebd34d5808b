"""
Synchronization of bundled artifacts into the runtime data directory.

Each artifact is compared by trimmed content and only rewritten when it
differs, so repeated syncs leave unchanged runtime files alone.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from lazyencrypt.errors import (
    CorruptArtifactError,
    LazyEncryptError,
    RetrievalFailedError,
    SourceUnavailableError,
)
from lazyencrypt.store import artifact_io
from lazyencrypt.store.locations import Artifact
from lazyencrypt.store.readers import SourceReader

logger = logging.getLogger(__name__)


class SyncStatus(Enum):
    """Outcome of syncing one artifact."""
    UPDATED = "updated"
    UP_TO_DATE = "up_to_date"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class ArtifactSyncResult:
    """Result of syncing a single artifact."""
    artifact: Artifact
    status: SyncStatus
    source: str
    destination: Path
    error: Optional[LazyEncryptError] = None


@dataclass
class SyncReport:
    """Results for every artifact processed by one sync."""
    results: List[ArtifactSyncResult] = field(default_factory=list)

    def _with_status(self, status: SyncStatus) -> List[ArtifactSyncResult]:
        return [r for r in self.results if r.status is status]

    @property
    def updated(self) -> List[ArtifactSyncResult]:
        return self._with_status(SyncStatus.UPDATED)

    @property
    def up_to_date(self) -> List[ArtifactSyncResult]:
        return self._with_status(SyncStatus.UP_TO_DATE)

    @property
    def skipped(self) -> List[ArtifactSyncResult]:
        return self._with_status(SyncStatus.SKIPPED)

    @property
    def failed(self) -> List[ArtifactSyncResult]:
        return self._with_status(SyncStatus.FAILED)

    @property
    def ok(self) -> bool:
        """True when no artifact failed to sync."""
        return not self.failed

    def result_for(self, artifact: Artifact) -> Optional[ArtifactSyncResult]:
        for result in self.results:
            if result.artifact is artifact:
                return result
        return None


def _content_matches(
    destination: Path,
    payload: bytes,
    source: str,
    encoding: str
) -> bool:
    """
    Compare trimmed runtime text with trimmed source text.

    A copy that cannot be decoded never matches, so it gets overwritten.
    """
    try:
        existing = artifact_io.read_text(destination, encoding)
    except CorruptArtifactError as e:
        logger.warning(f"{e}. Replacing it.")
        return False

    try:
        incoming = artifact_io.decode_text(payload, encoding, source).strip()
    except CorruptArtifactError as e:
        logger.warning(f"{e}. Copying raw bytes.")
        return False

    return existing == incoming


def sync_artifact(
    artifact: Artifact,
    reader: SourceReader,
    filename: str,
    destination: Path,
    encoding: str = artifact_io.DEFAULT_ENCODING
) -> ArtifactSyncResult:
    """
    Bring the runtime copy of an artifact up to date with its source.

    The source is read once; the same bytes are compared and written.

    Args:
        artifact: Artifact being synced
        reader: Reader for the bundled source copy
        filename: Artifact file name
        destination: Runtime path to update
        encoding: Text encoding used for the content comparison

    Returns:
        ArtifactSyncResult describing what happened
    """
    source = reader.location(filename)

    def _result(status: SyncStatus, error: Optional[LazyEncryptError] = None) -> ArtifactSyncResult:
        return ArtifactSyncResult(artifact, status, source, destination, error)

    try:
        payload = reader.read_bytes(filename)

        if destination.exists() and _content_matches(destination, payload, source, encoding):
            logger.info(f"{destination} is already up to date.")
            return _result(SyncStatus.UP_TO_DATE)

        logger.info(f"Copying {source} to {destination}")
        artifact_io.write_bytes(destination, payload)
        logger.info(f"Updated {destination}")
        return _result(SyncStatus.UPDATED)

    except SourceUnavailableError as e:
        logger.warning(f"{e}. Skipping update.")
        return _result(SyncStatus.SKIPPED, e)
    except RetrievalFailedError as e:
        logger.error(f"Failed to update {destination}: {e}")
        return _result(SyncStatus.FAILED, e)
    except OSError as e:
        logger.error(f"Failed to update {destination}: {e}")
        return _result(SyncStatus.FAILED, RetrievalFailedError(source, str(e)))
