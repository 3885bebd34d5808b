"""
Secret store with a lazily populated cache.

The decrypted secret is read from the runtime data directory on first use
and kept in memory until the cache is cleared or the runtime files are
re-synced from the bundled assets.
"""

import logging
import threading
from typing import Optional

from lazyencrypt.core.hasher import keyed_hash
from lazyencrypt.core.obfuscator import transform
from lazyencrypt.errors import MissingFilesError
from lazyencrypt.store import artifact_io
from lazyencrypt.store.locations import Artifact, ArtifactLocations
from lazyencrypt.store.readers import SourceReader
from lazyencrypt.store.sync import SyncReport, sync_artifact

logger = logging.getLogger(__name__)


class SecretStore:
    """
    Owns the cached secret and the runtime copies of the key and secret.

    Cache states:
    - Empty: nothing decrypted yet, or invalidated
    - Populated: holds the secret decrypted from the current runtime files

    A failed get_secret() leaves the cache empty. update_secret_files() and
    clear_cache() always empty it.

    Example:
        store = SecretStore(ArtifactLocations(data_dir), LocalFileReader(assets_dir))
        store.update_secret_files()
        digest = store.compute_hash('save-slot-1')
    """

    def __init__(
        self,
        locations: ArtifactLocations,
        reader: SourceReader,
        encoding: str = artifact_io.DEFAULT_ENCODING
    ):
        """
        Initialize secret store.

        Args:
            locations: Runtime paths for the key and secret files
            reader: Reader for the bundled source copies
            encoding: Text encoding of the artifact files
        """
        self.locations = locations
        self.reader = reader
        self.encoding = encoding
        self._cache: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def is_cached(self) -> bool:
        """Whether a decrypted secret is currently held in memory."""
        return self._cache is not None

    def get_secret(self) -> str:
        """
        Get the decrypted secret, loading it on first use.

        Returns:
            Decrypted secret

        Raises:
            MissingFilesError: If the runtime key or secret file is missing
            InvalidKeyError: If the runtime key file is empty
            CorruptArtifactError: If a runtime file is not valid text
        """
        with self._lock:
            if self._cache is not None:
                return self._cache

            key_path = self.locations.key_path
            secret_path = self.locations.secret_path
            missing = [p for p in (key_path, secret_path) if not p.is_file()]
            if missing:
                logger.error("Critical Error: Obfuscation key or secret file is missing!")
                raise MissingFilesError(missing)

            try:
                obfuscation_key = artifact_io.read_text(key_path, self.encoding)
                obfuscated_secret = artifact_io.read_text(secret_path, self.encoding)
            except FileNotFoundError as e:
                raise MissingFilesError([e.filename or secret_path])

            self._cache = transform(obfuscated_secret, obfuscation_key)
            logger.debug("Secret loaded into cache")
            return self._cache

    def clear_cache(self) -> None:
        """Clear the cached secret, forcing a reload next time it's requested."""
        logger.info("Clearing secret cache")
        with self._lock:
            self._cache = None

    def update_secret_files(self) -> SyncReport:
        """
        Update the runtime key and secret from the bundled assets.

        Must be triggered explicitly when the bundled key or secret change.
        Artifacts that are missing or fail to download are reported and
        skipped; the other artifact is still processed. The cache is always
        cleared afterwards.

        Returns:
            SyncReport with one result per artifact
        """
        logger.info("Updating secret & key from bundled assets...")
        report = SyncReport()

        try:
            for artifact in (Artifact.KEY, Artifact.SECRET):
                report.results.append(
                    sync_artifact(
                        artifact,
                        self.reader,
                        self.locations.filename(artifact),
                        self.locations.runtime_path(artifact),
                        self.encoding,
                    )
                )
        finally:
            self.clear_cache()

        logger.info(
            f"Sync complete: {len(report.updated)} updated, "
            f"{len(report.up_to_date)} up to date, "
            f"{len(report.skipped)} skipped, {len(report.failed)} failed"
        )
        return report

    def compute_hash(self, value: str) -> str:
        """
        Hash a value keyed with the stored secret.

        Args:
            value: Input string to hash

        Returns:
            64-character lowercase hex digest

        Raises:
            MissingFilesError: If the runtime files are missing
            MissingSecretError: If the stored secret is empty
        """
        return keyed_hash(value, self.get_secret())
