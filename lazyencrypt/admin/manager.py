"""
Administrative operations for publishing and checking the secret.

These are the operations an editor window or the command line calls: save a
key, obfuscate and save a secret into the bundled assets directory, verify
what was saved, push it to the runtime directory and test hashing.
"""

import logging
from pathlib import Path
from typing import Optional

from lazyencrypt.core.hasher import keyed_hash
from lazyencrypt.core.obfuscator import encrypt_preview, transform
from lazyencrypt.errors import MissingFilesError
from lazyencrypt.store import artifact_io
from lazyencrypt.store.secret_store import SecretStore
from lazyencrypt.store.sync import SyncReport

logger = logging.getLogger(__name__)


class SecretAdmin:
    """
    Publishes secrets to the bundled assets directory and manages the store.

    Args:
        assets_dir: Writable bundled assets directory (the source location
            during development)
        store: SecretStore serving the runtime copies
    """

    def __init__(self, assets_dir: Path, store: SecretStore):
        self.assets_dir = Path(assets_dir).expanduser()
        self.store = store

    @property
    def key_path(self) -> Path:
        return self.assets_dir / self.store.locations.key_filename

    @property
    def secret_path(self) -> Path:
        return self.assets_dir / self.store.locations.secret_filename

    def save_key(self, key: str) -> Path:
        """
        Save the obfuscation key to the bundled assets directory.

        Args:
            key: Obfuscation key, written verbatim

        Returns:
            Path the key was written to
        """
        path = artifact_io.write_text(self.key_path, key, self.store.encoding)
        logger.info(f"Obfuscation key saved successfully to {path}")
        return path

    def save_secret(self, obfuscated_text: str) -> Path:
        """
        Save an already obfuscated secret to the bundled assets directory.

        Clears the store cache so the next read picks up the new secret.

        Args:
            obfuscated_text: Obfuscated secret, written verbatim

        Returns:
            Path the secret was written to
        """
        path = artifact_io.write_text(self.secret_path, obfuscated_text, self.store.encoding)
        logger.info(f"Secret saved successfully to {path}")
        self.store.clear_cache()
        return path

    def publish_secret(self, plain_text: str, key: Optional[str] = None) -> str:
        """
        Obfuscate a plain secret and save it.

        Args:
            plain_text: Secret to store
            key: Obfuscation key; defaults to the key saved in the assets directory

        Returns:
            The obfuscated text that was saved

        Raises:
            MissingFilesError: If no key is given and none has been saved
            InvalidKeyError: If the key is empty
        """
        if key is None:
            if not self.key_path.is_file():
                raise MissingFilesError([self.key_path])
            key = artifact_io.read_text(self.key_path, self.store.encoding)

        obfuscated = transform(plain_text, key)
        self.save_secret(obfuscated)
        return obfuscated

    def encrypt_preview(self, plain_text: str, key: str) -> str:
        """Show what a secret looks like once obfuscated with a key."""
        return encrypt_preview(plain_text, key)

    def load_and_decrypt_from_source(self) -> str:
        """
        Decrypt the secret saved in the assets directory.

        Reads the bundled copies directly, bypassing the runtime files and
        the store cache.

        Returns:
            Decrypted secret

        Raises:
            MissingFilesError: If the key or secret file is missing
        """
        missing = [p for p in (self.key_path, self.secret_path) if not p.is_file()]
        if missing:
            logger.error("Secret file or key file not found!")
            raise MissingFilesError(missing)

        stored_key = artifact_io.read_text(self.key_path, self.store.encoding)
        stored_secret = artifact_io.read_text(self.secret_path, self.store.encoding)
        return transform(stored_secret, stored_key)

    def force_update(self) -> SyncReport:
        """Push the bundled key and secret into the runtime directory."""
        report = self.store.update_secret_files()
        if report.ok:
            logger.info("Secret & key updated from bundled assets.")
        return report

    def compute_test_hash(self, text: str) -> str:
        """
        Hash a test string with the runtime secret.

        Raises:
            MissingFilesError: If the runtime files are missing
            MissingSecretError: If the runtime secret is empty
        """
        return keyed_hash(text, self.store.get_secret())
