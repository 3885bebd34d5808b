"""Secret storage, synchronization and caching."""

from lazyencrypt.store.locations import Artifact, ArtifactLocations
from lazyencrypt.store.readers import SourceReader, LocalFileReader, BundledAssetReader
from lazyencrypt.store.sync import SyncStatus, ArtifactSyncResult, SyncReport
from lazyencrypt.store.secret_store import SecretStore

__all__ = [
    "Artifact",
    "ArtifactLocations",
    "SourceReader",
    "LocalFileReader",
    "BundledAssetReader",
    "SyncStatus",
    "ArtifactSyncResult",
    "SyncReport",
    "SecretStore",
]
