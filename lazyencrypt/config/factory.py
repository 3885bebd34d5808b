"""Build readers, stores and admins from a validated configuration."""

import logging
from pathlib import Path
from typing import Dict, Any

from lazyencrypt.admin.manager import SecretAdmin
from lazyencrypt.config.loader import get_config_value
from lazyencrypt.store.artifact_io import DEFAULT_ENCODING
from lazyencrypt.store.locations import ArtifactLocations
from lazyencrypt.store.readers import BundledAssetReader, LocalFileReader, SourceReader
from lazyencrypt.store.secret_store import SecretStore

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


def build_source_reader(config: Dict[str, Any]) -> SourceReader:
    """
    Select the reader for the bundled assets.

    Args:
        config: Validated configuration

    Returns:
        LocalFileReader for 'local' mode, BundledAssetReader for 'bundled' mode
    """
    mode = get_config_value(config, 'source.mode', 'local')

    if mode == 'bundled':
        base_url = get_config_value(config, 'source.base_url')
        timeout = float(get_config_value(config, 'source.timeout', DEFAULT_TIMEOUT))
        logger.debug(f"Using bundled asset reader at {base_url} (timeout {timeout}s)")
        return BundledAssetReader(base_url, timeout=timeout)

    assets_dir = Path(get_config_value(config, 'paths.assets')).expanduser()
    logger.debug(f"Using local file reader at {assets_dir}")
    return LocalFileReader(assets_dir)


def build_store(config: Dict[str, Any]) -> SecretStore:
    """Create a SecretStore wired to the configured locations and reader."""
    locations = ArtifactLocations.from_filenames(
        Path(get_config_value(config, 'paths.data')),
        get_config_value(config, 'files', {}),
    )
    encoding = get_config_value(config, 'storage.encoding', DEFAULT_ENCODING)
    return SecretStore(locations, build_source_reader(config), encoding=encoding)


def build_admin(config: Dict[str, Any]) -> SecretAdmin:
    """Create a SecretAdmin publishing into the configured assets directory."""
    return SecretAdmin(
        Path(get_config_value(config, 'paths.assets')),
        build_store(config),
    )
