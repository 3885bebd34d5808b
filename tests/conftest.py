"""
Shared pytest fixtures and utilities for the lazyencrypt test suite.
"""

from pathlib import Path
from typing import Dict, Any, Callable

import pytest
import yaml

from lazyencrypt.admin.manager import SecretAdmin
from lazyencrypt.core.obfuscator import transform
from lazyencrypt.store.locations import ArtifactLocations
from lazyencrypt.store.readers import LocalFileReader
from lazyencrypt.store.secret_store import SecretStore

KEY_FILENAME = "lazy_enc_key.dat"
SECRET_FILENAME = "lazy_enc.dat"


@pytest.fixture
def assets_dir(tmp_path: Path) -> Path:
    """
    Bundled assets directory (source location).
    """
    path = tmp_path / "Assets" / "StreamingAssets"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """
    Writable data directory (runtime location), initially absent.
    """
    return tmp_path / "persistent"


@pytest.fixture
def store(assets_dir: Path, data_dir: Path) -> SecretStore:
    """
    SecretStore reading bundled assets straight from disk.
    """
    return SecretStore(ArtifactLocations(data_dir), LocalFileReader(assets_dir))


@pytest.fixture
def admin(assets_dir: Path, store: SecretStore) -> SecretAdmin:
    return SecretAdmin(assets_dir, store)


@pytest.fixture
def write_artifacts() -> Callable[..., None]:
    """
    Write an obfuscated key/secret pair into a directory.

    Usage:
        write_artifacts(data_dir, secret="HELLO", key="K")
    """

    def _writer(directory: Path, secret: str, key: str) -> None:
        directory.mkdir(parents=True, exist_ok=True)
        (directory / KEY_FILENAME).write_text(key, encoding="utf-8")
        (directory / SECRET_FILENAME).write_text(transform(secret, key), encoding="utf-8")

    return _writer


@pytest.fixture
def make_config(tmp_path: Path, assets_dir: Path, data_dir: Path) -> Callable[[Dict[str, Any]], Path]:
    """
    Create a minimal lazyencrypt.yaml in a temp directory.
    
    Usage:
        path = make_config({"source": {"timeout": 5}})
    """

    def _builder(overrides: Dict[str, Any] | None = None) -> Path:
        base = {
            "paths": {
                "assets": str(assets_dir),
                "data": str(data_dir),
            },
            "source": {"mode": "local"},
            "logging": {"level": "INFO", "console": False},
        }
        if overrides:
            base = merge_dicts(base, overrides)

        cfg_path = tmp_path / "lazyencrypt.yaml"
        cfg_path.write_text(yaml.safe_dump(base))
        return cfg_path

    return _builder


def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow+deep merge helper for fixture config dictionaries.
    """
    result: Dict[str, Any] = dict(base)
    for key, value in override.items():
        if (
            key in result
            and isinstance(result[key], dict)
            and isinstance(value, dict)
        ):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = value
    return result
