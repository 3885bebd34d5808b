"""Tests for the cached secret store"""
import hashlib

import pytest

from lazyencrypt.errors import CorruptArtifactError, InvalidKeyError, MissingFilesError, MissingSecretError
from lazyencrypt.store import artifact_io, secret_store
from lazyencrypt.store.locations import Artifact
from lazyencrypt.store.sync import SyncStatus


@pytest.mark.unit
def test_get_secret_decrypts_runtime_files(store, data_dir, write_artifacts):
    write_artifacts(data_dir, secret="HELLO", key="K")

    assert store.get_secret() == "HELLO"
    assert store.is_cached


@pytest.mark.unit
def test_get_secret_trims_surrounding_whitespace(store, data_dir):
    data_dir.mkdir(parents=True)
    (data_dir / "lazy_enc_key.dat").write_text("  K\n")
    (data_dir / "lazy_enc.dat").write_text("\x03\x0e\x07\x07\x04\r\n")

    assert store.get_secret() == "HELLO"


@pytest.mark.unit
def test_get_secret_missing_files_raises_and_leaves_cache_empty(store, data_dir):
    with pytest.raises(MissingFilesError) as exc_info:
        store.get_secret()

    assert not store.is_cached
    assert data_dir / "lazy_enc_key.dat" in exc_info.value.paths
    assert data_dir / "lazy_enc.dat" in exc_info.value.paths


@pytest.mark.unit
def test_get_secret_missing_secret_file_only(store, data_dir):
    data_dir.mkdir(parents=True)
    (data_dir / "lazy_enc_key.dat").write_text("K")

    with pytest.raises(MissingFilesError) as exc_info:
        store.get_secret()

    assert exc_info.value.paths == [data_dir / "lazy_enc.dat"]
    assert not store.is_cached


@pytest.mark.unit
def test_get_secret_empty_key_file_raises_invalid_key(store, data_dir):
    data_dir.mkdir(parents=True)
    (data_dir / "lazy_enc_key.dat").write_text("   \n")
    (data_dir / "lazy_enc.dat").write_text("abc")

    with pytest.raises(InvalidKeyError):
        store.get_secret()
    assert not store.is_cached


@pytest.mark.unit
def test_cached_secret_is_returned_without_io(store, data_dir, write_artifacts, monkeypatch):
    write_artifacts(data_dir, secret="cached-value", key="K")
    first = store.get_secret()

    def _no_io(*args, **kwargs):
        raise AssertionError("cache hit should not read files")

    monkeypatch.setattr(artifact_io, "read_text", _no_io)
    (data_dir / "lazy_enc_key.dat").unlink()
    (data_dir / "lazy_enc.dat").unlink()

    assert store.get_secret() == first == "cached-value"


@pytest.mark.unit
def test_clear_cache_forces_reload(store, data_dir, write_artifacts):
    write_artifacts(data_dir, secret="first", key="K")
    assert store.get_secret() == "first"

    write_artifacts(data_dir, secret="second", key="K")
    assert store.get_secret() == "first"

    store.clear_cache()
    assert not store.is_cached
    assert store.get_secret() == "second"


@pytest.mark.unit
def test_clear_cache_is_idempotent(store):
    store.clear_cache()
    store.clear_cache()
    assert not store.is_cached


@pytest.mark.unit
def test_compute_hash_uses_decrypted_secret(store, data_dir, write_artifacts):
    write_artifacts(data_dir, secret="s3cr3t", key="DefaultKey")

    expected = hashlib.sha256(b"pings3cr3t").hexdigest()
    assert store.compute_hash("ping") == expected


@pytest.mark.unit
def test_compute_hash_missing_files_is_distinct_from_missing_secret(store, data_dir):
    with pytest.raises(MissingFilesError):
        store.compute_hash("ping")

    data_dir.mkdir(parents=True)
    (data_dir / "lazy_enc_key.dat").write_text("K")
    (data_dir / "lazy_enc.dat").write_text("")

    with pytest.raises(MissingSecretError):
        store.compute_hash("ping")


@pytest.mark.integration
def test_update_secret_files_copies_missing_runtime_files(store, assets_dir, data_dir, write_artifacts):
    write_artifacts(assets_dir, secret="HELLO", key="K")

    report = store.update_secret_files()

    assert report.ok
    assert [r.status for r in report.results] == [SyncStatus.UPDATED, SyncStatus.UPDATED]
    assert (data_dir / "lazy_enc_key.dat").read_bytes() == (assets_dir / "lazy_enc_key.dat").read_bytes()
    assert (data_dir / "lazy_enc.dat").read_bytes() == (assets_dir / "lazy_enc.dat").read_bytes()
    assert store.get_secret() == "HELLO"


@pytest.mark.integration
def test_update_secret_files_is_idempotent(store, assets_dir, data_dir, write_artifacts):
    write_artifacts(assets_dir, secret="HELLO", key="K")
    store.update_secret_files()

    key_stat = (data_dir / "lazy_enc_key.dat").stat()
    secret_stat = (data_dir / "lazy_enc.dat").stat()

    report = store.update_secret_files()

    assert [r.status for r in report.results] == [SyncStatus.UP_TO_DATE, SyncStatus.UP_TO_DATE]
    assert (data_dir / "lazy_enc_key.dat").stat().st_mtime_ns == key_stat.st_mtime_ns
    assert (data_dir / "lazy_enc.dat").stat().st_mtime_ns == secret_stat.st_mtime_ns


@pytest.mark.integration
def test_update_secret_files_ignores_whitespace_only_differences(store, assets_dir, data_dir):
    (assets_dir / "lazy_enc_key.dat").write_text("K\n")
    (assets_dir / "lazy_enc.dat").write_text("\x03\x0e\x07\x07\x04")
    data_dir.mkdir(parents=True)
    (data_dir / "lazy_enc_key.dat").write_text("K")
    (data_dir / "lazy_enc.dat").write_text("\x03\x0e\x07\x07\x04\n")

    report = store.update_secret_files()

    assert report.result_for(Artifact.KEY).status is SyncStatus.UP_TO_DATE
    assert report.result_for(Artifact.SECRET).status is SyncStatus.UP_TO_DATE
    assert (data_dir / "lazy_enc_key.dat").read_text() == "K"


@pytest.mark.integration
def test_update_secret_files_overwrites_changed_runtime_file(store, assets_dir, data_dir, write_artifacts):
    write_artifacts(data_dir, secret="old", key="K")
    write_artifacts(assets_dir, secret="new", key="K")

    report = store.update_secret_files()

    assert report.result_for(Artifact.KEY).status is SyncStatus.UP_TO_DATE
    assert report.result_for(Artifact.SECRET).status is SyncStatus.UPDATED
    assert store.get_secret() == "new"


@pytest.mark.integration
def test_update_secret_files_skips_missing_source(store, assets_dir, data_dir):
    (assets_dir / "lazy_enc_key.dat").write_text("K")
    data_dir.mkdir(parents=True)
    (data_dir / "lazy_enc.dat").write_text("untouched")

    report = store.update_secret_files()

    assert report.ok
    assert report.result_for(Artifact.KEY).status is SyncStatus.UPDATED
    skipped = report.result_for(Artifact.SECRET)
    assert skipped.status is SyncStatus.SKIPPED
    assert "does not exist" in str(skipped.error)
    assert (data_dir / "lazy_enc.dat").read_text() == "untouched"


@pytest.mark.integration
def test_update_secret_files_invalidates_cache(store, assets_dir, data_dir, write_artifacts):
    write_artifacts(data_dir, secret="HELLO", key="K")
    store.get_secret()
    assert store.is_cached

    store.update_secret_files()

    assert not store.is_cached


@pytest.mark.unit
def test_update_secret_files_with_no_sources_keeps_cache_empty(store):
    report = store.update_secret_files()

    assert [r.status for r in report.results] == [SyncStatus.SKIPPED, SyncStatus.SKIPPED]
    assert not store.is_cached


@pytest.mark.unit
def test_get_secret_never_syncs(store, assets_dir, data_dir, write_artifacts):
    write_artifacts(assets_dir, secret="HELLO", key="K")

    with pytest.raises(MissingFilesError):
        store.get_secret()
    assert not data_dir.exists()


@pytest.mark.integration
def test_update_secret_files_replaces_undecodable_runtime_key(store, assets_dir, data_dir, write_artifacts):
    write_artifacts(assets_dir, secret="HELLO", key="K")
    write_artifacts(data_dir, secret="HELLO", key="K")
    assert store.get_secret() == "HELLO"

    (data_dir / "lazy_enc_key.dat").write_bytes(b"\xff\xfe\x00garbage")
    (data_dir / "lazy_enc.dat").write_bytes(b"stale")

    report = store.update_secret_files()

    assert report.ok
    assert [r.status for r in report.results] == [SyncStatus.UPDATED, SyncStatus.UPDATED]
    assert not store.is_cached
    assert (data_dir / "lazy_enc_key.dat").read_bytes() == (assets_dir / "lazy_enc_key.dat").read_bytes()
    assert (data_dir / "lazy_enc.dat").read_bytes() == (assets_dir / "lazy_enc.dat").read_bytes()
    assert store.get_secret() == "HELLO"


@pytest.mark.integration
def test_update_secret_files_clears_cache_when_artifact_fails(store, assets_dir, data_dir, write_artifacts, monkeypatch):
    write_artifacts(assets_dir, secret="HELLO", key="K")
    write_artifacts(data_dir, secret="HELLO", key="K")
    store.get_secret()

    def _fail(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(artifact_io, "write_bytes", _fail)
    (assets_dir / "lazy_enc.dat").write_text("changed")

    report = store.update_secret_files()

    assert not report.ok
    assert report.result_for(Artifact.SECRET).status is SyncStatus.FAILED
    assert "disk full" in str(report.result_for(Artifact.SECRET).error)
    assert not store.is_cached


@pytest.mark.unit
def test_update_secret_files_clears_cache_on_unexpected_error(store, data_dir, write_artifacts, monkeypatch):
    write_artifacts(data_dir, secret="HELLO", key="K")
    store.get_secret()

    def _boom(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(secret_store, "sync_artifact", _boom)

    with pytest.raises(RuntimeError):
        store.update_secret_files()
    assert not store.is_cached


@pytest.mark.unit
def test_get_secret_undecodable_runtime_secret(store, data_dir):
    data_dir.mkdir(parents=True)
    (data_dir / "lazy_enc_key.dat").write_text("K")
    (data_dir / "lazy_enc.dat").write_bytes(b"\xff\xfe")

    with pytest.raises(CorruptArtifactError) as exc_info:
        store.get_secret()

    assert exc_info.value.location == str(data_dir / "lazy_enc.dat")
    assert not store.is_cached
