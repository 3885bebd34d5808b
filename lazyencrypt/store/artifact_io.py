"""
Reading and writing artifact files.

Obfuscated text may contain control characters and lone surrogates, so
every text read and write goes through the same codec settings and no
newline translation.
"""

import logging
from pathlib import Path
from typing import Optional

from lazyencrypt.errors import CorruptArtifactError

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"
_ERRORS = "surrogatepass"


def decode_text(
    data: bytes,
    encoding: str = DEFAULT_ENCODING,
    location: Optional[str] = None
) -> str:
    """
    Decode artifact bytes into text.

    Args:
        data: Raw artifact bytes
        encoding: Text encoding of the artifact
        location: Where the bytes came from, for error messages

    Returns:
        Decoded text

    Raises:
        CorruptArtifactError: If the bytes are not valid in the encoding
    """
    try:
        return data.decode(encoding, _ERRORS)
    except UnicodeDecodeError as e:
        raise CorruptArtifactError(location or "artifact data", str(e))


def read_text(path: Path, encoding: str = DEFAULT_ENCODING) -> str:
    """
    Read an artifact file with surrounding whitespace trimmed.

    Args:
        path: File to read
        encoding: Text encoding of the file

    Returns:
        Trimmed file content

    Raises:
        FileNotFoundError: If the file does not exist
        CorruptArtifactError: If the file is not valid text
    """
    path = Path(path)
    return decode_text(path.read_bytes(), encoding, str(path)).strip()


def write_text(path: Path, text: str, encoding: str = DEFAULT_ENCODING) -> Path:
    """
    Write text verbatim to an artifact file, creating parent directories.

    Args:
        path: Destination file
        text: Content to write
        encoding: Text encoding for the file

    Returns:
        The path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding=encoding, errors=_ERRORS, newline='') as f:
        f.write(text)
    return path


def write_bytes(path: Path, data: bytes) -> Path:
    """
    Write raw bytes to an artifact file via a temporary file.

    The destination is only replaced once the full payload is on disk.

    Args:
        path: Destination file
        data: Raw bytes to write

    Returns:
        The path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    temp_path = path.with_suffix(path.suffix + '.tmp')
    try:
        with open(temp_path, 'wb') as f:
            f.write(data)
        temp_path.replace(path)
    except OSError:
        if temp_path.exists():
            temp_path.unlink()
        raise

    logger.debug(f"Wrote {len(data)} bytes to {path}")
    return path
