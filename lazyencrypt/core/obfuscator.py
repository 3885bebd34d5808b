"""
Secret obfuscation utilities.

SECURITY NOTE: This module provides basic XOR obfuscation for game secrets.
This is NOT cryptographically secure and can be reverse-engineered. It exists
only to keep secrets out of plain sight in shipped asset files.
"""

import struct
from typing import List, Union

from lazyencrypt.errors import InvalidKeyError

# UTF-16 keeps lone surrogates produced by the XOR so the text round-trips
_CODE_UNIT_CODEC = "utf-16-le"


def _to_code_units(text: str) -> List[int]:
    """Split text into UTF-16 code units."""
    raw = text.encode(_CODE_UNIT_CODEC, "surrogatepass")
    return list(struct.unpack(f"<{len(raw) // 2}H", raw))


def _from_code_units(units: List[int]) -> str:
    """Join UTF-16 code units back into text."""
    raw = struct.pack(f"<{len(units)}H", *units)
    return raw.decode(_CODE_UNIT_CODEC, "surrogatepass")


def transform(text: str, key: str) -> str:
    """
    XOR text with a repeating key.

    Works on UTF-16 code units, so the same call both obfuscates and
    restores: ``transform(transform(text, key), key) == text``.

    Args:
        text: Text to obfuscate or restore
        key: Non-empty obfuscation key

    Returns:
        Transformed text with the same number of code units

    Raises:
        InvalidKeyError: If key is empty
    """
    if not key:
        raise InvalidKeyError()

    if not text:
        return ""

    key_units = _to_code_units(key)
    text_units = _to_code_units(text)
    key_length = len(key_units)

    return _from_code_units(
        [unit ^ key_units[i % key_length] for i, unit in enumerate(text_units)]
    )


def xor_bytes(data: bytes, key: Union[str, bytes]) -> bytes:
    """
    XOR encrypt/decrypt raw bytes with a key.

    Args:
        data: Bytes to encrypt/decrypt
        key: Key to use for XOR operation (str keys are UTF-8 encoded)

    Returns:
        XOR'd bytes

    Raises:
        InvalidKeyError: If key is empty
    """
    key_bytes = key.encode("utf-8") if isinstance(key, str) else bytes(key)
    if not key_bytes:
        raise InvalidKeyError()
    return bytes(b ^ key_bytes[i % len(key_bytes)] for i, b in enumerate(data))


def encrypt_preview(plain_text: str, key: str) -> str:
    """Obfuscate plain text so an operator can inspect it before saving."""
    return transform(plain_text, key)
