"""Keyed SHA-256 hashing for integrity checks."""

import hashlib
from typing import Optional

from lazyencrypt.errors import MissingSecretError


def keyed_hash(value: str, secret: Optional[str]) -> str:
    """
    Hash a value together with the secret using SHA-256.

    Args:
        value: Input string to hash
        secret: Secret appended to the input before hashing

    Returns:
        64-character lowercase hex digest

    Raises:
        MissingSecretError: If secret is empty or None
    """
    if not secret:
        raise MissingSecretError()

    combined = (value + secret).encode("utf-8", "surrogatepass")
    return hashlib.sha256(combined).hexdigest()
