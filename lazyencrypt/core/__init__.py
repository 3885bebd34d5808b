"""Stateless cipher and hash primitives."""

from lazyencrypt.core.obfuscator import transform, xor_bytes, encrypt_preview
from lazyencrypt.core.hasher import keyed_hash

__all__ = ["transform", "xor_bytes", "encrypt_preview", "keyed_hash"]
