"""
LazyEncrypt - lightweight secret obfuscation for game builds

Stores a small secret next to the game's bundled assets, obfuscates it with
a repeating-key XOR cipher, syncs it into the writable data directory and
derives keyed SHA-256 hashes from it for integrity checks.
"""

__version__ = "1.0.0"
__author__ = "jbruns"
