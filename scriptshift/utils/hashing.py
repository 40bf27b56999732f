"""Content fingerprints for schema documents."""

import hashlib


def hash_bytes(data: bytes) -> str:
    """
    Hash bytes using BLAKE2b.

    Args:
        data: Bytes to hash

    Returns:
        Hash string in format "blake2b:hexdigest"
    """
    h = hashlib.blake2b(data, digest_size=32)
    return f"blake2b:{h.hexdigest()}"


def hash_string(text: str, encoding: str = "utf-8") -> str:
    """
    Hash a string using BLAKE2b.

    Args:
        text: Text to hash
        encoding: Text encoding (default: utf-8)

    Returns:
        Hash string in format "blake2b:hexdigest"
    """
    return hash_bytes(text.encode(encoding))
