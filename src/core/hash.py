"""Fast hashing for non-cryptographic use cases.

xxhash backs generated class names and palette cache keys.
"""

from typing import Any, Protocol

import xxhash


class Hasher(Protocol):
    """Protocol for hash implementations."""

    def digest(self, data: bytes) -> str:
        """Compute hex digest of data."""
        ...


class XXHasher:
    """Ultra-fast non-cryptographic hasher."""

    def digest(self, data: bytes) -> str:
        return xxhash.xxh64(data).hexdigest()


_hasher: Hasher = XXHasher()


def hash_string(text: str, truncate: int | None = None) -> str:
    """
    Hash string to hex digest.

    Args:
        text: String to hash
        truncate: Optional length to truncate digest (e.g. 8 for class names)

    Returns:
        Hex digest string

    Examples:
        >>> len(hash_string("hero-1", truncate=8))
        8
    """
    digest = _hasher.digest(text.encode("utf-8"))
    return digest[:truncate] if truncate else digest


def hash_fields(*fields: Any) -> str:
    """
    Hash multiple fields together (deterministic).

    ``None`` hashes differently from the empty string so that an absent
    colour and a blank one never share a key.

    Examples:
        >>> hash_fields("#3b82f6", None, "#ffffff") != hash_fields("#3b82f6", "", "#ffffff")
        True
    """
    parts = ["\x01" if field is None else str(field) for field in fields]
    combined = "\x00".join(parts)  # Null byte separator
    return hash_string(combined)


__all__ = [
    "Hasher",
    "hash_string",
    "hash_fields",
]
