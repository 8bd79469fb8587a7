# src/git_assets/core/hash.py
"""SHA-256 content hash used as both identity and storage key.

Equality is structural over the raw digest bytes, so hex text of either
case parses to the same hash. Output hex is always lower-case. Whitespace,
prefixes and separators are rejected.
"""

import hashlib
import re
from dataclasses import dataclass
from typing import BinaryIO

from git_assets.contracts.errors import InvalidEncodingError, InvalidLengthError

__all__ = ["DIGEST_SIZE", "HEX_LENGTH", "ContentHash", "new_hasher"]

# Length of a SHA-256 hash in bytes
DIGEST_SIZE = 32
HEX_LENGTH = DIGEST_SIZE * 2

_HEX_PATTERN = re.compile(r"[0-9a-fA-F]*")
_STREAM_CHUNK_SIZE = 64 * 1024


def new_hasher() -> "hashlib._Hash":
    """Return a fresh SHA-256 accumulator."""
    return hashlib.sha256()


@dataclass(frozen=True)
class ContentHash:
    """A SHA-256 digest of some content."""

    digest: bytes

    def __post_init__(self) -> None:
        if len(self.digest) != DIGEST_SIZE:
            raise InvalidLengthError(f"Expected {DIGEST_SIZE} digest bytes, got {len(self.digest)}")

    @classmethod
    def from_bytes(cls, digest: bytes) -> "ContentHash":
        """Wrap exactly ``DIGEST_SIZE`` raw digest bytes."""
        return cls(bytes(digest))

    @classmethod
    def from_hex(cls, hex_text: str | bytes) -> "ContentHash":
        """Parse ``HEX_LENGTH`` hex characters of either case.

        Raises:
            InvalidLengthError: If the text is not exactly HEX_LENGTH characters
            InvalidEncodingError: If the text is not hexadecimal
        """
        if isinstance(hex_text, bytes):
            try:
                hex_text = hex_text.decode("ascii")
            except UnicodeDecodeError as e:
                raise InvalidEncodingError(f"Hash text is not ASCII: {hex_text[:HEX_LENGTH]!r}") from e
        if len(hex_text) != HEX_LENGTH:
            raise InvalidLengthError(f"Expected {HEX_LENGTH} hex characters, got {len(hex_text)}")
        # bytes.fromhex() tolerates whitespace, which is not a valid name
        if not _HEX_PATTERN.fullmatch(hex_text):
            raise InvalidEncodingError(f"Hash text is not hex: {hex_text!r}")
        return cls(bytes.fromhex(hex_text))

    @classmethod
    def of_bytes(cls, content: bytes) -> "ContentHash":
        """Hash a complete in-memory byte sequence."""
        return cls(hashlib.sha256(content).digest())

    @classmethod
    def of_stream(cls, source: BinaryIO, chunk_size: int = _STREAM_CHUNK_SIZE) -> "ContentHash":
        """Consume ``source`` to EOF and return the hash of everything read."""
        hasher = new_hasher()
        while chunk := source.read(chunk_size):
            hasher.update(chunk)
        return cls(hasher.digest())

    @classmethod
    def from_hasher(cls, hasher: "hashlib._Hash") -> "ContentHash":
        return cls(hasher.digest())

    def to_hex(self, byte_limit: int | None = None) -> str:
        """Lower-case hex of the digest.

        Args:
            byte_limit: Only render the first ``byte_limit`` bytes. For log
                and diagnostic output only, never for identity.
        """
        if byte_limit is None:
            return self.digest.hex()
        return self.digest[:byte_limit].hex()

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f"ContentHash({self.to_hex()!r})"
