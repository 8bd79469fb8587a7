# src/git_assets/core/reference.py
"""References: the fixed-format text that stands in for stored content.

A reference is exactly 78 bytes:

    git-assets v1\\n<64 hex characters>

- 14 bytes of header: magic "git-assets", a space, version "v1", a newline
- 64 bytes of hex-encoded SHA-256 of the referenced content; encoded
  lower-case, decoded in either case

There is no trailing delimiter. Writers may append a newline when printing,
but the decoder neither requires nor consumes one. Only version v1 exists;
any other header is rejected, never negotiated.
"""

from dataclasses import dataclass
from typing import BinaryIO

from git_assets.contracts.errors import InvalidHashError, MalformedReferenceError
from git_assets.core.hash import HEX_LENGTH, ContentHash

__all__ = ["REFERENCE_HEADER", "REFERENCE_LENGTH", "Reference"]

REFERENCE_HEADER = b"git-assets v1\n"
REFERENCE_LENGTH = len(REFERENCE_HEADER) + HEX_LENGTH


@dataclass(frozen=True)
class Reference:
    """A reference to a data file in the store.

    A pure function of its hash; never mutated.
    """

    hash: ContentHash

    def encode(self) -> bytes:
        """Render the exact REFERENCE_LENGTH-byte wire form."""
        return REFERENCE_HEADER + self.hash.to_hex().encode("ascii")

    def __str__(self) -> str:
        return self.encode().decode("ascii")

    @classmethod
    def parse(cls, data: bytes) -> "Reference":
        """Decode an in-memory reference of exactly REFERENCE_LENGTH bytes.

        Raises:
            MalformedReferenceError: On wrong length, header or hex body
        """
        if len(data) != REFERENCE_LENGTH:
            raise MalformedReferenceError(f"Expected {REFERENCE_LENGTH} bytes, got {len(data)}")
        if data[: len(REFERENCE_HEADER)] != REFERENCE_HEADER:
            raise MalformedReferenceError(f"Unrecognized reference header: {data[: len(REFERENCE_HEADER)]!r}")
        try:
            content_hash = ContentHash.from_hex(data[len(REFERENCE_HEADER) :])
        except InvalidHashError as e:
            raise MalformedReferenceError("Reference body is not a valid hash") from e
        return cls(content_hash)

    @classmethod
    def decode(cls, reader: BinaryIO) -> "Reference":
        """Read exactly REFERENCE_LENGTH bytes from ``reader`` and decode them.

        Short reads from pipes are retried until the full length arrives or
        the stream ends. Nothing past the fixed length is consumed.
        """
        buf = bytearray()
        while len(buf) < REFERENCE_LENGTH:
            chunk = reader.read(REFERENCE_LENGTH - len(buf))
            if not chunk:
                raise MalformedReferenceError(f"Reference truncated: expected {REFERENCE_LENGTH} bytes, got {len(buf)}")
            buf.extend(chunk)
        return cls.parse(bytes(buf))
