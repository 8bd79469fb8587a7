"""Result types of the store validation scan."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from git_assets.core.hash import ContentHash


@dataclass(frozen=True)
class HashMismatch:
    """A data file whose contents do not hash to its name.

    Attributes:
        file_name: Name of the file directly under ``data``
        expected_hash: Hash parsed from the file name
        actual_hash: Hash of the bytes currently in the file
    """

    file_name: str
    expected_hash: ContentHash
    actual_hash: ContentHash


@dataclass(frozen=True)
class ValidationReport:
    """Findings of one validation scan, ordered by file name.

    Built fresh on every scan and never persisted. Unexpected files are
    entries under ``data`` that are not hash-named regular files, including
    subdirectories.
    """

    hash_mismatches: list[HashMismatch] = field(default_factory=list)
    unexpected_files: list[Path] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """True when the scan found nothing to report."""
        return not self.hash_mismatches and not self.unexpected_files
