# src/git_assets/core/store.py
"""Content-addressed file store.

Layout under the store root:

    data/<64 hex chars>   committed content, file name == SHA-256 of contents
    staging/<prefix>.<n>  in-progress writes, one file per StagingWriter
    ref/                  reserved; neither read nor written here

Writes go to a uniquely-named staging file first and are promoted into
``data`` with a single rename. Rename within one filesystem is atomic, so
readers of ``data`` see either no file or a complete one. Because the
destination name is the content hash, a rename that replaces an existing
file replaces it with identical bytes; concurrent commits of the same
content converge on one file without locking.

Nothing here retries I/O or deletes files. Staging files left behind by
interrupted or failed writes are inert and are not cleaned up.
"""

import os
from pathlib import Path
from typing import BinaryIO

from git_assets.contracts.errors import (
    CommitFailedError,
    InvalidHashError,
    NoSuchContentError,
    StoreAccessError,
)
from git_assets.contracts.validation import HashMismatch, ValidationReport
from git_assets.core.hash import ContentHash
from git_assets.core.logging import get_logger
from git_assets.core.reference import Reference
from git_assets.core.staging import StagingWriter

__all__ = ["Store"]

logger = get_logger(__name__)

DATA_DIR_NAME = "data"
STAGING_DIR_NAME = "staging"
REF_DIR_NAME = "ref"

DEFAULT_STAGING_PREFIX = "smudge"
DEFAULT_MAX_STAGING_PROBES = 10_000
DEFAULT_CHUNK_SIZE = 64 * 1024

# Probing past this many taken names is logged; it hints at a leaking staging directory
_PROBE_WARNING_THRESHOLD = 1_000


class Store:
    """A content-addressed store rooted at one directory.

    Use ``Store.open_or_create`` rather than the constructor; it makes sure
    the directory layout exists.
    """

    def __init__(
        self,
        root: Path,
        *,
        staging_prefix: str = DEFAULT_STAGING_PREFIX,
        max_staging_probes: int = DEFAULT_MAX_STAGING_PROBES,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self.root = root.absolute()
        self.data_dir = self.root / DATA_DIR_NAME
        self.staging_dir = self.root / STAGING_DIR_NAME
        self.ref_dir = self.root / REF_DIR_NAME
        self.staging_prefix = staging_prefix
        self.max_staging_probes = max_staging_probes
        self.chunk_size = chunk_size

    @classmethod
    def open_or_create(
        cls,
        root: Path,
        *,
        staging_prefix: str = DEFAULT_STAGING_PREFIX,
        max_staging_probes: int = DEFAULT_MAX_STAGING_PROBES,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> "Store":
        """Open the store at ``root``, creating any missing directories.

        Raises:
            StoreAccessError: If a directory cannot be created
        """
        store = cls(
            Path(root),
            staging_prefix=staging_prefix,
            max_staging_probes=max_staging_probes,
            chunk_size=chunk_size,
        )
        for directory in (store.root, store.data_dir, store.staging_dir, store.ref_dir):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StoreAccessError(f"Cannot create store directory {directory}") from e
        logger.debug("Store opened", root=str(store.root))
        return store

    def _path_for_hash(self, content_hash: ContentHash) -> Path:
        # The only way a destination name is formed. Callers never supply one.
        return self.data_dir / content_hash.to_hex()

    def new_staging_file(self) -> StagingWriter:
        """Allocate a fresh staging file.

        Names are probed as ``<prefix>.1``, ``<prefix>.2``, ... with an
        exclusive create, so two processes can never share a staging file.

        Raises:
            StoreAccessError: If creation fails for a reason other than the
                name being taken, or if every probe up to
                ``max_staging_probes`` was taken
        """
        for counter in range(1, self.max_staging_probes + 1):
            path = self.staging_dir / f"{self.staging_prefix}.{counter}"
            try:
                file = open(path, "xb", buffering=0)  # noqa: SIM115
            except FileExistsError:
                if counter == _PROBE_WARNING_THRESHOLD:
                    logger.warning(
                        "Many staging names already taken",
                        staging_dir=str(self.staging_dir),
                        probes=counter,
                    )
                continue
            except OSError as e:
                raise StoreAccessError(f"Cannot create staging file {path}") from e
            logger.debug("Staging file allocated", path=str(path))
            return StagingWriter(path, file)
        raise StoreAccessError(f"No free staging file name in {self.staging_dir} after {self.max_staging_probes} attempts")

    def commit(self, staging: StagingWriter) -> Reference:
        """Promote a staging file into ``data`` under its content hash.

        The writer is consumed: its file is closed and its hash finalized
        before the rename. An existing destination is replaced, which is safe
        because a file with that name holds the same bytes.

        Raises:
            CommitFailedError: If the writer was already committed or the
                rename fails; the staging file stays in place
        """
        try:
            content_hash = staging._finish()
        except ValueError as e:
            raise CommitFailedError(str(e)) from e
        except OSError as e:
            raise CommitFailedError(f"Cannot close staging file {staging.path}") from e

        final_path = self._path_for_hash(content_hash)
        try:
            staging.path.replace(final_path)
        except OSError as e:
            logger.warning(
                "Commit failed, staging file left in place",
                staging_path=str(staging.path),
                content_hash=content_hash.to_hex(8),
            )
            raise CommitFailedError(f"Cannot move {staging.path} to {final_path}") from e

        logger.debug(
            "Committed content",
            content_hash=content_hash.to_hex(8),
            size=staging.bytes_written,
        )
        return Reference(content_hash)

    def store_stream(self, source: BinaryIO) -> Reference:
        """Copy ``source`` to EOF into a staging file and commit it."""
        staging = self.new_staging_file()
        staging.copy_from(source, self.chunk_size)
        return self.commit(staging)

    def store_bytes(self, content: bytes) -> Reference:
        """Store an in-memory byte sequence."""
        staging = self.new_staging_file()
        staging.write_all(content)
        return self.commit(staging)

    def open_ref(self, ref: Reference) -> BinaryIO:
        """Open the content behind ``ref`` for reading.

        The bytes are not verified here; ``validate`` does that.

        Raises:
            NoSuchContentError: If no regular file exists for the hash
        """
        path = self._path_for_hash(ref.hash)
        if not path.is_file():
            raise NoSuchContentError(f"No content for {ref.hash} in {self.data_dir}")
        try:
            return open(path, "rb")  # noqa: SIM115
        except FileNotFoundError as e:
            raise NoSuchContentError(f"No content for {ref.hash} in {self.data_dir}") from e

    def validate(self) -> ValidationReport:
        """Check every entry directly under ``data``.

        Non-regular entries and files whose names do not parse as a hex hash
        are reported as unexpected. Hash-named files, in either hex case, are
        re-hashed and reported when their contents disagree with their name.
        Read-only: nothing is repaired or deleted.

        Raises:
            StoreAccessError: If ``data`` or one of its files cannot be read
        """
        hash_mismatches: list[HashMismatch] = []
        unexpected_files: list[Path] = []

        try:
            with os.scandir(self.data_dir) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            raise StoreAccessError(f"Cannot list {self.data_dir}") from e

        for entry in entries:
            path = Path(entry.path)
            try:
                is_regular = entry.is_file(follow_symlinks=False)
            except OSError as e:
                raise StoreAccessError(f"Cannot stat {path}") from e
            if not is_regular:
                logger.warning("Unexpected entry in data directory", path=str(path))
                unexpected_files.append(path)
                continue

            try:
                expected_hash = ContentHash.from_hex(entry.name)
            except InvalidHashError:
                logger.warning("Unexpected entry in data directory", path=str(path))
                unexpected_files.append(path)
                continue

            try:
                with open(path, "rb") as f:
                    actual_hash = ContentHash.of_stream(f, self.chunk_size)
            except OSError as e:
                raise StoreAccessError(f"Cannot read {path}") from e

            if actual_hash != expected_hash:
                logger.warning(
                    "Hash mismatch in data directory",
                    file_name=entry.name,
                    actual_hash=actual_hash.to_hex(),
                )
                hash_mismatches.append(HashMismatch(entry.name, expected_hash, actual_hash))

        logger.info(
            "Validation finished",
            checked=len(entries),
            hash_mismatches=len(hash_mismatches),
            unexpected_files=len(unexpected_files),
        )
        return ValidationReport(hash_mismatches=hash_mismatches, unexpected_files=unexpected_files)

    def __repr__(self) -> str:
        return f"Store(root={str(self.root)!r})"
