# src/git_assets/core/staging.py
"""Staging writer: persist incoming bytes while hashing them.

Hash state and on-disk bytes advance in lockstep. Only bytes the file
actually accepted are fed to the hasher, so a short write never leaves the
hash ahead of the file.

A StagingWriter has no public finalize step. ``Store.commit`` closes the
handle, finalizes the hash and renames the file, in that order.
"""

import os
from pathlib import Path
from typing import BinaryIO

from git_assets.core.hash import ContentHash, new_hasher

__all__ = ["StagingWriter"]


class StagingWriter:
    """Write sink backed by a uniquely-named file in the staging directory.

    Instances are created by ``Store.new_staging_file``; the file handle must
    already be open for exclusive writing.
    """

    def __init__(self, path: Path, file: BinaryIO) -> None:
        self.path = path
        self._file = file
        self._hasher = new_hasher()
        self._bytes_written = 0
        self._finished = False

    @property
    def bytes_written(self) -> int:
        """Number of bytes persisted (and hashed) so far."""
        return self._bytes_written

    @property
    def finished(self) -> bool:
        """True once the writer has been consumed by a commit."""
        return self._finished

    def write(self, data: bytes | memoryview) -> int:
        """Write once and hash exactly the bytes that were persisted.

        Returns:
            Number of bytes persisted, possibly fewer than ``len(data)``
        """
        if self._finished:
            raise ValueError(f"Staging file already committed: {self.path}")
        view = memoryview(data)
        n_written = self._file.write(view)
        # Unbuffered raw writes may return None when nothing could be written
        if n_written is None:
            n_written = 0
        self._hasher.update(view[:n_written])
        self._bytes_written += n_written
        return n_written

    def write_all(self, data: bytes) -> None:
        """Write ``data`` completely, retrying after partial writes."""
        view = memoryview(data)
        while view:
            n_written = self.write(view)
            if n_written == 0:
                raise OSError(f"No progress writing staging file: {self.path}")
            view = view[n_written:]

    def copy_from(self, source: BinaryIO, chunk_size: int = 64 * 1024) -> int:
        """Stream ``source`` to EOF into the staging file.

        Returns:
            Number of bytes copied
        """
        copied = 0
        while chunk := source.read(chunk_size):
            self.write_all(chunk)
            copied += len(chunk)
        return copied

    def flush(self) -> None:
        """Force written bytes to storage. Hash state is unaffected."""
        self._file.flush()
        os.fsync(self._file.fileno())

    def _finish(self) -> ContentHash:
        """Close the backing file and return the final hash.

        Called only by ``Store.commit``. A writer can be finished once.
        """
        if self._finished:
            raise ValueError(f"Staging file already committed: {self.path}")
        self._finished = True
        self._file.close()
        return ContentHash.from_hasher(self._hasher)

    def __repr__(self) -> str:
        return f"StagingWriter(path={str(self.path)!r}, bytes_written={self._bytes_written})"
