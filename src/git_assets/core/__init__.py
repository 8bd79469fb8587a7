"""Core store subsystem: hashing, references, staging and the store itself."""

from git_assets.core.hash import ContentHash
from git_assets.core.reference import REFERENCE_HEADER, REFERENCE_LENGTH, Reference
from git_assets.core.staging import StagingWriter
from git_assets.core.store import Store

__all__ = [
    "REFERENCE_HEADER",
    "REFERENCE_LENGTH",
    "ContentHash",
    "Reference",
    "StagingWriter",
    "Store",
]
