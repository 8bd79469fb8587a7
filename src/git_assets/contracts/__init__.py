"""Shared contracts for cross-boundary data types.

This package is a LEAF MODULE with no outbound dependencies to core.
Settings classes are NOT re-exported here - import them from
git_assets.core.config.

Import patterns:
    from git_assets.contracts import ErrorKind, NoSuchContentError, ValidationReport
"""

from git_assets.contracts.enums import ErrorKind
from git_assets.contracts.errors import (
    CommitFailedError,
    GitAssetsError,
    InconsistentStoreError,
    InvalidEncodingError,
    InvalidHashError,
    InvalidLengthError,
    MalformedReferenceError,
    NoSuchContentError,
    NotInGitRepoError,
    StoreAccessError,
)
from git_assets.contracts.validation import HashMismatch, ValidationReport

__all__ = [
    "CommitFailedError",
    "ErrorKind",
    "GitAssetsError",
    "HashMismatch",
    "InconsistentStoreError",
    "InvalidEncodingError",
    "InvalidHashError",
    "InvalidLengthError",
    "MalformedReferenceError",
    "NoSuchContentError",
    "NotInGitRepoError",
    "StoreAccessError",
    "ValidationReport",
]
