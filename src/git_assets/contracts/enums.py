"""Error kinds shared by the store core and the command-line glue."""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Kind of a git-assets failure.

    The value is stable and machine-readable; ``description`` is what the
    CLI shows to a user.
    """

    INVALID_LENGTH = "invalid_length"
    INVALID_ENCODING = "invalid_encoding"
    MALFORMED_REFERENCE = "malformed_reference"
    NO_SUCH_CONTENT = "no_such_content"
    COMMIT_FAILED = "commit_failed"
    STORE_ACCESS = "store_access"
    INCONSISTENT = "inconsistent"
    NOT_IN_GIT_REPO = "not_in_git_repo"
    UNEXPECTED_ERROR = "unexpected_error"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS: dict[ErrorKind, str] = {
    ErrorKind.INVALID_LENGTH: "A content hash has the wrong length.",
    ErrorKind.INVALID_ENCODING: "A content hash is not valid hexadecimal.",
    ErrorKind.MALFORMED_REFERENCE: "The input is not a valid git-assets reference.",
    ErrorKind.NO_SUCH_CONTENT: "A referenced content file was not found.",
    ErrorKind.COMMIT_FAILED: "Could not move a staged file into the data store.",
    ErrorKind.STORE_ACCESS: "Could not access the data store due to some underlying error.",
    ErrorKind.INCONSISTENT: "The store is in an inconsistent state.",
    ErrorKind.NOT_IN_GIT_REPO: "No store path has been specified, but the command was not run within a git repository.",
    ErrorKind.UNEXPECTED_ERROR: "An unexpected error occurred.",
}
