"""Exception hierarchy for git-assets.

Every exception carries an ``ErrorKind`` so callers can decide remediation
without string matching. Underlying causes (usually ``OSError``) are chained
with ``raise ... from`` and are available as ``__cause__``.
"""

from git_assets.contracts.enums import ErrorKind


class GitAssetsError(Exception):
    """Base class for all git-assets failures."""

    kind: ErrorKind = ErrorKind.UNEXPECTED_ERROR

    def describe(self) -> str:
        """Render the kind-labelled message shown to users.

        Format mirrors the CLI output: the kind description, the detail
        message when it adds something, then the chained cause if any.
        """
        lines = [self.kind.description]
        detail = str(self)
        if detail:
            lines.append(detail)
        if self.__cause__ is not None:
            lines.append(f"Source: {self.__cause__}")
        return "\n".join(lines)


class InvalidHashError(GitAssetsError, ValueError):
    """Raised when bytes or text cannot be turned into a content hash."""


class InvalidLengthError(InvalidHashError):
    """Hash input does not have the digest length."""

    kind = ErrorKind.INVALID_LENGTH


class InvalidEncodingError(InvalidHashError):
    """Hash text is not hexadecimal."""

    kind = ErrorKind.INVALID_ENCODING


class MalformedReferenceError(GitAssetsError, ValueError):
    """Reference text has a wrong header, a bad hex body or is truncated."""

    kind = ErrorKind.MALFORMED_REFERENCE


class NoSuchContentError(GitAssetsError, LookupError):
    """A well-formed reference points at a hash with no data file."""

    kind = ErrorKind.NO_SUCH_CONTENT


class CommitFailedError(GitAssetsError):
    """Promoting a staging file into ``data`` did not complete.

    The staging file is left where it was; retrying means starting over with
    a fresh staging writer.
    """

    kind = ErrorKind.COMMIT_FAILED


class StoreAccessError(GitAssetsError):
    """A structural filesystem operation on the store failed."""

    kind = ErrorKind.STORE_ACCESS


class InconsistentStoreError(GitAssetsError):
    """Raised by the CLI when a validation report is non-empty.

    The store core never raises this; ``Store.validate`` only returns a report.
    """

    kind = ErrorKind.INCONSISTENT


class NotInGitRepoError(GitAssetsError):
    """No store path was given and no enclosing git repository was found."""

    kind = ErrorKind.NOT_IN_GIT_REPO
