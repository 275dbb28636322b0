"""Exception taxonomy for the claim/evidence graph."""
from __future__ import annotations

from enum import Enum


class ClaimTreesError(Exception):
    """Base class for every error raised by claimtrees."""


class ValidationReason(str, Enum):
    """Why an evidence record was rejected."""

    RELATIVE_PATH = "relative_path"
    EMPTY_COMMIT = "empty_commit"


_REASON_MESSAGES: dict[ValidationReason, str] = {
    ValidationReason.RELATIVE_PATH: "file_path must be absolute",
    ValidationReason.EMPTY_COMMIT: "git_commit is required",
}


class EvidenceValidationError(ClaimTreesError, ValueError):
    """Evidence fields failed validation; nothing was stored."""

    def __init__(self, reason: ValidationReason, value: str = "") -> None:
        self.reason = reason
        self.value = value
        message = _REASON_MESSAGES[reason]
        if value:
            message = f"{message}: {value!r}"
        super().__init__(message)


class NotFoundError(ClaimTreesError, LookupError):
    """An operation referenced an unknown node id."""

    kind = "node"

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(f"{self.kind} {node_id!r} not found")


class ClaimNotFoundError(NotFoundError):
    kind = "claim"


class EvidenceNotFoundError(NotFoundError):
    kind = "evidence"


class GitCheckError(ClaimTreesError):
    """The version-control check could not produce an answer."""

    def __init__(
        self,
        message: str,
        commit: str = "",
        file_path: str = "",
        stderr: str | None = None,
    ) -> None:
        self.commit = commit
        self.file_path = file_path
        self.stderr = stderr
        super().__init__(message)


class GitTimeoutError(GitCheckError):
    """The git invocation exceeded its deadline."""


class PersistenceError(ClaimTreesError):
    """Loading or saving the graph snapshot failed."""
