"""Claim/evidence graph: data model, operations, git-backed validity."""
from __future__ import annotations

from claimtrees.graph.errors import (
    ClaimNotFoundError,
    ClaimTreesError,
    EvidenceNotFoundError,
    EvidenceValidationError,
    GitCheckError,
    GitTimeoutError,
    NotFoundError,
    PersistenceError,
    ValidationReason,
)
from claimtrees.graph.git import GitChecker, GitCommandChecker
from claimtrees.graph.graph import ClaimGraph
from claimtrees.graph.models import ClaimNode, Edge, EvidenceNode
from claimtrees.graph.validity import (
    EvidenceValidity,
    check_validity,
    find_stale_evidence,
    validity_for_claim,
)

__all__ = [
    "ClaimGraph",
    "ClaimNode",
    "EvidenceNode",
    "Edge",
    "GitChecker",
    "GitCommandChecker",
    "EvidenceValidity",
    "check_validity",
    "validity_for_claim",
    "find_stale_evidence",
    "ClaimTreesError",
    "EvidenceValidationError",
    "ValidationReason",
    "NotFoundError",
    "ClaimNotFoundError",
    "EvidenceNotFoundError",
    "GitCheckError",
    "GitTimeoutError",
    "PersistenceError",
]
