"""Evidence validity orchestration.

Validity is never stored. These helpers ask the ``GitChecker`` afresh on every
call and turn each answer into an ``EvidenceValidity`` value for callers that
display many items at once.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from claimtrees.graph.errors import GitCheckError
from claimtrees.graph.git import GitChecker
from claimtrees.graph.graph import ClaimGraph
from claimtrees.graph.models import EvidenceNode


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvidenceValidity:
    """An evidence node with its freshly computed validity."""

    evidence: EvidenceNode
    valid: bool
    error: str | None = None


def check_validity(
    graph: ClaimGraph,
    evidence: EvidenceNode,
    checker: GitChecker,
    timeout: float | None = None,
) -> EvidenceValidity:
    """Check one evidence node.

    A git failure marks the evidence invalid and records the reason; unknown
    ids still raise ``EvidenceNotFoundError``.
    """
    try:
        valid = graph.check_evidence(evidence.id, checker, timeout=timeout)
    except GitCheckError as exc:
        logger.warning("Validity check failed for evidence %s: %s", evidence.id, exc)
        return EvidenceValidity(evidence=evidence, valid=False, error=str(exc))
    return EvidenceValidity(evidence=evidence, valid=valid)


def validity_for_claim(
    graph: ClaimGraph,
    claim_id: str,
    checker: GitChecker,
    timeout: float | None = None,
) -> list[EvidenceValidity]:
    """Annotate every evidence item linked to ``claim_id``, in edge order."""
    return [
        check_validity(graph, evidence, checker, timeout=timeout)
        for evidence in graph.get_evidence_for_claim(claim_id)
    ]


def find_stale_evidence(
    graph: ClaimGraph,
    checker: GitChecker,
    timeout: float | None = None,
) -> list[EvidenceValidity]:
    """Every evidence node that is no longer valid."""
    results = [
        check_validity(graph, evidence, checker, timeout=timeout)
        for evidence in graph.list_evidence()
    ]
    stale = [r for r in results if not r.valid]
    logger.info("Checked %d evidence nodes, %d stale", len(results), len(stale))
    return stale
