"""In-memory claim/evidence graph.

The graph owns node and edge storage and every structural operation. It does
no I/O and no locking; ``claimtrees.store.GraphStore`` serialises access.

Nodes are immutable values, so anything handed out by a getter can be kept
without aliasing the graph's internals. Edges hold ids, never node objects.
"""
from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import replace
from typing import Any

from claimtrees.graph.errors import (
    ClaimNotFoundError,
    EvidenceNotFoundError,
    EvidenceValidationError,
    ValidationReason,
)
from claimtrees.graph.git import GitChecker
from claimtrees.graph.models import ClaimNode, Edge, EvidenceNode


class ClaimGraph:
    """Claims, evidence and the edges linking them."""

    def __init__(self) -> None:
        self._evidence: dict[str, EvidenceNode] = {}
        self._claims: dict[str, ClaimNode] = {}
        self._edges: list[Edge] = []

    # ------------------------------------------------------------------
    # Evidence
    # ------------------------------------------------------------------

    def add_evidence(self, file_path: str, line_ref: str, git_commit: str) -> EvidenceNode:
        """Create an evidence node.

        Raises:
            EvidenceValidationError: ``file_path`` is not absolute
                (``RELATIVE_PATH``) or ``git_commit`` is empty (``EMPTY_COMMIT``).
        """
        if not os.path.isabs(file_path):
            raise EvidenceValidationError(ValidationReason.RELATIVE_PATH, file_path)
        if git_commit == "":
            raise EvidenceValidationError(ValidationReason.EMPTY_COMMIT)

        evidence = EvidenceNode(file_path=file_path, line_ref=line_ref, git_commit=git_commit)
        self._evidence[evidence.id] = evidence
        return evidence

    def get_evidence(self, evidence_id: str) -> EvidenceNode | None:
        return self._evidence.get(evidence_id)

    def list_evidence(self) -> list[EvidenceNode]:
        return list(self._evidence.values())

    def delete_evidence(self, evidence_id: str) -> bool:
        """Remove an evidence node and every edge pointing at it.

        Claims on the other end of those edges are left in place.
        """
        if self._evidence.pop(evidence_id, None) is None:
            return False
        self._edges = [e for e in self._edges if e.evidence_id != evidence_id]
        return True

    # ------------------------------------------------------------------
    # Claims
    # ------------------------------------------------------------------

    def add_claim(self, content: str) -> ClaimNode:
        claim = ClaimNode(content=content)
        self._claims[claim.id] = claim
        return claim

    def get_claim(self, claim_id: str) -> ClaimNode | None:
        return self._claims.get(claim_id)

    def list_claims(self) -> list[ClaimNode]:
        return list(self._claims.values())

    def update_claim(self, claim_id: str, content: str) -> ClaimNode | None:
        """Replace a claim's content, keeping its id and creation time."""
        existing = self._claims.get(claim_id)
        if existing is None:
            return None
        updated = replace(existing, content=content)
        self._claims[claim_id] = updated
        return updated

    def delete_claim(self, claim_id: str) -> bool:
        """Remove a claim and every edge from it. Evidence nodes survive."""
        if self._claims.pop(claim_id, None) is None:
            return False
        self._edges = [e for e in self._edges if e.claim_id != claim_id]
        return True

    def search_claims(self, query: str) -> list[ClaimNode]:
        """Claims whose content contains ``query``, ignoring case."""
        needle = query.casefold()
        return [c for c in self._claims.values() if needle in c.content.casefold()]

    # ------------------------------------------------------------------
    # Edges
    # ------------------------------------------------------------------

    @property
    def edges(self) -> tuple[Edge, ...]:
        return tuple(self._edges)

    def link_evidence(self, claim_id: str, evidence_id: str) -> Edge:
        """Record that ``evidence_id`` supports ``claim_id``.

        Linking the same pair twice stores two edges.
        """
        if claim_id not in self._claims:
            raise ClaimNotFoundError(claim_id)
        if evidence_id not in self._evidence:
            raise EvidenceNotFoundError(evidence_id)
        edge = Edge(claim_id=claim_id, evidence_id=evidence_id)
        self._edges.append(edge)
        return edge

    def get_evidence_for_claim(self, claim_id: str) -> Iterator[EvidenceNode]:
        """Yield the claim's evidence in edge-insertion order."""
        for edge in self._edges:
            if edge.claim_id != claim_id:
                continue
            evidence = self._evidence.get(edge.evidence_id)
            if evidence is not None:
                yield evidence

    # ------------------------------------------------------------------
    # Validity
    # ------------------------------------------------------------------

    def check_evidence(
        self,
        evidence_id: str,
        checker: GitChecker,
        timeout: float | None = None,
    ) -> bool:
        """Return True while the evidence file is unchanged since its commit.

        Errors raised by ``checker`` propagate untouched.
        """
        evidence = self._evidence.get(evidence_id)
        if evidence is None:
            raise EvidenceNotFoundError(evidence_id)
        changed = checker.has_file_changed_since(
            evidence.git_commit, evidence.file_path, timeout=timeout
        )
        return not changed

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def copy(self) -> "ClaimGraph":
        """Independent graph with the same contents."""
        other = ClaimGraph()
        other._evidence = dict(self._evidence)
        other._claims = dict(self._claims)
        other._edges = list(self._edges)
        return other

    def to_dict(self) -> dict[str, Any]:
        return {
            "evidence": {eid: ev.to_dict() for eid, ev in self._evidence.items()},
            "claims": {cid: c.to_dict() for cid, c in self._claims.items()},
            "edges": [e.to_dict() for e in self._edges],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClaimGraph":
        """Rebuild a graph from ``to_dict`` output.

        Raises:
            EvidenceValidationError: a stored evidence record breaks the
                absolute-path / non-empty-commit invariant.
            KeyError, TypeError, ValueError: the payload is malformed.
        """
        graph = cls()
        for key, raw in (data.get("evidence") or {}).items():
            evidence = EvidenceNode.from_dict({"id": key, **raw})
            if not os.path.isabs(evidence.file_path):
                raise EvidenceValidationError(ValidationReason.RELATIVE_PATH, evidence.file_path)
            if evidence.git_commit == "":
                raise EvidenceValidationError(ValidationReason.EMPTY_COMMIT)
            graph._evidence[evidence.id] = evidence
        for key, raw in (data.get("claims") or {}).items():
            claim = ClaimNode.from_dict({"id": key, **raw})
            graph._claims[claim.id] = claim
        graph._edges = [Edge.from_dict(raw) for raw in (data.get("edges") or [])]
        return graph

    def __repr__(self) -> str:
        return (
            f"ClaimGraph(claims={len(self._claims)}, evidence={len(self._evidence)}, "
            f"edges={len(self._edges)})"
        )
