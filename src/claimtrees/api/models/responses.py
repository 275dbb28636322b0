"""Response models for API endpoints."""
from __future__ import annotations

from pydantic import BaseModel

from claimtrees.graph.models import ClaimNode, EvidenceNode
from claimtrees.graph.validity import EvidenceValidity


class ClaimResponse(BaseModel):
    id: str
    content: str
    created_at: str


class EvidenceResponse(BaseModel):
    id: str
    file_path: str
    line_ref: str
    git_commit: str
    created_at: str


class EvidenceWithValidityResponse(EvidenceResponse):
    valid: bool
    validity_error: str | None = None


class ClaimWithEvidenceResponse(ClaimResponse):
    evidence: list[EvidenceWithValidityResponse]


class StaleEvidenceResponse(BaseModel):
    results: list[EvidenceWithValidityResponse]
    total: int
    checked: int


class StatusResponse(BaseModel):
    status: str


def claim_to_response(claim: ClaimNode) -> ClaimResponse:
    return ClaimResponse(
        id=claim.id,
        content=claim.content,
        created_at=claim.created_at.isoformat(),
    )


def evidence_to_response(evidence: EvidenceNode) -> EvidenceResponse:
    return EvidenceResponse(
        id=evidence.id,
        file_path=evidence.file_path,
        line_ref=evidence.line_ref,
        git_commit=evidence.git_commit,
        created_at=evidence.created_at.isoformat(),
    )


def validity_to_response(item: EvidenceValidity) -> EvidenceWithValidityResponse:
    ev = item.evidence
    return EvidenceWithValidityResponse(
        id=ev.id,
        file_path=ev.file_path,
        line_ref=ev.line_ref,
        git_commit=ev.git_commit,
        created_at=ev.created_at.isoformat(),
        valid=item.valid,
        validity_error=item.error,
    )
