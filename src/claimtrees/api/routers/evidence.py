"""Evidence endpoints."""
from __future__ import annotations

from fastapi import APIRouter, HTTPException

from claimtrees.api.dependencies import get_git_checker, get_store
from claimtrees.api.models import (
    EvidenceCreateRequest,
    EvidenceResponse,
    EvidenceWithValidityResponse,
    StaleEvidenceResponse,
    StatusResponse,
    evidence_to_response,
    validity_to_response,
)
from claimtrees.api.utils import save_store
from claimtrees.graph.errors import EvidenceValidationError
from claimtrees.graph.validity import check_validity, find_stale_evidence


router = APIRouter(prefix="/evidence", tags=["evidence"])


@router.post("", response_model=EvidenceResponse, status_code=201)
def create_evidence(body: EvidenceCreateRequest) -> EvidenceResponse:
    """Record evidence; the path must be absolute and the commit non-empty."""
    store = get_store()
    try:
        evidence = store.with_graph(
            lambda g: g.add_evidence(body.file_path, body.line_ref, body.git_commit)
        )
    except EvidenceValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    save_store(store)
    return evidence_to_response(evidence)


@router.get("", response_model=list[EvidenceResponse])
def list_evidence() -> list[EvidenceResponse]:
    return [evidence_to_response(e) for e in get_store().graph().list_evidence()]


@router.get("/stale", response_model=StaleEvidenceResponse)
def stale_evidence() -> StaleEvidenceResponse:
    """Evidence whose file changed since its commit, or could not be checked."""
    snapshot = get_store().graph()
    stale = find_stale_evidence(snapshot, get_git_checker())
    return StaleEvidenceResponse(
        results=[validity_to_response(item) for item in stale],
        total=len(stale),
        checked=len(snapshot.list_evidence()),
    )


@router.get("/{evidence_id}", response_model=EvidenceWithValidityResponse)
def get_evidence(evidence_id: str) -> EvidenceWithValidityResponse:
    snapshot = get_store().graph()
    evidence = snapshot.get_evidence(evidence_id)
    if evidence is None:
        raise HTTPException(status_code=404, detail="evidence not found")
    return validity_to_response(check_validity(snapshot, evidence, get_git_checker()))


@router.delete("/{evidence_id}", response_model=StatusResponse)
def delete_evidence(evidence_id: str) -> StatusResponse:
    """Delete evidence and its edges; linked claims are kept."""
    store = get_store()
    deleted = store.with_graph(lambda g: g.delete_evidence(evidence_id))
    if not deleted:
        raise HTTPException(status_code=404, detail="evidence not found")
    save_store(store)
    return StatusResponse(status="deleted")
