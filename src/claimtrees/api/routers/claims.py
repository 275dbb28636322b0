"""Claim endpoints: create, search, inspect, update, delete, link evidence."""
from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from claimtrees.api.dependencies import get_git_checker, get_store
from claimtrees.api.models import (
    ClaimContentRequest,
    ClaimResponse,
    ClaimWithEvidenceResponse,
    LinkEvidenceRequest,
    StatusResponse,
    claim_to_response,
    validity_to_response,
)
from claimtrees.api.utils import require_content, save_store
from claimtrees.graph.errors import NotFoundError
from claimtrees.graph.validity import validity_for_claim


router = APIRouter(prefix="/claims", tags=["claims"])


@router.post("", response_model=ClaimResponse, status_code=201)
def create_claim(body: ClaimContentRequest) -> ClaimResponse:
    """Create a claim."""
    content = require_content(body.content)
    store = get_store()
    claim = store.with_graph(lambda g: g.add_claim(content))
    save_store(store)
    return claim_to_response(claim)


@router.get("", response_model=list[ClaimResponse])
def list_claims(q: str | None = Query(None, description="Case-insensitive substring filter")) -> list[ClaimResponse]:
    """List all claims, or only those whose content contains ``q``."""
    snapshot = get_store().graph()
    claims = snapshot.search_claims(q) if q else snapshot.list_claims()
    return [claim_to_response(c) for c in claims]


@router.get("/{claim_id}", response_model=ClaimWithEvidenceResponse)
def get_claim(claim_id: str) -> ClaimWithEvidenceResponse:
    """Return a claim with its evidence, each checked against git now."""
    snapshot = get_store().graph()
    claim = snapshot.get_claim(claim_id)
    if claim is None:
        raise HTTPException(status_code=404, detail="claim not found")

    evidence = validity_for_claim(snapshot, claim_id, get_git_checker())
    return ClaimWithEvidenceResponse(
        **claim_to_response(claim).model_dump(),
        evidence=[validity_to_response(item) for item in evidence],
    )


@router.put("/{claim_id}", response_model=ClaimResponse)
def update_claim(claim_id: str, body: ClaimContentRequest) -> ClaimResponse:
    """Replace a claim's content."""
    content = require_content(body.content)
    store = get_store()
    claim = store.with_graph(lambda g: g.update_claim(claim_id, content))
    if claim is None:
        raise HTTPException(status_code=404, detail="claim not found")
    save_store(store)
    return claim_to_response(claim)


@router.delete("/{claim_id}", response_model=StatusResponse)
def delete_claim(claim_id: str) -> StatusResponse:
    """Delete a claim and its edges; linked evidence is kept."""
    store = get_store()
    deleted = store.with_graph(lambda g: g.delete_claim(claim_id))
    if not deleted:
        raise HTTPException(status_code=404, detail="claim not found")
    save_store(store)
    return StatusResponse(status="deleted")


@router.post("/{claim_id}/evidence", response_model=StatusResponse)
def link_evidence(claim_id: str, body: LinkEvidenceRequest) -> StatusResponse:
    """Link existing evidence to a claim."""
    store = get_store()
    try:
        store.with_graph(lambda g: g.link_evidence(claim_id, body.evidence_id))
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    save_store(store)
    return StatusResponse(status="linked")
