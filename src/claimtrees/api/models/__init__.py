"""Request and response models for the HTTP API."""
from claimtrees.api.models.requests import (
    ClaimContentRequest,
    EvidenceCreateRequest,
    LinkEvidenceRequest,
)
from claimtrees.api.models.responses import (
    ClaimResponse,
    ClaimWithEvidenceResponse,
    EvidenceResponse,
    EvidenceWithValidityResponse,
    StaleEvidenceResponse,
    StatusResponse,
    claim_to_response,
    evidence_to_response,
    validity_to_response,
)

__all__ = [
    "ClaimContentRequest",
    "EvidenceCreateRequest",
    "LinkEvidenceRequest",
    "ClaimResponse",
    "ClaimWithEvidenceResponse",
    "EvidenceResponse",
    "EvidenceWithValidityResponse",
    "StaleEvidenceResponse",
    "StatusResponse",
    "claim_to_response",
    "evidence_to_response",
    "validity_to_response",
]
