"""Request models for API endpoints."""
from __future__ import annotations

from pydantic import BaseModel


class ClaimContentRequest(BaseModel):
    """Body for creating or updating a claim."""

    content: str


class EvidenceCreateRequest(BaseModel):
    """Body for recording new evidence."""

    file_path: str
    line_ref: str = ""
    git_commit: str = ""


class LinkEvidenceRequest(BaseModel):
    """Body for linking existing evidence to a claim."""

    evidence_id: str
