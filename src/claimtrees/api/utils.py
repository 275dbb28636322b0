"""Helpers shared by API routers."""
from __future__ import annotations

import logging

from fastapi import HTTPException

from claimtrees.graph.errors import PersistenceError
from claimtrees.store import GraphStore


logger = logging.getLogger(__name__)


def save_store(store: GraphStore) -> None:
    """Persist the store after a mutation, mapping failures to HTTP 500."""
    try:
        store.save()
    except PersistenceError as exc:
        logger.error("Failed to persist graph: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc


def require_content(content: str) -> str:
    """Claim content must contain something other than whitespace."""
    if not content.strip():
        raise HTTPException(status_code=400, detail="content is required")
    return content
