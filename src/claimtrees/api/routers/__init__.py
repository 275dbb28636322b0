"""FastAPI route handlers organized by resource."""
from claimtrees.api.routers.claims import router as claims_router
from claimtrees.api.routers.evidence import router as evidence_router
from claimtrees.api.routers.status import router as status_router

__all__ = [
    "claims_router",
    "evidence_router",
    "status_router",
]
