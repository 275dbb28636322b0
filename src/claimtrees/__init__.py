from __future__ import annotations

__version__ = "0.1.0"
__author__ = "Claimtrees Contributors"

from claimtrees.graph import (
    ClaimGraph,
    ClaimNode,
    Edge,
    EvidenceNode,
    GitChecker,
    GitCommandChecker,
)
from claimtrees.store import GraphStore

__all__ = [
    "ClaimGraph",
    "ClaimNode",
    "EvidenceNode",
    "Edge",
    "GitChecker",
    "GitCommandChecker",
    "GraphStore",
]
