"""Persistence and concurrency control for the claim graph."""
from claimtrees.store.store import GraphStore

__all__ = ["GraphStore"]
