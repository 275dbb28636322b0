"""Shared dependencies for FastAPI routes.

Services are process singletons created on startup by ``initialize_services``;
route modules reach them through the getter functions so tests can patch them.
"""
from __future__ import annotations

import logging
from threading import Lock

from claimtrees.config import Config
from claimtrees.graph.git import GitChecker, GitCommandChecker
from claimtrees.store import GraphStore


logger = logging.getLogger(__name__)


# Global singletons (initialized on startup)
_config: Config | None = None
_store: GraphStore | None = None
_git_checker: GitChecker | None = None

_service_lock = Lock()


def initialize_services(config: Config | None = None) -> None:
    """Initialize all services on app startup."""
    global _config, _store, _git_checker

    with _service_lock:
        _config = config or Config.load()
        store_path = _config.paths.store_path
        _store = GraphStore(store_path)
        _git_checker = GitCommandChecker(
            git_binary=_config.git.binary,
            timeout=_config.git.timeout_seconds,
        )
        logger.info("Services initialized (store=%s)", store_path)


def reset_services() -> None:
    """Drop all singletons (used on shutdown and by tests)."""
    global _config, _store, _git_checker

    with _service_lock:
        _config = None
        _store = None
        _git_checker = None


def get_config() -> Config:
    """Get configuration singleton."""
    global _config
    if _config is None:
        with _service_lock:
            if _config is None:
                _config = Config.load()
    return _config


def get_store() -> GraphStore:
    """Get graph store singleton."""
    if _store is None:
        raise RuntimeError("Graph store not initialized")
    return _store


def get_git_checker() -> GitChecker:
    """Get git checker singleton."""
    if _git_checker is None:
        raise RuntimeError("Git checker not initialized")
    return _git_checker
