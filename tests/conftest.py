"""Pytest configuration and shared fixtures for claimtrees tests."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from claimtrees.graph import ClaimGraph, GitCheckError
from claimtrees.store import GraphStore


class FakeGitChecker:
    """GitChecker test double keyed by ``(commit, file_path)``.

    ``changed`` marks pairs reported as modified; ``errors`` maps pairs to the
    exception to raise. Every call is recorded in ``calls``.
    """

    def __init__(
        self,
        changed: set[tuple[str, str]] | None = None,
        errors: dict[tuple[str, str], Exception] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.changed = set(changed or ())
        self.errors = dict(errors or {})
        self.error = error
        self.calls: list[tuple[str, str, float | None]] = []

    def has_file_changed_since(self, commit: str, file_path: str, timeout: float | None = None) -> bool:
        self.calls.append((commit, file_path, timeout))
        if self.error is not None:
            raise self.error
        key = (commit, file_path)
        if key in self.errors:
            raise self.errors[key]
        return key in self.changed


@pytest.fixture
def graph() -> ClaimGraph:
    return ClaimGraph()


@pytest.fixture
def fake_checker() -> FakeGitChecker:
    return FakeGitChecker()


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "graph.json"


@pytest.fixture
def store(store_path: Path) -> GraphStore:
    return GraphStore(store_path)


@pytest.fixture
def git_error() -> GitCheckError:
    return GitCheckError("fatal: bad revision 'abc123..HEAD'", commit="abc123", file_path="/repo/a.py")


@pytest.fixture
def checker_factory():
    """Build a ``FakeGitChecker`` with custom answers."""
    return FakeGitChecker


@pytest.fixture
def patched_services(store: GraphStore, fake_checker: FakeGitChecker):
    """Point every router at a temp-file store and the fake git checker."""
    with (
        patch("claimtrees.api.routers.claims.get_store", return_value=store),
        patch("claimtrees.api.routers.claims.get_git_checker", return_value=fake_checker),
        patch("claimtrees.api.routers.evidence.get_store", return_value=store),
        patch("claimtrees.api.routers.evidence.get_git_checker", return_value=fake_checker),
    ):
        yield store, fake_checker
