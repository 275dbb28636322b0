"""Tests for ClaimGraph operations and invariants."""
from __future__ import annotations

import dataclasses
import inspect

import pytest

from claimtrees.graph import (
    ClaimGraph,
    ClaimNotFoundError,
    EvidenceNotFoundError,
    EvidenceValidationError,
    GitCheckError,
    NotFoundError,
    ValidationReason,
)


class TestAddEvidence:
    def test_stores_fields(self, graph: ClaimGraph) -> None:
        ev = graph.add_evidence("/home/user/project/main.go", "1-3,7,13-70", "abc123def456")

        assert ev.id
        assert ev.file_path == "/home/user/project/main.go"
        assert ev.line_ref == "1-3,7,13-70"
        assert ev.git_commit == "abc123def456"
        assert ev.created_at.tzinfo is not None
        assert graph.get_evidence(ev.id) == ev

    @pytest.mark.parametrize("path", ["relative/auth.go", "auth.go", "./auth.go", "../x/auth.go", ""])
    def test_relative_path_rejected(self, graph: ClaimGraph, path: str) -> None:
        with pytest.raises(EvidenceValidationError) as exc_info:
            graph.add_evidence(path, "1-3", "abc")

        assert exc_info.value.reason == ValidationReason.RELATIVE_PATH
        assert graph.list_evidence() == []

    def test_empty_commit_rejected(self, graph: ClaimGraph) -> None:
        with pytest.raises(EvidenceValidationError) as exc_info:
            graph.add_evidence("/home/user/project/main.go", "1-3", "")

        assert exc_info.value.reason == ValidationReason.EMPTY_COMMIT
        assert graph.list_evidence() == []

    def test_validation_error_is_value_error(self, graph: ClaimGraph) -> None:
        with pytest.raises(ValueError):
            graph.add_evidence("relative.go", "1", "abc")

    def test_path_stored_verbatim(self, graph: ClaimGraph) -> None:
        ev = graph.add_evidence("/home/user/../user/./main.go", "", "abc")
        assert ev.file_path == "/home/user/../user/./main.go"

    def test_ids_are_unique(self, graph: ClaimGraph) -> None:
        ids = {graph.add_evidence("/a.go", "1", "c").id for _ in range(50)}
        assert len(ids) == 50

    def test_nodes_are_immutable(self, graph: ClaimGraph) -> None:
        ev = graph.add_evidence("/a.go", "1", "c")
        with pytest.raises(dataclasses.FrozenInstanceError):
            ev.file_path = "relative.go"  # type: ignore[misc]


class TestClaims:
    def test_add_claim(self, graph: ClaimGraph) -> None:
        claim = graph.add_claim("The authentication module validates tokens correctly")

        assert claim.id
        assert claim.content == "The authentication module validates tokens correctly"
        assert graph.get_claim(claim.id) == claim

    def test_empty_content_allowed(self, graph: ClaimGraph) -> None:
        claim = graph.add_claim("")
        assert graph.get_claim(claim.id) is not None

    def test_get_missing_returns_none(self, graph: ClaimGraph) -> None:
        assert graph.get_claim("nonexistent") is None
        assert graph.get_evidence("nonexistent") is None

    def test_update_preserves_id_and_created_at(self, graph: ClaimGraph) -> None:
        claim = graph.add_claim("old")

        updated = graph.update_claim(claim.id, "new")

        assert updated is not None
        assert updated.id == claim.id
        assert updated.created_at == claim.created_at
        assert updated.content == "new"
        assert graph.get_claim(claim.id).content == "new"

    def test_update_does_not_alias_previous_value(self, graph: ClaimGraph) -> None:
        claim = graph.add_claim("old")
        graph.update_claim(claim.id, "new")
        assert claim.content == "old"

    def test_update_missing_returns_none(self, graph: ClaimGraph) -> None:
        assert graph.update_claim("nonexistent", "x") is None
        assert graph.list_claims() == []


class TestLinkEvidence:
    def test_link_creates_edge(self, graph: ClaimGraph) -> None:
        claim = graph.add_claim("Auth works")
        ev = graph.add_evidence("/home/user/auth.go", "10-25", "abc123")

        edge = graph.link_evidence(claim.id, ev.id)

        assert edge.claim_id == claim.id
        assert edge.evidence_id == ev.id
        assert graph.edges == (edge,)

    def test_unknown_claim(self, graph: ClaimGraph) -> None:
        ev = graph.add_evidence("/home/user/auth.go", "10-25", "abc123")

        with pytest.raises(ClaimNotFoundError) as exc_info:
            graph.link_evidence("nonexistent", ev.id)

        assert exc_info.value.node_id == "nonexistent"
        assert graph.edges == ()

    def test_unknown_evidence(self, graph: ClaimGraph) -> None:
        claim = graph.add_claim("Auth works")

        with pytest.raises(EvidenceNotFoundError):
            graph.link_evidence(claim.id, "nonexistent")
        assert graph.edges == ()

    def test_not_found_errors_share_base(self, graph: ClaimGraph) -> None:
        with pytest.raises(NotFoundError):
            graph.link_evidence("a", "b")
        with pytest.raises(LookupError):
            graph.link_evidence("a", "b")

    def test_duplicate_link_creates_two_edges(self, graph: ClaimGraph) -> None:
        claim = graph.add_claim("Auth works")
        ev = graph.add_evidence("/home/user/auth.go", "10-25", "abc123")

        graph.link_evidence(claim.id, ev.id)
        graph.link_evidence(claim.id, ev.id)

        matching = [e for e in graph.edges if e.claim_id == claim.id and e.evidence_id == ev.id]
        assert len(matching) == 2
        assert [e.id for e in graph.get_evidence_for_claim(claim.id)] == [ev.id, ev.id]


class TestGetEvidenceForClaim:
    def test_scenario_single_link(self, graph: ClaimGraph) -> None:
        claim = graph.add_claim("auth works")
        ev = graph.add_evidence("/abs/auth.go", "10-25", "abc123")
        graph.link_evidence(claim.id, ev.id)

        evidence = list(graph.get_evidence_for_claim(claim.id))

        assert [e.id for e in evidence] == [ev.id]

    def test_insertion_order_and_unlinked_excluded(self, graph: ClaimGraph) -> None:
        claim = graph.add_claim("Auth works")
        other = graph.add_claim("Other")
        ev1 = graph.add_evidence("/home/user/auth.go", "10-25", "abc123")
        ev2 = graph.add_evidence("/home/user/auth_test.go", "1-50", "abc123")
        unrelated = graph.add_evidence("/home/user/unrelated.go", "1-5", "abc123")
        graph.link_evidence(claim.id, ev2.id)
        graph.link_evidence(other.id, unrelated.id)
        graph.link_evidence(claim.id, ev1.id)

        assert [e.id for e in graph.get_evidence_for_claim(claim.id)] == [ev2.id, ev1.id]

    def test_returns_single_pass_iterator(self, graph: ClaimGraph) -> None:
        claim = graph.add_claim("c")
        ev = graph.add_evidence("/a.go", "1", "c")
        graph.link_evidence(claim.id, ev.id)

        result = graph.get_evidence_for_claim(claim.id)

        assert inspect.isgenerator(result)
        assert len(list(result)) == 1
        assert list(result) == []

    def test_unknown_claim_yields_nothing(self, graph: ClaimGraph) -> None:
        assert list(graph.get_evidence_for_claim("missing")) == []


class TestDelete:
    def test_delete_claim_cascades_edges_only(self, graph: ClaimGraph) -> None:
        claim = graph.add_claim("auth works")
        ev = graph.add_evidence("/abs/auth.go", "10-25", "abc123")
        graph.link_evidence(claim.id, ev.id)

        assert graph.delete_claim(claim.id) is True

        assert graph.get_claim(claim.id) is None
        assert graph.edges == ()
        assert graph.get_evidence(ev.id) == ev

    def test_delete_claim_keeps_other_edges(self, graph: ClaimGraph) -> None:
        c1 = graph.add_claim("one")
        c2 = graph.add_claim("two")
        ev = graph.add_evidence("/abs/auth.go", "1", "abc")
        graph.link_evidence(c1.id, ev.id)
        graph.link_evidence(c2.id, ev.id)

        graph.delete_claim(c1.id)

        assert [(e.claim_id, e.evidence_id) for e in graph.edges] == [(c2.id, ev.id)]

    def test_delete_claim_missing(self, graph: ClaimGraph) -> None:
        assert graph.delete_claim("missing") is False

    def test_delete_evidence_cascades_edges_only(self, graph: ClaimGraph) -> None:
        claim = graph.add_claim("auth works")
        ev1 = graph.add_evidence("/abs/auth.go", "10-25", "abc123")
        ev2 = graph.add_evidence("/abs/auth_test.go", "1-9", "abc123")
        graph.link_evidence(claim.id, ev1.id)
        graph.link_evidence(claim.id, ev2.id)
        graph.link_evidence(claim.id, ev1.id)

        assert graph.delete_evidence(ev1.id) is True

        assert graph.get_evidence(ev1.id) is None
        assert graph.get_claim(claim.id) == claim
        assert [e.evidence_id for e in graph.edges] == [ev2.id]

    def test_delete_evidence_missing(self, graph: ClaimGraph) -> None:
        assert graph.delete_evidence("missing") is False

    def test_ids_not_reused_after_delete(self, graph: ClaimGraph) -> None:
        claim = graph.add_claim("x")
        graph.delete_claim(claim.id)
        assert graph.add_claim("x").id != claim.id


class TestSearchClaims:
    def test_case_insensitive_substring(self, graph: ClaimGraph) -> None:
        a = graph.add_claim("Auth module validates TOKENS")
        graph.add_claim("Database migrations run on startup")
        c = graph.add_claim("token refresh is retried")

        assert [x.id for x in graph.search_claims("token")] == [a.id, c.id]
        assert [x.id for x in graph.search_claims("AUTH")] == [a.id]

    def test_no_match(self, graph: ClaimGraph) -> None:
        graph.add_claim("hello")
        assert graph.search_claims("xyz") == []

    def test_empty_query_matches_all(self, graph: ClaimGraph) -> None:
        graph.add_claim("a")
        graph.add_claim("b")
        assert len(graph.search_claims("")) == 2

    def test_unicode_case_folding(self, graph: ClaimGraph) -> None:
        claim = graph.add_claim("Die Straße ist gesperrt")
        assert graph.search_claims("STRASSE") == [claim]


class TestCheckEvidence:
    def test_valid_when_unchanged(self, graph: ClaimGraph, fake_checker) -> None:
        ev = graph.add_evidence("/home/user/auth.go", "10-25", "abc123")

        assert graph.check_evidence(ev.id, fake_checker) is True
        assert fake_checker.calls == [("abc123", "/home/user/auth.go", None)]

    def test_invalid_when_changed(self, graph: ClaimGraph, checker_factory) -> None:
        ev = graph.add_evidence("/home/user/auth.go", "10-25", "abc123")
        checker = checker_factory(changed={("abc123", "/home/user/auth.go")})

        assert graph.check_evidence(ev.id, checker) is False

    def test_unknown_evidence(self, graph: ClaimGraph, fake_checker) -> None:
        with pytest.raises(EvidenceNotFoundError):
            graph.check_evidence("nonexistent", fake_checker)
        assert fake_checker.calls == []

    def test_checker_error_propagates_unchanged(self, graph: ClaimGraph, checker_factory, git_error) -> None:
        ev = graph.add_evidence("/home/user/auth.go", "10-25", "abc123")
        checker = checker_factory(error=git_error)

        with pytest.raises(GitCheckError) as exc_info:
            graph.check_evidence(ev.id, checker)

        assert exc_info.value is git_error

    def test_timeout_is_forwarded(self, graph: ClaimGraph, fake_checker) -> None:
        ev = graph.add_evidence("/home/user/auth.go", "10-25", "abc123")

        graph.check_evidence(ev.id, fake_checker, timeout=2.5)

        assert fake_checker.calls[-1][2] == 2.5

    def test_rechecks_every_call(self, graph: ClaimGraph, fake_checker) -> None:
        ev = graph.add_evidence("/home/user/auth.go", "10-25", "abc123")
        assert graph.check_evidence(ev.id, fake_checker) is True

        fake_checker.changed.add(("abc123", "/home/user/auth.go"))

        assert graph.check_evidence(ev.id, fake_checker) is False
        assert len(fake_checker.calls) == 2


class TestSnapshots:
    def test_copy_is_independent(self, graph: ClaimGraph) -> None:
        claim = graph.add_claim("one")
        snapshot = graph.copy()

        graph.add_claim("two")
        graph.delete_claim(claim.id)

        assert [c.id for c in snapshot.list_claims()] == [claim.id]

    def test_dict_round_trip(self, graph: ClaimGraph) -> None:
        claim = graph.add_claim("auth works")
        ev = graph.add_evidence("/abs/auth.go", "10-25", "abc123")
        graph.link_evidence(claim.id, ev.id)
        graph.link_evidence(claim.id, ev.id)

        data = graph.to_dict()
        restored = ClaimGraph.from_dict(data)

        assert set(data) == {"evidence", "claims", "edges"}
        assert data["edges"] == [{"claim_id": claim.id, "evidence_id": ev.id}] * 2
        assert restored.get_claim(claim.id) == claim
        assert restored.get_evidence(ev.id) == ev
        assert restored.edges == graph.edges

    def test_from_dict_rejects_relative_evidence(self) -> None:
        data = {
            "evidence": {
                "e1": {"id": "e1", "file_path": "rel.go", "line_ref": "", "git_commit": "abc",
                       "created_at": "2024-01-01T00:00:00+00:00"},
            },
            "claims": {},
            "edges": [],
        }
        with pytest.raises(EvidenceValidationError):
            ClaimGraph.from_dict(data)

    def test_from_dict_null_edges(self) -> None:
        restored = ClaimGraph.from_dict({"evidence": {}, "claims": {}, "edges": None})
        assert restored.edges == ()
