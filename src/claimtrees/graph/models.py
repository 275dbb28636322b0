"""Claim/evidence graph data models."""
from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _make_id() -> str:
    return uuid.uuid4().hex


# RFC 3339 fractions may carry up to nanosecond precision; datetime keeps microseconds.
_FRACTION_RE = re.compile(r"\.(\d+)")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 / RFC 3339 timestamp into an aware datetime."""
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class EvidenceNode:
    """A pointer to a file, a line reference and the commit it was verified at."""

    file_path: str
    line_ref: str
    git_commit: str
    id: str = field(default_factory=_make_id)
    created_at: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "file_path": self.file_path,
            "line_ref": self.line_ref,
            "git_commit": self.git_commit,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EvidenceNode":
        return cls(
            id=str(data["id"]),
            file_path=str(data["file_path"]),
            line_ref=str(data.get("line_ref") or ""),
            git_commit=str(data["git_commit"]),
            created_at=parse_timestamp(str(data["created_at"])),
        )


@dataclass(frozen=True)
class ClaimNode:
    """A natural-language assertion about what code does."""

    content: str
    id: str = field(default_factory=_make_id)
    created_at: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClaimNode":
        return cls(
            id=str(data["id"]),
            content=str(data.get("content") or ""),
            created_at=parse_timestamp(str(data["created_at"])),
        )


@dataclass(frozen=True)
class Edge:
    """Evidence ``evidence_id`` supports claim ``claim_id``."""

    claim_id: str
    evidence_id: str

    def to_dict(self) -> dict[str, str]:
        return {"claim_id": self.claim_id, "evidence_id": self.evidence_id}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Edge":
        return cls(claim_id=str(data["claim_id"]), evidence_id=str(data["evidence_id"]))
