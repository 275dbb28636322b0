"""Locked, JSON-file backed holder for the claim graph."""
from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from claimtrees.graph.errors import EvidenceValidationError, PersistenceError
from claimtrees.graph.graph import ClaimGraph


logger = logging.getLogger(__name__)

T = TypeVar("T")


class GraphStore:
    """Serialises access to one ``ClaimGraph`` and snapshots it to disk.

    All mutations run through ``with_graph`` under a single re-entrant lock.
    Readers either take a copy with ``graph()`` or run inside ``read()``; neither
    can observe a half-applied mutation.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._graph = ClaimGraph()
        self._lock = threading.RLock()
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def graph(self) -> ClaimGraph:
        """Return an independent copy of the current graph."""
        with self._lock:
            return self._graph.copy()

    def read(self, fn: Callable[[ClaimGraph], T]) -> T:
        """Run a read-only ``fn`` against the live graph with the lock held."""
        with self._lock:
            return fn(self._graph)

    def with_graph(self, fn: Callable[[ClaimGraph], T]) -> T:
        """Run the mutation ``fn`` with exclusive access and return its result."""
        with self._lock:
            return fn(self._graph)

    def save(self) -> None:
        """Write the whole graph to ``path`` in a single write.

        Raises:
            PersistenceError: the directory or file could not be written.
        """
        with self._lock:
            payload = json.dumps(self._graph.to_dict(), indent=2)
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                with open(self._path, "w", encoding="utf-8") as f:
                    f.write(payload)
            except OSError as exc:
                raise PersistenceError(f"Failed to save graph to {self._path}: {exc}") from exc
            logger.debug("Saved %r to %s", self._graph, self._path)

    def _load(self) -> None:
        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.info("No graph snapshot at %s; starting empty", self._path)
            return
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"Malformed graph snapshot {self._path}: {exc}") from exc
        except OSError as exc:
            raise PersistenceError(f"Failed to read graph snapshot {self._path}: {exc}") from exc

        if not isinstance(data, dict):
            raise PersistenceError(
                f"Malformed graph snapshot {self._path}: expected an object, got {type(data).__name__}"
            )
        try:
            self._graph = ClaimGraph.from_dict(data)
        except EvidenceValidationError as exc:
            raise PersistenceError(f"Invalid evidence in {self._path}: {exc}") from exc
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise PersistenceError(f"Malformed graph snapshot {self._path}: {exc!r}") from exc
        logger.info("Loaded %r from %s", self._graph, self._path)
