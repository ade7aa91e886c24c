"""In-memory graph store.

Suitable for development, tests and small corpora. Data is lost on restart.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence

from xrefs_core.schema import EDGE_MARKER_FACT, Direction, edge_direction
from xrefs_core.storage.base import EdgeRecord, Entry, GraphStore
from xrefs_core.telemetry.spans import trace_store_read
from xrefs_core.tickets import VName


class MemoryGraphStore(GraphStore):
    """Graph store backed by per-node dictionaries.

    Indices:
    - facts: source -> fact name -> value
    - edges: source -> (edge kind, target) -> annotation name -> value

    Edge groups keep insertion order, so targets come back in the order they
    were first written. ``entry_count()`` reports how many distinct entries
    are held, which is how bulk loads and rewrites are checked for
    idempotence.
    """

    def __init__(self) -> None:
        self._facts: dict[VName, dict[str, bytes]] = {}
        self._edges: dict[VName, dict[tuple[str, VName], dict[str, bytes]]] = {}
        self._lock = threading.Lock()

    async def write(self, entries: Sequence[Entry]) -> None:
        """Store a batch of entries. Rewriting an entry replaces its value."""
        with self._lock:
            for entry in entries:
                if entry.target is None:
                    facts = self._facts.setdefault(entry.source, {})
                    facts[entry.fact_name] = entry.fact_value
                else:
                    edges = self._edges.setdefault(entry.source, {})
                    annotations = edges.setdefault((entry.edge_kind, entry.target), {})
                    annotations[entry.fact_name] = entry.fact_value

    async def read_facts(self, vname: VName) -> dict[str, bytes]:
        async with trace_store_read("read_facts", "memory"):
            with self._lock:
                return dict(self._facts.get(vname, {}))

    async def read_edges(self, vname: VName, direction: Direction) -> list[EdgeRecord]:
        async with trace_store_read("read_edges", "memory", direction):
            with self._lock:
                edges = list(self._edges.get(vname, {}).items())
        return [
            EdgeRecord(
                kind=kind,
                target=target,
                facts={n: v for n, v in annotations.items() if n != EDGE_MARKER_FACT},
            )
            for (kind, target), annotations in edges
            if edge_direction(kind) is direction
        ]

    def entry_count(self) -> int:
        """Get the number of distinct stored entries."""
        with self._lock:
            facts = sum(len(f) for f in self._facts.values())
            edges = sum(
                len(annotations)
                for node_edges in self._edges.values()
                for annotations in node_edges.values()
            )
        return facts + edges
