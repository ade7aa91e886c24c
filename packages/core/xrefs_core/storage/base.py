"""Graph store contract.

An Entry is either a fact of a node (no edge kind) or an edge from its source
to its target. Stores are append-only: an entry is keyed by
``(source, edge_kind, target, fact_name)`` and rewriting it replaces the value,
so writing the same entry twice is a no-op.

Reverse reads are served from the mirror edges written alongside every
forward edge; stores never derive them at read time.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field

from xrefs_core.schema import (
    EDGE_MARKER_FACT,
    EDGE_MARKER_VALUE,
    Direction,
    edge_direction,
    mirror_edge,
)
from xrefs_core.tickets import VName


@dataclass(frozen=True)
class Entry:
    """Atomic unit of graph data."""

    source: VName
    fact_name: str
    fact_value: bytes = b""
    edge_kind: str = ""
    target: VName | None = None

    def __post_init__(self) -> None:
        if bool(self.edge_kind) != (self.target is not None):
            raise ValueError("edge entries need both an edge kind and a target")

    @property
    def is_edge(self) -> bool:
        return bool(self.edge_kind)

    @classmethod
    def fact(cls, source: VName, name: str, value: bytes | str) -> Entry:
        if isinstance(value, str):
            value = value.encode("utf-8")
        return cls(source=source, fact_name=name, fact_value=value)

    @classmethod
    def edge(
        cls,
        source: VName,
        kind: str,
        target: VName,
        fact_name: str = EDGE_MARKER_FACT,
        fact_value: bytes = EDGE_MARKER_VALUE,
    ) -> Entry:
        return cls(
            source=source,
            fact_name=fact_name,
            fact_value=fact_value,
            edge_kind=kind,
            target=target,
        )

    def mirror(self) -> Entry:
        """Return the reverse of this edge entry."""
        if self.target is None:
            raise ValueError("only edge entries can be mirrored")
        return Entry(
            source=self.target,
            fact_name=self.fact_name,
            fact_value=self.fact_value,
            edge_kind=mirror_edge(self.edge_kind),
            target=self.source,
        )


@dataclass
class EdgeRecord:
    """An edge as read back from a store, relative to the node it was read for."""

    kind: str
    target: VName
    facts: dict[str, bytes] = field(default_factory=dict)
    """Edge annotations, without the reserved marker fact."""


class GraphStore(ABC):
    """Abstract base class for fact/edge storage."""

    @abstractmethod
    async def read_facts(self, vname: VName) -> dict[str, bytes]:
        """Get every fact stored for a node; empty if there are none."""
        ...

    @abstractmethod
    async def read_edges(self, vname: VName, direction: Direction) -> list[EdgeRecord]:
        """Get the node's outgoing edges whose kind has the given direction."""
        ...

    @abstractmethod
    async def write(self, entries: Sequence[Entry]) -> None:
        """Store a batch of entries."""
        ...

    async def close(self) -> None:
        """Release resources held by the store."""
        return None


def with_mirrors(entries: Iterable[Entry]) -> Iterator[Entry]:
    """Yield each entry followed by the mirror of every forward edge.

    Write-path helper for producers that only emit forward edges.
    """
    for entry in entries:
        yield entry
        if entry.is_edge and edge_direction(entry.edge_kind) is Direction.FORWARD:
            yield entry.mirror()
