"""Request and reply types of the xrefs service.

All of these are read-time projections built per request; nothing here is
persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class NodeInfo:
    """Facts known about one node."""

    ticket: str
    facts: dict[str, bytes] = field(default_factory=dict)


@dataclass
class EdgeSet:
    """Outgoing edges of one node, grouped by edge kind.

    Each group's targets are de-duplicated and kept in storage order.
    """

    source_ticket: str
    groups: dict[str, list[str]] = field(default_factory=dict)


@dataclass(frozen=True, order=True)
class Reference:
    """A span in a file pointing at the entity it denotes."""

    source_ticket: str
    target_ticket: str
    kind: str


@dataclass
class NodesRequest:
    tickets: list[str]
    filters: list[str] = field(default_factory=list)


@dataclass
class EdgesRequest:
    tickets: list[str]
    kinds: list[str] = field(default_factory=list)
    """Edge kind patterns; empty selects every kind."""
    filters: list[str] = field(default_factory=list)
    """Fact patterns for the embedded nodes; empty selects no facts."""


@dataclass
class EdgesReply:
    edge_sets: list[EdgeSet] = field(default_factory=list)
    nodes: list[NodeInfo] = field(default_factory=list)


@dataclass
class DecorationsRequest:
    ticket: str
    source_text: bool = False
    references: bool = False


@dataclass
class DecorationsReply:
    file_ticket: str
    source_text: bytes = b""
    encoding: str = ""
    references: list[Reference] = field(default_factory=list)
    nodes: list[NodeInfo] = field(default_factory=list)
