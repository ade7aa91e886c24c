"""Cross-reference queries over the graph store.

Main components:
- XRefService: Facade exposing nodes, edges and decorations
- resolve_nodes: Facts of a batch of nodes
- resolve_edges: One-hop outgoing edges, grouped by kind
- resolve_decorations: File text plus anchored references (two hops)
"""

from xrefs_core.xrefs.decorations import resolve_decorations
from xrefs_core.xrefs.edges import resolve_edges
from xrefs_core.xrefs.models import (
    DecorationsReply,
    DecorationsRequest,
    EdgeSet,
    EdgesReply,
    EdgesRequest,
    NodeInfo,
    NodesRequest,
    Reference,
)
from xrefs_core.xrefs.nodes import resolve_nodes
from xrefs_core.xrefs.service import XRefService

__all__ = [
    "DecorationsReply",
    "DecorationsRequest",
    "EdgeSet",
    "EdgesReply",
    "EdgesRequest",
    "NodeInfo",
    "NodesRequest",
    "Reference",
    "XRefService",
    "resolve_decorations",
    "resolve_edges",
    "resolve_nodes",
]
