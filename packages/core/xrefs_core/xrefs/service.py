"""Cross-reference service facade.

XRefService is the single entry point of the serving core. It holds nothing
but a graph store handle, so one instance can serve any number of
concurrent requests.
"""

from __future__ import annotations

import logging

from xrefs_core.exceptions import InvalidRequestError
from xrefs_core.storage.base import GraphStore
from xrefs_core.telemetry.spans import trace_xrefs_call
from xrefs_core.xrefs.decorations import resolve_decorations
from xrefs_core.xrefs.edges import resolve_edges
from xrefs_core.xrefs.models import (
    DecorationsReply,
    DecorationsRequest,
    EdgesReply,
    EdgesRequest,
    NodeInfo,
    NodesRequest,
)
from xrefs_core.xrefs.nodes import resolve_nodes

logger = logging.getLogger(__name__)


class XRefService:
    """Answers node, edge and decoration queries against a graph store."""

    def __init__(self, store: GraphStore):
        self._store = store

    @property
    def store(self) -> GraphStore:
        return self._store

    @trace_xrefs_call("nodes")
    async def nodes(self, request: NodesRequest) -> list[NodeInfo]:
        """Get the facts of each requested node."""
        if not request.tickets:
            raise InvalidRequestError("nodes request needs at least one ticket")
        logger.debug("nodes: %d tickets, filters=%s", len(request.tickets), request.filters)
        return await resolve_nodes(self._store, request.tickets, request.filters)

    @trace_xrefs_call("edges")
    async def edges(self, request: EdgesRequest) -> EdgesReply:
        """Get the outgoing edges of each requested node."""
        if not request.tickets:
            raise InvalidRequestError("edges request needs at least one ticket")
        logger.debug(
            "edges: %d tickets, kinds=%s, filters=%s",
            len(request.tickets),
            request.kinds,
            request.filters,
        )
        return await resolve_edges(
            self._store,
            request.tickets,
            request.kinds,
            request.filters,
        )

    @trace_xrefs_call("decorations")
    async def decorations(self, request: DecorationsRequest) -> DecorationsReply:
        """Get the text and/or references of a file."""
        if not request.ticket:
            raise InvalidRequestError("decorations request needs a file ticket")
        logger.debug(
            "decorations: %s (source_text=%s, references=%s)",
            request.ticket,
            request.source_text,
            request.references,
        )
        return await resolve_decorations(
            self._store,
            request.ticket,
            source_text=request.source_text,
            references=request.references,
        )
