"""Edge lookup: one-hop outgoing edges of a batch of nodes."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from functools import partial

from xrefs_core.filters import FactFilter, compile_filters
from xrefs_core.schema import Direction
from xrefs_core.storage.base import EdgeRecord, GraphStore
from xrefs_core.tickets import VName, decode_tickets, vname_to_ticket
from xrefs_core.xrefs.fanout import run_all
from xrefs_core.xrefs.models import EdgeSet, EdgesReply
from xrefs_core.xrefs.nodes import fetch_nodes

logger = logging.getLogger(__name__)


async def read_outgoing_edges(store: GraphStore, vname: VName) -> list[EdgeRecord]:
    """Read a node's edges in both directions (forward kinds, then mirrors)."""
    forward, reverse = await run_all(
        [
            partial(store.read_edges, vname, Direction.FORWARD),
            partial(store.read_edges, vname, Direction.REVERSE),
        ]
    )
    return [*forward, *reverse]


def group_edges(
    records: Iterable[EdgeRecord],
    kind_filter: FactFilter | None = None,
) -> dict[str, list[str]]:
    """Group edge targets by kind, dropping kinds the filter rejects.

    Args:
        records: Edges read for one node
        kind_filter: Kinds to keep; None keeps every kind

    Returns:
        Mapping of edge kind to de-duplicated target tickets
    """
    groups: dict[str, dict[str, None]] = {}
    for record in records:
        if kind_filter is not None and not kind_filter.matches(record.kind):
            continue
        groups.setdefault(record.kind, {})[vname_to_ticket(record.target)] = None
    return {kind: list(targets) for kind, targets in groups.items()}


async def resolve_edges(
    store: GraphStore,
    tickets: Sequence[str],
    kind_filters: Iterable[str] | None = None,
    fact_filters: Iterable[str] | None = None,
) -> EdgesReply:
    """Look up the outgoing edges of each ticket's node.

    Nodes without a single edge of a selected kind are left out of both the
    edge sets and the embedded nodes, so the two correspond 1:1 by ticket.

    Args:
        store: Graph store to read from
        tickets: Source node tickets
        kind_filters: Edge kind patterns; empty or None selects every kind
        fact_filters: Fact patterns for the embedded source nodes

    Raises:
        InvalidTicketError: If any ticket cannot be decoded.
    """
    vnames = list(dict.fromkeys(decode_tickets(tickets)))
    kind_list = list(kind_filters or ())
    kind_filter = compile_filters(kind_list) if kind_list else None

    edge_lists = await run_all([partial(read_outgoing_edges, store, v) for v in vnames])

    reply = EdgesReply()
    sources: list[VName] = []
    for vname, records in zip(vnames, edge_lists, strict=True):
        groups = group_edges(records, kind_filter)
        if not groups:
            continue
        reply.edge_sets.append(EdgeSet(source_ticket=vname_to_ticket(vname), groups=groups))
        sources.append(vname)

    reply.nodes = await fetch_nodes(store, sources, compile_filters(fact_filters))
    logger.debug(
        "Resolved edges for %d of %d nodes",
        len(reply.edge_sets),
        len(vnames),
    )
    return reply
