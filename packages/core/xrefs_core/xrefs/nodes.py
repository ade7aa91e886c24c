"""Node lookup: the facts known about a batch of nodes."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from functools import partial

from xrefs_core.filters import FactFilter, compile_filters
from xrefs_core.storage.base import GraphStore
from xrefs_core.tickets import VName, decode_tickets, vname_to_ticket
from xrefs_core.xrefs.fanout import run_all
from xrefs_core.xrefs.models import NodeInfo

logger = logging.getLogger(__name__)


async def fetch_nodes(
    store: GraphStore,
    vnames: Sequence[VName],
    fact_filter: FactFilter | None = None,
) -> list[NodeInfo]:
    """Read the facts of each VName, one NodeInfo per VName.

    Args:
        store: Graph store to read from
        vnames: Nodes to read
        fact_filter: Facts to keep; None keeps every fact

    Returns:
        NodeInfos in the order of ``vnames``
    """
    fact_sets = await run_all([partial(store.read_facts, vname) for vname in vnames])
    return [
        NodeInfo(
            ticket=vname_to_ticket(vname),
            facts=facts if fact_filter is None else fact_filter.select(facts),
        )
        for vname, facts in zip(vnames, fact_sets, strict=True)
    ]


async def resolve_nodes(
    store: GraphStore,
    tickets: Sequence[str],
    fact_filters: Iterable[str] | None = None,
) -> list[NodeInfo]:
    """Look up the facts of each ticket's node.

    Every ticket yields a NodeInfo, including nodes with no stored facts.
    Only facts matching ``fact_filters`` are returned; pass ``["**"]`` for
    all of them.

    Raises:
        InvalidTicketError: If any ticket cannot be decoded.
    """
    vnames = decode_tickets(tickets)
    nodes = await fetch_nodes(store, vnames, compile_filters(fact_filters))
    logger.debug("Resolved %d nodes", len(nodes))
    return nodes
