"""Decorations: a file's text plus the references anchored in it.

References are found in two fixed hops:

1. containment: the file's reverse child-of edges lead to the nodes it
   contains, of which only anchors are kept;
2. reference: each anchor's forward edges (other than child-of) lead to the
   entities the anchor denotes.

No further hops are taken.
"""

from __future__ import annotations

import logging
from functools import partial

from xrefs_core.exceptions import NotFoundError
from xrefs_core.schema import (
    ANCHOR_KIND,
    CHILD_OF_EDGE,
    FILE_ENCODING_FACT,
    FILE_TEXT_FACT,
    NODE_KIND_FACT,
    Direction,
    is_reference_edge,
    mirror_edge,
)
from xrefs_core.storage.base import GraphStore
from xrefs_core.tickets import VName, ticket_to_vname, vname_to_ticket
from xrefs_core.xrefs.fanout import run_all
from xrefs_core.xrefs.models import DecorationsReply, NodeInfo, Reference
from xrefs_core.xrefs.nodes import fetch_nodes

logger = logging.getLogger(__name__)

_REV_CHILD_OF_EDGE = mirror_edge(CHILD_OF_EDGE)
_ANCHOR_KIND_VALUE = ANCHOR_KIND.encode("utf-8")


async def find_anchors(store: GraphStore, file_vname: VName) -> list[NodeInfo]:
    """Find the anchors contained in a file, with all of their facts."""
    children = await store.read_edges(file_vname, Direction.REVERSE)
    candidates = list(
        dict.fromkeys(edge.target for edge in children if edge.kind == _REV_CHILD_OF_EDGE)
    )
    nodes = await fetch_nodes(store, candidates)
    return [node for node in nodes if node.facts.get(NODE_KIND_FACT) == _ANCHOR_KIND_VALUE]


async def anchor_references(
    store: GraphStore,
    anchors: list[NodeInfo],
) -> tuple[list[Reference], list[VName]]:
    """Follow each anchor's reference edges one hop.

    Returns:
        The references found and the distinct targets they point at
    """
    anchor_vnames = [ticket_to_vname(anchor.ticket) for anchor in anchors]
    edge_lists = await run_all(
        [partial(store.read_edges, vname, Direction.FORWARD) for vname in anchor_vnames]
    )

    references: dict[Reference, None] = {}
    targets: dict[VName, None] = {}
    for anchor, edges in zip(anchors, edge_lists, strict=True):
        for edge in edges:
            if not is_reference_edge(edge.kind):
                continue
            ref = Reference(
                source_ticket=anchor.ticket,
                target_ticket=vname_to_ticket(edge.target),
                kind=edge.kind,
            )
            references[ref] = None
            targets[edge.target] = None
    return list(references), list(targets)


async def resolve_decorations(
    store: GraphStore,
    file_ticket: str,
    source_text: bool = False,
    references: bool = False,
) -> DecorationsReply:
    """Decorate a file with its text and/or resolved references.

    Args:
        store: Graph store to read from
        file_ticket: Ticket of the file node
        source_text: Include the file's text and encoding
        references: Include anchored references and the nodes they touch

    Raises:
        InvalidTicketError: If the ticket cannot be decoded.
        NotFoundError: If no facts are stored for the file.
    """
    file_vname = ticket_to_vname(file_ticket)
    file_facts = await store.read_facts(file_vname)
    if not file_facts:
        raise NotFoundError(file_ticket)

    reply = DecorationsReply(file_ticket=vname_to_ticket(file_vname))

    if source_text:
        reply.source_text = file_facts.get(FILE_TEXT_FACT, b"")
        reply.encoding = file_facts.get(FILE_ENCODING_FACT, b"").decode("utf-8", errors="replace")

    if references:
        anchors = await find_anchors(store, file_vname)
        reply.references, target_vnames = await anchor_references(store, anchors)

        nodes: dict[str, NodeInfo] = {anchor.ticket: anchor for anchor in anchors}
        pending = [v for v in target_vnames if vname_to_ticket(v) not in nodes]
        for node in await fetch_nodes(store, pending):
            nodes[node.ticket] = node
        reply.nodes = list(nodes.values())

        logger.debug(
            "Decorated %s: %d anchors, %d references",
            reply.file_ticket,
            len(anchors),
            len(reply.references),
        )

    return reply
