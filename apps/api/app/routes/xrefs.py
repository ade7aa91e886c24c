"""Cross-reference routes: nodes, edges and file decorations."""

import asyncio
import base64
import logging
from collections.abc import Awaitable
from typing import Annotated, TypeVar

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from xrefs_core import (
    DecorationsReply,
    DecorationsRequest,
    EdgesReply,
    EdgesRequest,
    InvalidRequestError,
    InvalidTicketError,
    NodeInfo,
    NodesRequest,
    NotFoundError,
    StoreUnavailableError,
    XRefService,
    get_graph_store,
    get_settings,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/xrefs", tags=["xrefs"])

T = TypeVar("T")


class NodesBody(BaseModel):
    """Request model for node lookup."""

    tickets: list[str]
    filters: list[str] = []


class EdgesBody(BaseModel):
    """Request model for edge lookup."""

    tickets: list[str]
    kinds: list[str] = []
    filters: list[str] = []


class DecorationsBody(BaseModel):
    """Request model for file decorations."""

    ticket: str
    source_text: bool = False
    references: bool = False


class NodeResponse(BaseModel):
    """A node with base64-encoded fact values."""

    ticket: str
    facts: dict[str, str]


class NodesResponse(BaseModel):
    nodes: list[NodeResponse]


class EdgeGroupResponse(BaseModel):
    kind: str
    target_tickets: list[str]


class EdgeSetResponse(BaseModel):
    source_ticket: str
    groups: list[EdgeGroupResponse]


class EdgesResponse(BaseModel):
    edge_sets: list[EdgeSetResponse]
    nodes: list[NodeResponse]


class ReferenceResponse(BaseModel):
    source_ticket: str
    target_ticket: str
    kind: str


class DecorationsResponse(BaseModel):
    """File decorations; ``source_text`` is base64-encoded."""

    file_ticket: str
    source_text: str
    encoding: str
    references: list[ReferenceResponse]
    nodes: list[NodeResponse]


def get_xref_service() -> XRefService:
    """Build the service over the process-wide graph store."""
    return XRefService(get_graph_store())


XRefServiceDep = Annotated[XRefService, Depends(get_xref_service)]


def _b64(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


def _node_response(node: NodeInfo) -> NodeResponse:
    return NodeResponse(
        ticket=node.ticket,
        facts={name: _b64(value) for name, value in node.facts.items()},
    )


def _edges_response(reply: EdgesReply) -> EdgesResponse:
    return EdgesResponse(
        edge_sets=[
            EdgeSetResponse(
                source_ticket=edge_set.source_ticket,
                groups=[
                    EdgeGroupResponse(kind=kind, target_tickets=targets)
                    for kind, targets in edge_set.groups.items()
                ],
            )
            for edge_set in reply.edge_sets
        ],
        nodes=[_node_response(n) for n in reply.nodes],
    )


def _decorations_response(reply: DecorationsReply) -> DecorationsResponse:
    return DecorationsResponse(
        file_ticket=reply.file_ticket,
        source_text=_b64(reply.source_text),
        encoding=reply.encoding,
        references=[
            ReferenceResponse(
                source_ticket=ref.source_ticket,
                target_ticket=ref.target_ticket,
                kind=ref.kind,
            )
            for ref in reply.references
        ],
        nodes=[_node_response(n) for n in reply.nodes],
    )


async def _call(operation: str, call: Awaitable[T]) -> T:
    """Run a service call under the request deadline and map its errors."""
    timeout = get_settings().xrefs_request_timeout_seconds
    try:
        return await asyncio.wait_for(call, timeout=timeout)
    except (InvalidTicketError, InvalidRequestError) as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except StoreUnavailableError as e:
        logger.error("Graph store unavailable during %s: %s", operation, e)
        raise HTTPException(status_code=503, detail="Graph store unavailable") from e
    except asyncio.TimeoutError as e:
        logger.warning("%s exceeded the %.1fs deadline", operation, timeout)
        raise HTTPException(status_code=504, detail="Request timed out") from e
    except Exception as e:
        logger.exception("Error serving %s: %s", operation, e)
        raise HTTPException(status_code=500, detail="Internal server error") from e


@router.post("/nodes", response_model=NodesResponse)
async def nodes(
    body: NodesBody,
    service: XRefServiceDep,
) -> NodesResponse:
    """Look up facts for a batch of tickets."""
    result = await _call(
        "nodes", service.nodes(NodesRequest(tickets=body.tickets, filters=body.filters))
    )
    return NodesResponse(nodes=[_node_response(n) for n in result])


@router.post("/edges", response_model=EdgesResponse)
async def edges(
    body: EdgesBody,
    service: XRefServiceDep,
) -> EdgesResponse:
    """Look up outgoing edges for a batch of tickets."""
    reply = await _call(
        "edges",
        service.edges(EdgesRequest(tickets=body.tickets, kinds=body.kinds, filters=body.filters)),
    )
    return _edges_response(reply)


@router.post("/decorations", response_model=DecorationsResponse)
async def decorations(
    body: DecorationsBody,
    service: XRefServiceDep,
) -> DecorationsResponse:
    """Return a file's text and the references made from it."""
    reply = await _call(
        "decorations",
        service.decorations(
            DecorationsRequest(
                ticket=body.ticket,
                source_text=body.source_text,
                references=body.references,
            )
        ),
    )
    return _decorations_response(reply)
