"""xrefs core: cross-reference query serving over a fact/edge graph."""

from xrefs_core.exceptions import (
    InvalidRequestError,
    InvalidTicketError,
    NotFoundError,
    StoreUnavailableError,
    XrefsError,
)
from xrefs_core.filters import ALL_FILTER, FactFilter, compile_filters, filter_to_regexp
from xrefs_core.settings import Settings, get_settings
from xrefs_core.storage import (
    EdgeRecord,
    Entry,
    GraphStore,
    MemoryGraphStore,
    batch_writes,
    get_graph_store,
    with_mirrors,
    write_entries,
)
from xrefs_core.tickets import VName, decode_tickets, ticket_to_vname, vname_to_ticket
from xrefs_core.xrefs import (
    DecorationsReply,
    DecorationsRequest,
    EdgeSet,
    EdgesReply,
    EdgesRequest,
    NodeInfo,
    NodesRequest,
    Reference,
    XRefService,
)

__all__ = [
    "ALL_FILTER",
    "DecorationsReply",
    "DecorationsRequest",
    "EdgeRecord",
    "EdgeSet",
    "EdgesReply",
    "EdgesRequest",
    "Entry",
    "FactFilter",
    "GraphStore",
    "InvalidRequestError",
    "InvalidTicketError",
    "MemoryGraphStore",
    "NodeInfo",
    "NodesRequest",
    "NotFoundError",
    "Reference",
    "Settings",
    "StoreUnavailableError",
    "VName",
    "XRefService",
    "XrefsError",
    "batch_writes",
    "compile_filters",
    "decode_tickets",
    "filter_to_regexp",
    "get_graph_store",
    "get_settings",
    "ticket_to_vname",
    "vname_to_ticket",
    "with_mirrors",
    "write_entries",
]
