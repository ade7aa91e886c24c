"""Pytest configuration and shared graph fixtures."""

from collections.abc import AsyncGenerator
from dataclasses import dataclass, field

import pytest
from xrefs_core.schema import (
    ANCHOR_KIND,
    CHILD_OF_EDGE,
    FILE_ENCODING_FACT,
    FILE_KIND,
    FILE_TEXT_FACT,
    NODE_KIND_FACT,
    REF_EDGE,
    mirror_edge,
)
from xrefs_core.storage import Entry, MemoryGraphStore, write_entries
from xrefs_core.tickets import VName, vname_to_ticket
from xrefs_core.xrefs import XRefService

FILE_CONTENT = "file_content"
FILE_ENCODING = "UTF-8"


@dataclass
class FixtureNode:
    """A node of the test graph with its facts and outgoing edges."""

    vname: VName
    facts: dict[str, str]
    edges: dict[str, list[VName]] = field(default_factory=dict)

    @property
    def ticket(self) -> str:
        return vname_to_ticket(self.vname)

    def fact_bytes(self) -> dict[str, bytes]:
        return {name: value.encode("utf-8") for name, value in self.facts.items()}

    def edge_groups(self) -> dict[str, list[str]]:
        return {
            kind: [vname_to_ticket(t) for t in targets] for kind, targets in self.edges.items()
        }

    def entries(self) -> list[Entry]:
        result = [Entry.fact(self.vname, name, value) for name, value in self.facts.items()]
        for kind, targets in self.edges.items():
            result.extend(Entry.edge(self.vname, kind, target) for target in targets)
        return result


def sig(signature: str) -> VName:
    return VName(signature=signature)


FILE_VNAME = sig("testFileNode")
ANCHOR_VNAME = sig("testAnchor")
TARGET_VNAME = sig("someSemanticNode")


def build_graph() -> list[FixtureNode]:
    """The representative graph: an orphan, a file with one anchor, and a pair of test nodes."""
    return [
        FixtureNode(sig("orphanedNode"), {NODE_KIND_FACT: "orphan"}),
        FixtureNode(
            FILE_VNAME,
            {
                NODE_KIND_FACT: FILE_KIND,
                FILE_TEXT_FACT: FILE_CONTENT,
                FILE_ENCODING_FACT: FILE_ENCODING,
            },
            {mirror_edge(CHILD_OF_EDGE): [ANCHOR_VNAME]},
        ),
        FixtureNode(
            sig("sig2"),
            {NODE_KIND_FACT: "test"},
            {"someEdgeKind": [sig("signature")]},
        ),
        FixtureNode(
            sig("signature"),
            {NODE_KIND_FACT: "test"},
            {mirror_edge("someEdgeKind"): [sig("sig2")]},
        ),
        FixtureNode(
            ANCHOR_VNAME,
            {NODE_KIND_FACT: ANCHOR_KIND},
            {CHILD_OF_EDGE: [FILE_VNAME], REF_EDGE: [TARGET_VNAME]},
        ),
        FixtureNode(
            TARGET_VNAME,
            {NODE_KIND_FACT: "record"},
            {mirror_edge(REF_EDGE): [ANCHOR_VNAME]},
        ),
    ]


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def graph_nodes() -> list[FixtureNode]:
    return build_graph()


@pytest.fixture
def orphan_node(graph_nodes: list[FixtureNode]) -> FixtureNode:
    return graph_nodes[0]


@pytest.fixture
def file_node(graph_nodes: list[FixtureNode]) -> FixtureNode:
    return graph_nodes[1]


@pytest.fixture
def anchor_node(graph_nodes: list[FixtureNode]) -> FixtureNode:
    return graph_nodes[4]


@pytest.fixture
def target_node(graph_nodes: list[FixtureNode]) -> FixtureNode:
    return graph_nodes[5]


@pytest.fixture
def graph_entries(graph_nodes: list[FixtureNode]) -> list[Entry]:
    return [entry for node in graph_nodes for entry in node.entries()]


@pytest.fixture
async def graph_store(graph_entries: list[Entry]) -> AsyncGenerator[MemoryGraphStore, None]:
    """A memory store bulk-loaded with the representative graph."""
    store = MemoryGraphStore()
    await write_entries(store, graph_entries, batch_size=64)
    yield store
    await store.close()


@pytest.fixture
def service(graph_store: MemoryGraphStore) -> XRefService:
    return XRefService(graph_store)
