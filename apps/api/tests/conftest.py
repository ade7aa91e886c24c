"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator

import pytest
from app.main import app
from app.routes.xrefs import get_xref_service
from httpx import ASGITransport, AsyncClient
from xrefs_core.schema import (
    ANCHOR_KIND,
    CHILD_OF_EDGE,
    FILE_ENCODING_FACT,
    FILE_KIND,
    FILE_TEXT_FACT,
    NODE_KIND_FACT,
    REF_EDGE,
)
from xrefs_core.storage import Entry, GraphStore, MemoryGraphStore, with_mirrors
from xrefs_core.tickets import VName
from xrefs_core.xrefs import XRefService


def graph_entries() -> list[Entry]:
    """A file with one anchor referencing one target."""
    file = VName(corpus="corpus", path="main.py")
    anchor = VName(signature="anchor")
    target = VName(signature="target")
    return list(
        with_mirrors(
            [
                Entry.fact(file, NODE_KIND_FACT, FILE_KIND),
                Entry.fact(file, FILE_TEXT_FACT, "print(x)"),
                Entry.fact(file, FILE_ENCODING_FACT, "UTF-8"),
                Entry.fact(anchor, NODE_KIND_FACT, ANCHOR_KIND),
                Entry.fact(target, NODE_KIND_FACT, "variable"),
                Entry.edge(anchor, CHILD_OF_EDGE, file),
                Entry.edge(anchor, REF_EDGE, target),
            ]
        )
    )


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
async def graph_store() -> MemoryGraphStore:
    store = MemoryGraphStore()
    await store.write(graph_entries())
    return store


@pytest.fixture
def use_store():
    """Route the xrefs endpoints to a given store for the duration of a test."""

    def install(store: GraphStore) -> None:
        app.dependency_overrides[get_xref_service] = lambda: XRefService(store)

    yield install
    app.dependency_overrides.pop(get_xref_service, None)


@pytest.fixture
async def client(graph_store: MemoryGraphStore, use_store) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for testing."""
    use_store(graph_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
