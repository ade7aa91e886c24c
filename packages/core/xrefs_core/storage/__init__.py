"""Graph stores: the read contract used by the resolvers and its engines."""

from __future__ import annotations

import logging
import threading

from xrefs_core.storage.base import EdgeRecord, Entry, GraphStore, with_mirrors
from xrefs_core.storage.batching import DEFAULT_BATCH_SIZE, batch_writes, write_entries
from xrefs_core.storage.memory import MemoryGraphStore

logger = logging.getLogger(__name__)

# Global store instance
_store: GraphStore | None = None
_store_lock = threading.Lock()


def get_graph_store() -> GraphStore:
    """Get the configured graph store singleton.

    ``XREFS_STORE=sql`` selects the SQL store on ``DATABASE_URL``; anything
    else gets an in-memory store.
    """
    global _store

    with _store_lock:
        if _store is not None:
            return _store

        from xrefs_core.settings import get_settings

        settings = get_settings()
        if settings.xrefs_store == "sql":
            from xrefs_core.database import get_session_factory
            from xrefs_core.storage.sql import SqlGraphStore

            _store = SqlGraphStore(get_session_factory())
        else:
            _store = MemoryGraphStore()

        logger.info("Using %s graph store", type(_store).__name__)
        return _store


def set_graph_store(store: GraphStore) -> None:
    """Install a specific store as the process-wide instance."""
    global _store
    with _store_lock:
        _store = store


def reset_graph_store() -> None:
    """Drop the singleton (for testing)."""
    global _store
    with _store_lock:
        _store = None


__all__ = [
    "DEFAULT_BATCH_SIZE",
    "EdgeRecord",
    "Entry",
    "GraphStore",
    "MemoryGraphStore",
    "batch_writes",
    "get_graph_store",
    "reset_graph_store",
    "set_graph_store",
    "with_mirrors",
    "write_entries",
]
