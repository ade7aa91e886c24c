"""Bulk loading of entries into a graph store.

An entry stream of any length is cut into bounded batches and each batch is
written as one store call. Batch boundaries carry no meaning for queries.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, AsyncIterator, Iterable

from xrefs_core.storage.base import Entry, GraphStore

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 64


async def _aiter_entries(
    entries: Iterable[Entry] | AsyncIterable[Entry],
) -> AsyncIterator[Entry]:
    if isinstance(entries, AsyncIterable):
        async for entry in entries:
            yield entry
    else:
        for entry in entries:
            yield entry


async def batch_writes(
    entries: Iterable[Entry] | AsyncIterable[Entry],
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> AsyncIterator[list[Entry]]:
    """Group an entry stream into lists of at most ``batch_size`` entries.

    Args:
        entries: Entries to group (sync or async iterable)
        batch_size: Maximum entries per batch

    Yields:
        Non-empty batches, in stream order
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")

    batch: list[Entry] = []
    async for entry in _aiter_entries(entries):
        batch.append(entry)
        if len(batch) >= batch_size:
            yield batch
            batch = []
    if batch:
        yield batch


async def write_entries(
    store: GraphStore,
    entries: Iterable[Entry] | AsyncIterable[Entry],
    batch_size: int | None = None,
) -> int:
    """Write an entry stream to a store in batches.

    Args:
        store: Destination graph store
        entries: Entries to write
        batch_size: Entries per write (defaults to settings.xrefs_batch_size)

    Returns:
        Number of entries written
    """
    if batch_size is None:
        from xrefs_core.settings import get_settings

        batch_size = get_settings().xrefs_batch_size

    written = 0
    batches = 0
    async for batch in batch_writes(entries, batch_size):
        await store.write(batch)
        written += len(batch)
        batches += 1

    logger.info("Wrote %d entries in %d batches", written, batches)
    return written
