"""SQL graph store backed by SQLAlchemy (async).

Works with any async dialect; tests use ``sqlite+aiosqlite``, deployments
``postgresql+asyncpg``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from xrefs_core.exceptions import StoreUnavailableError
from xrefs_core.models import EntryRow, text_key
from xrefs_core.schema import EDGE_DIR_MARKER, EDGE_MARKER_FACT, Direction
from xrefs_core.storage.base import EdgeRecord, Entry, GraphStore
from xrefs_core.telemetry.spans import trace_store_read
from xrefs_core.tickets import VName, ticket_to_vname, vname_to_ticket

logger = logging.getLogger(__name__)


class SqlGraphStore(GraphStore):
    """Graph store over a single ``entries`` table.

    Each read opens its own session, so concurrent requests never share one.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def write(self, entries: Sequence[Entry]) -> None:
        """Store a batch of entries in one transaction.

        Rows are merged on their primary key, so rewriting an entry only
        replaces its value.
        """
        try:
            async with self._session_factory() as session:
                for entry in entries:
                    await session.merge(_to_row(entry))
                await session.commit()
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"Failed to write {len(entries)} entries") from e

    async def read_facts(self, vname: VName) -> dict[str, bytes]:
        query = select(EntryRow.fact_name, EntryRow.fact_value).where(
            *_source_clause(vname),
            EntryRow.edge_kind == "",
        )
        async with trace_store_read("read_facts", "sql") as span:
            rows = await self._fetch(query)
            span.set_attribute("graphstore.rows", len(rows))
        return {name: value for name, value in rows}

    async def read_edges(self, vname: VName, direction: Direction) -> list[EdgeRecord]:
        query = select(
            EntryRow.edge_kind,
            EntryRow.target_ticket,
            EntryRow.fact_name,
            EntryRow.fact_value,
        ).where(
            *_source_clause(vname),
            EntryRow.edge_kind != "",
        )
        reverse = EntryRow.edge_kind.startswith(EDGE_DIR_MARKER, autoescape=True)
        query = query.where(reverse if direction is Direction.REVERSE else ~reverse)

        async with trace_store_read("read_edges", "sql", direction) as span:
            rows = await self._fetch(query)
            span.set_attribute("graphstore.rows", len(rows))

        records: dict[tuple[str, str], EdgeRecord] = {}
        for kind, target_ticket, fact_name, fact_value in rows:
            record = records.get((kind, target_ticket))
            if record is None:
                record = EdgeRecord(kind=kind, target=ticket_to_vname(target_ticket))
                records[(kind, target_ticket)] = record
            if fact_name != EDGE_MARKER_FACT:
                record.facts[fact_name] = fact_value
        return list(records.values())

    async def _fetch(self, query) -> list[tuple]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(query)
                return [tuple(row) for row in result.all()]
        except SQLAlchemyError as e:
            raise StoreUnavailableError("Graph store read failed") from e


def _source_clause(vname: VName) -> tuple:
    ticket = vname_to_ticket(vname)
    return (EntryRow.source_key == text_key(ticket), EntryRow.source_ticket == ticket)


def _to_row(entry: Entry) -> EntryRow:
    source = vname_to_ticket(entry.source)
    target = vname_to_ticket(entry.target) if entry.target is not None else ""
    return EntryRow(
        entry_key=text_key(source, entry.edge_kind, target, entry.fact_name),
        source_key=text_key(source),
        source_ticket=source,
        edge_kind=entry.edge_kind,
        target_ticket=target,
        fact_name=entry.fact_name,
        fact_value=entry.fact_value,
    )
