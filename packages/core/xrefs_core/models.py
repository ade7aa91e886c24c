"""Database models."""

import hashlib

from sqlalchemy import LargeBinary, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from xrefs_core.database import Base


def text_key(*parts: str) -> str:
    """Fixed-width SHA-256 key over one or more text parts."""
    digest = hashlib.sha256()
    for part in parts:
        data = part.encode("utf-8")
        digest.update(b"%d:" % len(data))
        digest.update(data)
    return digest.hexdigest()


class EntryRow(Base):
    """One stored graph entry.

    Facts have an empty edge kind and target ticket. Tickets and names are
    unbounded text, so the table is keyed and indexed on SHA-256 digests:
    ``entry_key`` over the four identifying columns and ``source_key`` over
    the source ticket alone.
    """

    __tablename__ = "entries"

    entry_key: Mapped[str] = mapped_column(String(64), primary_key=True)
    source_key: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    source_ticket: Mapped[str] = mapped_column(Text, nullable=False)
    edge_kind: Mapped[str] = mapped_column(Text, nullable=False, default="")
    target_ticket: Mapped[str] = mapped_column(Text, nullable=False, default="")
    fact_name: Mapped[str] = mapped_column(Text, nullable=False)
    fact_value: Mapped[bytes] = mapped_column(LargeBinary, nullable=False, default=b"")
