"""VNames and their ticket encoding.

A VName names a node of the graph. A ticket is the opaque string clients use
to refer to that node:

    kythe://corpus?lang=python?path=src/app.py?root=gen#signature

Every present field is percent-escaped, so field text never collides with the
``//``, ``?``, ``=`` and ``#`` separators. Absent (empty) fields are omitted.
Only the canonical encoding of a VName is accepted when decoding, which keeps
the mapping a bijection between VNames and valid tickets.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from urllib.parse import quote, unquote

from xrefs_core.exceptions import InvalidTicketError

TICKET_SCHEME = "kythe:"

# Canonical parameter order and the VName field each one carries
_PARAMS: dict[str, str] = {
    "lang": "language",
    "path": "path",
    "root": "root",
}

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


@dataclass(frozen=True, order=True)
class VName:
    """Structured, immutable name of a graph node."""

    signature: str = ""
    corpus: str = ""
    root: str = ""
    path: str = ""
    language: str = ""

    def __post_init__(self) -> None:
        for field_name in ("signature", "corpus", "root", "path", "language"):
            value = getattr(self, field_name)
            try:
                value.encode("utf-8")
            except UnicodeEncodeError as e:
                raise ValueError(
                    f"VName {field_name} is not valid Unicode text: {value!r}"
                ) from e


def _escape(value: str) -> str:
    return quote(value, safe="/")


def _unescape(ticket: str, value: str) -> str:
    if _BAD_ESCAPE.search(value):
        raise InvalidTicketError(ticket, f"invalid escape in {value!r}")
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError as e:
        raise InvalidTicketError(ticket, f"escape is not valid UTF-8 in {value!r}") from e


def vname_to_ticket(vname: VName) -> str:
    """Encode a VName as a ticket."""
    parts = [TICKET_SCHEME]
    if vname.corpus:
        parts.append("//" + _escape(vname.corpus))
    for param, field_name in _PARAMS.items():
        value = getattr(vname, field_name)
        if value:
            parts.append(f"?{param}={_escape(value)}")
    if vname.signature:
        parts.append("#" + _escape(vname.signature))
    return "".join(parts)


def ticket_to_vname(ticket: str) -> VName:
    """Decode a ticket into the VName it denotes.

    Raises:
        InvalidTicketError: If the ticket is malformed or not canonical.
    """
    if not ticket.startswith(TICKET_SCHEME):
        raise InvalidTicketError(ticket, f"missing {TICKET_SCHEME!r} scheme")

    rest, has_signature, signature = ticket[len(TICKET_SCHEME) :].partition("#")
    if "#" in signature:
        raise InvalidTicketError(ticket, "more than one '#' separator")

    fields: dict[str, str] = {}
    if has_signature:
        fields["signature"] = _unescape(ticket, signature)

    head, *params = rest.split("?")
    if head:
        if not head.startswith("//"):
            raise InvalidTicketError(ticket, f"unexpected text {head!r} before parameters")
        fields["corpus"] = _unescape(ticket, head[2:])

    order = list(_PARAMS)
    last_index = -1
    for param in params:
        name, has_value, value = param.partition("=")
        if not has_value:
            raise InvalidTicketError(ticket, f"parameter {param!r} has no '='")
        if name not in _PARAMS:
            raise InvalidTicketError(ticket, f"unknown parameter {name!r}")
        field_name = _PARAMS[name]
        if field_name in fields:
            raise InvalidTicketError(ticket, f"repeated parameter {name!r}")
        index = order.index(name)
        if index < last_index:
            raise InvalidTicketError(ticket, f"parameter {name!r} out of order")
        last_index = index
        fields[field_name] = _unescape(ticket, value)

    vname = VName(**fields)
    if vname_to_ticket(vname) != ticket:
        raise InvalidTicketError(ticket, "not in canonical form")
    return vname


def decode_tickets(tickets: Iterable[str]) -> list[VName]:
    """Decode a batch of tickets, failing on the first invalid one."""
    return [ticket_to_vname(ticket) for ticket in tickets]
