"""Tests for VName/ticket encoding."""

import pytest
from xrefs_core.exceptions import InvalidTicketError
from xrefs_core.tickets import VName, decode_tickets, ticket_to_vname, vname_to_ticket


class TestVNameToTicket:
    """Tests for encoding VNames."""

    def test_empty_vname(self) -> None:
        assert vname_to_ticket(VName()) == "kythe:"

    def test_signature_only(self) -> None:
        assert vname_to_ticket(VName(signature="sig")) == "kythe:#sig"

    def test_all_fields(self) -> None:
        vname = VName(
            signature="sig",
            corpus="corpus",
            root="root",
            path="src/app.py",
            language="python",
        )
        assert vname_to_ticket(vname) == "kythe://corpus?lang=python?path=src/app.py?root=root#sig"

    def test_separators_are_escaped(self) -> None:
        vname = VName(signature="a#b?c=d%e", path="dir/with space?x")
        ticket = vname_to_ticket(vname)
        assert ticket == "kythe:?path=dir/with%20space%3Fx#a%23b%3Fc%3Dd%25e"
        assert ticket.count("#") == 1
        assert ticket.count("?") == 1

    def test_distinct_vnames_get_distinct_tickets(self) -> None:
        vnames = [
            VName(signature="x"),
            VName(corpus="x"),
            VName(root="x"),
            VName(path="x"),
            VName(language="x"),
            VName(signature="x", corpus="x"),
            VName(path="x?root=y"),
            VName(path="x", root="y"),
        ]
        tickets = {vname_to_ticket(v) for v in vnames}
        assert len(tickets) == len(vnames)


class TestTicketToVName:
    """Tests for decoding tickets."""

    @pytest.mark.parametrize(
        "vname",
        [
            VName(),
            VName(signature="sig"),
            VName(corpus="kythe", path="kythe/go/serving/xrefs.go", language="go"),
            VName(signature="#?=%/", corpus="c//x", root="r", path="p q", language="c++"),
            VName(signature="ünïcödé ☃", path="файл.py"),
            VName(corpus="//leading/slashes"),
            VName(signature="line\nbreak\ttab"),
        ],
    )
    def test_round_trip(self, vname: VName) -> None:
        ticket = vname_to_ticket(vname)
        assert ticket_to_vname(ticket) == vname
        assert vname_to_ticket(ticket_to_vname(ticket)) == ticket

    def test_decode_all_fields(self) -> None:
        vname = ticket_to_vname("kythe://corpus?lang=go?path=a/b.go?root=gen#sig")
        assert vname == VName(
            signature="sig",
            corpus="corpus",
            root="gen",
            path="a/b.go",
            language="go",
        )

    @pytest.mark.parametrize(
        "ticket",
        [
            "",
            "sig",
            "http://corpus#sig",
            "kythe:#a#b",
            "kythe:corpus#sig",
            "kythe:?path",
            "kythe:?file=x",
            "kythe:?path=a?path=b",
            "kythe:?root=r?path=p",
            "kythe:#bad%zzescape",
            "kythe:#trailing%2",
            "kythe:#%ff",
            "kythe:?path=",
            "kythe:#",
            "kythe://",
            "kythe:#%73ig",
            "kythe:#a%2fb",
        ],
    )
    def test_invalid_tickets(self, ticket: str) -> None:
        with pytest.raises(InvalidTicketError) as exc_info:
            ticket_to_vname(ticket)
        assert exc_info.value.ticket == ticket
        assert repr(ticket) in str(exc_info.value)

    def test_decode_tickets_batch(self) -> None:
        tickets = ["kythe:#a", "kythe://c#b"]
        assert decode_tickets(tickets) == [VName(signature="a"), VName(signature="b", corpus="c")]

    def test_decode_tickets_names_offending_ticket(self) -> None:
        with pytest.raises(InvalidTicketError) as exc_info:
            decode_tickets(["kythe:#ok", "not-a-ticket", "kythe:#fine"])
        assert exc_info.value.ticket == "not-a-ticket"


class TestVName:
    """Tests for VName identity."""

    def test_equality_is_fieldwise(self) -> None:
        assert VName(signature="a", path="p") == VName(path="p", signature="a")
        assert VName(signature="a") != VName(signature="a", corpus="c")

    def test_hashable(self) -> None:
        mapping = {VName(signature="a"): 1}
        assert mapping[VName(signature="a")] == 1

    def test_immutable(self) -> None:
        vname = VName(signature="a")
        with pytest.raises(AttributeError):
            vname.signature = "b"  # type: ignore[misc]

    @pytest.mark.parametrize("field_name", ["signature", "corpus", "root", "path", "language"])
    def test_rejects_unencodable_text(self, field_name: str) -> None:
        with pytest.raises(ValueError, match=field_name):
            VName(**{field_name: "bad\ud800"})

    def test_non_ascii_text_round_trips(self) -> None:
        vname = VName(signature="ünïcode", path="src/日本.py")
        assert ticket_to_vname(vname_to_ticket(vname)) == vname
