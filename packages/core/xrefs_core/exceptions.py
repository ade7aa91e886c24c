"""Cross-reference serving exceptions."""


class XrefsError(Exception):
    """Base class for xrefs errors."""

    pass


class InvalidTicketError(XrefsError):
    """Raised when a ticket cannot be decoded into a VName.

    Always a client error. A single bad ticket fails the whole batched call.
    """

    def __init__(self, ticket: str, reason: str):
        self.ticket = ticket
        self.reason = reason
        super().__init__(f"Invalid ticket {ticket!r}: {reason}")


class InvalidRequestError(XrefsError):
    """Raised when a request is structurally unusable (e.g. carries no tickets)."""

    pass


class NotFoundError(XrefsError):
    """Raised when an identity that must exist has no stored facts."""

    def __init__(self, ticket: str):
        self.ticket = ticket
        super().__init__(f"Node not found: {ticket}")


class StoreUnavailableError(XrefsError):
    """Raised when the underlying graph store fails to serve a read or write.

    Retry policy belongs to the store client; the serving layer only propagates.
    """

    pass
