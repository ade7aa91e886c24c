"""Conventional graph schema names.

Fact names, node kinds and edge kinds shared by the indexer that writes the
graph and the resolvers that read it. Edge kinds come in forward/reverse
pairs; the reverse kind is the forward kind prefixed with EDGE_DIR_MARKER.
"""

from __future__ import annotations

from enum import Enum

# Node facts
NODE_KIND_FACT = "/kythe/node/kind"
FILE_TEXT_FACT = "/kythe/text"
FILE_ENCODING_FACT = "/kythe/text/encoding"

# Node kinds
FILE_KIND = "file"
ANCHOR_KIND = "anchor"

# Edge kinds
CHILD_OF_EDGE = "/kythe/edge/childof"
REF_EDGE = "/kythe/edge/ref"
DEFINES_EDGE = "/kythe/edge/defines"

EDGE_DIR_MARKER = "%"

# Fact name/value carried by an edge entry with no annotation
EDGE_MARKER_FACT = "/"
EDGE_MARKER_VALUE = b""


class Direction(Enum):
    """Direction of an edge kind relative to the node it is stored on."""

    FORWARD = "forward"
    REVERSE = "reverse"


def mirror_edge(kind: str) -> str:
    """Return the reverse of an edge kind (applying it twice is the identity)."""
    if kind.startswith(EDGE_DIR_MARKER):
        return kind[len(EDGE_DIR_MARKER) :]
    return EDGE_DIR_MARKER + kind


def edge_direction(kind: str) -> Direction:
    """Return whether an edge kind is forward or reverse."""
    if kind.startswith(EDGE_DIR_MARKER):
        return Direction.REVERSE
    return Direction.FORWARD


def is_reference_edge(kind: str) -> bool:
    """Whether an anchor's edge of this kind points at the entity it denotes.

    Every forward kind except containment (child-of) qualifies: ref, defines,
    and any language-specific refinement of them.
    """
    return edge_direction(kind) is Direction.FORWARD and kind != CHILD_OF_EDGE
