"""
Pre-order serialization of a Huffman tree.

Every leaf is written as LEAF_MARKER followed by its byte,
every internal node as INTERNAL_MARKER followed by its left
and right subtrees, so the encoding needs no length prefix.
"""
from typing import BinaryIO, Optional

from huffpack.errors import FormatError
from huffpack.huffman_coding import ALPHABET_SIZE, Node

LEAF_MARKER = b"1"
INTERNAL_MARKER = b"0"

# a tree over 256 leaves has at most 255 internal levels
MAX_DEPTH = ALPHABET_SIZE - 1


def serialize_tree(root: Optional[Node], sink: BinaryIO) -> None:
    """
    Write the tree rooted at root to sink. An empty tree writes nothing.

    Args:
        root: Root node, or None for an empty source
        sink: Binary stream to write to
    """
    if root is None:
        return
    if root.is_leaf:
        sink.write(LEAF_MARKER)
        sink.write(bytes([root.value]))
        return
    sink.write(INTERNAL_MARKER)
    serialize_tree(root.left, sink)
    serialize_tree(root.right, sink)


def deserialize_tree(source: BinaryIO) -> Optional[Node]:
    """
    Read a tree written by serialize_tree.

    Args:
        source: Binary stream positioned at the first marker

    Returns:
        Root node, or None if the stream is empty

    Raises:
        FormatError: If the tree is truncated, nested too deep
            or contains an unknown marker
    """
    marker = source.read(1)
    if not marker:
        return None
    return _read_node(marker, source, 0)


def _read_node(marker: bytes, source: BinaryIO, depth: int) -> Node:
    if marker == LEAF_MARKER:
        symbol = source.read(1)
        if not symbol:
            raise FormatError("Unexpected end of data while reading a leaf symbol")
        return Node(symbol[0], 0)

    if marker != INTERNAL_MARKER:
        raise FormatError(f"Invalid tree marker: {marker!r}")
    if depth >= MAX_DEPTH:
        raise FormatError(f"Tree is deeper than {MAX_DEPTH} levels")

    children = []
    for _ in range(2):
        child_marker = source.read(1)
        if not child_marker:
            raise FormatError("Unexpected end of data while reading the tree")
        children.append(_read_node(child_marker, source, depth + 1))
    left, right = children
    return Node(None, 0, left=left, right=right)
