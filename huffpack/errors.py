"""Errors raised by the Huffman codec."""


class FormatError(ValueError):
    """
    Compressed data is structurally invalid: truncated tree,
    unknown marker byte, missing symbol count or a bit stream
    that ends before the declared number of symbols.
    """
