import io

import pytest
from bitarray import bitarray

from huffpack.errors import FormatError
from huffpack.huffman_coding import Node
from huffpack.huffman_utils.bit_reader import BitUnpacker
from huffpack.huffman_utils.bit_writer import BitPacker


def _tree():
    # a -> 0, b -> 10, c -> 11
    return Node(None, 3, left=Node(ord("a"), 2),
                right=Node(None, 2, left=Node(ord("b"), 1), right=Node(ord("c"), 1)))


def _code_book():
    return {ord("a"): bitarray("0"), ord("b"): bitarray("10"), ord("c"): bitarray("11")}


def test_write_code_emits_only_full_bytes():
    sink = io.BytesIO()
    packer = BitPacker(sink)
    packer.write_code(bitarray("101"))
    assert sink.getvalue() == b""
    packer.write_code(bitarray("11111"))
    assert sink.getvalue() == b"\xbf"
    assert packer.byte_count == 1


def test_byte_align_pads_with_zeros():
    sink = io.BytesIO()
    packer = BitPacker(sink)
    packer.write_code(bitarray("11"))
    packer.byte_align()
    assert sink.getvalue() == b"\xc0"
    packer.byte_align()
    assert sink.getvalue() == b"\xc0"


def test_encode_packs_msb_first():
    sink = io.BytesIO()
    bit_count = BitPacker(sink).encode(io.BytesIO(b"abca"), _code_book())
    # 0 10 11 0 -> 01011000
    assert bit_count == 6
    assert sink.getvalue() == b"\x58"


def test_encode_spans_many_bytes():
    sink = io.BytesIO()
    data = b"abc" * 5000
    bit_count = BitPacker(sink).encode(io.BytesIO(data), _code_book())
    assert bit_count == 5 * 5000
    assert len(sink.getvalue()) == (bit_count + 7) // 8


def test_encode_unknown_symbol_raises_value_error():
    with pytest.raises(ValueError, match="changed between passes") as exc:
        BitPacker(io.BytesIO()).encode(io.BytesIO(b"abz"), _code_book())
    assert not isinstance(exc.value, FormatError)


def test_decode_stops_at_declared_count():
    sink = io.BytesIO()
    # padding zeros would otherwise decode as extra "a" symbols
    emitted = BitUnpacker(io.BytesIO(b"\x58")).decode(_tree(), 4, sink)
    assert emitted == 4
    assert sink.getvalue() == b"abca"


def test_decode_leaves_trailing_bits_unread():
    sink = io.BytesIO()
    BitUnpacker(io.BytesIO(b"\x58\xff\xff")).decode(_tree(), 2, sink)
    assert sink.getvalue() == b"ab"


def test_decode_truncated_raises():
    sink = io.BytesIO()
    with pytest.raises(FormatError):
        BitUnpacker(io.BytesIO(b"\xff")).decode(_tree(), 5, sink)
    assert sink.getvalue() == b"cccc"


def test_decode_zero_symbols_reads_nothing():
    source = io.BytesIO(b"\x00")
    assert BitUnpacker(source).decode(_tree(), 0, io.BytesIO()) == 0
    assert source.read() == b"\x00"


def test_single_leaf_uses_one_bit_per_symbol():
    sink = io.BytesIO()
    emitted = BitUnpacker(io.BytesIO(b"\x00\x00")).decode(Node(ord("A"), 0), 9, sink)
    assert emitted == 9
    assert sink.getvalue() == b"A" * 9


def test_single_leaf_truncated_raises():
    with pytest.raises(FormatError):
        BitUnpacker(io.BytesIO(b"\x00")).decode(Node(ord("A"), 0), 9, io.BytesIO())


def test_single_leaf_rejects_one_bits():
    with pytest.raises(FormatError):
        BitUnpacker(io.BytesIO(b"\x80")).decode(Node(ord("A"), 0), 4, io.BytesIO())


def test_encode_counts_bits_across_chunks():
    sink = io.BytesIO()
    packer = BitPacker(sink)
    packer.write_code(bitarray("1"))
    bit_count = packer.encode(io.BytesIO(b"ab"), _code_book())
    # 1 0 10 -> 10100000
    assert bit_count == 4
    assert sink.getvalue() == b"\xa0"
