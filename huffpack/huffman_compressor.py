"""
Static Huffman compression of byte streams.

Compressed layout:
    serialized tree | symbol count ("<I") | packed codes, zero padded
An empty input compresses to an empty output.
"""
import logging
import struct
from typing import BinaryIO

from huffpack.compressor_base import Compressor
from huffpack.errors import FormatError
from huffpack.huffman_coding import FrequencyTable, HuffmanTree
from huffpack.huffman_utils.bit_reader import BitUnpacker
from huffpack.huffman_utils.bit_writer import BitPacker
from huffpack.huffman_utils.tree_codec import deserialize_tree, serialize_tree

logger = logging.getLogger(__name__)

COUNT_FORMAT = "<I"
COUNT_SIZE = struct.calcsize(COUNT_FORMAT)
MAX_SYMBOLS = 2**32 - 1


class HuffmanCompressor(Compressor):
    """
    Two-pass Huffman compressor: the input is read once to count
    byte frequencies and once more to encode it.
    """

    def compress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        start = input_stream.tell()
        table = FrequencyTable.count(input_stream)
        total = table.total
        if total > MAX_SYMBOLS:
            raise ValueError(f"Input too large: {total} bytes, at most {MAX_SYMBOLS} supported")

        tree = HuffmanTree.build(table)
        if tree is None:
            logger.debug("Empty input, nothing to write")
            return "Compressed 0 bytes into 0 bytes"

        code_book = tree.code_bits()
        serialize_tree(tree.root, output_stream)
        output_stream.write(struct.pack(COUNT_FORMAT, total))

        input_stream.seek(start)
        packer = BitPacker(output_stream)
        bit_count = packer.encode(input_stream, code_book)
        logger.debug("Encoded %d symbols into %d bits", total, bit_count)

        return (
            f"Compressed {total} bytes into {packer.byte_count} bytes of codes "
            f"({len(code_book)} distinct symbols, {bit_count / total:.3f} bits/symbol)"
        )

    def decompress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        root = deserialize_tree(input_stream)
        if root is None:
            logger.debug("Empty compressed input, nothing to write")
            return "Decompressed 0 bytes"

        header = input_stream.read(COUNT_SIZE)
        if len(header) != COUNT_SIZE:
            raise FormatError("Unexpected end of data while reading the symbol count")
        (total,) = struct.unpack(COUNT_FORMAT, header)

        unpacker = BitUnpacker(input_stream)
        emitted = unpacker.decode(root, total, output_stream)
        logger.debug("Decoded %d symbols from %d bytes of codes", emitted, unpacker.byte_count)

        return f"Decompressed {emitted} bytes"
