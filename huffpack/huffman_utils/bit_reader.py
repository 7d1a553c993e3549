from typing import BinaryIO, Iterator

from bitarray import bitarray

from huffpack.errors import FormatError
from huffpack.huffman_coding import CHUNK_SIZE, Node


class BitUnpacker:
    """
    Reads packed codes from a stream, most significant bit first,
    and walks the Huffman tree one bit at a time.
    """

    def __init__(self, source: BinaryIO) -> None:
        """
        Initialize BitUnpacker over a binary stream.

        Args:
            source: Binary stream positioned at the first packed byte
        """
        self.source = source
        self.byte_count = 0

    def iter_bits(self) -> Iterator[int]:
        """
        Yield the bits of the remaining stream, reading it in chunks.
        """
        for chunk in iter(lambda: self.source.read(CHUNK_SIZE), b""):
            self.byte_count += len(chunk)
            bits = bitarray(endian="big")
            bits.frombytes(chunk)
            yield from bits

    def decode(self, root: Node, total: int, sink: BinaryIO) -> int:
        """
        Decode exactly total symbols and write them to sink.

        Padding bits after the last symbol are never read as codes.

        Args:
            root: Root of the Huffman tree
            total: Number of symbols in the original data
            sink: Binary stream receiving the decoded bytes

        Returns:
            Number of symbols written

        Raises:
            FormatError: If the stream ends before total symbols are decoded
        """
        if total == 0:
            return 0
        if root.is_leaf:
            return self._decode_single(root, total, sink)

        out = bytearray()
        emitted = 0
        at_node = root
        for bit in self.iter_bits():
            at_node = at_node.right if bit else at_node.left
            if not at_node.is_leaf:
                continue
            out.append(at_node.value)
            emitted += 1
            at_node = root
            if emitted == total:
                break
            if len(out) >= CHUNK_SIZE:
                sink.write(out)
                out.clear()

        sink.write(out)
        if emitted < total:
            raise FormatError(f"Unexpected end of data: decoded {emitted} of {total} symbols")
        return emitted

    def _decode_single(self, root: Node, total: int, sink: BinaryIO) -> int:
        # one-symbol tree: every occurrence was packed as a single 0 bit
        emitted = 0
        for bit in self.iter_bits():
            if bit:
                raise FormatError("Invalid code for a single-symbol tree")
            emitted += 1
            if emitted == total:
                break

        sink.write(bytes([root.value]) * emitted)
        if emitted < total:
            raise FormatError(f"Unexpected end of data: decoded {emitted} of {total} symbols")
        return emitted
