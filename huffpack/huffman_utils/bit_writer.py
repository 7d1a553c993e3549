from typing import BinaryIO

from bitarray import bitarray

from huffpack.huffman_coding import CHUNK_SIZE


class BitPacker:
    """
    Packs variable-length codes into bytes, most significant bit first,
    and writes every completed byte to the output stream.
    """

    def __init__(self, sink: BinaryIO) -> None:
        """
        Initialize a new BitPacker with an empty bit buffer.

        Args:
            sink: Binary stream receiving the packed bytes
        """
        self.sink = sink
        self.bits = bitarray(endian="big")
        self.bit_count = 0
        self.byte_count = 0

    def write_code(self, code: bitarray) -> None:
        """
        Append bits to the buffer and emit any full bytes.

        Args:
            code: Bits of one or more codes, in transmission order
        """
        self.bits.extend(code)
        self.bit_count += len(code)
        self._flush_full_bytes()

    def encode(self, source: BinaryIO, code_book: dict[int, bitarray]) -> int:
        """
        Encode every byte of source with code_book and pad the last byte.

        Args:
            source: Binary stream positioned at the start of the original data
            code_book: Mapping from byte value to its code

        Returns:
            Number of code bits written, padding excluded

        Raises:
            ValueError: If source holds a byte missing from code_book,
                i.e. it changed since the frequencies were counted
        """
        for chunk in iter(lambda: source.read(CHUNK_SIZE), b""):
            chunk_bits = bitarray(endian="big")
            try:
                chunk_bits.encode(code_book, chunk)
            except (KeyError, ValueError) as e:
                raise ValueError(f"Source changed between passes, byte has no Huffman code: {e}") from e
            self.write_code(chunk_bits)
        self.byte_align()
        return self.bit_count

    def byte_align(self) -> None:
        """Pad the buffer with zero bits to a byte boundary and write it out."""
        if self.bits:
            self.bits.fill()
            self._flush_full_bytes()

    def _flush_full_bytes(self) -> None:
        full = len(self.bits) // 8 * 8
        if full == 0:
            return
        self.sink.write(self.bits[:full].tobytes())
        del self.bits[:full]
        self.byte_count += full // 8
