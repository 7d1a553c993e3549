from abc import ABC, abstractmethod
import io
import os
from typing import BinaryIO, Tuple


class Compressor(ABC):
    """
    Interface for compressing and decompressing byte streams,
    with helpers for files and in-memory bytes.
    """

    @abstractmethod
    def compress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Reads all bytes from the input stream and writes the compressed
        form to the output stream.

        Args:
            input_stream: Rewindable input stream
            output_stream: Output stream for the compressed data

        Returns:
            One line of information for logging
        """

    @abstractmethod
    def decompress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Reads compressed bytes from the input stream and writes the
        original data to the output stream.

        Args:
            input_stream: Input stream with compressed data
            output_stream: Output stream for the decompressed data

        Returns:
            One line of information for logging
        """

    @classmethod
    def compress_file(cls, input_file: str, output_file: str) -> str:
        """
        Helper for compressing a file.

        A partially written output file is removed if compression fails.

        Args:
            input_file: Path to the input file
            output_file: Path to the output file

        Returns:
            Compression information
        """
        compressor = cls()
        return cls._run_on_files(compressor.compress, input_file, output_file)

    @classmethod
    def decompress_file(cls, input_file: str, output_file: str) -> str:
        """
        Helper for decompressing a file.

        A partially written output file is removed if decompression fails.

        Args:
            input_file: Path to the compressed file
            output_file: Path to the output file

        Returns:
            Decompression information
        """
        compressor = cls()
        return cls._run_on_files(compressor.decompress, input_file, output_file)

    @staticmethod
    def _run_on_files(operation, input_file: str, output_file: str) -> str:
        with open(input_file, 'rb') as in_file:
            with open(output_file, 'wb') as out_file:
                try:
                    return operation(in_file, out_file)
                except BaseException:
                    out_file.close()
                    os.remove(output_file)
                    raise

    @classmethod
    def compress_bytes(cls, data: bytes) -> Tuple[bytes, str]:
        """
        Helper for compressing bytes.

        Args:
            data: Input data

        Returns:
            Tuple (compressed data, compression information)
        """
        compressor = cls()
        in_buffer = io.BytesIO(data)
        out_buffer = io.BytesIO()
        log_info = compressor.compress(in_buffer, out_buffer)
        return out_buffer.getvalue(), log_info

    @classmethod
    def decompress_bytes(cls, data: bytes) -> Tuple[bytes, str]:
        """
        Helper for decompressing bytes.

        Args:
            data: Compressed data

        Returns:
            Tuple (decompressed data, decompression information)
        """
        compressor = cls()
        in_buffer = io.BytesIO(data)
        out_buffer = io.BytesIO()
        log_info = compressor.decompress(in_buffer, out_buffer)
        return out_buffer.getvalue(), log_info
