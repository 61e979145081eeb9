from abc import ABC, abstractmethod
import io
from typing import BinaryIO, Tuple


class Compressor(ABC):
    """
    Interface describing compression and decompression
    of files and byte streams.
    """

    @abstractmethod
    def compress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Reads bytes from the input stream, compresses them
        and writes the result to the output stream.

        Args:
            input_stream: Input stream with the data
            output_stream: Output stream for the compressed data

        Returns:
            Line with information for logging
        """
        pass

    @abstractmethod
    def decompress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Reads bytes from the compressed stream, decompresses them
        and writes the result to the output stream.

        Args:
            input_stream: Input stream with the compressed data
            output_stream: Output stream for the decompressed data

        Returns:
            Line with information for logging
        """
        pass

    @classmethod
    def compress_file(cls, input_file: str, output_file: str, **kwargs) -> str:
        """
        Helper for compressing a file.
        No output file is created for an empty input.

        Args:
            input_file: Path to the input file
            output_file: Path to the output file

        Returns:
            Information about the compression
        """
        compressor = cls(**kwargs)
        with open(input_file, "rb") as in_file:
            out_buffer = io.BytesIO()
            log_info = compressor.compress(in_file, out_buffer)
            input_size = in_file.tell()
        if cls._write_output(output_file, out_buffer, input_size):
            log_info += f", written to {output_file}"
        return log_info

    @classmethod
    def decompress_file(cls, input_file: str, output_file: str, **kwargs) -> str:
        """
        Helper for decompressing a file.
        Nothing is written if decompression fails.

        Args:
            input_file: Path to the compressed file
            output_file: Path to the output file

        Returns:
            Information about the decompression
        """
        compressor = cls(**kwargs)
        with open(input_file, "rb") as in_file:
            out_buffer = io.BytesIO()
            log_info = compressor.decompress(in_file, out_buffer)
            input_size = in_file.tell()
        if cls._write_output(output_file, out_buffer, input_size):
            log_info += f", written to {output_file}"
        return log_info

    @classmethod
    def compress_bytes(cls, data: bytes, **kwargs) -> Tuple[bytes, str]:
        """
        Helper for compressing bytes.

        Args:
            data: Input data for compression

        Returns:
            Tuple (compressed data, information about the compression)
        """
        compressor = cls(**kwargs)
        in_buffer = io.BytesIO(data)
        out_buffer = io.BytesIO()
        log_info = compressor.compress(in_buffer, out_buffer)
        return out_buffer.getvalue(), log_info

    @classmethod
    def decompress_bytes(cls, data: bytes, **kwargs) -> Tuple[bytes, str]:
        """
        Helper for decompressing bytes.

        Args:
            data: Compressed data

        Returns:
            Tuple (decompressed data, information about the decompression)
        """
        compressor = cls(**kwargs)
        in_buffer = io.BytesIO(data)
        out_buffer = io.BytesIO()
        log_info = compressor.decompress(in_buffer, out_buffer)
        return out_buffer.getvalue(), log_info

    @staticmethod
    def _write_output(output_file: str, out_buffer: io.BytesIO, input_size: int) -> bool:
        # empty input is a no-op, anything else gets an output file
        if not input_size:
            return False
        with open(output_file, "wb") as out_file:
            out_file.write(out_buffer.getvalue())
        return True
