"""
Huffman compressor working on streams
in the "table + payload" text format
"""

from typing import BinaryIO

from compressor_ABC import Compressor
from huffman_coding import decode, encode, split_sections


class HuffmanCompressor(Compressor):
    """
    Writes and reads files of the form

        <symbol><code>\\n
        ...
        \\n
        <'0'/'1' payload>
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def compress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        data = input_stream.read()
        encoded = encode(data, verbose=self.verbose)
        if encoded is None:
            return "Nothing to encode: input is empty"

        table, payload = encoded
        output_stream.write(table)
        output_stream.write(payload)
        return (
            f"Encoded {len(data)} bytes: table {len(table)} bytes, "
            f"payload {len(payload)} bits"
        )

    def decompress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        blob = input_stream.read()
        if not blob:
            return "Nothing to decode: input is empty"

        table, payload = split_sections(blob)
        decoded = decode(table, payload, verbose=self.verbose)
        output_stream.write(decoded)
        return f"Decoded {len(decoded)} bytes from {len(blob)} bytes"
