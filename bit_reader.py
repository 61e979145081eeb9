from bitarray import bitarray

from huffman_errors import MalformedPayloadError


class BitReader:
    """
    Reads bits one at a time from the '0'/'1' text payload
    of an encoded file.
    """

    def __init__(self, payload: bytes):
        """
        Validates the payload and loads it into a bitarray.
        Whitespace is skipped, anything else besides 0/1 is an error.

        :param payload: bytes, the text after the table section
        """
        digits = b"".join(payload.split())
        if digits.strip(b"01"):
            raise MalformedPayloadError(
                "Payload may only contain '0' and '1' characters"
            )
        self.bits = bitarray(digits.decode("ascii"), endian="big")
        self.pos = 0  # current position in the bit stream

    def read_bit(self) -> int:
        """
        Reads one bit and returns it as 0 or 1.
        """
        if self.pos >= len(self.bits):
            raise EOFError("Read past the end of the payload")
        val = self.bits[self.pos]
        self.pos += 1
        return val

    def remaining(self) -> int:
        """
        Number of bits not read yet.
        """
        return len(self.bits) - self.pos
