from bitarray import bitarray


class BitWriter:
    """
    Simple writer of Huffman codes into a bitarray,
    rendered as the '0'/'1' text used by the encoded files.
    """

    def __init__(self):
        self.bits = bitarray(endian="big")

    def write_symbols(self, codes: dict[int, str], data: bytes):
        """
        Appends the code of every symbol of data, in order.

        :param codes: dict, symbol -> code string
        :param data: bytes to encode, every symbol must be in codes
        """
        code_dict = {
            symbol: bitarray(code, endian="big") for symbol, code in codes.items()
        }
        self.bits.encode(code_dict, data)

    def to_text(self) -> bytes:
        """
        Returns the written bits as ASCII '0'/'1' characters.
        No byte alignment: codes are stored as text, not packed.
        """
        return self.bits.to01().encode("ascii")

