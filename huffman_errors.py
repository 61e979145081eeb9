"""
Errors raised while encoding and decoding
Huffman-coded files
"""


class HuffmanFormatError(ValueError):
    """
    Base class for errors in the persisted
    table + payload format.
    """


class MalformedTableError(HuffmanFormatError):
    """
    The code table section can't be turned back into a tree:
    a record without a code, a code that isn't made of 0/1,
    two records fighting over the same path, or no terminator.
    """


class MalformedPayloadError(HuffmanFormatError):
    """The payload section holds something other than 0/1 characters."""


class UnrepresentableSymbolError(ValueError):
    """
    The input holds a symbol that the line-based table
    can't store (a newline).
    """
