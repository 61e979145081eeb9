"""
Huffman coding algorithm -
builds a prefix-code tree from byte frequencies,
stores the code table next to the encoded bits
and rebuilds the tree from that table to decode.
"""

import heapq
from collections import defaultdict

from bit_reader import BitReader
from bit_writer import BitWriter
from huffman_errors import MalformedTableError, UnrepresentableSymbolError

# one table record is "<symbol><code>\n", an empty line ends the table
RECORD_END = b"\n"
SECTION_END = b"\n"
NEWLINE = RECORD_END[0]


class Node:
    """
    Class object for Node in Huffman's Tree
    """

    def __init__(self, val_freq: int):
        self.val_freq = val_freq

    def __lt__(self, val):
        return self.val_freq < val.val_freq


class Leaf(Node):
    """
    Leaf of the tree, holds one symbol and its frequency.
    """

    def __init__(self, value: int, val_freq: int = 0):
        """
        :param value: int, byte value held by the leaf
        :param val_freq: int, the frequency of this value in the data
        """
        super().__init__(val_freq)
        self.value = value

    def __repr__(self):
        return f"Leaf({self.value!r}, {self.val_freq})"


class Internal(Node):
    """
    Internal node, owns its children and weighs as much as they do.
    """

    def __init__(self, left: Node | None = None, right: Node | None = None):
        weight = sum(child.val_freq for child in (left, right) if child is not None)
        super().__init__(weight)
        self.left = left
        self.right = right

    def __repr__(self):
        return f"Internal({self.left!r}, {self.right!r})"


def char_frequency(data: bytes) -> dict[int, int]:
    """
    Function builds dictionary with frequency
    of each symbol for given data.

    :param data: data to count symbol frequency for
    :return: dict, dictionary with symbol frequency
    """
    char_frequency_dict = defaultdict(int)
    for el in data:
        char_frequency_dict[el] += 1

    return dict(char_frequency_dict)


def build_tree(freq_dict: dict[int, int]) -> Internal:
    """
    Function builds Huffman Tree from a non-empty
    frequency dictionary and returns its root.

    The root is always an internal node, so even a
    single symbol gets a one bit code.
    """
    if not freq_dict:
        raise ValueError("Can't build a tree without symbols")

    nodes = [Leaf(val, val_freq) for val, val_freq in freq_dict.items()]
    heapq.heapify(nodes)

    if len(nodes) == 1:
        return Internal(left=nodes[0])

    while len(nodes) > 1:
        # left smallest node
        l = heapq.heappop(nodes)
        # right smallest node
        r = heapq.heappop(nodes)

        # creating new merged node from the smallest left and right
        heapq.heappush(nodes, Internal(l, r))

    return nodes[0]


def codes_generation(root: Node) -> tuple[dict[int, str], dict[str, int]]:
    """
    Preorder traversal of Huffman's tree that generates
    code for each symbol.

    :param root: node to start traversal from
    :return: tuple, (symbol -> code, code -> symbol)
    """
    res_codes = {}
    rev_codes = {}

    def traverse(node, curr_code):
        if node is None:
            return
        if isinstance(node, Leaf):
            res_codes[node.value] = curr_code
            rev_codes[curr_code] = node.value
            return
        traverse(node.left, curr_code + "0")
        traverse(node.right, curr_code + "1")

    traverse(root, "")
    return res_codes, rev_codes


def _read_records(blob: bytes) -> tuple[list[tuple[int, str]], int]:
    """
    Reads table records up to the empty terminator line.

    :return: tuple, (list of (symbol, code), offset right after the terminator)
    """
    records = []
    pos = 0
    while True:
        end = blob.find(RECORD_END, pos)
        if end == -1:
            raise MalformedTableError("Code table isn't terminated by an empty line")
        line = blob[pos:end]
        pos = end + 1
        if not line:
            return records, pos

        symbol, raw_code = line[0], line[1:]
        if not raw_code:
            raise MalformedTableError(f"Record for symbol {symbol!r} has no code")
        if raw_code.strip(b"01"):
            raise MalformedTableError(
                f"Code for symbol {symbol!r} isn't made of 0 and 1: {raw_code!r}"
            )
        records.append((symbol, raw_code.decode("ascii")))


def split_sections(blob: bytes) -> tuple[bytes, bytes]:
    """
    Splits an encoded file into its table section
    (with the terminator) and its payload.
    Records are left for reconstruct to check.
    """
    if blob.startswith(SECTION_END):
        offset = len(SECTION_END)
    else:
        end = blob.find(RECORD_END + SECTION_END)
        if end == -1:
            raise MalformedTableError("Code table isn't terminated by an empty line")
        offset = end + len(RECORD_END + SECTION_END)
    return blob[:offset], blob[offset:]


class HuffmanTree:
    """
    Class object for Huffman Tree - main structure used
    in Huffman coding algorithm. Holds the root and both
    directions of the code table.
    """

    def __init__(self):
        self.root = None
        self.res_codes = {}
        self.rev_codes = {}

    @classmethod
    def build_from_freq(cls, freq_dict: dict[int, int]) -> "HuffmanTree":
        """
        Builds the tree from a frequency dictionary
        and generates the prefix codes.

        :param freq_dict: dict, {symbol: frequency}
        :return: HuffmanTree with filled res_codes and rev_codes
        """
        tree = cls()
        tree.root = build_tree(freq_dict)
        tree.res_codes, tree.rev_codes = codes_generation(tree.root)
        return tree

    @classmethod
    def reconstruct(cls, table: bytes) -> "HuffmanTree":
        """
        Rebuilds the tree from a serialized code table.
        Codes are taken literally from the table, the tree is
        built along them and checked for conflicting paths.

        :param table: bytes, records followed by an empty line
        :return: HuffmanTree
        """
        records, _ = _read_records(table)
        if not records:
            raise MalformedTableError("Code table has no records")

        tree = cls()
        tree.root = Internal()
        for symbol, code in records:
            known = tree.res_codes.get(symbol)
            if known == code:
                continue
            if known is not None:
                raise MalformedTableError(
                    f"Symbol {symbol!r} has two codes: {known} and {code}"
                )
            if code in tree.rev_codes:
                raise MalformedTableError(
                    f"Code {code} is used by {tree.rev_codes[code]!r} and {symbol!r}"
                )
            tree._insert_path(symbol, code)
            tree.res_codes[symbol] = code
            tree.rev_codes[code] = symbol
        return tree

    def _insert_path(self, symbol: int, code: str):
        """
        Hangs a leaf for symbol at the end of the code path,
        creating missing internal nodes on the way.
        The path is checked before the tree is touched.
        """
        node = self.root
        for bit in code[:-1]:
            child = node.right if bit == "1" else node.left
            if child is None:
                break
            if isinstance(child, Leaf):
                raise MalformedTableError(
                    f"Code {code} of {symbol!r} runs through the leaf of {child.value!r}"
                )
            node = child
        else:
            slot = node.right if code[-1] == "1" else node.left
            if slot is not None:
                raise MalformedTableError(
                    f"Code {code} of {symbol!r} ends on an occupied position"
                )

        node = self.root
        for bit in code[:-1]:
            if bit == "1":
                if node.right is None:
                    node.right = Internal()
                node = node.right
            else:
                if node.left is None:
                    node.left = Internal()
                node = node.left
        if code[-1] == "1":
            node.right = Leaf(symbol)
        else:
            node.left = Leaf(symbol)

    def serialize(self) -> bytes:
        """
        Serializes the code table: one "<symbol><code>\\n"
        record per symbol and an empty line at the end.
        """
        records = bytearray()
        for symbol, code in self.res_codes.items():
            if symbol == NEWLINE:
                raise UnrepresentableSymbolError(
                    "Newline can't be stored in the code table"
                )
            records.append(symbol)
            records += code.encode("ascii")
            records += RECORD_END
        records += SECTION_END
        return bytes(records)

    def encode_data(self, data: bytes) -> bytes:
        """
        Replaces every symbol of data with its code.

        :return: bytes, '0'/'1' characters
        """
        writer = BitWriter()
        writer.write_symbols(self.res_codes, data)
        return writer.to_text()

    def decode_payload(self, payload: bytes, verbose: bool = False) -> bytes:
        """
        Decodes the '0'/'1' payload bit by bit against
        the code table. Bits left over at the end that
        don't form a whole code are dropped.
        """
        reader = BitReader(payload)
        decoded_data = bytearray()
        curr_code = ""

        while reader.remaining():
            curr_code += "1" if reader.read_bit() else "0"
            if curr_code in self.rev_codes:
                decoded_data.append(self.rev_codes[curr_code])
                curr_code = ""

        if curr_code and verbose:
            print(f"Dropped {len(curr_code)} trailing bits: {curr_code}")

        return bytes(decoded_data)


def encode(data: bytes, verbose: bool = False) -> tuple[bytes, bytes] | None:
    """
    Encodes data with a Huffman code built for it.

    :param data: bytes to encode
    :return: tuple (serialized table, payload) or None if data is empty
    """
    freq_dict = char_frequency(data)
    if not freq_dict:
        if verbose:
            print("Nothing to encode")
        return None
    if NEWLINE in freq_dict:
        raise UnrepresentableSymbolError(
            "Input contains a newline, which the code table can't store"
        )

    tree = HuffmanTree.build_from_freq(freq_dict)
    table = tree.serialize()
    payload = tree.encode_data(data)

    if verbose:
        print(f"{len(freq_dict)} symbols, {len(data)} bytes -> {len(payload)} bits")
    return table, payload


def reconstruct(table: bytes) -> HuffmanTree:
    """
    Rebuilds the tree and code tables from a serialized table.
    """
    return HuffmanTree.reconstruct(table)


def decode(table: bytes, payload: bytes, verbose: bool = False) -> bytes:
    """
    Decodes payload with the code table serialized in table.
    The table is fully validated before any bit is decoded.
    """
    tree = reconstruct(table)
    return tree.decode_payload(payload, verbose=verbose)
