import random

import pytest

from huffman_coding import (
    Internal,
    Leaf,
    build_tree,
    char_frequency,
    codes_generation,
    decode,
    encode,
    reconstruct,
    split_sections,
)
from huffman_errors import (
    MalformedPayloadError,
    MalformedTableError,
    UnrepresentableSymbolError,
)

SAMPLE = b"Lorem ipsum dolor sit amet, consectetur adipiscing elit. " * 20


def _leaves(node, depth=0):
    if node is None:
        return
    if isinstance(node, Leaf):
        yield node, depth
        return
    yield from _leaves(node.left, depth + 1)
    yield from _leaves(node.right, depth + 1)


def _internals(node):
    if isinstance(node, Internal):
        yield node
        yield from _internals(node.left)
        yield from _internals(node.right)


def test_char_frequency():
    assert char_frequency(b"abracadabra") == {
        ord("a"): 5,
        ord("b"): 2,
        ord("r"): 2,
        ord("c"): 1,
        ord("d"): 1,
    }


def test_char_frequency_empty():
    assert char_frequency(b"") == {}


def test_build_tree_rejects_empty_frequencies():
    with pytest.raises(ValueError):
        build_tree({})


def test_weights_add_up():
    freq = char_frequency(SAMPLE)
    root = build_tree(freq)

    assert root.val_freq == len(SAMPLE)
    for node in _internals(root):
        assert node.val_freq == node.left.val_freq + node.right.val_freq
    for leaf, _ in _leaves(root):
        assert leaf.val_freq == freq[leaf.value]


def test_every_symbol_gets_one_leaf():
    freq = char_frequency(SAMPLE)
    leaves = [leaf.value for leaf, _ in _leaves(build_tree(freq))]
    assert sorted(leaves) == sorted(freq)


def test_codes_form_prefix_code():
    codes, rev_codes = codes_generation(build_tree(char_frequency(SAMPLE)))
    values = list(codes.values())

    assert len(set(values)) == len(values)
    for c1 in values:
        assert c1
        for c2 in values:
            if c1 != c2:
                assert not c2.startswith(c1)
    assert {code: symbol for symbol, code in codes.items()} == rev_codes


def _random_frequencies(seed):
    rng = random.Random(seed)
    symbols = rng.sample([b for b in range(256) if b != 10], rng.randint(2, 60))
    return {symbol: rng.randint(1, 1000) for symbol in symbols}


@pytest.mark.parametrize(
    "freq",
    [
        {ord("a"): 45, ord("b"): 13, ord("c"): 12, ord("d"): 16, ord("e"): 9, ord("f"): 5},
        char_frequency(SAMPLE),
        *(_random_frequencies(seed) for seed in range(20)),
    ],
)
def test_more_frequent_symbols_get_shorter_codes(freq):
    codes, _ = codes_generation(build_tree(freq))

    for s1, f1 in freq.items():
        for s2, f2 in freq.items():
            if f1 > f2:
                assert len(codes[s1]) <= len(codes[s2])


def test_single_symbol_gets_one_bit_code():
    encoded = encode(b"aaaa")
    assert encoded is not None
    table, payload = encoded

    tree = reconstruct(table)
    assert list(tree.res_codes) == [ord("a")]
    assert len(tree.res_codes[ord("a")]) >= 1
    assert decode(table, payload) == b"aaaa"


def test_empty_input_is_noop():
    assert encode(b"") is None


def test_table_format():
    table, payload = encode(b"aab")
    lines = table.split(b"\n")

    assert lines[-2:] == [b"", b""]
    records = lines[:-2]
    assert sorted(line[:1] for line in records) == [b"a", b"b"]
    assert set(payload) <= set(b"01")
    assert len(payload) == 3


@pytest.mark.parametrize(
    "data",
    [
        b"a",
        b"ab",
        b"abracadabra",
        SAMPLE,
        bytes(b for b in range(256) if b != 10),
    ],
)
def test_roundtrip(data):
    table, payload = encode(data)
    assert decode(table, payload) == data


def test_roundtrip_random():
    rng = random.Random(1234)
    alphabet = [b for b in range(256) if b != 10]
    data = bytes(rng.choice(alphabet) for _ in range(5000))

    table, payload = encode(data)
    assert decode(table, payload) == data


def test_newline_symbol_rejected():
    with pytest.raises(UnrepresentableSymbolError):
        encode(b"first line\nsecond line")


def test_reconstructed_maps_are_inverse():
    table, _ = encode(SAMPLE)
    tree = reconstruct(table)

    for symbol, code in tree.res_codes.items():
        assert tree.rev_codes[code] == symbol
    for code, symbol in tree.rev_codes.items():
        assert tree.res_codes[symbol] == code


def test_reconstructed_tree_matches_codes():
    table, _ = encode(SAMPLE)
    tree = reconstruct(table)

    codes, _ = codes_generation(tree.root)
    assert codes == tree.res_codes


def test_reconstruct_keeps_literal_codes():
    tree = reconstruct(b"a0\nb10\nc11\n\n")
    assert tree.res_codes == {ord("a"): "0", ord("b"): "10", ord("c"): "11"}
    assert tree.rev_codes == {"0": ord("a"), "10": ord("b"), "11": ord("c")}


def test_exact_duplicate_record_is_accepted():
    tree = reconstruct(b"a0\na0\nb1\n\n")
    assert tree.res_codes == {ord("a"): "0", ord("b"): "1"}


@pytest.mark.parametrize(
    "table",
    [
        b"a\nb1\n\n",  # missing code
        b"a0\nb1x\n\n",  # not a binary code
        b"a0\nb1\n",  # no terminator
        b"\n",  # no records
        b"a0\na1\n\n",  # symbol with two codes
        b"a0\nb0\n\n",  # code with two symbols
        b"a0\nb01\n\n",  # runs through a leaf
        b"a01\nb0\n\n",  # ends on an internal node
    ],
)
def test_malformed_table_rejected(table):
    with pytest.raises(MalformedTableError):
        reconstruct(table)


def test_malformed_table_produces_no_output():
    with pytest.raises(MalformedTableError):
        decode(b"a\nb1\n\n", b"0101")


def test_trailing_bits_are_dropped():
    assert decode(b"a0\nb10\nc11\n\n", b"0101") == b"ab"


def test_payload_whitespace_is_skipped():
    assert decode(b"a0\nb1\n\n", b"01\n10\n") == b"abba"


def test_payload_with_foreign_characters_rejected():
    with pytest.raises(MalformedPayloadError):
        decode(b"a0\nb1\n\n", b"0120")


def test_split_sections():
    table, payload = split_sections(b"a0\nb1\n\n0110")
    assert table == b"a0\nb1\n\n"
    assert payload == b"0110"


def test_split_sections_without_terminator():
    with pytest.raises(MalformedTableError):
        split_sections(b"a0\nb1")


def test_split_sections_leaves_records_to_reconstruct():
    table, payload = split_sections(b"a\nb1\n\n01")
    assert table == b"a\nb1\n\n"
    assert payload == b"01"
    with pytest.raises(MalformedTableError):
        reconstruct(table)


def test_split_sections_empty_table():
    assert split_sections(b"\n0101") == (b"\n", b"0101")
