"""
Command line for the Huffman coding tree compressor
"""

import argparse
import os
import sys

from huffman_compressor import HuffmanCompressor
from huffman_errors import HuffmanFormatError, UnrepresentableSymbolError

ENCODED_SUFFIX = "_encoded.txt"
DECODED_SUFFIX = "_decoded.txt"

ENCODE_OPTION = 1
DECODE_OPTION = 2


def output_name(file_name: str, suffix: str) -> str:
    """
    Replaces the text after the last '.' of the file's
    base name with suffix: lorem.txt -> lorem_encoded.txt.
    Names without an extension just get the suffix.
    """
    directory, base = os.path.split(file_name)
    stem, dot, _ = base.rpartition(".")
    if not dot:
        stem = base
    return os.path.join(directory, stem + suffix)


def run(command: str, file_name: str, output: str | None = None, verbose: bool = False) -> int:
    """
    Encodes or decodes one file and reports the result.

    :return: int, process exit status
    """
    if command == "encode":
        output = output or output_name(file_name, ENCODED_SUFFIX)
        action = HuffmanCompressor.compress_file
    else:
        output = output or output_name(file_name, DECODED_SUFFIX)
        action = HuffmanCompressor.decompress_file

    try:
        log_info = action(file_name, output, verbose=verbose)
    except OSError as e:
        print(f"Error: can't access {e.filename or file_name}: {e.strerror}", file=sys.stderr)
        return 1
    except UnrepresentableSymbolError as e:
        print(f"Encoding failed: {e}", file=sys.stderr)
        return 1
    except HuffmanFormatError as e:
        print(f"Decoding failed, {file_name} isn't a valid encoded file: {e}", file=sys.stderr)
        return 1

    print(log_info)
    return 0


def prompt_file_name() -> str:
    """
    Asks for a file name until one can be opened.
    """
    while True:
        file_name = input("Enter a file name: ")
        try:
            with open(file_name, "rb"):
                return file_name
        except OSError:
            print("\nError opening file. Please try again.")


def prompt_option() -> int:
    """
    Asks for the encode/decode option until a valid one is given.
    """
    while True:
        print("#" * 10 + " Menu: " + "#" * 10)
        print(f"{ENCODE_OPTION}: Encode")
        print(f"{DECODE_OPTION}: Decode")
        answer = input("Would you like to encode or decode? Option: ").strip()
        if answer in (str(ENCODE_OPTION), str(DECODE_OPTION)):
            return int(answer)
        print("Invalid input.\n")


def interactive() -> int:
    file_name = prompt_file_name()
    option = prompt_option()
    command = "encode" if option == ENCODE_OPTION else "decode"
    return run(command, file_name)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Huffman coding tree compressor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  huffman-tree encode lorem.txt
  huffman-tree decode lorem_encoded.txt -o lorem.txt
  huffman-tree            (interactive menu)
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command")

    for command, help_text in (("encode", "Encode a file"), ("decode", "Decode a file")):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument("file", help="Source file")
        sub.add_argument("-o", "--output", help="Output file")
        sub.add_argument("-v", "--verbose", action="store_true", help="Print details")

    args = parser.parse_args(argv)

    if not args.command:
        try:
            return interactive()
        except (EOFError, KeyboardInterrupt):
            print()
            return 1

    return run(args.command, args.file, args.output, args.verbose)


if __name__ == "__main__":
    sys.exit(main())
