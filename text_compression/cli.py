"""
Command line front end for the LZ78 and Huffman coders
"""
import argparse
import json
import logging
import sys
from typing import Optional

from text_compression.compressor_ABC import ENCODING
from text_compression.errors import CompressionError
from text_compression.huffman_coding import build_huffman
from text_compression.lz78_compressor import LZ78Compressor

logger = logging.getLogger(__name__)

SYMBOL_NAMES = {" ": "space", "\n": "\\n", "\t": "\\t", "\r": "\\r"}


def display_symbol(symbol: str) -> str:
    return SYMBOL_NAMES.get(symbol, symbol)


def print_dictionary(dictionary: list[dict]):
    print(f"{'Index':>8}  String")
    print("-" * 40)
    for row in dictionary:
        print(f"{row['index']:>8}  {row['string']!r}")


def print_statistics(stats: dict):
    for key, value in stats.items():
        print(f"  {key.replace('_', ' ').capitalize():<24} {value}")


def run_compress(args) -> int:
    output_path, compressor = LZ78Compressor.compress_file(
        args.input, args.output, deduplicate_dictionary=args.deduplicate
    )
    print(f"Compressed {args.input} -> {output_path}")
    print_statistics(compressor.get_statistics())
    if args.show_dictionary:
        print_dictionary(compressor.get_dictionary())
    return 0


def run_decompress(args) -> int:
    output_path, compressor = LZ78Compressor.decompress_file(
        args.input, args.output, deduplicate_dictionary=args.deduplicate
    )
    print(f"Decompressed {args.input} -> {output_path}")
    print_statistics(compressor.get_decompression_statistics())
    if args.show_dictionary:
        print_dictionary(compressor.get_dictionary())
    return 0


def run_huffman(args) -> int:
    if args.file:
        with open(args.file, "r", encoding=ENCODING, newline="") as f:
            text = f.read()
    else:
        text = args.text

    result = build_huffman(text)

    print(f"{'Symbol':<8} {'Probability':>11} {'Code':>16} {'Avg length':>11} {'Entropy':>9}")
    print("-" * 59)
    for row in result.rows:
        print(
            f"{display_symbol(row.symbol):<8} {row.probability:>11.3f} "
            f"{row.code:>16} {row.average_length:>11.3f} {row.entropy:>9.3f}"
        )
    print("-" * 59)
    print(f"Average length: {result.average_length:.3f}")
    print(f"Entropy:        {result.entropy:.3f}")
    print(f"Efficiency:     {result.efficiency:.2f}%")

    if args.report:
        with open(args.report, "w", encoding=ENCODING) as f:
            json.dump(result.to_dict(), f, ensure_ascii=False, indent=2)
        print(f"Report written to {args.report}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="text-compression",
        description="LZ78 and Huffman text coders",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  text-compression compress input.txt -o input.lz78
  text-compression decompress input.lz78 -o restored.txt --show-dictionary
  text-compression huffman "codigo oso"
  text-compression huffman --file input.txt --report codes.json
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command")

    for name, help_text in (("compress", "Compress a text file with LZ78"),
                            ("decompress", "Decompress a .lz78 file")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("input", help="Input file")
        sub.add_argument("-o", "--output", help="Output file")
        sub.add_argument("--show-dictionary", action="store_true", help="Print the LZ78 dictionary")
        sub.add_argument(
            "--deduplicate", action="store_true",
            help="Display the dictionary without repeated strings",
        )

    huffman_parser = subparsers.add_parser("huffman", help="Huffman codes and metrics of a text")
    source = huffman_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("text", nargs="?", help="Text to analyse")
    source.add_argument("-f", "--file", help="Read the text from a file")
    huffman_parser.add_argument("--report", help="Write a JSON report to this path")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        "compress": run_compress,
        "decompress": run_decompress,
        "huffman": run_huffman,
    }

    try:
        return commands[args.command](args)
    except (CompressionError, OSError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
