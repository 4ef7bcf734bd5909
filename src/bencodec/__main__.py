"""
Dumps a bencoded file as a readable tree.

    python -m bencodec FILE [--max-depth N] [--lenient]
"""
import argparse
import pprint
import sys
from pathlib import Path

from .decoder import decode_all
from .errors import BencodeDecodeError
from .options import DEFAULT_MAX_DEPTH, DecoderOptions, KeyOrder
from .structure import BencodeDict, BencodeList, BencodeString


class HexPrinter:
    def __init__(self, data: bytes):
        self.data = data

    def __repr__(self):
        return f"hex({len(self.data)} bytes):'{self.data.hex()}'"


def to_printable(value):
    """Turns a decoded tree into plain Python objects suited to pprint."""
    if isinstance(value, BencodeString):
        data = value.value
        # printable ASCII is shown as text, anything else as hex
        if all(0x20 <= b <= 0x7e for b in data):
            return data.decode()
        return HexPrinter(data)

    if isinstance(value, BencodeList):
        return [to_printable(x) for x in value]

    if isinstance(value, BencodeDict):
        return {to_printable(BencodeString(k)): to_printable(v) for k, v in value.items()}

    return value.value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bencodec", description="Dump a bencoded file.")
    parser.add_argument("file", type=Path, help="bencoded file to dump")
    parser.add_argument("--max-depth", type=int, default=DEFAULT_MAX_DEPTH,
                        help="maximum container nesting (default: %(default)s)")
    parser.add_argument("--lenient", action="store_true",
                        help="accept dictionaries with unsorted keys")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        options = DecoderOptions(
            max_depth=args.max_depth,
            key_order=KeyOrder.LENIENT if args.lenient else KeyOrder.STRICT,
        )
    except ValueError as e:
        print(f"[Dump] {e}", file=sys.stderr)
        return 2

    try:
        raw = args.file.read_bytes()
    except OSError as e:
        print(f"[Dump] Could not read {args.file}: {e}", file=sys.stderr)
        return 1

    try:
        root = decode_all(raw, options)
    except BencodeDecodeError as e:
        print(f"[Dump] {args.file}: {e}", file=sys.stderr)
        return 1

    pprint.PrettyPrinter(indent=2).pprint(to_printable(root))
    return 0


if __name__ == "__main__":
    sys.exit(main())
