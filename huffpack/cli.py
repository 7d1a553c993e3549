import argparse
import logging
import os
import sys

from huffpack.huffman_compressor import HuffmanCompressor


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='huffpack', description='Huffman file compression')
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument('-c', dest='mode', action='store_const', const='compress',
                      help='compress INPUT into OUTPUT')
    mode.add_argument('-d', dest='mode', action='store_const', const='decompress',
                      help='decompress INPUT into OUTPUT')
    parser.add_argument('input')
    parser.add_argument('output')
    parser.add_argument('-v', '--verbose', action='store_true', help='show debug output')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(message)s'
    )

    try:
        if args.mode == 'compress':
            info = HuffmanCompressor.compress_file(args.input, args.output)
            print("File compressed successfully.")
        else:
            info = HuffmanCompressor.decompress_file(args.input, args.output)
            print("File decompressed successfully.")
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(info)
    original_size = os.path.getsize(args.input) if args.mode == 'compress' else 0
    if original_size:
        ratio = (1 - os.path.getsize(args.output) / original_size) * 100
        print(f"Compression ratio: {ratio:.2f}%")
    return 0


if __name__ == '__main__':
    sys.exit(main())
