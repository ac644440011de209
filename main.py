import argparse
import logging
import string
import sys

import blocks
import keys
from typing import List, Optional

logger = logging.getLogger(__name__)

# Functions for parsing command line values

def is_hex(value: str) -> bool:
    return all(c in string.hexdigits for c in value)

def parse_secret(value: str) -> int:
    value = value.strip()
    if len(value) != 16:
        raise argparse.ArgumentTypeError("secret must be exactly 16 hex digits")
    if not is_hex(value):
        raise argparse.ArgumentTypeError(f"secret is not hex: {value!r}")
    return int(value, 16)

def parse_cipher_hex(value: str) -> List[int]:
    """
    Turn a hex ciphertext string back into 64-bit blocks.
    """
    value = "".join(value.split())
    if not value or len(value) % 16:
        raise ValueError("ciphertext must be a non-empty multiple of 16 hex digits")
    if not is_hex(value):
        raise ValueError("ciphertext is not hex")
    return [int(value[i:i + 16], 16) for i in range(0, len(value), 16)]

def format_blocks(cipher_blocks: List[int]) -> str:
    return "".join(f"{block:016x}" for block in cipher_blocks)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="des-cli", description="Encrypt and decrypt text with single DES (ECB)")
    parser.add_argument('-v', '--verbose', action='store_true', help="log every block")
    commands = parser.add_subparsers(dest='command', required=True)

    encrypt = commands.add_parser('encrypt', help="encrypt text, print hex ciphertext")
    encrypt.add_argument('-s', '--secret', type=parse_secret, required=True)
    encrypt.add_argument('-i', '--input', required=True)

    decrypt = commands.add_parser('decrypt', help="decrypt hex ciphertext, print text")
    decrypt.add_argument('-s', '--secret', type=parse_secret, required=True)
    decrypt.add_argument('-i', '--input', required=True)

    schedule = commands.add_parser('keys', help="print the 16 round keys")
    schedule.add_argument('-s', '--secret', type=parse_secret, required=True)
    return parser

#
# Run commands
#

def run(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    if args.command == 'encrypt':
        print(format_blocks(blocks.encipher_message(args.input, args.secret)))
    elif args.command == 'decrypt':
        try:
            cipher_blocks = parse_cipher_hex(args.input)
        except ValueError as e:
            parser.error(str(e))
        try:
            plain = blocks.decipher_message(cipher_blocks, args.secret)
        except blocks.InvalidPaddingError as e:
            logger.error("Decryption failed: %s", e)
            return 1
        print(plain.decode("utf-8", errors="replace"))
    elif args.command == 'keys':
        for i, subkey in enumerate(keys.subkeys(args.secret), 1):
            print(f"K{i:<2} {subkey:012x}")
    return 0

def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s [%(levelname)s] %(message)s',
    )
    return run(args, parser)

if __name__ == "__main__":
    sys.exit(main())
