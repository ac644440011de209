#!/usr/bin/env python
# encoding: utf-8

"""
Byte framing for multi-block messages.

Messages are padded so their length is a multiple of 8 bytes (N bytes of
value N, N in 1..8), cut into big-endian 64-bit blocks, and each block is
transformed on its own.
"""

import logging

import des
from typing import List, Union

logger = logging.getLogger(__name__)

BLOCK_SIZE = 8

class InvalidPaddingError(ValueError):
    """
    Raised when the trailing bytes of a deciphered message are not valid padding.
    """

def pad(data: bytes) -> bytes:
    n = BLOCK_SIZE - len(data) % BLOCK_SIZE
    return data + bytes([n]) * n

def unpad(data: bytes) -> bytes:
    """
    Strip the padding added by pad().

    :param data: A padded message, a whole number of blocks long
    :ret: The message without its padding
    """
    if not data or len(data) % BLOCK_SIZE:
        raise InvalidPaddingError(f"padded data must be a non-empty multiple of {BLOCK_SIZE} bytes, got {len(data)}")
    n = data[-1]
    if not 1 <= n <= BLOCK_SIZE:
        raise InvalidPaddingError(f"bad padding length {n}")
    if any(b != n for b in data[-n:]):
        raise InvalidPaddingError(f"the last {n} bytes are not all {n}")
    return data[:-n]

def bytes_to_blocks(data: bytes) -> List[int]:
    """
    Split block-aligned data into 64-bit ints, first byte most significant.
    """
    if len(data) % BLOCK_SIZE:
        raise ValueError(f"data length {len(data)} is not a multiple of {BLOCK_SIZE}")
    return [int.from_bytes(data[i:i + BLOCK_SIZE], "big") for i in range(0, len(data), BLOCK_SIZE)]

def blocks_to_bytes(blocks: List[int]) -> bytes:
    return b"".join(block.to_bytes(BLOCK_SIZE, "big") for block in blocks)

def string_to_blocks(text: str) -> List[int]:
    """
    Encode text as UTF-8, pad it and split it into blocks.
    """
    return bytes_to_blocks(pad(text.encode("utf-8")))

def encipher_message(data: Union[str, bytes], key: Union[int, bytes]) -> List[int]:
    """
    Pad a message and encipher each block independently.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    blocks = bytes_to_blocks(pad(data))
    logger.debug("enciphering %d bytes as %d blocks", len(data), len(blocks))
    return [des.encipher(block, key) for block in blocks]

def decipher_message(blocks: List[int], key: Union[int, bytes]) -> bytes:
    """
    Decipher each block and strip the padding from the result.
    """
    logger.debug("deciphering %d blocks", len(blocks))
    return unpad(blocks_to_bytes([des.decipher(block, key) for block in blocks]))
