#!/usr/bin/env python
# encoding: utf-8

"""
The DES Feistel network: round function, block driver and the public
encipher/decipher pair.
"""

import logging

from tables import IP, E, P, S, S_BIT_MASK
from keys import round_keys
from typing import Iterable, Tuple, Union

logger = logging.getLogger(__name__)

BLOCK_MASK = (1 << 64) - 1
HALF_BLOCK_MASK = 0xffffffff

def get_i6(block: int, i: int) -> int:
    """
    Extract the i'th 6-bit chunk from a 48-bit block

    :param block: A 48-bit block of data
    :param i: The index of 6-bit chunk from MSB to LSB
    :ret: A 6-bit chunk from block
    """
    return (block >> (42 - i * 6)) & S_BIT_MASK

def split_block(block: int) -> Tuple[int, int]:
    """
    Split a 64-bit block into a pair of 32-bit halves (left, right).
    """
    return block >> 32, block & HALF_BLOCK_MASK

def join_block(left: int, right: int) -> int:
    """
    Join a pair of 32-bit halves back into a 64-bit block.
    """
    return (left << 32) | right

def f(block: int, key: int) -> int:
    """
    Implements the DES mangler function

    The 32-bit half is expanded to 48 bits and mixed with the round key.
    Each 6-bit chunk goes through its S-box; S1's output lands in the most
    significant nibble. The 32 substituted bits are then permuted by P.
    """
    block = E(block) ^ key
    ret = 0
    for i in range(8):
        ret = ret << 4 | S(get_i6(block, i), i)
    return P(ret)

def feistel_round(left: int, right: int, subkey: int) -> Tuple[int, int]:
    """
    Perform a single Feistel round of DES on 32-bit halves.
    """
    new_left = right
    new_right = left ^ f(right, subkey)
    return new_left, new_right

def encode_block_rounds(block: int, derived_keys: Iterable[int], encryption: bool, rounds: int = 16) -> int:
    """
    Encode a 64-bit block using a configurable number of DES rounds.

    The initial permutation, the closing half swap and the final
    permutation are always applied, so rounds=16 is plain DES and smaller
    values give reduced-round variants for analysis.

    Parameters
    ----------
    block : int
        The 64-bit plaintext (when encryption is True) or ciphertext
        (when encryption is False).
    derived_keys : iterable
        A sequence or generator of the 16 DES round subkeys, in round order.
    encryption : bool
        True for encryption, False for decryption.
    rounds : int
        How many rounds of the Feistel structure to apply. Values outside
        1..len(derived_keys) are clamped.

    Returns
    -------
    int
        The 64-bit block after applying the chosen number of rounds.
    """
    keys_list = list(derived_keys)
    if not keys_list:
        raise ValueError("derived_keys must contain at least one subkey")

    rounds = max(1, min(rounds, len(keys_list)))
    last = len(keys_list) - 1

    left, right = split_block(IP(block))

    for i in range(rounds):
        # Decryption walks the schedule backwards
        subkey = keys_list[i] if encryption else keys_list[last - i]
        left, right = feistel_round(left, right, subkey)

    # The last round's swap is undone before the final permutation.
    return IP(join_block(right, left), invert=True)

def encode_block(block: int, derived_keys: Iterable[int], encryption: bool) -> int:
    """
    Run the full 16-round network over one block.
    """
    return encode_block_rounds(block, derived_keys, encryption)

def check_block(block: int) -> int:
    if not 0 <= block <= BLOCK_MASK:
        raise ValueError(f"block does not fit in 64 bits: {block:#x}")
    return block

def encipher(plain_block: int, secret_key: Union[int, bytes]) -> int:
    """
    Encipher a 64-bit block under a 64-bit secret key.
    """
    cipher_block = encode_block(check_block(plain_block), round_keys(secret_key), True)
    logger.debug("encipher %016x -> %016x", plain_block, cipher_block)
    return cipher_block

def decipher(cipher_block: int, secret_key: Union[int, bytes]) -> int:
    """
    Decipher a 64-bit block under a 64-bit secret key.
    """
    plain_block = encode_block(check_block(cipher_block), round_keys(secret_key), False)
    logger.debug("decipher %016x -> %016x", cipher_block, plain_block)
    return plain_block
