#!/usr/bin/env python
# encoding: utf-8

"""
DES key schedule.

The 64-bit secret key is reduced to two 28-bit halves (C, D) by permuted
choice 1. Each round rotates both halves left and emits a 48-bit round key
through permuted choice 2.
"""

from tables import PC1_C_TABLE, PC1_D_TABLE, PC2_TABLE, SHIFTS, permute
from typing import List, Tuple, Union

HALF_MASK = 0xfffffff
ROUNDS = len(SHIFTS)

def key_to_int(key: Union[int, bytes]) -> int:
    """
    Normalise a secret key given as an int or as 8 big-endian bytes.
    """
    if isinstance(key, (bytes, bytearray)):
        if len(key) != 8:
            raise ValueError(f"DES keys are 8 bytes, got {len(key)}")
        return int.from_bytes(key, "big")
    if not 0 <= key < 1 << 64:
        raise ValueError(f"key does not fit in 64 bits: {key:#x}")
    return key

def rotate_left(half: int, n: int) -> int:
    """
    Circular left rotation within a 28-bit field.
    """
    return (half << n | half >> (28 - n)) & HALF_MASK

def permuted_choice_1(key: int) -> Tuple[int, int]:
    """
    Split a 64-bit key into the 28-bit halves (C, D), dropping the parity bits.
    """
    return permute(key, PC1_C_TABLE, 64), permute(key, PC1_D_TABLE, 64)

def permuted_choice_2(c: int, d: int) -> int:
    """
    Select the 48-bit round key from the concatenated 56-bit (C, D).
    """
    return permute(c << 28 | d, PC2_TABLE, 56)

class KeySchedule:
    """
    Single-pass iterator over the 16 round keys of a secret key.

    Every call to next() rotates C and D by the round's shift amount and
    returns the round key. After the 16th key the schedule is exhausted and
    stays that way; build a new one from the same key to start over.
    """

    def __init__(self, key: Union[int, bytes]):
        self.c, self.d = permuted_choice_1(key_to_int(key))
        self.round = 0

    def __iter__(self):
        return self

    def __next__(self) -> int:
        if self.round >= ROUNDS:
            raise StopIteration
        shift = SHIFTS[self.round]
        self.c = rotate_left(self.c, shift)
        self.d = rotate_left(self.d, shift)
        self.round += 1
        return permuted_choice_2(self.c, self.d)

def subkeys(key: Union[int, bytes]) -> KeySchedule:
    """
    Derive the DES round subkeys lazily, in round order.
    """
    return KeySchedule(key)

def round_keys(key: Union[int, bytes]) -> List[int]:
    """
    Materialise all 16 round keys so they can be indexed by round.
    """
    return list(subkeys(key))
