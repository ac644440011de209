import random

from tables import E, FP_TABLE, IP, IP_TABLE, P, S, S_BOXES, permute


def test_permute_selects_one_indexed_bits_from_msb():
    # Bit 1 is the most significant bit of the input field
    assert permute(0b1000, [1], 4) == 1
    assert permute(0b0001, [4], 4) == 1
    assert permute(0b1000, [4], 4) == 0
    assert permute(0b1010, [4, 3, 2, 1], 4) == 0b0101


def test_permute_can_widen():
    # Repeated positions duplicate bits
    assert permute(0b10, [1, 1, 2], 2) == 0b110


def test_initial_permutation_known_value():
    assert IP(0x0123456789ABCDEF) == 0xCC00CCFFF0AAF0AA


def test_final_permutation_inverts_initial():
    rng = random.Random(46)
    for _ in range(200):
        block = rng.getrandbits(64)
        assert IP(IP(block), invert=True) == block
        assert IP(IP(block, invert=True)) == block


def test_fp_table_is_inverse_of_ip_table():
    for i, pos in enumerate(IP_TABLE, 1):
        assert FP_TABLE[pos - 1] == i


def test_expansion_known_value():
    assert E(0xF0AAF0AA) == 0x7A15557A1555


def test_expansion_duplicates_edge_bits():
    # Bit 32 feeds output bits 1 and 47, bit 1 feeds outputs 2 and 48
    assert E(0x00000001) == (1 << 47) | (1 << 1)
    assert E(0x80000000) == (1 << 46) | 1


def test_p_permutation_known_value():
    assert P(0x5C82B597) == 0x234AA9BB


def test_p_permutation_is_bijective():
    seen = {P(1 << i) for i in range(32)}
    assert len(seen) == 32
    assert all(bin(v).count("1") == 1 for v in seen)


def test_sbox_row_uses_outer_bits_and_column_inner_bits():
    # 011000: row 00, column 1100
    assert S(0b011000, 0) == S_BOXES[0][0][12] == 5
    # 100001: row 11, column 0000
    assert S(0b100001, 0) == S_BOXES[0][3][0] == 15
    # 111111 in S8: row 3, column 15
    assert S(0b111111, 7) == 11


def test_sbox_rows_are_permutations_of_nibbles():
    for box in S_BOXES:
        assert len(box) == 4
        for row in box:
            assert sorted(row) == list(range(16))
