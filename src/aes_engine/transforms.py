"""
AES round transforms on a 4x4 column-major state.

Every function returns a new state and leaves its arguments untouched.

Forward round:  byte_sub -> row_shift_forward -> column_mix -> round_key_add
Inverse round:  row_shift_inverse -> inv_byte_sub -> ... -> inv_column_mix
"""

from .gf256 import gf_multiply
from .sbox import sub_byte, inv_sub_byte


# Circulant rows of the MixColumns matrices
MIX_MATRIX = (0x02, 0x03, 0x01, 0x01)
INV_MIX_MATRIX = (0x0E, 0x0B, 0x0D, 0x09)


def byte_sub(state: list[list[int]]) -> list[list[int]]:
    """Apply the S-box to every byte."""
    return [[sub_byte(state[row][col]) for col in range(4)] for row in range(4)]


def inv_byte_sub(state: list[list[int]]) -> list[list[int]]:
    """Apply the inverse S-box to every byte."""
    return [[inv_sub_byte(state[row][col]) for col in range(4)] for row in range(4)]


def row_shift_forward(state: list[list[int]]) -> list[list[int]]:
    """
    Rotate row r left by r byte positions.

      row 0: no shift
      row 1: left by 1
      row 2: left by 2
      row 3: left by 3
    """
    return [[state[row][(col + row) % 4] for col in range(4)] for row in range(4)]


def row_shift_inverse(state: list[list[int]]) -> list[list[int]]:
    """Rotate row r right by r byte positions."""
    return [[state[row][(col - row) % 4] for col in range(4)] for row in range(4)]


def _mix(state: list[list[int]], matrix: tuple[int, ...]) -> list[list[int]]:
    result = [[0 for _ in range(4)] for _ in range(4)]
    for col in range(4):
        column = [state[row][col] for row in range(4)]
        for row in range(4):
            acc = 0
            for k in range(4):
                acc ^= gf_multiply(matrix[(k - row) % 4], column[k])
            result[row][col] = acc
    return result


def column_mix(state: list[list[int]]) -> list[list[int]]:
    """
    MixColumns: multiply each column by {02,03,01,01} modulo x^4 + 1.
    """
    return _mix(state, MIX_MATRIX)


def inv_column_mix(state: list[list[int]]) -> list[list[int]]:
    """
    InvMixColumns: multiply each column by {0E,0B,0D,09} modulo x^4 + 1.
    """
    return _mix(state, INV_MIX_MATRIX)


def round_key_add(state: list[list[int]], round_key: list[list[int]]) -> list[list[int]]:
    """XOR the state with a round key. Self-inverse."""
    return [[state[row][col] ^ round_key[row][col] for col in range(4)] for row in range(4)]
