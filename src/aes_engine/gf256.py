"""
GF(2^8) arithmetic for the AES column mixing.

Elements are bytes; the field is GF(2)[x] / (x^8 + x^4 + x^3 + x + 1).

Only the seven constants that appear in MixColumns and InvMixColumns are
supported. Each one is expanded into shifted copies of the operand (at
most x^3, so the unreduced product fits in 11 bits) and the overflow bits
are folded back from bit 10 down to bit 8.
"""

# x^8 + x^4 + x^3 + x + 1
IRREDUCIBLE_POLY = 0x11B

# constant -> left shifts whose XOR gives constant * b
_SHIFT_DECOMPOSITION: dict[int, tuple[int, ...]] = {
    0x01: (0,),
    0x02: (1,),
    0x03: (1, 0),
    0x09: (3, 0),
    0x0B: (3, 1, 0),
    0x0D: (3, 2, 0),
    0x0E: (3, 2, 1),
}

MIX_CONSTANTS = tuple(sorted(_SHIFT_DECOMPOSITION))


def _reduce(product: int) -> int:
    """Fold an 11-bit carry-less product back into a byte."""
    for bit in (10, 9, 8):
        if product & (1 << bit):
            product ^= IRREDUCIBLE_POLY << (bit - 8)
    return product


def gf_multiply(constant: int, value: int) -> int:
    """
    Multiply a byte by one of the MixColumns constants in GF(2^8).

    Args:
        constant: One of 0x01, 0x02, 0x03, 0x09, 0x0B, 0x0D, 0x0E
        value: Byte to multiply (0-255)

    Returns:
        Product as a byte
    """
    shifts = _SHIFT_DECOMPOSITION.get(constant)
    if shifts is None:
        raise ValueError(
            f"Unsupported GF(2^8) constant 0x{constant:02x}; "
            f"expected one of {', '.join(f'0x{c:02x}' for c in MIX_CONSTANTS)}"
        )

    if not 0 <= value <= 0xFF:
        raise ValueError(f"Value must be a byte (0-255), got {value}")
    product = 0
    for shift in shifts:
        product ^= value << shift
    return _reduce(product)
