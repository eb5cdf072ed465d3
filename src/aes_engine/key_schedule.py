"""
AES key expansion and round-key extraction.

The schedule is a tuple of Nb * (Nr + 1) big-endian 32-bit words. Round
keys are 4x4 states sliced from four consecutive words.

Decryption round keys follow the equivalent inverse cipher (FIPS-197
section 5.3.5): the intermediate keys are passed through InvMixColumns so
that the decrypt round can apply InvMixColumns before AddRoundKey, in the
same shape as the encrypt round.
"""

from __future__ import annotations

from .config import NB, CipherConfig
from .sbox import sub_word
from .transforms import inv_column_mix
from .utils import bytes_to_words, words_to_state

# Powers of x in GF(2^8). Indexed from 1; slot 0 is never read.
RCON = (
    0x00,
    0x01, 0x02, 0x04, 0x08, 0x10, 0x20, 0x40,
    0x80, 0x1B, 0x36, 0x6C, 0xD8, 0xAB, 0x4D,
)


def rotate_word_left(word: int) -> int:
    """Rotate a 32-bit word left by one byte."""
    return ((word << 8) | (word >> 24)) & 0xFFFFFFFF


def expand_key(key: bytes, config: CipherConfig | None = None) -> tuple[int, ...]:
    """
    Expand a raw key into the full word schedule.

    Args:
        key: 16, 24 or 32-byte key
        config: Key-length parameters; derived from the key when omitted

    Returns:
        Tuple of Nb * (Nr + 1) 32-bit words
    """
    if config is None:
        config = CipherConfig.for_key(key)
    config.validate_key(key)

    nk = config.nk
    w = bytes_to_words(key)

    for i in range(nk, config.schedule_words):
        temp = w[i - 1]
        if i % nk == 0:
            temp = sub_word(rotate_word_left(temp)) ^ (RCON[i // nk] << 24)
        elif nk > 6 and i % nk == 4:
            temp = sub_word(temp)
        w.append(w[i - nk] ^ temp)

    return tuple(w)


def _window(schedule, round_num: int) -> list[int]:
    last_round = len(schedule) // NB - 1
    if not 0 <= round_num <= last_round:
        raise ValueError(f"Round must be in 0..{last_round}, got {round_num}")
    return list(schedule[round_num * NB:(round_num + 1) * NB])


def encrypt_round_key(schedule, round_num: int) -> list[list[int]]:
    """
    Round key for encryption round `round_num`.

    Words w[4r] .. w[4r+3], first word in column 0.
    """
    return words_to_state(_window(schedule, round_num))


def decrypt_round_key(schedule, round_num: int) -> list[list[int]]:
    """
    Equivalent-inverse-cipher round key at schedule position `round_num`.

    Positions 0 and Nr are the bare key additions at either end of the
    decryption and are returned unmodified; every intermediate position
    is passed through InvMixColumns.
    """
    words = _window(schedule, round_num)
    key = words_to_state(words)
    last_round = len(schedule) // NB - 1
    if 0 < round_num < last_round:
        key = inv_column_mix(key)
    return key
