"""
Decrypt engine (equivalent inverse cipher).

The schedule is expanded forward at the latch and walked backwards: the
round counter r selects schedule position Nr - r.

Tick schedule (AES-256, Nr = 14):
- Tick 0:     latch; expand key; state = ciphertext
- Tick 1:     AddRoundKey(w[56..59])
- Ticks 2-14: InvShiftRows, InvSubBytes, InvMixColumns,
              AddRoundKey(InvMixColumns(w[4(Nr-r)..]))
- Tick 15:    InvShiftRows, InvSubBytes, AddRoundKey(w[0..3]) -> data_out

Total: Nr + 2 ticks including the latch.
"""

from __future__ import annotations

from .config import CipherConfig
from .engine import RoundEngine, RoundProgram, run_operation
from .key_schedule import decrypt_round_key
from .trace import TraceRecorder
from .transforms import (
    inv_byte_sub,
    inv_column_mix,
    round_key_add,
    row_shift_inverse,
)


def _middle_round(state, round_key):
    return round_key_add(inv_column_mix(inv_byte_sub(row_shift_inverse(state))), round_key)


def _final_round(state, round_key):
    return round_key_add(inv_byte_sub(row_shift_inverse(state)), round_key)


DECRYPT_PROGRAM = RoundProgram(
    name="decrypt",
    initial_at_latch=False,
    initial_round=round_key_add,
    middle_round=_middle_round,
    final_round=_final_round,
    round_key=decrypt_round_key,
    key_index=lambda nr, round_num: nr - round_num,
)


class DecryptEngine(RoundEngine):
    """Iterative AES decryption, one round per tick."""

    program = DECRYPT_PROGRAM


def decrypt_block(
    key: bytes,
    ciphertext: bytes,
    tracer: TraceRecorder | None = None,
) -> tuple[bytes, int]:
    """
    Convenience function to decrypt one block on a fresh engine.

    Returns:
        Tuple of (plaintext, ticks)
    """
    engine = DecryptEngine(CipherConfig.for_key(key), tracer=tracer)
    return run_operation(engine, key, ciphertext)
