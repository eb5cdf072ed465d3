"""
Encrypt engine.

Tick schedule (AES-256, Nr = 14):
- Tick 0:     latch; expand key; state = plaintext XOR key[0:16]
- Ticks 1-13: SubBytes, ShiftRows, MixColumns, AddRoundKey(round)
- Tick 14:    SubBytes, ShiftRows, AddRoundKey(14) -> data_out, busy drops

Total: Nr + 1 ticks including the latch.
"""

from __future__ import annotations

from .config import CipherConfig
from .engine import RoundEngine, RoundProgram, run_operation
from .key_schedule import encrypt_round_key
from .trace import TraceRecorder
from .transforms import (
    byte_sub,
    column_mix,
    round_key_add,
    row_shift_forward,
)


def _middle_round(state, round_key):
    return round_key_add(column_mix(row_shift_forward(byte_sub(state))), round_key)


def _final_round(state, round_key):
    return round_key_add(row_shift_forward(byte_sub(state)), round_key)


ENCRYPT_PROGRAM = RoundProgram(
    name="encrypt",
    initial_at_latch=True,
    initial_round=round_key_add,
    middle_round=_middle_round,
    final_round=_final_round,
    round_key=encrypt_round_key,
    key_index=lambda nr, round_num: round_num,
)


class EncryptEngine(RoundEngine):
    """Iterative AES encryption, one round per tick."""

    program = ENCRYPT_PROGRAM


def encrypt_block(
    key: bytes,
    plaintext: bytes,
    tracer: TraceRecorder | None = None,
) -> tuple[bytes, int]:
    """
    Convenience function to encrypt one block on a fresh engine.

    Args:
        key: 16, 24 or 32-byte key
        plaintext: 16-byte plaintext
        tracer: Optional trace recorder

    Returns:
        Tuple of (ciphertext, ticks)
    """
    engine = EncryptEngine(CipherConfig.for_key(key), tracer=tracer)
    return run_operation(engine, key, plaintext)
