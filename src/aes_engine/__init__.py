"""
Iterative AES round engine.

Encrypt and decrypt state machines that re-derive the key schedule at
every latch and run one AES round per clock tick, for 128, 192 and
256-bit keys.
"""

__version__ = "1.0.0"

# Default AES-256 test values from FIPS-197 Appendix C.3
DEFAULT_KEY_HEX = "000102030405060708090a0b0c0d0e0f101112131415161718191a1b1c1d1e1f"
DEFAULT_PT_HEX = "00112233445566778899aabbccddeeff"
DEFAULT_CT_HEX = "8ea2b7ca516745bfeafc49904b496089"

from .config import CipherConfig, KEY_SIZES
from .engine import Phase, Registers, RoundEngine, run_operation
from .encrypt import EncryptEngine, encrypt_block
from .decrypt import DecryptEngine, decrypt_block

__all__ = [
    "CipherConfig",
    "KEY_SIZES",
    "Phase",
    "Registers",
    "RoundEngine",
    "run_operation",
    "EncryptEngine",
    "DecryptEngine",
    "encrypt_block",
    "decrypt_block",
]
