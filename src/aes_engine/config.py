"""Cipher configuration: key length and round count."""

from __future__ import annotations

from dataclasses import dataclass

# Block size in 32-bit words (fixed for AES)
NB = 4

# key size in bits -> (Nk, Nr)
KEY_SIZES: dict[int, tuple[int, int]] = {
    128: (4, 10),
    192: (6, 12),
    256: (8, 14),
}


@dataclass(frozen=True)
class CipherConfig:
    """Key-length parameters shared by the key schedule and both engines.

    An engine is built against one config; a key of any other length is
    rejected when it is latched.
    """

    # Key length in 32-bit words
    nk: int = 8

    # Number of rounds
    nr: int = 14

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.nk not in (4, 6, 8):
            raise ValueError(f"nk must be 4, 6, or 8, got {self.nk}")
        if self.nr != self.nk + 6:
            raise ValueError(
                f"nr must equal nk + 6 ({self.nk + 6} for nk={self.nk}), got {self.nr}"
            )

    @classmethod
    def for_key_bits(cls, bits: int) -> CipherConfig:
        """Build the config for a 128, 192 or 256-bit key."""
        if bits not in KEY_SIZES:
            available = ", ".join(str(b) for b in KEY_SIZES)
            raise ValueError(f"Unsupported key size {bits}. Available: {available}")
        nk, nr = KEY_SIZES[bits]
        return cls(nk=nk, nr=nr)

    @classmethod
    def for_key(cls, key: bytes) -> CipherConfig:
        """Build the config matching the length of a raw key."""
        return cls.for_key_bits(len(key) * 8)

    @property
    def key_bytes(self) -> int:
        """Key length in bytes."""
        return 4 * self.nk

    @property
    def key_bits(self) -> int:
        """Key length in bits."""
        return 32 * self.nk

    @property
    def schedule_words(self) -> int:
        """Number of words in the expanded key: Nb * (Nr + 1)."""
        return NB * (self.nr + 1)

    def validate_key(self, key: bytes) -> None:
        """Check that a raw key matches this configuration."""
        if len(key) != self.key_bytes:
            raise ValueError(
                f"Key must be {self.key_bytes} bytes for AES-{self.key_bits}, got {len(key)}"
            )
