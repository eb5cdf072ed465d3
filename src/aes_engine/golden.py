"""Golden reference AES implementation using PyCryptodome."""

from Crypto.Cipher import AES


def _check_lengths(key: bytes, block: bytes, label: str) -> None:
    if len(key) not in (16, 24, 32):
        raise ValueError(f"Key must be 16, 24 or 32 bytes, got {len(key)}")
    if len(block) != 16:
        raise ValueError(f"{label} must be 16 bytes, got {len(block)}")


def golden_encrypt(key: bytes, plaintext: bytes) -> bytes:
    """Encrypt a single block using PyCryptodome as golden reference.

    Args:
        key: 16, 24 or 32-byte AES key
        plaintext: 16-byte plaintext block

    Returns:
        16-byte ciphertext block

    Raises:
        ValueError: If key or plaintext has the wrong length
    """
    _check_lengths(key, plaintext, "Plaintext")
    cipher = AES.new(key, AES.MODE_ECB)
    return cipher.encrypt(plaintext)


def golden_decrypt(key: bytes, ciphertext: bytes) -> bytes:
    """Decrypt a single block using PyCryptodome as golden reference."""
    _check_lengths(key, ciphertext, "Ciphertext")
    cipher = AES.new(key, AES.MODE_ECB)
    return cipher.decrypt(ciphertext)


def validate_against_golden(
    key: bytes, plaintext: bytes, candidate_ciphertext: bytes
) -> tuple[bool, str]:
    """Validate a candidate ciphertext against the golden reference.

    Returns:
        Tuple of (is_correct, error_detail)
    """
    expected = golden_encrypt(key, plaintext)
    if candidate_ciphertext == expected:
        return True, ""
    else:
        return False, (
            f"Ciphertext mismatch: expected {expected.hex()}, "
            f"got {candidate_ciphertext.hex()}"
        )


# FIPS-197 Appendix B and C test vectors
FIPS_197_TEST_VECTORS = [
    # Appendix B - cipher example
    {
        "name": "FIPS-197 B (AES-128)",
        "key": bytes.fromhex("2b7e151628aed2a6abf7158809cf4f3c"),
        "plaintext": bytes.fromhex("3243f6a8885a308d313198a2e0370734"),
        "ciphertext": bytes.fromhex("3925841d02dc09fbdc118597196a0b32"),
    },
    # Appendix C.1 - AES-128
    {
        "name": "FIPS-197 C.1 (AES-128)",
        "key": bytes.fromhex("000102030405060708090a0b0c0d0e0f"),
        "plaintext": bytes.fromhex("00112233445566778899aabbccddeeff"),
        "ciphertext": bytes.fromhex("69c4e0d86a7b0430d8cdb78070b4c55a"),
    },
    # Appendix C.2 - AES-192
    {
        "name": "FIPS-197 C.2 (AES-192)",
        "key": bytes.fromhex("000102030405060708090a0b0c0d0e0f1011121314151617"),
        "plaintext": bytes.fromhex("00112233445566778899aabbccddeeff"),
        "ciphertext": bytes.fromhex("dda97ca4864cdfe06eaf70a0ec0d7191"),
    },
    # Appendix C.3 - AES-256
    {
        "name": "FIPS-197 C.3 (AES-256)",
        "key": bytes.fromhex(
            "000102030405060708090a0b0c0d0e0f101112131415161718191a1b1c1d1e1f"
        ),
        "plaintext": bytes.fromhex("00112233445566778899aabbccddeeff"),
        "ciphertext": bytes.fromhex("8ea2b7ca516745bfeafc49904b496089"),
    },
]
