"""Tests for the golden reference AES implementation."""

import secrets

import pytest
from Crypto.Cipher import AES

from aes_engine.golden import (
    FIPS_197_TEST_VECTORS,
    golden_decrypt,
    golden_encrypt,
    validate_against_golden,
)


class TestGoldenEncrypt:
    """Tests for golden_encrypt and golden_decrypt."""

    @pytest.mark.parametrize("vec", FIPS_197_TEST_VECTORS, ids=lambda v: v["name"])
    def test_fips_197_vectors(self, vec: dict) -> None:
        assert golden_encrypt(vec["key"], vec["plaintext"]) == vec["ciphertext"]
        assert golden_decrypt(vec["key"], vec["ciphertext"]) == vec["plaintext"]

    def test_invalid_key_length(self) -> None:
        with pytest.raises(ValueError, match="Key must be 16, 24 or 32 bytes"):
            golden_encrypt(bytes(20), bytes(16))

    def test_invalid_block_length(self) -> None:
        with pytest.raises(ValueError, match="Plaintext must be 16 bytes"):
            golden_encrypt(bytes(16), bytes(15))
        with pytest.raises(ValueError, match="Ciphertext must be 16 bytes"):
            golden_decrypt(bytes(16), bytes(17))

    @pytest.mark.parametrize("key_len", [16, 24, 32])
    def test_matches_pycryptodome_directly(self, key_len: int) -> None:
        key = secrets.token_bytes(key_len)
        plaintext = secrets.token_bytes(16)
        cipher = AES.new(key, AES.MODE_ECB)
        assert golden_encrypt(key, plaintext) == cipher.encrypt(plaintext)


class TestValidateAgainstGolden:
    """Tests for validate_against_golden."""

    def test_correct_ciphertext_passes(self) -> None:
        vec = FIPS_197_TEST_VECTORS[-1]
        is_correct, error = validate_against_golden(vec["key"], vec["plaintext"], vec["ciphertext"])
        assert is_correct is True
        assert error == ""

    def test_single_bit_difference_fails(self) -> None:
        vec = FIPS_197_TEST_VECTORS[-1]
        wrong = bytearray(vec["ciphertext"])
        wrong[0] ^= 0x01

        is_correct, error = validate_against_golden(vec["key"], vec["plaintext"], bytes(wrong))

        assert is_correct is False
        assert "mismatch" in error.lower()
