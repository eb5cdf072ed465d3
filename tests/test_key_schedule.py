"""
Tests for key expansion, round-key extraction and cipher configuration.

Expansion words are from FIPS-197 Appendix A.
"""

import pytest

from aes_engine.config import CipherConfig, KEY_SIZES
from aes_engine.key_schedule import (
    RCON,
    decrypt_round_key,
    encrypt_round_key,
    expand_key,
    rotate_word_left,
)
from aes_engine.transforms import column_mix
from aes_engine.utils import hex_to_bytes, state_to_hex, state_to_words


KEY_128 = "2b7e151628aed2a6abf7158809cf4f3c"
KEY_192 = "8e73b0f7da0e6452c810f32b809079e562f8ead2522c6b7b"
KEY_256 = "603deb1015ca71be2b73aef0857d77811f352c073b6108d72d9810a30914dff4"

# (key_hex, {word_index: expected_word})
APPENDIX_A = [
    (KEY_128, {
        0: 0x2B7E1516,
        4: 0xA0FAFE17,
        5: 0x88542CB1,
        6: 0x23A33939,
        7: 0x2A6C7605,
        40: 0xD014F9A8,
        41: 0xC9EE2589,
        42: 0xE13F0CC8,
        43: 0xB6630CA6,
    }),
    (KEY_192, {
        5: 0x522C6B7B,
        6: 0xFE0C91F7,
        51: 0x01002202,
    }),
    (KEY_256, {
        7: 0x0914DFF4,
        8: 0x9BA35411,
        59: 0x706C631E,
    }),
]


class TestCipherConfig:
    """Tests for CipherConfig validation and helpers."""

    @pytest.mark.parametrize("bits,nk,nr", [(128, 4, 10), (192, 6, 12), (256, 8, 14)])
    def test_for_key_bits(self, bits, nk, nr):
        config = CipherConfig.for_key_bits(bits)
        assert (config.nk, config.nr) == (nk, nr)
        assert config.key_bits == bits
        assert config.key_bytes == bits // 8
        assert config.schedule_words == 4 * (nr + 1)

    def test_default_is_aes256(self):
        config = CipherConfig()
        assert (config.nk, config.nr) == KEY_SIZES[256]

    def test_mismatched_rounds_rejected(self):
        with pytest.raises(ValueError, match="nr must equal nk \\+ 6"):
            CipherConfig(nk=4, nr=14)

    def test_unsupported_nk_rejected(self):
        with pytest.raises(ValueError, match="nk must be 4, 6, or 8"):
            CipherConfig(nk=5, nr=11)

    def test_unsupported_key_bits_rejected(self):
        with pytest.raises(ValueError, match="Unsupported key size"):
            CipherConfig.for_key_bits(160)

    def test_for_key(self):
        assert CipherConfig.for_key(bytes(24)).nk == 6

    def test_validate_key_length(self):
        with pytest.raises(ValueError, match="Key must be 32 bytes"):
            CipherConfig().validate_key(bytes(16))


class TestExpandKey:
    """Tests for expand_key."""

    @pytest.mark.parametrize("key_hex,expected", APPENDIX_A)
    def test_appendix_a_words(self, key_hex, expected):
        schedule = expand_key(hex_to_bytes(key_hex))
        for index, word in expected.items():
            assert schedule[index] == word, f"w[{index}] = {schedule[index]:08x}"

    @pytest.mark.parametrize("bits", sorted(KEY_SIZES))
    def test_schedule_length(self, bits):
        config = CipherConfig.for_key_bits(bits)
        schedule = expand_key(bytes(config.key_bytes), config)
        assert len(schedule) == config.schedule_words
        assert all(0 <= w <= 0xFFFFFFFF for w in schedule)

    def test_schedule_is_immutable(self):
        schedule = expand_key(hex_to_bytes(KEY_128))
        assert isinstance(schedule, tuple)

    def test_key_length_must_match_config(self):
        with pytest.raises(ValueError, match="Key must be 16 bytes"):
            expand_key(bytes(32), CipherConfig.for_key_bits(128))

    def test_rotate_word_left(self):
        assert rotate_word_left(0x09CF4F3C) == 0xCF4F3C09
        assert rotate_word_left(0xFF000000) == 0x000000FF

    def test_round_constants(self):
        assert RCON[1:11] == (0x01, 0x02, 0x04, 0x08, 0x10, 0x20, 0x40, 0x80, 0x1B, 0x36)


class TestRoundKeyExtraction:
    """Tests for encrypt_round_key and decrypt_round_key."""

    def test_encrypt_round_key_window(self):
        schedule = expand_key(hex_to_bytes(KEY_128))
        assert state_to_hex(encrypt_round_key(schedule, 0)) == KEY_128
        assert state_to_hex(encrypt_round_key(schedule, 1)) == "a0fafe1788542cb123a339392a6c7605"
        assert state_to_words(encrypt_round_key(schedule, 10)) == list(schedule[40:44])

    @pytest.mark.parametrize("key_hex", [KEY_128, KEY_192, KEY_256])
    def test_decrypt_keys_equivalent_inverse(self, key_hex):
        """Intermediate decrypt keys are InvMixColumns of the encrypt keys."""
        key = hex_to_bytes(key_hex)
        config = CipherConfig.for_key(key)
        schedule = expand_key(key, config)

        for r in range(1, config.nr):
            assert column_mix(decrypt_round_key(schedule, r)) == encrypt_round_key(schedule, r)

    @pytest.mark.parametrize("key_hex", [KEY_128, KEY_192, KEY_256])
    def test_decrypt_keys_unmodified_at_ends(self, key_hex):
        key = hex_to_bytes(key_hex)
        config = CipherConfig.for_key(key)
        schedule = expand_key(key, config)

        assert decrypt_round_key(schedule, 0) == encrypt_round_key(schedule, 0)
        assert decrypt_round_key(schedule, config.nr) == encrypt_round_key(schedule, config.nr)

    def test_out_of_range_round_rejected(self):
        schedule = expand_key(hex_to_bytes(KEY_128))
        with pytest.raises(ValueError, match="Round must be in 0..10"):
            encrypt_round_key(schedule, 11)
        with pytest.raises(ValueError):
            decrypt_round_key(schedule, -1)
