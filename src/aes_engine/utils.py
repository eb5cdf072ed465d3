"""
Utility functions for byte/state/word conversions and hex formatting.

AES state is 4x4 bytes in column-major order:
  state[row][col] where row, col in [0..3]

Column-major mapping from 16-byte array:
  byte[0]  -> state[0][0]
  byte[1]  -> state[1][0]
  byte[2]  -> state[2][0]
  byte[3]  -> state[3][0]
  byte[4]  -> state[0][1]
  ...
  byte[15] -> state[3][3]

Each column is one 32-bit word, most-significant byte in row 0.
"""


def bytes_to_state(data: bytes) -> list[list[int]]:
    """
    Convert 16 bytes to 4x4 AES state (column-major).

    Args:
        data: 16 bytes of input

    Returns:
        4x4 list of integers (0-255)
    """
    if len(data) != 16:
        raise ValueError(f"Expected 16 bytes, got {len(data)}")

    state = [[0 for _ in range(4)] for _ in range(4)]
    for col in range(4):
        for row in range(4):
            state[row][col] = data[col * 4 + row]
    return state


def state_to_bytes(state: list[list[int]]) -> bytes:
    """
    Convert 4x4 AES state to 16 bytes (column-major).
    """
    result = []
    for col in range(4):
        for row in range(4):
            result.append(state[row][col])
    return bytes(result)


def bytes_to_words(data: bytes) -> list[int]:
    """
    Split a byte string into big-endian 32-bit words.

    Args:
        data: bytes, length a multiple of 4

    Returns:
        List of len(data) // 4 integers
    """
    if len(data) % 4 != 0:
        raise ValueError(f"Length must be a multiple of 4, got {len(data)}")
    return [int.from_bytes(data[i:i + 4], "big") for i in range(0, len(data), 4)]


def words_to_state(words) -> list[list[int]]:
    """
    Build a state from four 32-bit words, one word per column.

    Args:
        words: Sequence of exactly 4 integers

    Returns:
        4x4 state
    """
    if len(words) != 4:
        raise ValueError(f"Expected 4 words, got {len(words)}")

    state = [[0 for _ in range(4)] for _ in range(4)]
    for col, word in enumerate(words):
        for row in range(4):
            state[row][col] = (word >> (24 - 8 * row)) & 0xFF
    return state


def state_to_words(state: list[list[int]]) -> list[int]:
    """Inverse of words_to_state."""
    return bytes_to_words(state_to_bytes(state))


def hex_to_bytes(hex_str: str) -> bytes:
    """
    Convert hex string to bytes.
    """
    return bytes.fromhex(hex_str)


def bytes_to_hex(data: bytes) -> str:
    """
    Convert bytes to lowercase hex string.
    """
    return data.hex()


def state_to_hex(state: list[list[int]]) -> str:
    """
    Convert state to hex string (via bytes).
    """
    return bytes_to_hex(state_to_bytes(state))


def hex_to_state(hex_str: str) -> list[list[int]]:
    """
    Convert hex string to state.
    """
    return bytes_to_state(hex_to_bytes(hex_str))


def format_words(words) -> str:
    """Format 32-bit words as space-separated 8-digit hex."""
    return " ".join(f"{w:08x}" for w in words)


def xor_bytes(a: bytes, b: bytes) -> bytes:
    """
    XOR two byte sequences of equal length.
    """
    if len(a) != len(b):
        raise ValueError(f"Length mismatch: {len(a)} vs {len(b)}")
    return bytes(x ^ y for x, y in zip(a, b))
