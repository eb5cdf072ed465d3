"""Command-line interface for the iterative AES round engine.

Usage:
    aes-engine encrypt --key <hex> --data <hex32> --verbose
    aes-engine decrypt --key <hex> --data <hex32> --trace trace.jsonl
    aes-engine schedule --key <hex>
    aes-engine validate --key-bits all --n 100 --seed 42
"""

from __future__ import annotations

import random
import secrets
import sys
from typing import Callable, TextIO

import click
from tabulate import tabulate

from . import DEFAULT_KEY_HEX, DEFAULT_PT_HEX, __version__
from .config import KEY_SIZES, CipherConfig
from .decrypt import DecryptEngine
from .encrypt import EncryptEngine
from .engine import RoundEngine, run_operation
from .golden import FIPS_197_TEST_VECTORS, golden_decrypt, golden_encrypt
from .key_schedule import decrypt_round_key, encrypt_round_key, expand_key
from .trace import TraceRecorder, print_header, print_result
from .utils import bytes_to_hex, format_words, hex_to_bytes, state_to_hex


def _parse_hex(value: str, label: str) -> bytes:
    try:
        return hex_to_bytes(value)
    except ValueError as e:
        raise click.BadParameter(f"Invalid hex: {e}", param_hint=label)


def _run_engine(
    engine_cls: type[RoundEngine],
    key_hex: str,
    data_hex: str,
    verbose: bool,
    trace_path: str | None,
    golden: Callable[[bytes, bytes], bytes],
    label: str,
) -> None:
    key = _parse_hex(key_hex, "--key")
    data = _parse_hex(data_hex, "--data")

    try:
        config = CipherConfig.for_key(key)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    if len(data) != 16:
        click.echo(f"Error: Data must be 32 hex chars (16 bytes), got {len(data_hex)} chars", err=True)
        sys.exit(1)

    print_header(f"AES-{config.key_bits} {engine_cls.program.name} (Nk={config.nk}, Nr={config.nr})")
    click.echo(f"Key:  {bytes_to_hex(key)}")
    click.echo(f"Data: {bytes_to_hex(data)}")

    trace_file: TextIO | None = None
    if trace_path:
        try:
            trace_file = open(trace_path, "w")
        except OSError as e:
            click.echo(f"Error: Cannot open trace file: {e}", err=True)
            sys.exit(1)

    try:
        tracer = TraceRecorder(verbose=verbose, trace_file=trace_file)
        engine = engine_cls(config, tracer=tracer)
        output, ticks = run_operation(engine, key, data)
    finally:
        if trace_file:
            trace_file.close()

    expected = golden(key, data)
    passed = output == expected
    print_result(label, bytes_to_hex(output), ticks, passed)

    if not passed:
        click.echo(f"Expected: {bytes_to_hex(expected)}")
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="aes-engine")
def main() -> None:
    """Iterative AES round engine.

    Encrypt and decrypt single blocks one round per clock tick, inspect
    the key schedule, and validate against FIPS-197 and PyCryptodome.
    """
    pass


def _block_options(func):
    func = click.option(
        "--trace",
        "trace_path",
        type=click.Path(dir_okay=False),
        default=None,
        help="Write a JSON Lines trace of every tick to FILE",
    )(func)
    func = click.option(
        "--verbose", "-v",
        is_flag=True,
        help="Print one line per tick",
    )(func)
    func = click.option(
        "--data",
        "data_hex",
        type=str,
        default=DEFAULT_PT_HEX,
        help="16-byte input block as 32 hex chars (default: FIPS-197 plaintext)",
    )(func)
    func = click.option(
        "--key",
        "key_hex",
        type=str,
        default=DEFAULT_KEY_HEX,
        help="128/192/256-bit key as hex (default: FIPS-197 C.3 key)",
    )(func)
    return func


@main.command()
@_block_options
def encrypt(key_hex: str, data_hex: str, verbose: bool, trace_path: str | None) -> None:
    """Encrypt one block on the encrypt engine."""
    _run_engine(EncryptEngine, key_hex, data_hex, verbose, trace_path,
                golden_encrypt, "Ciphertext")


@main.command()
@_block_options
def decrypt(key_hex: str, data_hex: str, verbose: bool, trace_path: str | None) -> None:
    """Decrypt one block on the decrypt engine."""
    _run_engine(DecryptEngine, key_hex, data_hex, verbose, trace_path,
                golden_decrypt, "Plaintext")


@main.command()
@click.option(
    "--key",
    "key_hex",
    type=str,
    default=DEFAULT_KEY_HEX,
    help="128/192/256-bit key as hex (default: FIPS-197 C.3 key)",
)
def schedule(key_hex: str) -> None:
    """Show the expanded key and the per-round encrypt/decrypt keys."""
    key = _parse_hex(key_hex, "--key")
    try:
        config = CipherConfig.for_key(key)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    words = expand_key(key, config)
    click.echo(f"AES-{config.key_bits}: Nk={config.nk}, Nr={config.nr}, "
               f"{config.schedule_words} words")
    click.echo("")

    rows = []
    for r in range(config.nr + 1):
        rows.append([
            r,
            format_words(words[4 * r:4 * r + 4]),
            state_to_hex(encrypt_round_key(words, r)),
            state_to_hex(decrypt_round_key(words, r)),
        ])
    click.echo(tabulate(
        rows,
        headers=["Round", "Words", "Encrypt key", "Decrypt key"],
        tablefmt="simple",
    ))


@main.command()
@click.option(
    "--key-bits",
    type=click.Choice(["128", "192", "256", "all"]),
    default="all",
    help="Key size for random tests (default: all)",
)
@click.option(
    "--n",
    "num_tests",
    type=int,
    default=100,
    help="Number of random test vectors per key size (default: 100)",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Random seed for reproducibility",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show detailed output",
)
def validate(key_bits: str, num_tests: int, seed: int | None, verbose: bool) -> None:
    """Validate both engines against FIPS-197 and random round trips."""
    if key_bits == "all":
        sizes = sorted(KEY_SIZES)
    else:
        sizes = [int(key_bits)]

    # FIPS-197 tests
    click.echo("Running FIPS-197 KAT tests...")
    fips_passed = 0

    for vec in FIPS_197_TEST_VECTORS:
        config = CipherConfig.for_key(vec["key"])
        ct, _ = run_operation(EncryptEngine(config), vec["key"], vec["plaintext"])
        pt, _ = run_operation(DecryptEngine(config), vec["key"], vec["ciphertext"])

        if ct == vec["ciphertext"] and pt == vec["plaintext"]:
            fips_passed += 1
            if verbose:
                click.echo(f"  {vec['name']}: PASS")
        else:
            click.echo(f"  {vec['name']}: FAIL - encrypt {ct.hex()}, decrypt {pt.hex()}")

    click.echo(f"FIPS-197 tests: {fips_passed}/{len(FIPS_197_TEST_VECTORS)} passed")

    if seed is not None:
        rng = random.Random(seed)
        random_bytes = lambda n: bytes(rng.randint(0, 255) for _ in range(n))
    else:
        random_bytes = secrets.token_bytes

    # Random tests
    random_passed = 0
    random_total = 0
    for bits in sizes:
        config = CipherConfig.for_key_bits(bits)
        encryptor = EncryptEngine(config)
        decryptor = DecryptEngine(config)

        click.echo(f"\nRunning {num_tests} random AES-{bits} tests...")
        passed = 0
        for i in range(num_tests):
            key = random_bytes(config.key_bytes)
            pt = random_bytes(16)

            ct, _ = run_operation(encryptor, key, pt)
            recovered, _ = run_operation(decryptor, key, ct)

            if ct == golden_encrypt(key, pt) and recovered == pt:
                passed += 1
            elif verbose:
                click.echo(f"  Random test {i+1}: FAIL - key {key.hex()} pt {pt.hex()}")

        click.echo(f"AES-{bits} random tests: {passed}/{num_tests} passed")
        random_passed += passed
        random_total += num_tests

    total_passed = fips_passed + random_passed
    total_tests = len(FIPS_197_TEST_VECTORS) + random_total

    click.echo("")
    if total_passed == total_tests:
        click.echo(f"VALIDATION PASSED: All {total_tests} tests passed")
        sys.exit(0)
    else:
        click.echo(f"VALIDATION FAILED: {total_tests - total_passed} failures")
        sys.exit(1)


if __name__ == "__main__":
    main()
