"""
Trace recording and pretty printing for the round engines.

Contains:
- TraceRecorder: in-memory records, JSON Lines file, compact verbose stdout
- print_header / print_result: shared formatting helpers for the CLI
"""

import json
from typing import Any, TextIO

from .utils import state_to_hex


class TraceRecorder:
    """
    Records one entry per engine tick.

    Supports:
    - JSON Lines file output (when trace_file is set)
    - Compact verbose stdout (one line per tick)
    """

    def __init__(self, verbose: bool = False, trace_file: TextIO | None = None):
        self.verbose = verbose
        self.trace_file = trace_file
        self._records: list[dict[str, Any]] = []

    def record(self, **kwargs) -> None:
        """
        Record a trace entry.

        Expected keys: engine, tick, event, round, busy, state, and
        optionally round_key and data_out. States may be given as 4x4
        lists or bytes; both are written as hex.
        """
        self._records.append(kwargs)

        if self.trace_file:
            self._write_jsonl(kwargs)

        if self.verbose:
            self._print_verbose(kwargs)

    def _write_jsonl(self, record: dict[str, Any]) -> None:
        serializable = self._make_serializable(record)
        self.trace_file.write(json.dumps(serializable) + "\n")
        self.trace_file.flush()

    def _make_serializable(self, obj: Any) -> Any:
        if isinstance(obj, dict):
            return {k: self._make_serializable(v) for k, v in obj.items()}
        elif _is_state(obj):
            return state_to_hex(obj)
        elif isinstance(obj, (list, tuple)):
            return [self._make_serializable(item) for item in obj]
        elif isinstance(obj, bytes):
            return obj.hex()
        else:
            return obj

    def _print_verbose(self, record: dict[str, Any]) -> None:
        tick = record.get("tick", 0)
        round_num = record.get("round", "?")
        event = record.get("event", "unknown")
        busy = "B" if record.get("busy") else "-"

        line = f"T{tick:04d} R{round_num:<2} {busy} {event:8s}"
        if record.get("state") is not None:
            line += f" STATE:{_hex(record['state'])}"
        if record.get("round_key") is not None:
            line += f" KEY:{_hex(record['round_key'])}"
        if record.get("data_out") is not None:
            line += f" OUT:{_hex(record['data_out'])}"
        print(line)

    def get_records(self) -> list[dict[str, Any]]:
        return list(self._records)

    def clear(self) -> None:
        self._records.clear()


def _is_state(obj: Any) -> bool:
    return (
        isinstance(obj, list)
        and len(obj) == 4
        and all(isinstance(row, list) and len(row) == 4 for row in obj)
    )


def _hex(value: Any) -> str:
    if isinstance(value, bytes):
        return value.hex()
    return state_to_hex(value)


# ------------------------------------------------------------------
# Shared formatting functions
# ------------------------------------------------------------------

def print_header(title: str) -> None:
    """Print a section header."""
    print(f"\n{'#'*70}")
    print(f"# {title}")
    print(f"{'#'*70}")


def print_result(label: str, output_hex: str, ticks: int,
                 passed: bool | None = None) -> None:
    """Print the result of one engine operation."""
    print(f"\n{'='*70}")
    print("RESULT")
    print(f"{'='*70}")
    print(f"{label}: {output_hex}")
    print(f"Ticks: {ticks}")

    if passed is not None:
        status = "PASS" if passed else "FAIL"
        marker = "[OK]" if passed else "[ERROR]"
        print(f"Verification: {marker} {status}")
    print(f"{'='*70}")
