"""
Iterative round engine shared by the encrypt and decrypt engines.

The engine is a clocked state machine: one round per tick, an enable
input that latches key and data, a busy output, and a reset that takes
priority over everything else.

The next register values are computed by `transition`, a pure function of
the previous registers and the tick inputs. Every branch builds a complete
`Registers`; holding is returning the previous registers as they are.

Timing (after the latch tick, enable deasserted):
- encrypt: round 0 is folded into the latch, Nr ticks to completion
- decrypt: round 0 runs on the first busy tick, Nr + 1 ticks to completion
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from .config import CipherConfig
from .key_schedule import expand_key
from .trace import TraceRecorder
from .utils import bytes_to_state, state_to_bytes

State = list[list[int]]
RoundOp = Callable[[State, State], State]

ZERO_BLOCK = bytes(16)


class Phase(Enum):
    """Engine phase.

    DONE is entered on the tick that produces data_out and is held across
    idle ticks until the next latch or reset. It behaves like IDLE for
    transitions.
    """

    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"


@dataclass(frozen=True)
class Inputs:
    """Values on the engine inputs for one tick."""

    reset: bool = False
    enable: bool = False
    key: bytes | None = None
    data_in: bytes | None = None


@dataclass(frozen=True)
class Registers:
    """Complete engine state between ticks."""

    phase: Phase = Phase.IDLE
    round: int = 0
    busy: bool = False
    block: bytes = ZERO_BLOCK
    schedule: tuple[int, ...] = ()
    data_out: bytes = ZERO_BLOCK


RESET_REGISTERS = Registers()


@dataclass(frozen=True)
class RoundProgram:
    """Transform table that turns the generic engine into a cipher direction.

    Attributes:
        name: Engine name used in traces
        initial_at_latch: Run the round-0 key addition on the latch tick,
            using the leading 16 bytes of the raw key, instead of on the
            first busy tick
        initial_round: Round 0 operation (state, round_key) -> state
        middle_round: Rounds 1..Nr-1
        final_round: Round Nr, result goes to data_out
        round_key: Extracts a round key from the schedule by position
        key_index: Maps (Nr, round) to the schedule position to use
    """

    name: str
    initial_at_latch: bool
    initial_round: RoundOp
    middle_round: RoundOp
    final_round: RoundOp
    round_key: Callable[[tuple[int, ...], int], State]
    key_index: Callable[[int, int], int]


@dataclass(frozen=True)
class Transition:
    """Next registers plus what happened on the tick (for tracing)."""

    registers: Registers
    event: str
    round: int = 0
    round_key: State | None = None


def _latch(program: RoundProgram, config: CipherConfig, inputs: Inputs) -> Transition:
    if inputs.key is None or inputs.data_in is None:
        raise ValueError("key and data_in must be driven when enable is asserted")
    config.validate_key(inputs.key)
    if len(inputs.data_in) != 16:
        raise ValueError(f"data_in must be 16 bytes, got {len(inputs.data_in)}")

    schedule = expand_key(inputs.key, config)

    if program.initial_at_latch:
        raw_key = bytes_to_state(inputs.key[:16])
        state = program.initial_round(bytes_to_state(inputs.data_in), raw_key)
        return Transition(
            Registers(
                phase=Phase.RUNNING,
                round=1,
                busy=True,
                block=state_to_bytes(state),
                schedule=schedule,
                data_out=ZERO_BLOCK,
            ),
            event="latch",
            round=0,
            round_key=raw_key,
        )

    return Transition(
        Registers(
            phase=Phase.RUNNING,
            round=0,
            busy=True,
            block=bytes(inputs.data_in),
            schedule=schedule,
            data_out=ZERO_BLOCK,
        ),
        event="latch",
    )


def transition(
    program: RoundProgram,
    config: CipherConfig,
    registers: Registers,
    inputs: Inputs,
) -> Transition:
    """
    Compute the next registers for one tick.

    Priority: reset, then enable (latch, aborting any operation in
    flight), then the busy round steps, then hold.
    """
    if inputs.reset:
        return Transition(RESET_REGISTERS, event="reset")

    if inputs.enable:
        return _latch(program, config, inputs)

    if not registers.busy:
        return Transition(registers, event="hold", round=registers.round)

    nr = config.nr
    current = registers.round
    if current > nr:
        raise ValueError(f"Round counter {current} exceeds Nr={nr}")

    round_key = program.round_key(registers.schedule, program.key_index(nr, current))
    state = bytes_to_state(registers.block)

    if current == 0:
        state = program.initial_round(state, round_key)
        return Transition(
            Registers(
                phase=Phase.RUNNING,
                round=1,
                busy=True,
                block=state_to_bytes(state),
                schedule=registers.schedule,
                data_out=registers.data_out,
            ),
            event="initial",
            round=current,
            round_key=round_key,
        )

    if current < nr:
        state = program.middle_round(state, round_key)
        return Transition(
            Registers(
                phase=Phase.RUNNING,
                round=current + 1,
                busy=True,
                block=state_to_bytes(state),
                schedule=registers.schedule,
                data_out=registers.data_out,
            ),
            event="round",
            round=current,
            round_key=round_key,
        )

    state = program.final_round(state, round_key)
    return Transition(
        Registers(
            phase=Phase.DONE,
            round=0,
            busy=False,
            block=ZERO_BLOCK,
            schedule=registers.schedule,
            data_out=state_to_bytes(state),
        ),
        event="final",
        round=current,
        round_key=round_key,
    )


def step(
    program: RoundProgram,
    config: CipherConfig,
    registers: Registers,
    inputs: Inputs,
) -> Registers:
    """Pure next-state function: (registers, inputs) -> registers."""
    return transition(program, config, registers, inputs).registers


class RoundEngine:
    """
    Clocked wrapper around `transition`.

    Subclasses set `program`. Inputs are applied per call to `tick()`;
    `assert_reset()` clears the registers immediately, without waiting for
    a tick, and keeps them cleared until `release_reset()`.
    """

    program: RoundProgram | None = None

    def __init__(
        self,
        config: CipherConfig | None = None,
        tracer: TraceRecorder | None = None,
        program: RoundProgram | None = None,
    ):
        """
        Initialize the engine.

        Args:
            config: Key-length parameters (default AES-256)
            tracer: Optional trace recorder, one entry per tick
            program: Transform table, overrides the class attribute
        """
        if program is not None:
            self.program = program
        if self.program is None:
            raise ValueError(f"{self.__class__.__name__} has no round program")

        self.config = config or CipherConfig()
        self.tracer = tracer
        self._op_ticks = 0

        self._registers = RESET_REGISTERS
        self._reset_asserted = False
        self._tick_index = 0

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def tick(
        self,
        enable: bool = False,
        reset: bool = False,
        key: bytes | None = None,
        data_in: bytes | None = None,
    ) -> Registers:
        """
        Apply one clock tick.

        Args:
            enable: Latch key and data_in, starting a new operation
            reset: Synchronous view of the reset input
            key: Raw key, sampled only when enable is asserted
            data_in: 16-byte block, sampled only when enable is asserted

        Returns:
            Registers after the tick
        """
        inputs = Inputs(
            reset=reset or self._reset_asserted,
            enable=enable,
            key=key,
            data_in=data_in,
        )
        result = transition(self.program, self.config, self._registers, inputs)
        self._registers = result.registers
        self._tick_index += 1

        if result.event == "reset":
            self._op_ticks = 0
        elif result.event == "latch":
            self._op_ticks = 1
        elif result.event != "hold":
            self._op_ticks += 1

        self._trace(result)
        return self._registers

    def assert_reset(self) -> None:
        """Assert reset: registers clear now and stay clear while held."""
        self._reset_asserted = True
        self._registers = RESET_REGISTERS
        self._op_ticks = 0
        self._trace(Transition(RESET_REGISTERS, event="reset"))

    def release_reset(self) -> None:
        """Deassert reset."""
        self._reset_asserted = False

    # ------------------------------------------------------------------
    # Outputs
    # ------------------------------------------------------------------

    @property
    def registers(self) -> Registers:
        return self._registers

    @property
    def busy(self) -> bool:
        return self._registers.busy

    @property
    def data_out(self) -> bytes:
        return self._registers.data_out

    @property
    def round(self) -> int:
        return self._registers.round

    @property
    def phase(self) -> Phase:
        return self._registers.phase

    @property
    def ticks(self) -> int:
        """Ticks consumed by the current or last operation."""
        return self._op_ticks

    def _trace(self, result: Transition) -> None:
        if not self.tracer:
            return

        registers = result.registers
        entry: dict[str, Any] = {
            "engine": self.program.name,
            "tick": self._tick_index,
            "event": result.event,
            "round": result.round,
            "busy": registers.busy,
            "state": registers.block,
        }
        if result.round_key is not None:
            entry["round_key"] = result.round_key
        if result.event == "final":
            entry["data_out"] = registers.data_out
        self.tracer.record(**entry)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(nk={self.config.nk}, nr={self.config.nr}, "
            f"phase={self.phase.value}, round={self.round})"
        )


def run_operation(engine: RoundEngine, key: bytes, data: bytes) -> tuple[bytes, int]:
    """
    Drive one complete operation: a single enable tick, then plain ticks
    until busy drops.

    Args:
        engine: Encrypt or decrypt engine
        key: Raw key matching the engine config
        data: 16-byte input block

    Returns:
        Tuple of (data_out, ticks including the latch tick)
    """
    engine.tick(enable=True, key=key, data_in=data)
    if engine.phase is not Phase.RUNNING:
        raise RuntimeError(
            f"{engine.program.name} engine did not latch; reset is asserted"
        )

    limit = engine.config.nr + 2
    while engine.busy:
        if engine.ticks >= limit:
            raise RuntimeError(
                f"{engine.program.name} engine still busy after {engine.ticks} ticks"
            )
        engine.tick()

    return engine.data_out, engine.ticks
