"""Headless program runner with tracing for the CHIP-8 interpreter."""

import logging
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, Field

from .display import HEIGHT, WIDTH
from .entropy import EntropySource, SeededEntropy, SystemEntropy
from .errors import Chip8Error, ErrorInfo
from .interpreter import Interpreter
from .keypad import KEY_COUNT, KeyEventQueue


logger = logging.getLogger(__name__)

TIMER_HZ = 60


class KeyEvent(BaseModel):
    """A key transition applied before the given frame runs."""
    frame: int = Field(ge=0)
    key: int = Field(ge=0, lt=KEY_COUNT)
    pressed: bool = True


class RunOptions(BaseModel):
    """Options for program execution."""
    frequency: int = Field(default=500, ge=TIMER_HZ, le=100_000)
    frames: int = Field(default=60, ge=0, le=1_000_000)
    max_cycles: Optional[int] = Field(default=None, ge=0)
    seed: Optional[int] = None
    trace: bool = False
    key_events: list[KeyEvent] = Field(default_factory=list)

    @property
    def cycles_per_frame(self) -> int:
        return self.frequency // TIMER_HZ


@dataclass
class TraceRow:
    """Single row of execution trace."""
    cycle: int
    frame: int
    addr: int
    word: int
    instr_text: str
    v: list[int]
    i: int

    def to_dict(self) -> dict:
        return {
            "cycle": self.cycle,
            "frame": self.frame,
            "addr": self.addr,
            "word": f"{self.word:04X}",
            "instr_text": self.instr_text,
            "v": self.v,
            "i": self.i,
        }


@dataclass
class RunResult:
    """Result of program execution."""
    status: str  # "ok" | "error"
    cycles_executed: int
    frames_executed: int
    final_state: dict
    screen: list[str]
    sound_frames: int
    trace: list[dict]
    error: Optional[ErrorInfo] = None

    def to_dict(self) -> dict:
        result = {
            "status": self.status,
            "cycles_executed": self.cycles_executed,
            "frames_executed": self.frames_executed,
            "final_state": self.final_state,
            "screen": self.screen,
            "sound_frames": self.sound_frames,
            "trace": self.trace,
        }
        if self.error:
            result["error"] = self.error.to_dict()
        return result


def _pick_entropy(options: RunOptions, entropy: Optional[EntropySource]) -> EntropySource:
    if entropy is not None:
        return entropy
    if options.seed is not None:
        return SeededEntropy(options.seed)
    return SystemEntropy()


def _schedule(events: list[KeyEvent]) -> dict[int, list[KeyEvent]]:
    by_frame: dict[int, list[KeyEvent]] = {}
    for event in events:
        by_frame.setdefault(event.frame, []).append(event)
    return by_frame


def run_program(
    program: bytes,
    options: Optional[RunOptions] = None,
    entropy: Optional[EntropySource] = None,
) -> RunResult:
    """Run a program image headlessly for a number of 60 Hz frames.

    Each frame applies the key events scheduled for it, executes
    `frequency // 60` cycles, samples the sound signal and ticks the
    timers.

    Args:
        program: raw program image
        options: execution options
        entropy: random byte source; overrides `options.seed`

    Returns:
        RunResult with execution status, final state and screen
    """
    if options is None:
        options = RunOptions()

    trace_rows: list[dict] = []
    error_info: Optional[ErrorInfo] = None
    frames_executed = 0
    sound_frames = 0

    try:
        vm = Interpreter(_pick_entropy(options, entropy), program)
    except Chip8Error as e:
        return RunResult(
            status="error",
            cycles_executed=0,
            frames_executed=0,
            final_state={},
            screen=["." * WIDTH] * HEIGHT,
            sound_frames=0,
            trace=[],
            error=e.to_error_info(),
        )

    logger.info(
        "running %d-byte program: %d frames at %d Hz",
        len(program), options.frames, options.frequency,
    )

    schedule = _schedule(options.key_events)
    queue = KeyEventQueue()

    def budget_exhausted() -> bool:
        return options.max_cycles is not None and vm.cycles >= options.max_cycles

    try:
        for frame in range(options.frames):
            for event in schedule.get(frame, ()):
                queue.push(event.key, event.pressed)
            queue.drain_into(vm)

            for _ in range(options.cycles_per_frame):
                if budget_exhausted():
                    break
                addr = vm.cpu.pc
                before = vm.cycles
                vm.step()
                if options.trace and vm.cycles > before:
                    instr = vm.last_instruction
                    trace_rows.append(TraceRow(
                        cycle=vm.cycles,
                        frame=frame,
                        addr=addr,
                        word=instr.word,
                        instr_text=str(instr),
                        v=list(vm.cpu.v),
                        i=vm.cpu.i,
                    ).to_dict())

            if vm.sound_active():
                sound_frames += 1
            vm.tick_timers()
            frames_executed += 1

            if budget_exhausted():
                break
    except Chip8Error as e:
        logger.warning("program faulted: %s", e.message)
        error_info = e.to_error_info()

    logger.info("finished after %d cycles, %d frames", vm.cycles, frames_executed)

    return RunResult(
        status="ok" if error_info is None else "error",
        cycles_executed=vm.cycles,
        frames_executed=frames_executed,
        final_state=vm.get_state(),
        screen=vm.display.render(),
        sound_frames=sound_frames,
        trace=trace_rows,
        error=error_info,
    )
