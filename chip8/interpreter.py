"""The CHIP-8 interpreter: one machine, stepped by a host."""

import logging
from typing import Iterator, Optional

from .cpu import CPU
from .decoder import Instruction, decode
from .display import Display
from .entropy import EntropySource
from .errors import Chip8RuntimeError
from .instructions import execute_instruction
from .keypad import Keypad
from .memory import PROGRAM_START, Memory
from .timers import Timers


logger = logging.getLogger(__name__)


class Interpreter:
    """Owns the whole machine state and advances it one cycle at a time.

    The host drives everything: `step()` once per virtual cycle,
    `tick_timers()` at 60 Hz, `key_down()`/`key_up()` on input, and
    `framebuffer()`/`sound_active()` once per rendered frame. Nothing here
    blocks or is thread-safe; callers serialize access.

    Args:
        entropy: source of random bytes for the Cxnn instruction
        program: raw program image, loaded verbatim at 0x200

    Raises:
        ProgramTooLarge: if the program does not fit in memory
    """

    def __init__(self, entropy: EntropySource, program: bytes):
        self.entropy = entropy
        self.program = bytes(program)
        self.memory = Memory(self.program)
        self.cpu = CPU(PROGRAM_START)
        self.display = Display()
        self.timers = Timers()
        self.keypad = Keypad()
        self.cycles = 0
        self.last_instruction: Optional[Instruction] = None

    @property
    def waiting_for_key(self) -> bool:
        return self.keypad.waiting

    def step(self) -> None:
        """Fetch, decode and execute one instruction.

        Does nothing while waiting for a key press. A fault leaves the
        machine exactly as it was before the call.

        Raises:
            Chip8RuntimeError: unknown opcode, stack fault or out-of-bounds access
        """
        if self.keypad.waiting:
            return

        addr = self.cpu.pc
        try:
            instr = decode(self.memory.read_word(addr))
            self.cpu.pc = addr + 2
            new_pc = execute_instruction(instr, self)
        except Chip8RuntimeError as e:
            self.cpu.pc = addr
            e.cycle = self.cycles + 1
            e.addr = addr
            logger.debug("fault at %03X: %s", addr, e.message)
            raise

        if new_pc is not None:
            self.cpu.pc = new_pc
        self.last_instruction = instr
        self.cycles += 1

    def tick_timers(self) -> None:
        """Decrement the delay and sound timers; call at 60 Hz."""
        self.timers.tick()

    def key_down(self, key: int) -> None:
        """Mark `key` pressed, resolving a pending Fx0A wait."""
        register = self.keypad.press(key)
        if register is not None:
            self.cpu.set_v(register, key)

    def key_up(self, key: int) -> None:
        """Mark `key` released."""
        self.keypad.release(key)

    def framebuffer(self) -> Iterator[tuple[int, int, int]]:
        """Yield (row, col, bit) for every pixel; 1 means lit."""
        return self.display.pixels()

    def sound_active(self) -> bool:
        return self.timers.sound_active

    def reset(self) -> None:
        """Return to the freshly loaded state, keeping program and entropy."""
        self.memory.load(self.program)
        self.cpu.reset(PROGRAM_START)
        self.display.clear()
        self.timers.reset()
        self.keypad.reset()
        self.cycles = 0
        self.last_instruction = None

    def get_state(self) -> dict:
        """Get current machine state as dictionary."""
        state = self.cpu.get_state()
        state.update(self.timers.get_state())
        state.update(self.keypad.get_state())
        state["cycles"] = self.cycles
        return state
