"""CPU state model for the CHIP-8 interpreter."""

import logging

from .errors import StackOverflow, StackUnderflow
from .memory import PROGRAM_START


logger = logging.getLogger(__name__)

REGISTER_COUNT = 16
STACK_DEPTH = 16
FLAG = 0xF


class CPU:
    """Register file, index register, program counter and call stack."""

    def __init__(self, start_address: int = PROGRAM_START):
        self.v: list[int] = [0] * REGISTER_COUNT
        self.i: int = 0
        self.pc: int = start_address
        self.stack: list[int] = [0] * STACK_DEPTH
        self.sp: int = 0

    def set_v(self, index: int, value: int) -> None:
        """Set register Vx, keeping the low 8 bits."""
        self.v[index] = value & 0xFF

    def set_flag(self, value: bool) -> None:
        """Set VF to 1 or 0."""
        self.v[FLAG] = 1 if value else 0

    def push(self, addr: int) -> None:
        """Push a return address."""
        if self.sp >= STACK_DEPTH:
            raise StackOverflow(f"Call stack overflow (depth {STACK_DEPTH})")
        self.stack[self.sp] = addr
        self.sp += 1
        logger.debug("push %03X, sp=%d", addr, self.sp)

    def pop(self) -> int:
        """Pop the most recent return address."""
        if self.sp == 0:
            raise StackUnderflow("Return with empty call stack")
        self.sp -= 1
        addr = self.stack[self.sp]
        logger.debug("pop %03X, sp=%d", addr, self.sp)
        return addr

    def get_state(self) -> dict:
        """Get current register state as dictionary."""
        return {
            "v": list(self.v),
            "i": self.i,
            "pc": self.pc,
            "sp": self.sp,
            "stack": self.stack[:self.sp],
        }

    def reset(self, start_address: int = PROGRAM_START) -> None:
        """Reset CPU to initial state."""
        self.v = [0] * REGISTER_COUNT
        self.i = 0
        self.pc = start_address
        self.stack = [0] * STACK_DEPTH
        self.sp = 0
