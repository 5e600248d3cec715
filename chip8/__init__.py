"""CHIP-8 Interpreter Core Package."""

from .interpreter import Interpreter
from .runner import run_program, RunOptions, RunResult, KeyEvent
from .entropy import EntropySource, SystemEntropy, SeededEntropy, FixedEntropy
from .keypad import KeyEventQueue
from .errors import (
    Chip8Error,
    Chip8RuntimeError,
    ProgramTooLarge,
    UnknownOpcode,
    StackOverflow,
    StackUnderflow,
    OutOfBoundsAccess,
    InvalidKey,
)

__all__ = [
    "Interpreter",
    "run_program",
    "RunOptions",
    "RunResult",
    "KeyEvent",
    "EntropySource",
    "SystemEntropy",
    "SeededEntropy",
    "FixedEntropy",
    "KeyEventQueue",
    "Chip8Error",
    "Chip8RuntimeError",
    "ProgramTooLarge",
    "UnknownOpcode",
    "StackOverflow",
    "StackUnderflow",
    "OutOfBoundsAccess",
    "InvalidKey",
]
