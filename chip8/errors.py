"""Custom exceptions for the CHIP-8 interpreter."""

from dataclasses import dataclass


@dataclass
class ErrorInfo:
    """Structured error information for host reporting."""
    type: str
    message: str
    cycle: int
    addr: int

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "message": self.message,
            "cycle": self.cycle,
            "addr": self.addr,
        }


class Chip8Error(Exception):
    """Base exception for all interpreter errors."""

    def __init__(self, message: str, cycle: int = 0, addr: int = 0):
        super().__init__(message)
        self.message = message
        self.cycle = cycle
        self.addr = addr

    def to_error_info(self) -> ErrorInfo:
        return ErrorInfo(
            type=self.__class__.__name__,
            message=self.message,
            cycle=self.cycle,
            addr=self.addr,
        )


class ProgramTooLarge(Chip8Error):
    """Program image does not fit above the program start address."""
    pass


class Chip8RuntimeError(Chip8Error):
    """Fault raised while executing a cycle."""
    pass


class UnknownOpcode(Chip8RuntimeError):
    """Fetched word matches no instruction pattern."""

    def __init__(self, word: int, cycle: int = 0, addr: int = 0):
        super().__init__(f"Unknown opcode: {word:04X}", cycle=cycle, addr=addr)
        self.word = word


class StackOverflow(Chip8RuntimeError):
    """Subroutine call with a full call stack."""
    pass


class StackUnderflow(Chip8RuntimeError):
    """Return with an empty call stack."""
    pass


class OutOfBoundsAccess(Chip8RuntimeError):
    """Memory address out of range."""
    pass


class InvalidKey(Chip8RuntimeError, ValueError):
    """Key value outside the hex keypad range."""
    pass
