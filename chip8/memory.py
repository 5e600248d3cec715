"""Memory model for the CHIP-8 interpreter."""

from .errors import OutOfBoundsAccess, ProgramTooLarge


MEMORY_SIZE = 4096
PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START

FONT_GLYPH_SIZE = 5

# Hex digit sprites 0-F, 4x5 pixels each (high nibble of every byte)
FONT_SET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])


class Memory:
    """Byte-addressed memory with the font set and a loaded program."""

    def __init__(self, program: bytes = b"", size: int = MEMORY_SIZE):
        self.size = size
        self._data = bytearray(size)
        self.load(program)

    def load(self, program: bytes) -> None:
        """Zero memory, install the font set and copy `program` to 0x200."""
        program = bytes(program)
        if len(program) > self.size - PROGRAM_START:
            raise ProgramTooLarge(
                f"Program is {len(program)} bytes, "
                f"at most {self.size - PROGRAM_START} fit in memory",
                addr=PROGRAM_START,
            )
        self._data[:] = bytes(self.size)
        self._data[:len(FONT_SET)] = FONT_SET
        self._data[PROGRAM_START:PROGRAM_START + len(program)] = program

    def check_range(self, addr: int, length: int = 1) -> None:
        """Check that `length` bytes starting at `addr` are addressable."""
        if addr < 0 or length < 0 or addr + length > self.size:
            raise OutOfBoundsAccess(
                f"Memory access out of range: {addr}..{addr + length - 1}",
                addr=addr,
            )

    def read(self, addr: int) -> int:
        """Read one byte."""
        self.check_range(addr)
        return self._data[addr]

    def write(self, addr: int, value: int) -> None:
        """Write one byte, keeping the low 8 bits of `value`."""
        self.check_range(addr)
        self._data[addr] = value & 0xFF

    def read_word(self, addr: int) -> int:
        """Read a big-endian 16-bit word."""
        self.check_range(addr, 2)
        return (self._data[addr] << 8) | self._data[addr + 1]

    def read_block(self, addr: int, length: int) -> bytes:
        """Read `length` bytes; the whole range is validated first."""
        self.check_range(addr, length)
        return bytes(self._data[addr:addr + length])

    def write_block(self, addr: int, values) -> None:
        """Write a sequence of bytes; nothing is written if any would fall outside."""
        values = bytes(v & 0xFF for v in values)
        self.check_range(addr, len(values))
        self._data[addr:addr + len(values)] = values
