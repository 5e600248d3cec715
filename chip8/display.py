"""Monochrome framebuffer and sprite blitting."""

from typing import Iterator


WIDTH = 64
HEIGHT = 32
SPRITE_WIDTH = 8

LIT = 1


class Display:
    """64x32 framebuffer, row-major, 1 means lit.

    Sprites are XORed onto the framebuffer. Pixels that fall past the
    right or bottom edge are clipped, never wrapped.
    """

    def __init__(self, width: int = WIDTH, height: int = HEIGHT):
        self.width = width
        self.height = height
        self._rows = [bytearray(width) for _ in range(height)]

    def clear(self) -> None:
        """Set every pixel to unlit."""
        for row in self._rows:
            row[:] = bytes(self.width)

    def get(self, row: int, col: int) -> int:
        return self._rows[row][col]

    def draw(self, x: int, y: int, sprite: bytes) -> bool:
        """XOR `sprite` at (x, y); return True if any lit pixel was cleared."""
        collision = False
        for offset, bits in enumerate(sprite):
            row = y + offset
            if row >= self.height:
                break
            line = self._rows[row]
            for col_offset in range(SPRITE_WIDTH):
                col = x + col_offset
                if col >= self.width:
                    break
                if not (bits >> (SPRITE_WIDTH - 1 - col_offset)) & 1:
                    continue
                if line[col] == LIT:
                    collision = True
                line[col] ^= 1
        return collision

    def pixels(self) -> Iterator[tuple[int, int, int]]:
        """Yield (row, col, bit) for every pixel, row-major."""
        for r, line in enumerate(self._rows):
            for c, bit in enumerate(line):
                yield r, c, bit

    def render(self, on: str = "#", off: str = ".") -> list[str]:
        """Return the framebuffer as one string per row."""
        return ["".join(on if bit else off for bit in line) for line in self._rows]
