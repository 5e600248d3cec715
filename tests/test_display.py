"""Tests for the Display module."""

from chip8.display import Display, WIDTH, HEIGHT


class TestDisplay:
    """Display module tests."""

    def test_starts_blank(self):
        """Every pixel starts unlit."""
        display = Display()
        assert all(bit == 0 for _, _, bit in display.pixels())

    def test_pixels_row_major_and_restartable(self):
        """Pixel enumeration covers the grid and can be repeated."""
        display = Display()
        first = list(display.pixels())
        second = list(display.pixels())
        assert len(first) == WIDTH * HEIGHT
        assert first == second
        assert first[0] == (0, 0, 0)
        assert first[1] == (0, 1, 0)
        assert first[WIDTH] == (1, 0, 0)

    def test_draw_sets_bits_msb_first(self):
        """Sprite bit 7 lands in the leftmost column."""
        display = Display()
        assert display.draw(3, 2, b"\x81") is False
        assert display.get(2, 3) == 1
        assert display.get(2, 10) == 1
        assert display.get(2, 4) == 0

    def test_xor_self_inverse(self):
        """Drawing the same sprite twice clears it and reports collision."""
        display = Display()
        display.draw(10, 10, b"\xF0\x90\xF0")
        assert display.draw(10, 10, b"\xF0\x90\xF0") is True
        assert all(bit == 0 for _, _, bit in display.pixels())

    def test_collision_accumulates_across_rows(self):
        """A collision in an early row survives later clean rows."""
        display = Display()
        display.draw(0, 0, b"\x80")
        assert display.draw(0, 0, b"\x80\x80") is True
        assert display.get(0, 0) == 0
        assert display.get(1, 0) == 1

    def test_clips_right_edge(self):
        """Columns past the right edge are dropped, not wrapped."""
        display = Display()
        display.draw(WIDTH - 2, 0, b"\xFF")
        assert display.get(0, WIDTH - 2) == 1
        assert display.get(0, WIDTH - 1) == 1
        assert display.get(0, 0) == 0
        assert display.get(0, 1) == 0

    def test_clips_bottom_edge(self):
        """Rows past the bottom edge are dropped, not wrapped."""
        display = Display()
        display.draw(0, HEIGHT - 1, b"\x80\x80")
        assert display.get(HEIGHT - 1, 0) == 1
        assert display.get(0, 0) == 0

    def test_origin_off_screen(self):
        """A sprite entirely off-screen draws nothing."""
        display = Display()
        assert display.draw(200, 200, b"\xFF") is False
        assert all(bit == 0 for _, _, bit in display.pixels())

    def test_clear(self):
        """Clear unlights every pixel."""
        display = Display()
        display.draw(0, 0, b"\xFF\xFF")
        display.clear()
        assert display.render()[0] == "." * WIDTH

    def test_render(self):
        """Render uses the given characters."""
        display = Display()
        display.draw(0, 0, b"\xA0")
        assert display.render(on="X", off=" ")[0].startswith("X X ")
