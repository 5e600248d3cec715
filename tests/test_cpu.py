"""Tests for the CPU module."""

import pytest
from chip8.cpu import CPU, STACK_DEPTH
from chip8.errors import StackOverflow, StackUnderflow


class TestCPU:
    """CPU module tests."""

    def test_default_initialization(self):
        """CPU starts at the program address with cleared registers."""
        cpu = CPU()
        assert cpu.v == [0] * 16
        assert cpu.i == 0
        assert cpu.pc == 0x200
        assert cpu.sp == 0

    def test_set_v_wraps(self):
        """Register writes keep 8 bits."""
        cpu = CPU()
        cpu.set_v(3, 0x105)
        assert cpu.v[3] == 0x05

    def test_set_flag(self):
        """VF holds 1 or 0."""
        cpu = CPU()
        cpu.set_flag(True)
        assert cpu.v[0xF] == 1
        cpu.set_flag(False)
        assert cpu.v[0xF] == 0

    def test_push_pop_lifo(self):
        """Stack returns addresses in reverse order."""
        cpu = CPU()
        cpu.push(0x202)
        cpu.push(0x304)
        assert cpu.pop() == 0x304
        assert cpu.pop() == 0x202

    def test_stack_overflow(self):
        """Pushing onto a full stack raises and keeps the stack."""
        cpu = CPU()
        for n in range(STACK_DEPTH):
            cpu.push(n)
        with pytest.raises(StackOverflow):
            cpu.push(0x999)
        assert cpu.sp == STACK_DEPTH
        assert cpu.pop() == STACK_DEPTH - 1

    def test_stack_underflow(self):
        """Popping an empty stack raises."""
        cpu = CPU()
        with pytest.raises(StackUnderflow):
            cpu.pop()
        assert cpu.sp == 0

    def test_get_state(self):
        """State shows only live stack entries."""
        cpu = CPU()
        cpu.push(0x202)
        cpu.i = 0x123
        state = cpu.get_state()
        assert state["stack"] == [0x202]
        assert state["sp"] == 1
        assert state["i"] == 0x123
        assert state["pc"] == 0x200

    def test_reset(self):
        """Reset returns CPU to initial state."""
        cpu = CPU()
        cpu.set_v(0, 9)
        cpu.i = 50
        cpu.pc = 0x300
        cpu.push(1)
        cpu.reset()
        assert cpu.v[0] == 0
        assert cpu.i == 0
        assert cpu.pc == 0x200
        assert cpu.sp == 0
