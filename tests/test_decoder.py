"""Tests for instruction decoding."""

import pytest
from chip8.decoder import Op, decode, mnemonic
from chip8.errors import UnknownOpcode


class TestDecode:
    """Decoder tests."""

    def test_fields(self):
        """Nibble fields are split out of the word."""
        instr = decode(0xD12A)
        assert instr.op is Op.DRW
        assert instr.x == 0x1
        assert instr.y == 0x2
        assert instr.n == 0xA
        assert instr.nn == 0x2A
        assert instr.nnn == 0x12A

    @pytest.mark.parametrize("word, op", [
        (0x00E0, Op.CLS),
        (0x00EE, Op.RET),
        (0x1ABC, Op.JP),
        (0x8AB4, Op.ADD_REG),
        (0x8AB6, Op.SHR),
        (0x8ABE, Op.SHL),
        (0x9AB0, Op.SNE_REG),
        (0xE19E, Op.SKP),
        (0xE1A1, Op.SKNP),
        (0xF10A, Op.LD_VX_K),
        (0xF165, Op.LD_VX_MEM),
    ])
    def test_known_words(self, word, op):
        """Representative words decode to their operation."""
        assert decode(word).op is op

    @pytest.mark.parametrize("word", [
        0x0000,
        0x0123,
        0x00E1,
        0x5121,
        0x800F,
        0x9121,
        0xE093,
        0xF0FF,
    ])
    def test_unknown_words(self, word):
        """Words outside the instruction set raise UnknownOpcode."""
        with pytest.raises(UnknownOpcode) as exc:
            decode(word)
        assert exc.value.word == word

    def test_every_op_is_decodable(self):
        """Each pattern decodes back to its own operation."""
        for op in Op:
            word = int(
                op.value.replace("x", "1").replace("y", "2").replace("n", "3"),
                16,
            )
            assert decode(word).op is op


class TestMnemonic:
    """Disassembly tests."""

    @pytest.mark.parametrize("word, text", [
        (0x00E0, "CLS"),
        (0x2345, "CALL 345"),
        (0x6A42, "LD VA, #42"),
        (0x5120, "SE V1, V2"),
        (0x8106, "SHR V1"),
        (0x8127, "SUBN V1, V2"),
        (0xB200, "JP V0, 200"),
        (0xD015, "DRW V0, V1, 5"),
        (0xE39E, "SKP V3"),
        (0xF355, "LD [I], V3"),
        (0xF207, "LD V2, DT"),
    ])
    def test_text(self, word, text):
        """Instructions render in assembler syntax."""
        assert mnemonic(decode(word)) == text
        assert str(decode(word)) == text
