"""Instruction decoding for the CHIP-8 interpreter.

`decode` turns a 16-bit word into an `Instruction` tagged with one of the
35 `Op` members. It is pure: no machine state is read or written.
"""

from dataclasses import dataclass
from enum import Enum

from .errors import UnknownOpcode


class Op(Enum):
    """Every operation of the instruction set."""

    CLS = "00E0"
    RET = "00EE"
    JP = "1nnn"
    CALL = "2nnn"
    SE_IMM = "3xnn"
    SNE_IMM = "4xnn"
    SE_REG = "5xy0"
    LD_IMM = "6xnn"
    ADD_IMM = "7xnn"
    LD_REG = "8xy0"
    OR = "8xy1"
    AND = "8xy2"
    XOR = "8xy3"
    ADD_REG = "8xy4"
    SUB = "8xy5"
    SHR = "8xy6"
    SUBN = "8xy7"
    SHL = "8xyE"
    SNE_REG = "9xy0"
    LD_I = "Annn"
    JP_V0 = "Bnnn"
    RND = "Cxnn"
    DRW = "Dxyn"
    SKP = "Ex9E"
    SKNP = "ExA1"
    LD_VX_DT = "Fx07"
    LD_VX_K = "Fx0A"
    LD_DT_VX = "Fx15"
    LD_ST_VX = "Fx18"
    ADD_I = "Fx1E"
    LD_F = "Fx29"
    LD_B = "Fx33"
    LD_MEM_VX = "Fx55"
    LD_VX_MEM = "Fx65"


@dataclass(frozen=True)
class Instruction:
    """A decoded instruction word and its operand fields."""
    op: Op
    word: int
    x: int
    y: int
    n: int
    nn: int
    nnn: int

    def __str__(self) -> str:
        return mnemonic(self)


# Fixed-pattern sub-tables keyed by the low nibble / low byte
_ALU_OPS = {
    0x0: Op.LD_REG,
    0x1: Op.OR,
    0x2: Op.AND,
    0x3: Op.XOR,
    0x4: Op.ADD_REG,
    0x5: Op.SUB,
    0x6: Op.SHR,
    0x7: Op.SUBN,
    0xE: Op.SHL,
}

_KEY_OPS = {
    0x9E: Op.SKP,
    0xA1: Op.SKNP,
}

_MISC_OPS = {
    0x07: Op.LD_VX_DT,
    0x0A: Op.LD_VX_K,
    0x15: Op.LD_DT_VX,
    0x18: Op.LD_ST_VX,
    0x1E: Op.ADD_I,
    0x29: Op.LD_F,
    0x33: Op.LD_B,
    0x55: Op.LD_MEM_VX,
    0x65: Op.LD_VX_MEM,
}

_PREFIX_OPS = {
    0x1: Op.JP,
    0x2: Op.CALL,
    0x3: Op.SE_IMM,
    0x4: Op.SNE_IMM,
    0x6: Op.LD_IMM,
    0x7: Op.ADD_IMM,
    0xA: Op.LD_I,
    0xB: Op.JP_V0,
    0xC: Op.RND,
    0xD: Op.DRW,
}


def _select(word: int) -> Op:
    prefix = word >> 12
    n = word & 0xF
    nn = word & 0xFF

    if prefix in _PREFIX_OPS:
        return _PREFIX_OPS[prefix]
    if word == 0x00E0:
        return Op.CLS
    if word == 0x00EE:
        return Op.RET
    if prefix == 0x5 and n == 0:
        return Op.SE_REG
    if prefix == 0x9 and n == 0:
        return Op.SNE_REG
    if prefix == 0x8 and n in _ALU_OPS:
        return _ALU_OPS[n]
    if prefix == 0xE and nn in _KEY_OPS:
        return _KEY_OPS[nn]
    if prefix == 0xF and nn in _MISC_OPS:
        return _MISC_OPS[nn]
    raise UnknownOpcode(word)


def decode(word: int) -> Instruction:
    """Decode a 16-bit instruction word.

    Raises:
        UnknownOpcode: if the word matches no instruction pattern
    """
    word &= 0xFFFF
    return Instruction(
        op=_select(word),
        word=word,
        x=(word >> 8) & 0xF,
        y=(word >> 4) & 0xF,
        n=word & 0xF,
        nn=word & 0xFF,
        nnn=word & 0xFFF,
    )


def mnemonic(instr: Instruction) -> str:
    """Render an instruction in conventional assembler syntax."""
    op, x, y = instr.op, instr.x, instr.y
    nn, nnn = f"#{instr.nn:02X}", f"{instr.nnn:03X}"

    if op is Op.CLS:
        return "CLS"
    if op is Op.RET:
        return "RET"
    if op is Op.JP:
        return f"JP {nnn}"
    if op is Op.CALL:
        return f"CALL {nnn}"
    if op is Op.JP_V0:
        return f"JP V0, {nnn}"
    if op is Op.LD_I:
        return f"LD I, {nnn}"
    if op in (Op.SE_IMM, Op.SNE_IMM, Op.LD_IMM, Op.ADD_IMM, Op.RND):
        name = {
            Op.SE_IMM: "SE",
            Op.SNE_IMM: "SNE",
            Op.LD_IMM: "LD",
            Op.ADD_IMM: "ADD",
            Op.RND: "RND",
        }[op]
        return f"{name} V{x:X}, {nn}"
    if op is Op.DRW:
        return f"DRW V{x:X}, V{y:X}, {instr.n:X}"
    if op in _ALU_OPS.values() or op in (Op.SE_REG, Op.SNE_REG):
        name = {
            Op.SE_REG: "SE",
            Op.SNE_REG: "SNE",
            Op.LD_REG: "LD",
            Op.ADD_REG: "ADD",
        }.get(op, op.name)
        if op in (Op.SHR, Op.SHL):
            return f"{name} V{x:X}"
        return f"{name} V{x:X}, V{y:X}"
    if op is Op.SKP:
        return f"SKP V{x:X}"
    if op is Op.SKNP:
        return f"SKNP V{x:X}"
    return {
        Op.LD_VX_DT: f"LD V{x:X}, DT",
        Op.LD_VX_K: f"LD V{x:X}, K",
        Op.LD_DT_VX: f"LD DT, V{x:X}",
        Op.LD_ST_VX: f"LD ST, V{x:X}",
        Op.ADD_I: f"ADD I, V{x:X}",
        Op.LD_F: f"LD F, V{x:X}",
        Op.LD_B: f"LD B, V{x:X}",
        Op.LD_MEM_VX: f"LD [I], V{x:X}",
        Op.LD_VX_MEM: f"LD V{x:X}, [I]",
    }[op]
