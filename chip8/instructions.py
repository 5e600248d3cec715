"""Instruction execution for the CHIP-8 interpreter.

Each handler receives the decoded instruction and the interpreter whose
state it mutates. The program counter has already been advanced past the
instruction. Handlers return the new program counter for instructions
that change control flow, None otherwise.

Handlers raise before mutating anything, so a faulted instruction leaves
the machine untouched.
"""

from typing import TYPE_CHECKING, Callable, Optional

from .cpu import FLAG
from .decoder import Instruction, Op
from .memory import FONT_GLYPH_SIZE

if TYPE_CHECKING:
    from .interpreter import Interpreter


# Instruction executor type
InstructionExecutor = Callable[[Instruction, "Interpreter"], Optional[int]]


def execute_cls(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """00E0: clear the framebuffer"""
    vm.display.clear()
    return None


def execute_ret(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """00EE: PC := pop()"""
    return vm.cpu.pop()


def execute_jp(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """1nnn: PC := nnn"""
    return instr.nnn


def execute_call(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """2nnn: push(PC); PC := nnn"""
    vm.cpu.push(vm.cpu.pc)
    return instr.nnn


def _skip_if(condition: bool, vm: "Interpreter") -> Optional[int]:
    if condition:
        return vm.cpu.pc + 2
    return None


def execute_se_imm(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """3xnn: skip if Vx == nn"""
    return _skip_if(vm.cpu.v[instr.x] == instr.nn, vm)


def execute_sne_imm(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """4xnn: skip if Vx != nn"""
    return _skip_if(vm.cpu.v[instr.x] != instr.nn, vm)


def execute_se_reg(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """5xy0: skip if Vx == Vy"""
    return _skip_if(vm.cpu.v[instr.x] == vm.cpu.v[instr.y], vm)


def execute_sne_reg(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """9xy0: skip if Vx != Vy"""
    return _skip_if(vm.cpu.v[instr.x] != vm.cpu.v[instr.y], vm)


def execute_ld_imm(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """6xnn: Vx := nn"""
    vm.cpu.set_v(instr.x, instr.nn)
    return None


def execute_add_imm(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """7xnn: Vx := Vx + nn, wrapping, VF untouched"""
    vm.cpu.set_v(instr.x, vm.cpu.v[instr.x] + instr.nn)
    return None


def execute_ld_reg(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """8xy0: Vx := Vy"""
    vm.cpu.set_v(instr.x, vm.cpu.v[instr.y])
    return None


def execute_or(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """8xy1: Vx := Vx OR Vy"""
    vm.cpu.set_v(instr.x, vm.cpu.v[instr.x] | vm.cpu.v[instr.y])
    return None


def execute_and(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """8xy2: Vx := Vx AND Vy"""
    vm.cpu.set_v(instr.x, vm.cpu.v[instr.x] & vm.cpu.v[instr.y])
    return None


def execute_xor(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """8xy3: Vx := Vx XOR Vy"""
    vm.cpu.set_v(instr.x, vm.cpu.v[instr.x] ^ vm.cpu.v[instr.y])
    return None


def execute_add_reg(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """8xy4: Vx := Vx + Vy, VF := carry"""
    total = vm.cpu.v[instr.x] + vm.cpu.v[instr.y]
    vm.cpu.set_v(instr.x, total)
    vm.cpu.set_flag(total > 0xFF)
    return None


def execute_sub(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """8xy5: Vx := Vx - Vy, VF := borrow"""
    vx, vy = vm.cpu.v[instr.x], vm.cpu.v[instr.y]
    vm.cpu.set_v(instr.x, vx - vy)
    vm.cpu.set_flag(vx < vy)
    return None


def execute_shr(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """8xy6: VF := Vx AND 1; Vx := Vx >> 1"""
    vm.cpu.v[FLAG] = vm.cpu.v[instr.x] & 0x1
    vm.cpu.set_v(instr.x, vm.cpu.v[instr.x] >> 1)
    return None


def execute_subn(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """8xy7: Vx := Vy - Vx, VF := borrow"""
    vx, vy = vm.cpu.v[instr.x], vm.cpu.v[instr.y]
    vm.cpu.set_v(instr.x, vy - vx)
    vm.cpu.set_flag(vy < vx)
    return None


def execute_shl(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """8xyE: VF := Vx >> 7; Vx := Vx << 1"""
    vm.cpu.v[FLAG] = vm.cpu.v[instr.x] >> 7
    vm.cpu.set_v(instr.x, vm.cpu.v[instr.x] << 1)
    return None


def execute_ld_i(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """Annn: I := nnn"""
    vm.cpu.i = instr.nnn
    return None


def execute_jp_v0(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """Bnnn: PC := nnn + V0"""
    target = instr.nnn + vm.cpu.v[0]
    vm.memory.check_range(target, 2)
    return target


def execute_rnd(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """Cxnn: Vx := random byte AND nn"""
    vm.cpu.set_v(instr.x, vm.entropy.random_byte() & instr.nn)
    return None


def execute_drw(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """Dxyn: draw n sprite rows from I at (Vx, Vy), VF := collision"""
    sprite = vm.memory.read_block(vm.cpu.i, instr.n)
    collision = vm.display.draw(vm.cpu.v[instr.x], vm.cpu.v[instr.y], sprite)
    vm.cpu.set_flag(collision)
    return None


def execute_skp(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """Ex9E: skip if key Vx is pressed"""
    return _skip_if(vm.keypad.is_pressed(vm.cpu.v[instr.x]), vm)


def execute_sknp(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """ExA1: skip if key Vx is released"""
    return _skip_if(not vm.keypad.is_pressed(vm.cpu.v[instr.x]), vm)


def execute_ld_vx_dt(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """Fx07: Vx := delay timer"""
    vm.cpu.set_v(instr.x, vm.timers.delay)
    return None


def execute_ld_vx_k(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """Fx0A: halt until a key is pressed, then Vx := key"""
    vm.keypad.wait_for_key(instr.x)
    return None


def execute_ld_dt_vx(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """Fx15: delay timer := Vx"""
    vm.timers.set_delay(vm.cpu.v[instr.x])
    return None


def execute_ld_st_vx(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """Fx18: sound timer := Vx"""
    vm.timers.set_sound(vm.cpu.v[instr.x])
    return None


def execute_add_i(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """Fx1E: I := I + Vx (16-bit), VF := overflow"""
    total = vm.cpu.i + vm.cpu.v[instr.x]
    vm.cpu.i = total & 0xFFFF
    vm.cpu.set_flag(total > 0xFFFF)
    return None


def execute_ld_f(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """Fx29: I := address of the font glyph for Vx"""
    vm.cpu.i = vm.cpu.v[instr.x] * FONT_GLYPH_SIZE
    return None


def execute_ld_b(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """Fx33: MEM[I..I+2] := decimal digits of Vx"""
    value = vm.cpu.v[instr.x]
    vm.memory.write_block(vm.cpu.i, (value // 100, (value // 10) % 10, value % 10))
    return None


def execute_ld_mem_vx(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """Fx55: MEM[I..I+x] := V0..Vx"""
    vm.memory.write_block(vm.cpu.i, vm.cpu.v[:instr.x + 1])
    return None


def execute_ld_vx_mem(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """Fx65: V0..Vx := MEM[I..I+x]"""
    values = vm.memory.read_block(vm.cpu.i, instr.x + 1)
    vm.cpu.v[:len(values)] = list(values)
    return None


# Instruction dispatch table
INSTRUCTION_EXECUTORS: dict[Op, InstructionExecutor] = {
    Op.CLS: execute_cls,
    Op.RET: execute_ret,
    Op.JP: execute_jp,
    Op.CALL: execute_call,
    Op.SE_IMM: execute_se_imm,
    Op.SNE_IMM: execute_sne_imm,
    Op.SE_REG: execute_se_reg,
    Op.LD_IMM: execute_ld_imm,
    Op.ADD_IMM: execute_add_imm,
    Op.LD_REG: execute_ld_reg,
    Op.OR: execute_or,
    Op.AND: execute_and,
    Op.XOR: execute_xor,
    Op.ADD_REG: execute_add_reg,
    Op.SUB: execute_sub,
    Op.SHR: execute_shr,
    Op.SUBN: execute_subn,
    Op.SHL: execute_shl,
    Op.SNE_REG: execute_sne_reg,
    Op.LD_I: execute_ld_i,
    Op.JP_V0: execute_jp_v0,
    Op.RND: execute_rnd,
    Op.DRW: execute_drw,
    Op.SKP: execute_skp,
    Op.SKNP: execute_sknp,
    Op.LD_VX_DT: execute_ld_vx_dt,
    Op.LD_VX_K: execute_ld_vx_k,
    Op.LD_DT_VX: execute_ld_dt_vx,
    Op.LD_ST_VX: execute_ld_st_vx,
    Op.ADD_I: execute_add_i,
    Op.LD_F: execute_ld_f,
    Op.LD_B: execute_ld_b,
    Op.LD_MEM_VX: execute_ld_mem_vx,
    Op.LD_VX_MEM: execute_ld_vx_mem,
}


def execute_instruction(instr: Instruction, vm: "Interpreter") -> Optional[int]:
    """Execute a single decoded instruction.

    Returns:
        New PC value if the instruction changes control flow, None otherwise
    """
    executor = INSTRUCTION_EXECUTORS.get(instr.op)
    if executor is None:
        raise ValueError(f"No executor for opcode: {instr.op.name}")
    return executor(instr, vm)
