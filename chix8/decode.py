"""CHIP-8 instruction decoding."""

import enum

from chex import dataclass

from chix8.errors import UnknownOpcode


class Op(enum.Enum):
    """Every CHIP-8 instruction, valued by its opcode pattern."""
    SYS = "0NNN"
    CLEAR_SCREEN = "00E0"
    RETURN = "00EE"
    JUMP = "1NNN"
    CALL = "2NNN"
    SKIP_EQ_IMM = "3XNN"
    SKIP_NE_IMM = "4XNN"
    SKIP_EQ_REG = "5XY0"
    SET_IMM = "6XNN"
    ADD_IMM = "7XNN"
    SET_REG = "8XY0"
    OR = "8XY1"
    AND = "8XY2"
    XOR = "8XY3"
    ADD_REG = "8XY4"
    SUB = "8XY5"
    SHR = "8XY6"
    SUBN = "8XY7"
    SHL = "8XYE"
    SKIP_NE_REG = "9XY0"
    SET_INDEX = "ANNN"
    JUMP_OFFSET = "BNNN"
    RANDOM = "CXNN"
    DRAW = "DXYN"
    SKIP_KEY = "EX9E"
    SKIP_NOT_KEY = "EXA1"
    GET_DELAY = "FX07"
    WAIT_KEY = "FX0A"
    SET_DELAY = "FX15"
    SET_SOUND = "FX18"
    ADD_INDEX = "FX1E"
    FONT = "FX29"
    BCD = "FX33"
    STORE = "FX55"
    LOAD = "FX65"


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    raw: int
    op: Op
    opcode: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)


# Families selected by the high nibble alone
_SIMPLE_OPS = {
    0x1: Op.JUMP,
    0x2: Op.CALL,
    0x3: Op.SKIP_EQ_IMM,
    0x4: Op.SKIP_NE_IMM,
    0x6: Op.SET_IMM,
    0x7: Op.ADD_IMM,
    0xA: Op.SET_INDEX,
    0xB: Op.JUMP_OFFSET,
    0xC: Op.RANDOM,
    0xD: Op.DRAW,
}

_ALU_OPS = {
    0x0: Op.SET_REG,
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
    0x9E: Op.SKIP_KEY,
    0xA1: Op.SKIP_NOT_KEY,
}

_MISC_OPS = {
    0x07: Op.GET_DELAY,
    0x0A: Op.WAIT_KEY,
    0x15: Op.SET_DELAY,
    0x18: Op.SET_SOUND,
    0x1E: Op.ADD_INDEX,
    0x29: Op.FONT,
    0x33: Op.BCD,
    0x55: Op.STORE,
    0x65: Op.LOAD,
}


def _classify(instruction: int, opcode: int, n: int, nn: int) -> Op:
    """Pick the instruction variant, or raise for unused bit patterns."""
    if opcode in _SIMPLE_OPS:
        return _SIMPLE_OPS[opcode]
    if opcode == 0x0:
        if instruction == 0x00E0:
            return Op.CLEAR_SCREEN
        if instruction == 0x00EE:
            return Op.RETURN
        return Op.SYS
    if opcode == 0x5 and n == 0:
        return Op.SKIP_EQ_REG
    if opcode == 0x9 and n == 0:
        return Op.SKIP_NE_REG
    if opcode == 0x8 and n in _ALU_OPS:
        return _ALU_OPS[n]
    if opcode == 0xE and nn in _KEY_OPS:
        return _KEY_OPS[nn]
    if opcode == 0xF and nn in _MISC_OPS:
        return _MISC_OPS[nn]
    raise UnknownOpcode(instruction)


def decode(instruction: int) -> DecodedInstruction:
    """Decode 16-bit instruction into components.

    Raises:
        UnknownOpcode: the word matches no CHIP-8 instruction
    """
    instruction = int(instruction) & 0xFFFF
    opcode = (instruction & 0xF000) >> 12
    n = instruction & 0x000F
    nn = instruction & 0x00FF
    return DecodedInstruction(
        raw=instruction,
        op=_classify(instruction, opcode, n, nn),
        opcode=opcode,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=n,
        nn=nn,
        nnn=instruction & 0x0FFF
    )
