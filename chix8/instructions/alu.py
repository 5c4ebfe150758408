"""CHIP-8 ALU operations (8xxx).

Each ALU function maps the two operands to ``(result, flag)``. A flag of
``None`` leaves VF alone. Both are computed from the operands before any
register is written. Arithmetic writes the flag first and the result second,
so ``8FY4``, ``8FY5`` and ``8FY7`` leave the result in VF. Shifts write the
result first and the flag second, so ``8FY6`` and ``8FYE`` leave the
shifted-out bit in VF.
"""

from typing import Callable, Optional

import jax.numpy as jnp
from chix8.state import EmulatorState
from chix8.decode import DecodedInstruction
from chix8.constants import FLAG_REGISTER

AluResult = tuple[jnp.ndarray, Optional[jnp.ndarray]]


def alu_set(vx: int, vy: int) -> AluResult:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> AluResult:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> AluResult:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> AluResult:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> AluResult:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = jnp.astype(vx, jnp.int32) + vy
    carry = jnp.astype(result > 255, jnp.uint8)
    return jnp.astype(result & 0xFF, jnp.uint8), carry


def alu_sub_xy(vx: int, vy: int) -> AluResult:
    """8XY5 - Subtract: VX -= VY, set no-borrow flag."""
    borrow_flag = jnp.astype(vx >= vy, jnp.uint8)
    result = (jnp.astype(vx, jnp.int32) - vy) & 0xFF
    return jnp.astype(result, jnp.uint8), borrow_flag


def alu_shift_right(vx: int, vy: int) -> AluResult:
    """8XY6 - Shift right: VX >>= 1."""
    shifted_bit = vx & 1
    result = vx >> 1
    return result, shifted_bit


def alu_sub_yx(vx: int, vy: int) -> AluResult:
    """8XY7 - Subtract: VX = VY - VX, set no-borrow flag."""
    borrow_flag = jnp.astype(vy >= vx, jnp.uint8)
    result = (jnp.astype(vy, jnp.int32) - vx) & 0xFF
    return jnp.astype(result, jnp.uint8), borrow_flag


def alu_shift_left(vx: int, vy: int) -> AluResult:
    """8XYE - Shift left: VX <<= 1."""
    shifted_bit = (vx & 0x80) >> 7
    result = (jnp.astype(vx, jnp.int32) << 1) & 0xFF
    return jnp.astype(result, jnp.uint8), shifted_bit


def make_alu_instruction(
    alu_fn: Callable[[jnp.ndarray, jnp.ndarray], AluResult], shift: bool = False
) -> Callable[[EmulatorState, DecodedInstruction], EmulatorState]:
    """Factory for 8XYN instructions.

    Shifts read VY instead of VX when ``shift_uses_source_register`` is set,
    and write VF after VX rather than before it.
    """
    def alu_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        vx = state.V[instruction.x]
        vy = state.V[instruction.y]
        if shift and state.quirks.shift_uses_source_register:
            vx = vy

        result, flag = alu_fn(vx, vy)

        result = jnp.astype(result, jnp.uint8)
        if flag is None:
            return state.replace(V=state.V.at[instruction.x].set(result))

        flag = jnp.astype(flag, jnp.uint8)
        if shift:
            new_V = state.V.at[instruction.x].set(result).at[FLAG_REGISTER].set(flag)
        else:
            new_V = state.V.at[FLAG_REGISTER].set(flag).at[instruction.x].set(result)
        return state.replace(V=new_V)
    return alu_instruction


execute_alu_set = make_alu_instruction(alu_set)
execute_alu_or = make_alu_instruction(alu_or)
execute_alu_and = make_alu_instruction(alu_and)
execute_alu_xor = make_alu_instruction(alu_xor)
execute_alu_add = make_alu_instruction(alu_add)
execute_alu_sub_xy = make_alu_instruction(alu_sub_xy)
execute_alu_shift_right = make_alu_instruction(alu_shift_right, shift=True)
execute_alu_sub_yx = make_alu_instruction(alu_sub_yx)
execute_alu_shift_left = make_alu_instruction(alu_shift_left, shift=True)
