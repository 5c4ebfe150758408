"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from chix8.state import EmulatorState
from chix8.decode import DecodedInstruction
from chix8.constants import ADDRESS_MASK, FONT_START, FONT_GLYPH_SIZE
from chix8.memory import read_bytes, write_bytes


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register, keeping 12 bits."""
    new_i = (jnp.astype(state.I, jnp.int32) + state.V[instruction.x]) & ADDRESS_MASK
    return state.replace(I=jnp.astype(new_i, jnp.uint16))


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press.

    The program counter is moved back onto this instruction and the state is
    flagged as waiting; the key is delivered by ``keypad.resume_after_key``.
    """
    return state.replace(
        pc=state.pc - 2,
        awaiting_key=True,
        key_register=instruction.x,
        pending_key=-1,
    )


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = int(state.V[instruction.x]) & 0xF
    return state.replace(I=jnp.astype(font_address(digit), jnp.uint16))


def font_address(digit: int) -> int:
    """Memory address of the built-in glyph for hexadecimal digit 0x0-0xF."""
    return FONT_START + (digit & 0xF) * FONT_GLYPH_SIZE


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.x])
    digits = [value // 100, (value // 10) % 10, value % 10]
    return state.replace(memory=write_bytes(state.memory, int(state.I), digits))


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    count = instruction.x + 1
    new_memory = write_bytes(state.memory, int(state.I), state.V[:count])

    if state.quirks.load_store_increments_index:
        return state.replace(memory=new_memory, I=(state.I + count) & ADDRESS_MASK)
    return state.replace(memory=new_memory)


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    count = instruction.x + 1
    values = read_bytes(state.memory, int(state.I), count)
    new_V = state.V.at[:count].set(values)

    if state.quirks.load_store_increments_index:
        return state.replace(V=new_V, I=(state.I + count) & ADDRESS_MASK)
    return state.replace(V=new_V)
