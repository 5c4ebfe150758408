"""CHIP-8 memory access.

Memory is a flat ``uint8`` array of 4096 bytes. Words are big-endian: the
high byte lives at ``address`` and the low byte at ``address + 1``.
Run-time writes may only land in the program region (0x200 and above);
the interpreter area holding the font is read-only once the state exists.
"""

import jax.numpy as jnp

from chix8.constants import MEMORY_SIZE, PROGRAM_START, MAX_ROM_SIZE
from chix8.errors import OutOfBounds, RomTooLarge


def _check_range(address: int, length: int = 1) -> None:
    if address + length > MEMORY_SIZE:
        # Report the first byte past the end of memory
        raise OutOfBounds(max(address, MEMORY_SIZE))


def _check_writable(address: int, length: int) -> None:
    _check_range(address, length)
    if length and address < PROGRAM_START:
        raise OutOfBounds(address, reason="reserved for the interpreter")


def read_byte(memory: jnp.ndarray, address: int) -> jnp.ndarray:
    """Read one byte."""
    _check_range(address)
    return memory[address]


def read_word(memory: jnp.ndarray, address: int) -> int:
    """Read a big-endian 16-bit word."""
    _check_range(address, 2)
    return (int(memory[address]) << 8) | int(memory[address + 1])


def read_bytes(memory: jnp.ndarray, address: int, length: int) -> jnp.ndarray:
    """Read ``length`` consecutive bytes starting at ``address``."""
    _check_range(address, length)
    return memory[address:address + length]


def write_byte(memory: jnp.ndarray, address: int, value: int) -> jnp.ndarray:
    """Write one byte, returning the updated memory."""
    _check_writable(address, 1)
    return memory.at[address].set(jnp.asarray(value, dtype=jnp.uint8))


def write_bytes(memory: jnp.ndarray, address: int, values) -> jnp.ndarray:
    """Write a run of bytes starting at ``address``, returning the updated memory."""
    values = jnp.asarray(values, dtype=jnp.uint8)
    _check_writable(address, len(values))
    return memory.at[address:address + len(values)].set(values)


def load_program(memory: jnp.ndarray, rom: bytes) -> jnp.ndarray:
    """Copy a ROM image to the program start address.

    Raises:
        RomTooLarge: the image does not fit in the program region
    """
    if len(rom) > MAX_ROM_SIZE:
        raise RomTooLarge(len(rom), MAX_ROM_SIZE)
    if not rom:
        return memory
    rom_array = jnp.array(list(rom), dtype=jnp.uint8)
    return memory.at[PROGRAM_START:PROGRAM_START + len(rom)].set(rom_array)
