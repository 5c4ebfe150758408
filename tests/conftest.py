"""Test configuration and fixtures for CHIP-8 interpreter tests."""

import pytest
import jax.numpy as jnp
from chix8 import create_state, Interpreter, Quirks, PROGRAM_START


# IBM Logo: clears the screen, draws six 8x15 sprites, then jumps to itself.
IBM_LOGO = bytes([
    0x00, 0xE0, 0xA2, 0x2A, 0x60, 0x0C, 0x61, 0x08, 0xD0, 0x1F, 0x70, 0x09,
    0xA2, 0x39, 0xD0, 0x1F, 0xA2, 0x48, 0x70, 0x08, 0xD0, 0x1F, 0x70, 0x04,
    0xA2, 0x57, 0xD0, 0x1F, 0x70, 0x08, 0xA2, 0x66, 0xD0, 0x1F, 0x70, 0x08,
    0xA2, 0x75, 0xD0, 0x1F, 0x12, 0x28,
    # I
    0xFF, 0x00, 0xFF, 0x00, 0x3C, 0x00, 0x3C, 0x00, 0x3C, 0x00, 0x3C, 0x00, 0xFF, 0x00, 0xFF,
    # B (left half)
    0xFF, 0x00, 0xFF, 0x00, 0x38, 0x00, 0x3F, 0x00, 0x3F, 0x00, 0x38, 0x00, 0xFF, 0x00, 0xFF,
    # B (right half)
    0x80, 0x00, 0xE0, 0x00, 0xE0, 0x00, 0x80, 0x00, 0x80, 0x00, 0xE0, 0x00, 0xE0, 0x00, 0x80,
    # M (left)
    0xF8, 0x00, 0xFC, 0x00, 0x3E, 0x00, 0x3F, 0x00, 0x3B, 0x00, 0x39, 0x00, 0xF8, 0x00, 0xF8,
    # M (middle)
    0x03, 0x00, 0x07, 0x00, 0x0F, 0x00, 0xBF, 0x00, 0xFB, 0x00, 0xF3, 0x00, 0xE3, 0x00, 0x43,
    # M (right)
    0xE0, 0x00, 0xE0, 0x00, 0x80, 0x00, 0x80, 0x00, 0x80, 0x00, 0x80, 0x00, 0xE0, 0x00, 0xE0,
])

# (x, sprite address) for each logo sprite, all drawn at y = 8
IBM_LOGO_SPRITES = [(12, 0x22A), (21, 0x239), (29, 0x248), (33, 0x257), (41, 0x266), (49, 0x275)]


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def cosmac_state():
    """Provide a fresh state with the COSMAC VIP quirks."""
    return create_state(quirks=Quirks.from_profile("cosmac"))


@pytest.fixture
def modern_state():
    """Provide a fresh state with the CHIP-48/SUPER-CHIP quirks."""
    return create_state(quirks=Quirks.from_profile("modern"))


@pytest.fixture
def interpreter():
    """Provide an interpreter with nothing loaded."""
    return Interpreter()


def make_interpreter(*instructions, quirks=None):
    """Build an interpreter running a program made of 16-bit instruction words."""
    rom = bytearray()
    for word in instructions:
        rom += bytes([word >> 8, word & 0xFF])
    return Interpreter(bytes(rom), quirks=quirks)


def program_address(index):
    """Address of the index-th instruction of a program."""
    return PROGRAM_START + 2 * index


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )
