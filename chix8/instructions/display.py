"""CHIP-8 display operations."""

import jax.numpy as jnp
from chix8.state import EmulatorState
from chix8.decode import DecodedInstruction
from chix8.constants import (
    SCREEN_WIDTH, SCREEN_HEIGHT, SPRITE_WIDTH, MAX_SPRITE_HEIGHT, FLAG_REGISTER,
)
from chix8.memory import read_bytes

# Pre-computed coordinate grids for display operations
xx, yy = jnp.meshgrid(jnp.arange(SCREEN_WIDTH), jnp.arange(SCREEN_HEIGHT), indexing='ij')


def sprite_mask(sprite_rows: jnp.ndarray, x: int, y: int, wrap: bool) -> jnp.ndarray:
    """Lay an 8-pixel-wide sprite onto a screen-sized boolean mask.

    Args:
        sprite_rows: Sprite bytes, one per row, most significant bit leftmost
        x: Left column, already reduced modulo the screen width
        y: Top row, already reduced modulo the screen height
        wrap: Wrap pixels past the right/bottom edges instead of clipping them

    Returns:
        Boolean array of shape (64, 32), True where the sprite has a set pixel
    """
    height = len(sprite_rows)
    padded = jnp.zeros(MAX_SPRITE_HEIGHT + 1, dtype=jnp.int32).at[:height].set(
        jnp.astype(sprite_rows, jnp.int32)
    )

    col_offset = xx - x
    row_offset = yy - y
    if wrap:
        col_offset = col_offset % SCREEN_WIDTH
        row_offset = row_offset % SCREEN_HEIGHT

    in_sprite = (col_offset >= 0) & (col_offset < SPRITE_WIDTH) & (row_offset >= 0) & (row_offset < height)

    sprite_bytes = padded[jnp.clip(row_offset, 0, MAX_SPRITE_HEIGHT)]
    bits = (sprite_bytes >> (SPRITE_WIDTH - 1 - jnp.clip(col_offset, 0, SPRITE_WIDTH - 1))) & 1
    return jnp.astype(bits, jnp.bool_) & in_sprite


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N, VF = collision."""
    sprite_x = int(state.V[instruction.x]) % SCREEN_WIDTH
    sprite_y = int(state.V[instruction.y]) % SCREEN_HEIGHT
    sprite_rows = read_bytes(state.memory, int(state.I), instruction.n)

    sprite = sprite_mask(sprite_rows, sprite_x, sprite_y, state.quirks.draw_wraps_at_edges)
    collision = jnp.any(state.display & sprite)

    return state.replace(
        display=state.display ^ sprite,
        V=state.V.at[FLAG_REGISTER].set(jnp.astype(collision, jnp.uint8))
    )
