"""CHIP-8 keypad state and key-wait handling."""

from chix8.state import EmulatorState
from chix8.constants import NUM_KEYS
from chix8.errors import InvalidKey


def _check_key(key: int) -> int:
    if not 0 <= key < NUM_KEYS:
        raise InvalidKey(key)
    return key


def is_key_pressed(state: EmulatorState, key: int) -> bool:
    """Current (level-triggered) state of a key."""
    return bool(state.keypad[_check_key(key)])


def pressed_keys(state: EmulatorState) -> list[int]:
    """Ordinals of every key currently held down, in ascending order."""
    return [key for key in range(NUM_KEYS) if state.keypad[key]]


def set_key(state: EmulatorState, key: int, pressed: bool) -> EmulatorState:
    """Set the state of one key.

    A press transition observed while FX0A is waiting is latched into
    ``pending_key``; keys already held when the wait began do not count.
    """
    was_pressed = is_key_pressed(state, key)
    state = state.replace(keypad=state.keypad.at[key].set(bool(pressed)))
    if pressed and not was_pressed and state.awaiting_key and state.pending_key < 0:
        state = state.replace(pending_key=key)
    return state


def resume_after_key(state: EmulatorState) -> EmulatorState:
    """Complete a pending FX0A: store the key in VX and step past the instruction."""
    if not state.awaiting_key or state.pending_key < 0:
        return state
    return state.replace(
        V=state.V.at[state.key_register].set(state.pending_key),
        pc=state.pc + 2,
        awaiting_key=False,
        pending_key=-1,
    )
