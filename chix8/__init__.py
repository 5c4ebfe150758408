"""CHIP-8 interpreter package."""

from chix8.state import EmulatorState, StackState, create_state
from chix8.quirks import Quirks
from chix8.emulator import execute, load_rom, fetch
from chix8.decode import DecodedInstruction, Op, decode
from chix8.keypad import set_key, is_key_pressed, pressed_keys
from chix8.timers import tick_timers, sound_active, TimerClock
from chix8.interpreter import Interpreter, Status
from chix8.errors import (
    Chip8Error, RomTooLarge, InvalidKey, ExecutionError, OutOfBounds,
    StackOverflow, StackUnderflow, UnknownOpcode, InterpreterHalted,
)
from chix8.constants import *

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "Quirks",
    "fetch",
    "execute",
    "load_rom",
    "DecodedInstruction",
    "Op",
    "decode",
    "set_key",
    "is_key_pressed",
    "pressed_keys",
    "tick_timers",
    "sound_active",
    "TimerClock",
    "Interpreter",
    "Status",
    "Chip8Error",
    "RomTooLarge",
    "InvalidKey",
    "ExecutionError",
    "OutOfBounds",
    "StackOverflow",
    "StackUnderflow",
    "UnknownOpcode",
    "InterpreterHalted",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
