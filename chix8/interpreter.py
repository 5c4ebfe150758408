"""CHIP-8 interpreter driver.

:class:`Interpreter` owns a single :class:`~chix8.state.EmulatorState` and
exposes the host-facing surface: load a ROM, ``step()`` one instruction,
``tick_timers()`` at 60 Hz, feed key events and read the framebuffer.

The driver does not pace itself. Call ``step()`` at the cadence you want
(500-1000 Hz is typical) and ``tick_timers()`` from a 60 Hz clock, e.g. a
:class:`~chix8.timers.TimerClock`. The state is not thread-safe; a host
that runs the interpreter on its own thread must guard the whole
interpreter with one lock.
"""

import enum
from typing import Any, Dict, Optional

import jax
import numpy as np

from chix8.constants import PROGRAM_START
from chix8.decode import decode
from chix8.emulator import DISPLAY_OPS, execute, fetch, load_rom
from chix8.errors import ExecutionError, InterpreterHalted, RomTooLarge
from chix8.keypad import set_key, resume_after_key
from chix8.logging import ConsoleLogger, build_progress_bar
from chix8.quirks import Quirks
from chix8.state import EmulatorState, create_state
from chix8.timers import tick_timers, sound_active


class Status(enum.Enum):
    """Driver execution status."""
    READY = "ready"
    WAITING_FOR_KEY = "waiting_for_key"
    HALTED = "halted"


class Interpreter:
    """Steps a CHIP-8 program on behalf of a host application.

    Args:
        rom: Optional ROM image to load immediately
        quirks: Quirk configuration (defaults to the COSMAC VIP profile)
        seed: Seed for the CXNN random source
        logger: Logger for lifecycle events; defaults to a WARNING-level console logger
    """

    def __init__(
        self,
        rom: Optional[bytes] = None,
        quirks: Optional[Quirks] = None,
        seed: int = 0,
        logger: Optional[ConsoleLogger] = None,
    ):
        self.quirks = quirks if quirks is not None else Quirks()
        self.seed = seed
        self.logger = logger if logger is not None else ConsoleLogger("chix8", log_level="WARNING")
        self.error: Optional[ExecutionError] = None
        self._rom = b""
        self.state: EmulatorState = self._fresh_state()
        if rom is not None:
            self.load(rom)

    def _fresh_state(self) -> EmulatorState:
        return create_state(jax.random.PRNGKey(self.seed), self.quirks)

    @property
    def status(self) -> Status:
        if self.error is not None:
            return Status.HALTED
        if self.state.awaiting_key:
            return Status.WAITING_FOR_KEY
        return Status.READY

    @property
    def pc(self) -> int:
        return int(self.state.pc)

    @property
    def sound_active(self) -> bool:
        """True while the sound timer is non-zero."""
        return sound_active(self.state)

    def load(self, rom: bytes) -> None:
        """Reset the machine and load a ROM image at 0x200.

        Raises:
            RomTooLarge: the image does not fit; the current session is kept
        """
        rom = bytes(rom)
        try:
            state = load_rom(self._fresh_state(), rom)
        except RomTooLarge as e:
            self.logger.error(f"ROM rejected: {e}")
            raise
        self.state = state
        self.error = None
        self._rom = rom
        self.logger.info(f"Loaded {len(rom)}-byte ROM at 0x{PROGRAM_START:03X}")

    def reset(self) -> None:
        """Re-initialise the machine and reload the last accepted ROM."""
        self.logger.debug("Reset")
        self.load(self._rom)

    def step(self) -> bool:
        """Run one fetch-decode-execute cycle.

        While waiting for a key this is a no-op until a press arrives; the
        step after the press completes FX0A and nothing else.

        Returns:
            True if the instruction may have changed the framebuffer

        Raises:
            ExecutionError: the instruction failed; the interpreter is now halted
            InterpreterHalted: called while halted
        """
        if self.error is not None:
            raise InterpreterHalted(
                "interpreter halted after an error; reset or load a ROM to continue"
            ) from self.error

        if self.state.awaiting_key:
            if self.state.pending_key >= 0:
                key = self.state.pending_key
                self.state = resume_after_key(self.state)
                self.logger.debug(f"Key 0x{key:X} received, resuming at 0x{self.pc:03X}")
            return False

        pc = self.pc
        opcode = None
        try:
            state, opcode = fetch(self.state)
            instruction = decode(opcode)
            state = execute(state, instruction)
        except ExecutionError as e:
            self.error = e.attach(pc, opcode, self.state.cycles)
            self.logger.error(f"Halted: {e}")
            raise

        self.state = state.replace(cycles=state.cycles + 1)
        if self.state.awaiting_key:
            self.logger.debug(f"Waiting for key press into V{self.state.key_register:X}")
        return instruction.op in DISPLAY_OPS

    def tick_timers(self) -> None:
        """Decrement the delay and sound timers; call at 60 Hz."""
        self.state = tick_timers(self.state)

    def set_key_state(self, key: int, pressed: bool) -> None:
        """Report a key as pressed or released.

        Raises:
            InvalidKey: key outside 0x0-0xF
        """
        self.state = set_key(self.state, key, pressed)

    def framebuffer(self) -> np.ndarray:
        """Copy of the display as a (64, 32) boolean array indexed ``[x, y]``."""
        return np.array(self.state.display, dtype=np.bool_)

    def snapshot(self) -> Dict[str, Any]:
        """Registers, stack, timers and status for diagnostics."""
        stack = self.state.stack
        return {
            "status": self.status.value,
            "cycles": self.state.cycles,
            "pc": self.pc,
            "I": int(self.state.I),
            "V": [int(v) for v in self.state.V],
            "stack": [int(a) for a in stack.data[:stack.pointer]],
            "delay_timer": int(self.state.delay_timer),
            "sound_timer": int(self.state.sound_timer),
        }

    def _blocked(self) -> bool:
        return self.state.awaiting_key and self.state.pending_key < 0

    def run_frame(self, instructions_per_frame: int = 10) -> bool:
        """Tick the timers once, then step up to ``instructions_per_frame`` times.

        Stops early while blocked on a key press.

        Returns:
            True if any step may have changed the framebuffer
        """
        self.tick_timers()
        display_updated = False
        for _ in range(instructions_per_frame):
            if self._blocked():
                break
            display_updated |= self.step()
        return display_updated

    def run(self, max_steps: int, progress: bool = False) -> int:
        """Step until the program parks in a jump-to-self loop, blocks on a key, or ``max_steps`` is reached.

        Returns:
            Number of ``step()`` calls made
        """
        update, close = build_progress_bar(max_steps) if progress else (None, None)
        executed = 0
        try:
            while executed < max_steps and not self._blocked():
                pc_before = self.pc
                resuming = self.state.awaiting_key
                self.step()
                executed += 1
                if update is not None:
                    update(1)
                if not resuming and not self.state.awaiting_key and self.pc == pc_before:
                    self.logger.debug(f"Idle loop at 0x{pc_before:03X} after {executed} steps")
                    break
        finally:
            if close is not None:
                close()
        return executed
