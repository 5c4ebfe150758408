"""CHIP-8 delay and sound timers."""

import time
from typing import Optional

import jax.numpy as jnp
from chix8.state import EmulatorState
from chix8.constants import TIMER_HZ


def _decrement(timer: jnp.ndarray) -> jnp.ndarray:
    return jnp.astype(jnp.where(timer > 0, timer - 1, timer), jnp.uint8)


def tick_timers(state: EmulatorState) -> EmulatorState:
    """Decrement delay and sound timers by one, floored at zero."""
    return state.replace(
        delay_timer=_decrement(state.delay_timer),
        sound_timer=_decrement(state.sound_timer),
    )


def sound_active(state: EmulatorState) -> bool:
    """Whether the host should be playing the tone."""
    return bool(state.sound_timer > 0)


class TimerClock:
    """Turns monotonic timestamps into a count of due timer ticks.

    The host calls :meth:`due` whenever convenient and then ticks the timers
    that many times, keeping them at ``rate_hz`` regardless of how often
    instructions are stepped. Fractional ticks carry over between calls.
    """

    def __init__(self, rate_hz: float = TIMER_HZ, start: Optional[float] = None):
        if rate_hz <= 0:
            raise ValueError(f"rate_hz must be positive, got {rate_hz}")
        self.interval = 1.0 / rate_hz
        self._last = start

    def due(self, now: Optional[float] = None) -> int:
        """Number of ticks elapsed since the previous call."""
        if now is None:
            now = time.monotonic()
        if self._last is None:
            self._last = now
            return 0
        ticks = int((now - self._last) // self.interval)
        if ticks > 0:
            self._last += ticks * self.interval
        return ticks
