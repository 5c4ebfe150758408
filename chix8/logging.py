"""Console logging for the chix8 interpreter.

:class:`ConsoleLogger` is the leveled logger the :class:`~chix8.interpreter.Interpreter`
reports lifecycle events through (ROM loads, resets, key waits, halts).
:func:`build_progress_bar` wraps tqdm for long ``Interpreter.run`` batches.
"""

import sys
import time
from typing import Callable, TextIO, Tuple

from tqdm import tqdm

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_ANSI = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"


class ConsoleLogger:
    """Leveled console logger with optional colors and elapsed-time stamps.

    Args:
        name: Tag printed on every line
        log_level: Minimum level shown, one of ``LEVELS``
        use_colors: Color the level tag; ignored unless ``stream`` is a TTY
        show_timestamps: Prefix lines with seconds since the logger was created
        stream: Output stream, stdout by default
    """

    def __init__(
        self,
        name: str = "chix8",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream: TextIO = None,
    ):
        self.log_level = log_level.upper()
        if self.log_level not in LEVELS:
            raise ValueError(
                f"Unknown log level '{log_level}'. Available: {list(LEVELS)}"
            )
        self.name = name
        self.stream = stream if stream is not None else sys.stdout
        isatty = getattr(self.stream, "isatty", None)
        self.use_colors = use_colors and isatty is not None and isatty()
        self.show_timestamps = show_timestamps
        self.start_time = time.monotonic()
        self._threshold = LEVELS.index(self.log_level)

    def enabled(self, level: str) -> bool:
        """Whether a message at ``level`` would be printed."""
        return LEVELS.index(level.upper()) >= self._threshold

    def _format(self, level: str, message: str) -> str:
        tag = f"[{level:>8s}]"
        if self.use_colors:
            tag = f"{_ANSI[level]}{tag}{_RESET}"
        stamp = f"[{time.monotonic() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        return f"{stamp}{tag}[{self.name}] {message}"

    def log(self, level: str, message: str):
        level = level.upper()
        if self.enabled(level):
            print(self._format(level, message), file=self.stream, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)


def build_progress_bar(
    max_steps: int,
    desc: str = None,
    **kwargs,
) -> Tuple[Callable[[int], None], Callable[[], None]]:
    """Build a tqdm progress bar for a run of up to ``max_steps`` instructions.

    Returns:
        ``(update, close)``: ``update(steps)`` advances the bar, ``close()``
        finalises it
    """
    if desc is None:
        desc = f"Running (up to {max_steps:,} instructions)"
    kwargs.pop("total", None)

    bar = tqdm(total=max_steps, desc=desc, unit="instr", **kwargs)

    def _update(steps: int = 1):
        bar.update(int(steps))

    def _close():
        bar.close()

    return _update, _close
