"""CHIP-8 interpreter errors.

Load-time failures (:class:`RomTooLarge`) leave the interpreter untouched.
Run-time failures derive from :class:`ExecutionError`; the driver fills in
the program counter, raw instruction word and cycle count of the failing
instruction before handing the error back to the host.
"""

from typing import Optional


class Chip8Error(Exception):
    """Base class for every error raised by chix8."""


class RomTooLarge(Chip8Error):
    """ROM image does not fit between the load address and the end of memory."""

    def __init__(self, size: int, capacity: int):
        self.size = size
        self.capacity = capacity
        super().__init__(f"ROM is {size} bytes but only {capacity} bytes are available")


class InvalidKey(Chip8Error, ValueError):
    """Key ordinal outside the 0x0-0xF keypad range."""

    def __init__(self, key: int):
        self.key = key
        super().__init__(f"invalid key {key!r}, expected 0x0-0xF")


class ExecutionError(Chip8Error):
    """Fatal error raised while executing an instruction."""

    def __init__(self, message: str):
        self.message = message
        self.pc: Optional[int] = None
        self.opcode: Optional[int] = None
        self.cycle: Optional[int] = None
        super().__init__(message)

    def attach(self, pc: int, opcode: Optional[int], cycle: int) -> "ExecutionError":
        """Record where the failure happened."""
        self.pc = pc
        self.opcode = opcode
        self.cycle = cycle
        return self

    def __str__(self) -> str:
        if self.pc is None:
            return self.message
        location = f"cycle {self.cycle}, pc 0x{self.pc:03X}"
        if self.opcode is not None:
            location += f", opcode 0x{self.opcode:04X}"
        return f"{self.message} ({location})"


class OutOfBounds(ExecutionError):
    """Memory access outside the addressable range or into reserved memory."""

    def __init__(self, address: int, reason: str = "outside addressable memory"):
        self.address = address
        super().__init__(f"address 0x{address:X} is {reason}")


class StackOverflow(ExecutionError):
    """Subroutine call with every stack slot in use."""

    def __init__(self, depth: int):
        self.depth = depth
        super().__init__(f"call nesting exceeds {depth} frames")


class StackUnderflow(ExecutionError):
    """Return with an empty call stack."""

    def __init__(self):
        super().__init__("return with empty call stack")


class UnknownOpcode(ExecutionError):
    """Instruction word that does not decode to an executable instruction."""

    def __init__(self, instruction: int, reason: str = "unrecognised opcode"):
        self.instruction = instruction
        super().__init__(f"{reason} 0x{instruction:04X}")


class InterpreterHalted(Chip8Error):
    """``step()`` called after a fatal error; reset or reload to continue."""
