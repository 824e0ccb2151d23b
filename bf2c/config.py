from __future__ import annotations

from dataclasses import dataclass

TAPE_LENGTH = 30000
CELL_BITS = 32
CELL_MIN = -(1 << (CELL_BITS - 1))

# Parser, optimizer, IR builder and emitter all recurse once per nesting level.
MAX_NESTING_DEPTH = 256

CELL_TYPE = "int"
MEMORY_NAME = "memory"
POINTER_NAME = "memPointer"
OUTPUT_HEADER = "stdio.h"
OUTPUT_FUNCTION = "putchar"


def wrap_cell(value: int) -> int:
    """Reduce ``value`` to a signed two's-complement cell."""
    span = 1 << CELL_BITS
    return (value - CELL_MIN) % span + CELL_MIN


@dataclass
class CompilerOptions:
    optimize: bool = True
    nested_leading_elision: bool = False
    wrap_pointer: bool = True
    tape_length: int = TAPE_LENGTH
    indent: str = "\t"


__all__ = [
    "CELL_BITS",
    "CELL_MIN",
    "CELL_TYPE",
    "CompilerOptions",
    "MAX_NESTING_DEPTH",
    "MEMORY_NAME",
    "OUTPUT_FUNCTION",
    "OUTPUT_HEADER",
    "POINTER_NAME",
    "TAPE_LENGTH",
    "wrap_cell",
]
