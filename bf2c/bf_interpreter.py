from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence

from .config import TAPE_LENGTH, wrap_cell
from .errors import StepLimitExceeded, UnsupportedOperation
from .tokens import ChangeMem, Input, Loop, MovePointer, NoOp, Print, SetMemTo, Token


@dataclass
class ExecutionState:
    step: int
    command: Optional[str]
    pointer: int
    tape_start: int
    tape: List[int]
    output: str


@dataclass
class TokenInterpreter:
    """Execute a token tree directly against a fixed tape.

    Used to cross-check the generated C program: the optimized and the raw
    token tree must leave identical tapes behind.
    """

    tape_length: int = TAPE_LENGTH
    print_output: bool = True

    tape: List[int] = field(init=False, repr=False)
    pointer: int = field(init=False, repr=False)
    output_buffer: List[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.reset()

    def reset(self, tape: Optional[List[int]] = None, pointer: int = 0) -> None:
        if tape is not None and len(tape) != self.tape_length:
            raise ValueError(f"Tape must hold exactly {self.tape_length} cells")
        self.tape = tape if tape is not None else [0] * self.tape_length
        self.pointer = pointer
        self.output_buffer = []

    def run(
        self,
        tokens: Sequence[Token],
        *,
        tape: Optional[List[int]] = None,
        pointer: int = 0,
        max_steps: Optional[int] = None,
    ) -> str:
        """Execute ``tokens`` and return the printed text.

        A caller-supplied ``tape`` is mutated in place.
        """
        self.reset(tape, pointer)
        steps = 0
        for _ in self._execute(tokens):
            steps += 1
            if max_steps is not None and steps > max_steps:
                raise StepLimitExceeded("Program exceeded allowed step count")
        return "".join(self.output_buffer)

    def step(
        self,
        tokens: Sequence[Token],
        *,
        max_steps: Optional[int] = None,
        tape_window: int = 10,
    ) -> Iterator[ExecutionState]:
        self.reset()
        steps = 0
        for command in self._execute(tokens):
            if max_steps is not None and steps >= max_steps:
                raise StepLimitExceeded("Program exceeded allowed step count")
            steps += 1
            yield self.snapshot(steps, command, tape_window)

        # Final snapshot marks completion
        yield self.snapshot(steps, None, tape_window)

    def snapshot(self, step: int, command: Optional[str], tape_window: int = 10) -> ExecutionState:
        start = max(0, self.pointer - tape_window)
        end = min(self.tape_length, self.pointer + tape_window + 1)
        return ExecutionState(
            step=step,
            command=command,
            pointer=self.pointer,
            tape_start=start,
            tape=self.tape[start:end].copy(),
            output="".join(self.output_buffer),
        )

    def _execute(self, tokens: Sequence[Token]) -> Iterator[str]:
        # Yields once per executed token and once per loop-guard test.
        for token in tokens:
            if isinstance(token, Loop):
                yield "Loop"
                while self.tape[self.pointer] != 0:
                    yield from self._execute(token.body)
                    yield "Loop"
            else:
                self._apply(token)
                yield type(token).__name__

    def _apply(self, token: Token) -> None:
        if isinstance(token, ChangeMem):
            self.tape[self.pointer] = wrap_cell(self.tape[self.pointer] + token.delta)
        elif isinstance(token, SetMemTo):
            self.tape[self.pointer] = wrap_cell(token.value)
        elif isinstance(token, MovePointer):
            self.pointer = (self.pointer + token.delta) % self.tape_length
        elif isinstance(token, Print):
            if self.print_output:
                self.output_buffer.append(chr(self.tape[self.pointer] & 0xFF))
        elif isinstance(token, Input):
            raise UnsupportedOperation("Input (',') is not supported by the interpreter")
        elif isinstance(token, NoOp):
            pass
        else:
            raise UnsupportedOperation(f"Unknown token {token!r}")


def format_tape(tape: Iterable[int]) -> str:
    """Render the tape up to its last non-zero cell as ``[a][b]...``."""
    cells = list(tape)
    while cells and cells[-1] == 0:
        cells.pop()
    return "".join(f"[{cell}]" for cell in cells)


__all__ = [
    "ExecutionState",
    "StepLimitExceeded",
    "TokenInterpreter",
    "format_tape",
]
