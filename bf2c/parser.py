from __future__ import annotations

from typing import List, Tuple

from .config import MAX_NESTING_DEPTH
from .errors import NestingTooDeep, UnmatchedCloseBracket, UnterminatedLoop
from .tokens import ChangeMem, Input, Loop, MovePointer, Print, Token

_SIMPLE_COMMANDS = {
    "+": lambda: ChangeMem(1),
    "-": lambda: ChangeMem(-1),
    ">": lambda: MovePointer(1),
    "<": lambda: MovePointer(-1),
    ",": Input,
    ".": Print,
}


class Parser:
    def __init__(self, max_depth: int = MAX_NESTING_DEPTH) -> None:
        self.max_depth = max_depth

    def parse(self, source: str) -> List[Token]:
        # Each frame holds the sequence under construction and where its '[' was.
        stack: List[Tuple[List[Token], int, int]] = [([], 0, 0)]
        line = 1
        column = 0
        for char in source:
            if char == "\n":
                line += 1
                column = 0
                continue
            column += 1
            factory = _SIMPLE_COMMANDS.get(char)
            if factory is not None:
                stack[-1][0].append(factory())
            elif char == "[":
                if len(stack) > self.max_depth:
                    raise NestingTooDeep(
                        f"Loop nesting deeper than {self.max_depth} levels", line, column
                    )
                stack.append(([], line, column))
            elif char == "]":
                if len(stack) == 1:
                    raise UnmatchedCloseBracket("Unmatched ']'", line, column)
                body, _, _ = stack.pop()
                stack[-1][0].append(Loop(body))
        if len(stack) > 1:
            _, open_line, open_column = stack[-1]
            raise UnterminatedLoop("Unterminated '['", open_line, open_column)
        return stack[0][0]


def parse(source: str) -> List[Token]:
    return Parser().parse(source)


__all__ = ["Parser", "parse"]
