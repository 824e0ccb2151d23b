from __future__ import annotations

from typing import Optional


class CompileError(Exception):
    pass


class ParseError(CompileError):
    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
        if line is not None and column is not None:
            message = f"{message} at line {line}, column {column}"
        super().__init__(message)
        self.line = line
        self.column = column


class UnmatchedCloseBracket(ParseError):
    pass


class UnterminatedLoop(ParseError):
    pass


class NestingTooDeep(ParseError):
    pass


class UnsupportedOperation(CompileError):
    """Raised for tokens that have no lowering, currently only ``,``."""


class StepLimitExceeded(RuntimeError):
    """Raised when execution exceeds the configured step budget."""


__all__ = [
    "CompileError",
    "NestingTooDeep",
    "ParseError",
    "StepLimitExceeded",
    "UnmatchedCloseBracket",
    "UnsupportedOperation",
    "UnterminatedLoop",
]
