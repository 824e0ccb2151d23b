from .bf_interpreter import ExecutionState, TokenInterpreter, format_tape
from .codegen import IRBuilder, build_unit
from .compiler import BrainfuckCompiler, CompileResult
from .config import TAPE_LENGTH, CompilerOptions
from .emitter import Emitter, emit
from .errors import (
    CompileError,
    NestingTooDeep,
    ParseError,
    StepLimitExceeded,
    UnmatchedCloseBracket,
    UnsupportedOperation,
    UnterminatedLoop,
)
from .optimizer import optimize
from .parser import Parser, parse

__all__ = [
    "BrainfuckCompiler",
    "CompileError",
    "CompileResult",
    "CompilerOptions",
    "Emitter",
    "ExecutionState",
    "IRBuilder",
    "NestingTooDeep",
    "ParseError",
    "Parser",
    "StepLimitExceeded",
    "TAPE_LENGTH",
    "TokenInterpreter",
    "UnmatchedCloseBracket",
    "UnsupportedOperation",
    "UnterminatedLoop",
    "build_unit",
    "emit",
    "format_tape",
    "optimize",
    "parse",
]
