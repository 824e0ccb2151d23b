from __future__ import annotations

import copy
import logging
import time
from dataclasses import dataclass
from typing import List, Optional

from .codegen import IRBuilder
from .config import CompilerOptions
from .emitter import Emitter
from .ir import TranslationUnit
from .optimizer import optimize
from .parser import Parser
from .tokens import Token, count_tokens

logger = logging.getLogger(__name__)


@dataclass
class CompileResult:
    tokens: List[Token]
    optimized: List[Token]
    unit: TranslationUnit
    code: str


class BrainfuckCompiler:
    def __init__(self, options: Optional[CompilerOptions] = None) -> None:
        self.options = options or CompilerOptions()
        self.parser = Parser()

    def parse(self, source: str) -> List[Token]:
        return self.parser.parse(source)

    def optimize(self, tokens: List[Token]) -> List[Token]:
        if not self.options.optimize:
            return copy.deepcopy(tokens)
        return optimize(tokens, nested_leading_elision=self.options.nested_leading_elision)

    def build(self, tokens: List[Token]) -> TranslationUnit:
        return IRBuilder(self.options).build(tokens)

    def compile(self, source: str) -> str:
        return self.compile_result(source).code

    def compile_result(self, source: str) -> CompileResult:
        started = time.perf_counter()
        tokens = self.parse(source)
        logger.info("Parsed %d tokens", count_tokens(tokens))
        optimized = self.optimize(tokens)
        logger.info("Optimized to %d tokens", count_tokens(optimized))
        unit = self.build(optimized)
        code = Emitter(self.options.indent).emit(unit)
        logger.info("Elapsed: %.3f seconds", time.perf_counter() - started)
        return CompileResult(tokens=tokens, optimized=optimized, unit=unit, code=code)


__all__ = ["BrainfuckCompiler", "CompileResult"]
