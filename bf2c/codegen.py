from __future__ import annotations

from typing import Optional, Sequence

from .config import (
    CELL_TYPE,
    MEMORY_NAME,
    OUTPUT_FUNCTION,
    OUTPUT_HEADER,
    POINTER_NAME,
    CompilerOptions,
)
from .errors import UnsupportedOperation
from .ir import (
    ArrayDecl,
    Assign,
    Call,
    Compare,
    If,
    IndexRef,
    Increment,
    Literal,
    Return,
    Scope,
    TranslationUnit,
    VarDecl,
    VarRef,
    While,
)
from .tokens import ChangeMem, Input, Loop, MovePointer, NoOp, Print, SetMemTo, Token

EXIT_OK = 0


class IRBuilder:
    """Lower an optimized token tree into a single ``main`` function."""

    def __init__(self, options: Optional[CompilerOptions] = None) -> None:
        self.options = options or CompilerOptions()

    def build(self, tokens: Sequence[Token]) -> TranslationUnit:
        unit = TranslationUnit()
        unit.add_import(OUTPUT_HEADER)
        main = unit.add_function("main", "int")
        main.scope.add(ArrayDecl(MEMORY_NAME, CELL_TYPE, self.options.tape_length))
        main.scope.add(VarDecl(POINTER_NAME, CELL_TYPE, 0))
        self._build_scope(tokens, main.scope)
        main.scope.add(Return(Literal(EXIT_OK)))
        return unit

    def _build_scope(self, tokens: Sequence[Token], scope: Scope) -> None:
        for token in tokens:
            self._build_token(token, scope)

    def _build_token(self, token: Token, scope: Scope) -> None:
        if isinstance(token, ChangeMem):
            scope.add(Increment(self._cell(), token.delta))
        elif isinstance(token, SetMemTo):
            scope.add(Assign(self._cell(), Literal(token.value)))
        elif isinstance(token, MovePointer):
            self._build_move(token.delta, scope)
        elif isinstance(token, Print):
            scope.add(Call(OUTPUT_FUNCTION, [self._cell()]))
        elif isinstance(token, Loop):
            body = Scope()
            self._build_scope(token.body, body)
            scope.add(While(Compare("!=", self._cell(), Literal(0)), body))
        elif isinstance(token, Input):
            raise UnsupportedOperation("Input (',') has no translation to C")
        elif isinstance(token, NoOp):
            return
        else:
            raise UnsupportedOperation(f"Unknown token {token!r}")

    def _cell(self) -> IndexRef:
        return IndexRef(MEMORY_NAME, POINTER_NAME)

    def _pointer(self) -> VarRef:
        return VarRef(POINTER_NAME)

    def _build_move(self, delta: int, scope: Scope) -> None:
        if not self.options.wrap_pointer:
            scope.add(Increment(self._pointer(), delta))
            return
        # Keep |delta| below the tape length so one correction lands back on the tape.
        length = self.options.tape_length
        step = delta % length if delta >= 0 else -((-delta) % length)
        scope.add(Increment(self._pointer(), step))
        if step > 0:
            overflow = Compare(">=", self._pointer(), Literal(length))
            scope.add(If(overflow, Scope([Increment(self._pointer(), -length)])))
        elif step < 0:
            underflow = Compare("<", self._pointer(), Literal(0))
            scope.add(If(underflow, Scope([Increment(self._pointer(), length)])))


def build_unit(tokens: Sequence[Token], options: Optional[CompilerOptions] = None) -> TranslationUnit:
    return IRBuilder(options).build(tokens)


__all__ = ["EXIT_OK", "IRBuilder", "build_unit"]
