from __future__ import annotations

from typing import List

from .ir import (
    ArrayDecl,
    Assign,
    Call,
    Compare,
    Condition,
    Function,
    If,
    IndexRef,
    Increment,
    Literal,
    Return,
    Scope,
    Statement,
    Target,
    TranslationUnit,
    VarDecl,
    VarRef,
    While,
)


class Emitter:
    """Render a :class:`TranslationUnit` as C source text."""

    def __init__(self, indent: str = "\t") -> None:
        self.indent = indent

    def emit(self, unit: TranslationUnit) -> str:
        lines: List[str] = [f"#include <{item.header}>" for item in unit.imports]
        for function in unit.functions:
            self._emit_function(function, lines)
        return "\n".join(lines) + "\n"

    def _emit_function(self, function: Function, lines: List[str]) -> None:
        lines.append(f"{function.return_type} {function.name}(void) {{")
        self._emit_scope(function.scope, 1, lines)
        lines.append("}")

    def _emit_scope(self, scope: Scope, depth: int, lines: List[str]) -> None:
        for statement in scope.statements:
            self._emit_statement(statement, depth, lines)

    def _emit_statement(self, stmt: Statement, depth: int, lines: List[str]) -> None:
        pad = self.indent * depth
        if isinstance(stmt, (While, If)):
            keyword = "while" if isinstance(stmt, While) else "if"
            lines.append(f"{pad}{keyword} ({self._condition(stmt.condition)}) {{")
            self._emit_scope(stmt.body, depth + 1, lines)
            lines.append(f"{pad}}}")
            return
        lines.append(pad + self._simple_statement(stmt))

    def _simple_statement(self, stmt: Statement) -> str:
        if isinstance(stmt, ArrayDecl):
            return f"{stmt.var_type} {stmt.name}[{stmt.length}] = {{0}};"
        if isinstance(stmt, VarDecl):
            return f"{stmt.var_type} {stmt.name} = {stmt.value};"
        if isinstance(stmt, Increment):
            target = self._target(stmt.target)
            if stmt.amount < 0:
                return f"{target} -= {-stmt.amount};"
            return f"{target} += {stmt.amount};"
        if isinstance(stmt, Assign):
            return f"{self._target(stmt.target)} = {self._target(stmt.value)};"
        if isinstance(stmt, Call):
            arguments = ", ".join(self._target(arg) for arg in stmt.arguments)
            return f"{stmt.name}({arguments});"
        if isinstance(stmt, Return):
            return f"return {self._target(stmt.value)};"
        raise TypeError(f"Cannot emit statement {stmt!r}")

    def _condition(self, condition: Condition) -> str:
        if isinstance(condition, Compare):
            return f"{self._target(condition.left)} {condition.op} {self._target(condition.right)}"
        raise TypeError(f"Cannot emit condition {condition!r}")

    def _target(self, target: Target) -> str:
        if isinstance(target, IndexRef):
            return f"{target.array}[{target.index}]"
        if isinstance(target, VarRef):
            return target.name
        if isinstance(target, Literal):
            return str(target.value)
        raise TypeError(f"Cannot emit reference {target!r}")


def emit(unit: TranslationUnit, indent: str = "\t") -> str:
    return Emitter(indent).emit(unit)


__all__ = ["Emitter", "emit"]
