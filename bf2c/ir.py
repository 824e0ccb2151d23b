from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union


# === References ===


@dataclass
class VarRef:
    name: str


@dataclass
class IndexRef:
    array: str
    index: str


@dataclass
class Literal:
    value: int


Target = Union[VarRef, IndexRef, Literal]


# === Conditions ===


class Condition:
    pass


@dataclass
class Compare(Condition):
    op: str
    left: Target
    right: Target

    def __post_init__(self) -> None:
        if self.op not in ("==", "!=", "<", ">="):
            raise ValueError(f"Unsupported comparison operator '{self.op}'")


# === Statements ===


class Statement:
    pass


@dataclass
class Scope:
    statements: List[Statement] = field(default_factory=list)

    def add(self, statement: Statement) -> None:
        self.statements.append(statement)


@dataclass
class VarDecl(Statement):
    name: str
    var_type: str
    value: int


@dataclass
class ArrayDecl(Statement):
    name: str
    var_type: str
    length: int


@dataclass
class Increment(Statement):
    target: Target
    amount: int


@dataclass
class Assign(Statement):
    target: Target
    value: Target


@dataclass
class Call(Statement):
    name: str
    arguments: List[Target]


@dataclass
class While(Statement):
    condition: Condition
    body: Scope


@dataclass
class If(Statement):
    condition: Condition
    body: Scope


@dataclass
class Return(Statement):
    value: Target


# === Translation unit ===


@dataclass
class Import:
    header: str


@dataclass
class Function:
    name: str
    return_type: str
    scope: Scope = field(default_factory=Scope)


@dataclass
class TranslationUnit:
    imports: List[Import] = field(default_factory=list)
    functions: List[Function] = field(default_factory=list)

    def add_import(self, header: str) -> None:
        self.imports.append(Import(header))

    def add_function(self, name: str, return_type: str) -> Function:
        function = Function(name, return_type)
        self.functions.append(function)
        return function


__all__ = [
    "ArrayDecl",
    "Assign",
    "Call",
    "Compare",
    "Condition",
    "Function",
    "If",
    "Import",
    "IndexRef",
    "Increment",
    "Literal",
    "Return",
    "Scope",
    "Statement",
    "Target",
    "TranslationUnit",
    "VarDecl",
    "VarRef",
    "While",
]
