from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List


class Token:
    pass


@dataclass
class MovePointer(Token):
    delta: int


@dataclass
class ChangeMem(Token):
    delta: int


@dataclass
class SetMemTo(Token):
    value: int


@dataclass
class Loop(Token):
    body: List[Token] = field(default_factory=list)


@dataclass
class Input(Token):
    pass


@dataclass
class Print(Token):
    pass


@dataclass
class NoOp(Token):
    pass


def count_tokens(tokens: Iterable[Token]) -> int:
    total = 0
    for token in tokens:
        total += 1
        if isinstance(token, Loop):
            total += count_tokens(token.body)
    return total


def _repeat(positive: str, negative: str, amount: int) -> str:
    if amount >= 0:
        return positive * amount
    return negative * (-amount)


def to_source(tokens: Iterable[Token]) -> str:
    """Render a token sequence back into the eight-symbol language."""
    parts: List[str] = []
    for token in tokens:
        if isinstance(token, ChangeMem):
            parts.append(_repeat("+", "-", token.delta))
        elif isinstance(token, MovePointer):
            parts.append(_repeat(">", "<", token.delta))
        elif isinstance(token, SetMemTo):
            parts.append("[-]")
            parts.append(_repeat("+", "-", token.value))
        elif isinstance(token, Loop):
            parts.append("[")
            parts.append(to_source(token.body))
            parts.append("]")
        elif isinstance(token, Input):
            parts.append(",")
        elif isinstance(token, Print):
            parts.append(".")
    return "".join(parts)


__all__ = [
    "ChangeMem",
    "Input",
    "Loop",
    "MovePointer",
    "NoOp",
    "Print",
    "SetMemTo",
    "Token",
    "count_tokens",
    "to_source",
]
