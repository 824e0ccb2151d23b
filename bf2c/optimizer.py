from __future__ import annotations

import dataclasses
from typing import List, Sequence

from .config import wrap_cell
from .tokens import ChangeMem, Loop, MovePointer, SetMemTo, Token

_ZERO_LOOP_BODY = [ChangeMem(-1)]


def optimize(tokens: Sequence[Token], *, nested_leading_elision: bool = False) -> List[Token]:
    """Apply the peephole rules to ``tokens`` and return a new sequence.

    Loops at the very start of the program can never run because every cell
    starts at zero, so they are dropped. Setting ``nested_leading_elision``
    drops leading loops at the start of every loop body as well, which is
    what the legacy tool did even though the cell is not known to be zero
    there.

    The input is never modified.
    """
    return _optimize_sequence(tokens, True, nested_leading_elision)


def _optimize_sequence(tokens: Sequence[Token], elide_leading: bool, nested: bool) -> List[Token]:
    optimized: List[Token] = []
    length = len(tokens)
    index = 0
    if elide_leading:
        while index < length and isinstance(tokens[index], Loop):
            index += 1

    while index < length:
        token = tokens[index]
        if isinstance(token, (ChangeMem, MovePointer)):
            kind = type(token)
            delta = 0
            while index < length and type(tokens[index]) is kind:
                delta += tokens[index].delta
                index += 1
            optimized.append(kind(wrap_cell(delta)))
            continue
        if isinstance(token, Loop):
            body = _optimize_sequence(token.body, nested, nested)
            if body == _ZERO_LOOP_BODY:
                optimized.append(SetMemTo(0))
            else:
                optimized.append(Loop(body))
        else:
            optimized.append(dataclasses.replace(token))
        index += 1
    return optimized


__all__ = ["optimize"]
