from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence

from bf2c.bf_interpreter import ExecutionState, StepLimitExceeded, TokenInterpreter
from bf2c.errors import UnsupportedOperation
from bf2c.tokens import Token


@dataclass
class ExecutionSession:
    tokens: List[Token]
    tape_window: int = 10
    max_steps: Optional[int] = None
    history_limit: int = 200

    def __post_init__(self) -> None:
        self.history: List[ExecutionState] = []
        self._init_interpreter()

    def _init_interpreter(self) -> None:
        self.interpreter = TokenInterpreter()
        self.step_iter: Iterator[ExecutionState] = self.interpreter.step(
            self.tokens,
            max_steps=self.max_steps,
            tape_window=self.tape_window,
        )
        self.finished = False
        self.history.clear()
        self._record_state(self.interpreter.snapshot(0, None, self.tape_window))

    def restart(self) -> None:
        self._init_interpreter()

    def _record_state(self, state: ExecutionState) -> None:
        self.history.append(state)
        if len(self.history) > self.history_limit:
            self.history.pop(0)
        self.last_state = state

    def step_forward(self, count: int = 1) -> Sequence[ExecutionState]:
        states: List[ExecutionState] = []
        for _ in range(max(count, 0)):
            if self.finished:
                break
            try:
                state = next(self.step_iter)
            except StopIteration:
                self.finished = True
                break
            except (StepLimitExceeded, UnsupportedOperation):
                self.finished = True
                raise
            self._record_state(state)
            states.append(state)
            if state.command is None:
                self.finished = True
                break
        return states

    def current_state(self) -> ExecutionState:
        return self.last_state

    def is_finished(self) -> bool:
        return self.finished


@dataclass
class SessionRecord:
    session_id: str
    session: ExecutionSession
    code: str


class SessionStore:
    """Thread-safe registry for ExecutionSession instances."""

    def __init__(self) -> None:
        self._sessions: Dict[str, SessionRecord] = {}
        self._lock = threading.RLock()

    def create_session(
        self,
        *,
        code: str,
        tokens: List[Token],
        tape_window: int = 10,
        max_steps: Optional[int] = None,
        history_limit: int = 200,
    ) -> SessionRecord:
        session = ExecutionSession(
            tokens=tokens,
            tape_window=tape_window,
            max_steps=max_steps,
            history_limit=history_limit,
        )
        record = SessionRecord(session_id=uuid.uuid4().hex, session=session, code=code)
        with self._lock:
            self._sessions[record.session_id] = record
        return record

    def get(self, session_id: str) -> SessionRecord:
        with self._lock:
            try:
                return self._sessions[session_id]
            except KeyError as exc:
                raise KeyError(f"Unknown session id: {session_id}") from exc

    def reset(self, session_id: str) -> SessionRecord:
        record = self.get(session_id)
        record.session.restart()
        return record

    def remove(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None


__all__ = ["ExecutionSession", "SessionRecord", "SessionStore"]
