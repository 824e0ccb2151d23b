from __future__ import annotations

from typing import List, Optional

from fastapi import FastAPI, HTTPException, Response, status
from pydantic import BaseModel, Field

from bf2c.bf_interpreter import (
    ExecutionState,
    StepLimitExceeded,
    TokenInterpreter,
    format_tape,
)
from bf2c.compiler import BrainfuckCompiler
from bf2c.config import CompilerOptions
from bf2c.errors import CompileError
from bf2c.tokens import count_tokens, to_source

from .session import SessionRecord, SessionStore


def _state_to_dict(state: ExecutionState) -> dict:
    return {
        "step": state.step,
        "command": state.command,
        "pointer": state.pointer,
        "tape_start": state.tape_start,
        "tape": list(state.tape),
        "output": state.output,
    }


class CompileRequest(BaseModel):
    code: str
    optimize: bool = True
    nested_leading_elision: bool = False
    wrap_pointer: bool = True


class CompileResponse(BaseModel):
    c_source: str
    optimized_source: str
    token_count: int
    optimized_token_count: int


class RunRequest(BaseModel):
    code: str
    optimize: bool = True
    nested_leading_elision: bool = False
    max_steps: Optional[int] = Field(default=1_000_000, ge=1)


class RunResponse(BaseModel):
    output: str
    pointer: int
    tape: str


class SessionConfiguration(BaseModel):
    code: str
    optimize: bool = True
    tape_window: int = Field(default=10, ge=0)
    max_steps: Optional[int] = Field(default=None, ge=1)
    history_limit: int = Field(default=200, ge=1)


class SessionState(BaseModel):
    step: int
    command: Optional[str]
    pointer: int
    tape_start: int
    tape: List[int]
    output: str


class SessionPayload(BaseModel):
    session_id: str
    code: str
    state: SessionState
    history: List[SessionState]
    finished: bool
    history_size: int


class StepRequest(BaseModel):
    count: int = Field(default=1, ge=1)


class StepResponse(SessionPayload):
    states: List[SessionState]


def _compile_error(exc: CompileError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


def create_app(store: Optional[SessionStore] = None) -> FastAPI:
    session_store = store or SessionStore()
    app = FastAPI(title="bf2c API", version="0.1.0")

    def _serialize_states(states: List[ExecutionState]) -> List[SessionState]:
        return [SessionState(**_state_to_dict(state)) for state in states]

    def _build_payload(record: SessionRecord) -> SessionPayload:
        session = record.session
        return SessionPayload(
            session_id=record.session_id,
            code=record.code,
            state=SessionState(**_state_to_dict(session.current_state())),
            history=_serialize_states(session.history),
            finished=session.is_finished(),
            history_size=len(session.history),
        )

    def _get_record(session_id: str) -> SessionRecord:
        try:
            return session_store.get(session_id)
        except KeyError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    @app.post("/api/compile", response_model=CompileResponse)
    def compile_program(payload: CompileRequest) -> CompileResponse:
        compiler = BrainfuckCompiler(
            CompilerOptions(
                optimize=payload.optimize,
                nested_leading_elision=payload.nested_leading_elision,
                wrap_pointer=payload.wrap_pointer,
            )
        )
        try:
            result = compiler.compile_result(payload.code)
        except CompileError as exc:
            raise _compile_error(exc) from exc
        return CompileResponse(
            c_source=result.code,
            optimized_source=to_source(result.optimized),
            token_count=count_tokens(result.tokens),
            optimized_token_count=count_tokens(result.optimized),
        )

    @app.post("/api/run", response_model=RunResponse)
    def run_program(payload: RunRequest) -> RunResponse:
        compiler = BrainfuckCompiler(
            CompilerOptions(
                optimize=payload.optimize,
                nested_leading_elision=payload.nested_leading_elision,
            )
        )
        interpreter = TokenInterpreter()
        try:
            tokens = compiler.optimize(compiler.parse(payload.code))
            output = interpreter.run(tokens, max_steps=payload.max_steps)
        except CompileError as exc:
            raise _compile_error(exc) from exc
        except StepLimitExceeded as exc:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
        return RunResponse(
            output=output,
            pointer=interpreter.pointer,
            tape=format_tape(interpreter.tape),
        )

    @app.post("/api/session", response_model=SessionPayload, status_code=status.HTTP_201_CREATED)
    def create_session(payload: SessionConfiguration) -> SessionPayload:
        compiler = BrainfuckCompiler(CompilerOptions(optimize=payload.optimize))
        try:
            tokens = compiler.optimize(compiler.parse(payload.code))
        except CompileError as exc:
            raise _compile_error(exc) from exc
        record = session_store.create_session(
            code=payload.code,
            tokens=tokens,
            tape_window=payload.tape_window,
            max_steps=payload.max_steps,
            history_limit=payload.history_limit,
        )
        return _build_payload(record)

    @app.get("/api/session/{session_id}", response_model=SessionPayload)
    def get_session(session_id: str) -> SessionPayload:
        return _build_payload(_get_record(session_id))

    @app.post("/api/session/{session_id}/reset", response_model=SessionPayload)
    def reset_session(session_id: str) -> SessionPayload:
        try:
            record = session_store.reset(session_id)
        except KeyError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
        return _build_payload(record)

    @app.post("/api/session/{session_id}/step", response_model=StepResponse)
    def step_session(session_id: str, payload: StepRequest) -> StepResponse:
        record = _get_record(session_id)
        session = record.session
        try:
            states = session.step_forward(payload.count)
        except StepLimitExceeded as exc:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
        except CompileError as exc:
            raise _compile_error(exc) from exc

        base = _build_payload(record)
        return StepResponse(states=_serialize_states(list(states)), **base.model_dump())

    @app.delete("/api/session/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_session(session_id: str) -> Response:
        removed = session_store.remove(session_id)
        if not removed:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Unknown session id: {session_id}",
            )
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return app


__all__ = ["create_app"]
