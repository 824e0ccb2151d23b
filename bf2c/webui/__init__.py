from .app import create_app
from .session import ExecutionSession, SessionRecord, SessionStore

__all__ = [
    "create_app",
    "ExecutionSession",
    "SessionRecord",
    "SessionStore",
]
