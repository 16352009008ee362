"""Context propagation for structured logging.

Fields set here are injected into every log record emitted inside the
scope. Context lives in a ContextVar, so each dispatch worker thread and each
request carries its own copy.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional


LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the current logging context."""
    return LogContextVar.get().copy()


def clear_log_context() -> None:
    """Drop all context fields. Mostly useful in tests."""
    LogContextVar.set({})


class log_context:
    """Context manager for scoped logging context.

    Fields merge over the enclosing context and are restored on exit.

    Example:
        >>> with log_context(job_id=42):
        ...     logger.info("Dispatching job")  # record carries job_id
    """

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = LogContextVar.set({**LogContextVar.get(), **self.kwargs})
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            LogContextVar.reset(self.token)
            self.token = None
        return False
