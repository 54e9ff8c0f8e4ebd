"""Request trace ID context.

Set by the HTTP trace middleware, read by the logging adapter so every log
line emitted while serving a request carries the same trace_id.
"""

from contextvars import ContextVar

trace_id_context: ContextVar[str | None] = ContextVar("trace_id", default=None)


def get_trace_id() -> str | None:
    """Return the current trace ID.

    Returns:
        str | None: The current request trace ID, or None outside a request.
    """
    return trace_id_context.get()
