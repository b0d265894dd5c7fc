"""Correlation-aware logging for virtual tree traversal.

Every record emitted by the engine carries the component that produced it and
the correlation ID of the traversal, so diagnostics from one unwrap or walk can
be picked out of a noisy test run.
"""

import logging
import reprlib
from typing import Any, Dict, Optional

# Bounded repr used for node context in log records
_CONTEXT_REPR = reprlib.Repr()
_CONTEXT_REPR.maxstring = 120
_CONTEXT_REPR.maxother = 120
_CONTEXT_REPR.maxlist = 8
_CONTEXT_REPR.maxdict = 8


def describe(context: Any) -> str:
    """Render an arbitrary value as a short, log-safe string.

    Args:
        context: Value to describe (node, list, mapping, anything)

    Returns:
        Bounded textual representation that never raises
    """
    try:
        return _CONTEXT_REPR.repr(context)
    except Exception:
        return f"<unrepresentable {type(context).__name__}>"


class CorrelationLogger:
    """Stdlib logger wrapper stamping traversal identity onto every record.

    Records get ``component`` (unwrapper, tree_walker, snapshot_inspector)
    and ``correlation_id`` attributes; callers add their own fields through
    ``extra``.
    """

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Traversal the records belong to
            component: Engine part emitting the records; defaults to the
                last segment of ``name``
        """
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.rpartition(".")[2]

    def log(
        self,
        level: int,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = False
    ) -> None:
        """Emit one record at ``level`` with traversal identity attached."""
        if not self.logger.isEnabledFor(level):
            return
        fields: Dict[str, Any] = {"component": self.component, "correlation_id": self.correlation_id}
        fields.update(extra or {})
        self.logger.log(level, message, extra=fields, exc_info=exc_info)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.log(logging.DEBUG, message, extra)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.log(logging.INFO, message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.log(logging.WARNING, message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.log(logging.ERROR, message, extra)

    def exception(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log at ERROR with the active exception's traceback."""
        self.log(logging.ERROR, message, extra, exc_info=True)

    def warn(self, message: str, context: Any = None) -> None:
        """Report a non-fatal traversal problem.

        The context is summarised with a bounded repr and attached to the
        record as ``node_context``. Reporting never aborts the caller.

        Args:
            message: Human readable description of the problem
            context: Node, list or value the problem was observed on
        """
        self.warning(message, extra={"node_context": describe(context)})


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger for one traversal component."""
    return CorrelationLogger(name, correlation_id, component)
