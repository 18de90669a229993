"""Operation logger — color-coded success/error entries for customization use cases.

Every entry names the operation and the identifiers it touched, e.g.

    SUCCESS in create_customization: Created customization (id=... | name=...)
    ERROR in update_customization → EntityNotFoundError: ... (id=...)

Color scheme:
    Green — success
    Red   — errors
    Gray  — identifiers / context
"""

import logging
from contextlib import contextmanager
from typing import Any


class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    GRAY = "\033[90m"


_IMAGE_KEYS = ("boardImage", "imageData")


def summarize_payload(payload: Any) -> Any:
    """Copy of a request payload with base64 image fields replaced by their length.

    Keeps large image strings out of the logs.
    """
    if not isinstance(payload, dict):
        return payload

    summary = dict(payload)
    for key in _IMAGE_KEYS:
        if isinstance(summary.get(key), str):
            summary[key] = f"[image data - {len(summary[key])} chars]"
    if isinstance(summary.get("pieces"), list):
        summary["pieces"] = [summarize_payload(piece) for piece in summary["pieces"]]
    return summary


def _format_context(context: dict[str, Any]) -> str:
    if not context:
        return ""
    details = " | ".join(f"{k}={v}" for k, v in context.items())
    return f" {_Colors.GRAY}({details}){_Colors.RESET}"


class OperationLogger:
    """Logs the outcome of named operations.

    Usage:
        log = OperationLogger(__name__)
        with log.operation("delete_customization", id=customization_id):
            ...
        log.success("delete_customization", "Deleted customization", id=customization_id)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def success(self, operation: str, message: str, **context: Any) -> None:
        formatted = (
            f"{_Colors.GREEN}{_Colors.BOLD}SUCCESS in {operation}{_Colors.RESET}"
            f"{_Colors.GREEN}: {message}{_Colors.RESET}"
        )
        self._logger.info(formatted + _format_context(context))

    def error(self, operation: str, error: BaseException, **context: Any) -> None:
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}ERROR in {operation}{_Colors.RESET} "
            f"{_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        )
        self._logger.error(formatted + _format_context(context))

    @contextmanager
    def operation(self, name: str, **context: Any):
        """Log any exception escaping the block under ``name``, then re-raise it."""
        try:
            yield
        except Exception as e:
            self.error(name, e, **context)
            raise
