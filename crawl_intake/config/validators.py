"""Non-fatal sanity checks for configuration."""

import warnings
from typing import Any, Dict, List

LARGE_WORKER_COUNT = 32


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Inspect a raw configuration mapping for settings that are legal but suspicious.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    queue = config_dict.get("queue") or {}
    if isinstance(queue, dict) and str(queue.get("backend", "")).lower() == "memory":
        warning_messages.append(
            "queue.backend is 'memory': work items never leave this process "
            "and are lost on restart"
        )

    dispatch = config_dict.get("dispatch") or {}
    if isinstance(dispatch, dict):
        worker_count = dispatch.get("worker_count")
        if isinstance(worker_count, int) and worker_count > LARGE_WORKER_COUNT:
            warning_messages.append(
                f"Large dispatch.worker_count ({worker_count}) may exhaust "
                "database connections"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit each message through the warnings module."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
