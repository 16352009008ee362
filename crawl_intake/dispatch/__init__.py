"""Asynchronous fan-out of created jobs onto the crawl work queue."""

from .fanout import DispatchFanout
from .models import DispatchStats, DispatchTask
from .workers import DispatcherStoppedError, DispatchWorkerPool

__all__ = [
    "DispatchFanout",
    "DispatchStats",
    "DispatchTask",
    "DispatchWorkerPool",
    "DispatcherStoppedError",
]
