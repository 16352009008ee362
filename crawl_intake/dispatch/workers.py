"""Worker pool that drains dispatch tasks off the request path."""

import threading
from datetime import timezone
from typing import Optional

from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_EXECUTED, EVENT_JOB_MISSED
from apscheduler.executors.pool import ThreadPoolExecutor
from apscheduler.schedulers.background import BackgroundScheduler

from crawl_intake.logging import get_logger
from crawl_intake.logging.context import log_context

from .fanout import DispatchFanout
from .models import DispatchTask

logger = get_logger(__name__, component="dispatch")


class DispatcherStoppedError(RuntimeError):
    """Raised when a task is submitted to a pool that is shutting down."""


class DispatchWorkerPool:
    """
    Runs each dispatch task as a one-off job on an APScheduler thread pool.

    One job owns a task from start to finish, so the URLs of a job are
    marked and published in job order. Tasks of different jobs may run
    concurrently on different worker threads.
    """

    def __init__(self, fanout: DispatchFanout, worker_count: int = 4):
        """
        Initialize the pool. No threads are started until start().

        Args:
            fanout: Fan-out run for every task
            worker_count: Number of executor threads
        """
        if worker_count < 1:
            raise ValueError(f"worker_count must be at least 1, got {worker_count}")

        self.fanout = fanout
        self.worker_count = worker_count
        self.scheduler = BackgroundScheduler(
            executors={"default": ThreadPoolExecutor(worker_count)},
            job_defaults={
                "coalesce": False,
                "max_instances": 1,  # Per job id; every task gets its own id
                "misfire_grace_time": None,  # Late tasks still run
            },
            timezone=timezone.utc,
        )
        self.scheduler.add_listener(
            self._on_task_finished, EVENT_JOB_EXECUTED | EVENT_JOB_ERROR | EVENT_JOB_MISSED
        )

        self._lock = threading.Lock()
        self._idle = threading.Condition(self._lock)
        self._outstanding = 0
        self._stopped = False

    @property
    def pending_tasks(self) -> int:
        """Number of submitted tasks that have not finished yet."""
        with self._lock:
            return self._outstanding

    def start(self) -> None:
        """Start the executor threads. Calling it again is a no-op."""
        with self._lock:
            if self._stopped:
                raise DispatcherStoppedError("Dispatch worker pool has been shut down")
            if self.scheduler.running:
                return
            self.scheduler.start()

        logger.info(
            f"Dispatch worker pool started with {self.worker_count} workers",
            extra={"event": "dispatch.pool.started", "worker_count": self.worker_count},
        )

    def submit(self, task: DispatchTask) -> None:
        """
        Queue a task for dispatch without waiting for it.

        Tasks submitted before start() are held until the scheduler starts.

        Raises:
            DispatcherStoppedError: If shutdown() has been called
        """
        with self._lock:
            if self._stopped:
                raise DispatcherStoppedError("Dispatch worker pool has been shut down")
            self._outstanding += 1

        self.scheduler.add_job(
            self._run,
            args=[task],
            name=f"dispatch-job-{task.job_id}",
        )

        logger.debug(
            f"Queued dispatch task for job {task.job_id}",
            extra={
                "event": "dispatch.task.queued",
                "job_id": task.job_id,
                "url_count": len(task.urls),
            },
        )

    def join(self, timeout: Optional[float] = None) -> bool:
        """
        Block until every submitted task has finished.

        Returns:
            False if the timeout expired first
        """
        with self._idle:
            return self._idle.wait_for(lambda: self._outstanding == 0, timeout)

    def shutdown(self, wait: bool = True, timeout: Optional[float] = None) -> None:
        """
        Stop accepting tasks and stop the scheduler once queued tasks are done.

        Running and already-queued tasks are never cancelled.

        Args:
            wait: If True, wait for queued tasks before stopping
            timeout: Upper bound in seconds for the wait; None waits forever
        """
        with self._lock:
            if self._stopped:
                return
            self._stopped = True

        logger.info(
            "Shutting down dispatch worker pool",
            extra={
                "event": "dispatch.pool.stopping",
                "pending_tasks": self.pending_tasks,
                "wait_for_tasks": wait,
            },
        )

        drained = True
        if wait and self.scheduler.running:
            drained = self.join(timeout)

        if self.scheduler.running:
            self.scheduler.shutdown(wait=wait and drained)

        if not drained:
            logger.warning(
                f"{self.pending_tasks} dispatch tasks still unfinished after {timeout}s",
                extra={"event": "dispatch.pool.shutdown_timeout", "pending_tasks": self.pending_tasks},
            )
            return

        logger.info("Dispatch worker pool stopped", extra={"event": "dispatch.pool.stopped"})

    def _on_task_finished(self, event) -> None:
        with self._idle:
            self._outstanding -= 1
            self._idle.notify_all()

    def _run(self, task: DispatchTask) -> None:
        context = {"job_id": task.job_id}
        if task.request_id:
            context["request_id"] = task.request_id

        with log_context(**context):
            try:
                self.fanout.dispatch(task)
            except Exception as e:
                # Fan-out handles its own advisory failures; anything here is a bug
                logger.exception(
                    f"Dispatch task crashed: {e}",
                    extra={"event": "dispatch.task.crashed", "error_type": type(e).__name__},
                )
