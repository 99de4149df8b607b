"""Thread-based queue adapter for fire-and-forget captures.

Purpose
-------
Wrap any :class:`ReporterPort` so its non-blocking capture methods really are
non-blocking: the call is enqueued and executed on a dedicated worker thread,
keeping the logging caller responsive even when the wrapped backend performs
IO inline.

Contents
--------
* :class:`QueuedReporter` - background worker implementation of
  :class:`ReporterPort`.

System Role
-----------
Optional layer selected by ``LOG_SENTRY_QUEUE``. The ``*_and_wait`` methods
bypass the queue and call the wrapped reporter directly.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from collections.abc import Callable
from functools import partial
from typing import Any, Mapping

from lib_log_sentry.application.ports.reporter import MessageContext, ReporterPort


LOGGER = logging.getLogger(__name__)

Job = Callable[[], Any]


class QueuedReporter(ReporterPort):
    """Run non-blocking captures of ``reporter`` on a background thread.

    Queued captures return ``""`` because the backend identifier is not known
    until the worker has run them.

    Examples
    --------
    >>> seen = []
    >>> class Inline:
    ...     def capture_message(self, message, tags, *contexts):
    ...         seen.append(message)
    ...         return "id"
    >>> adapter = QueuedReporter(Inline())
    >>> adapter.start()
    >>> adapter.capture_message("queued", {})
    ''
    >>> adapter.stop(drain=True)
    >>> seen
    ['queued']
    """

    def __init__(
        self,
        reporter: ReporterPort,
        *,
        maxsize: int = 1024,
        drop_policy: str = "drop",
        on_drop: Callable[[str], None] | None = None,
        timeout: float | None = 1.0,
        stop_timeout: float | None = 5.0,
    ) -> None:
        """Create the queue around ``reporter``.

        Parameters
        ----------
        reporter:
            Wrapped backend executing the captures.
        maxsize:
            Maximum number of pending captures.
        drop_policy:
            ``"drop"`` rejects captures when the queue is full, ``"block"``
            waits up to ``timeout`` seconds for space first.
        on_drop:
            Optional callback receiving the name of each dropped capture.
        timeout:
            Producer wait for the blocking policy; ``None`` waits forever.
        stop_timeout:
            Default drain deadline for :meth:`stop`; ``None`` waits forever.
        """
        policy = drop_policy.lower()
        if policy not in {"block", "drop"}:
            raise ValueError("drop_policy must be 'block' or 'drop'")
        self._reporter = reporter
        self._queue: queue.Queue[tuple[str, Job] | None] = queue.Queue(maxsize=maxsize)
        self._thread: threading.Thread | None = None
        self._drop_policy = policy
        self._on_drop = on_drop
        self._timeout = timeout
        self._stop_timeout = stop_timeout
        self._worker_failed = False

    @property
    def reporter(self) -> ReporterPort:
        return self._reporter

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def worker_failed(self) -> bool:
        """Return ``True`` once a queued capture raised; cleared by :meth:`start`."""

        return self._worker_failed

    def start(self) -> None:
        """Start the background worker thread if it is not already running."""
        if self.running:
            return
        self._worker_failed = False
        self._thread = threading.Thread(target=self._run, name="lib-log-sentry-queue", daemon=True)
        self._thread.start()

    def stop(self, *, drain: bool = True, timeout: float | None = None) -> None:
        """Stop the worker, optionally waiting for pending captures.

        When ``drain`` is ``False`` pending captures are discarded through the
        drop callback. Raises :class:`RuntimeError` when the worker does not
        finish within the deadline.
        """
        thread = self._thread
        if thread is None:
            return
        effective_timeout = timeout if timeout is not None else self._stop_timeout
        deadline = time.monotonic() + effective_timeout if effective_timeout is not None else None

        if not drain:
            self._drain_pending_items()
        self._queue.put(None)
        thread.join(None if deadline is None else max(0.0, deadline - time.monotonic()))
        if thread.is_alive():
            raise RuntimeError("Sentry queue worker failed to stop within the allotted timeout")
        self._thread = None

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        """Block until every queued capture ran; ``False`` when ``timeout`` hit."""
        deadline = time.monotonic() + timeout if timeout is not None else None
        while self._queue.unfinished_tasks:
            if deadline is not None and time.monotonic() >= deadline:
                return False
            time.sleep(0.005)
        return True

    def capture_message(self, message: str, tags: Mapping[str, str], *contexts: MessageContext) -> str:
        self._put("capture_message", partial(self._reporter.capture_message, message, dict(tags), *contexts))
        return ""

    def capture_error(self, error: BaseException, tags: Mapping[str, str], *contexts: MessageContext) -> str:
        self._put("capture_error", partial(self._reporter.capture_error, error, dict(tags), *contexts))
        return ""

    def capture_message_and_wait(self, message: str, tags: Mapping[str, str], *contexts: MessageContext) -> str:
        return self._reporter.capture_message_and_wait(message, tags, *contexts)

    def capture_error_and_wait(self, error: BaseException, tags: Mapping[str, str], *contexts: MessageContext) -> str:
        return self._reporter.capture_error_and_wait(error, tags, *contexts)

    def _put(self, name: str, job: Job) -> bool:
        """Enqueue ``job``; returns ``False`` when the queue rejected it.

        Captures arriving while no worker runs (before :meth:`start` or after
        :meth:`stop`) are dropped at once.
        """
        if not self.running:
            self._handle_drop(name, reason="worker not running")
            return False
        block = self._drop_policy == "block" and not self._worker_failed
        try:
            if block:
                self._queue.put((name, job), timeout=self._timeout)
            else:
                self._queue.put((name, job), block=False)
        except queue.Full:
            self._handle_drop(name)
            return False
        return True

    def _run(self) -> None:
        """Internal worker loop draining the queue until the stop sentinel."""
        while True:
            item = self._queue.get()
            try:
                if item is None:
                    break
                name, job = item
                try:
                    job()
                except Exception as exc:  # noqa: BLE001
                    self._worker_failed = True
                    LOGGER.error("Queued Sentry %s raised an exception; continuing", name, exc_info=exc)
            finally:
                self._queue.task_done()

    def _handle_drop(self, name: str, *, reason: str = "queue full") -> None:
        LOGGER.warning("Sentry queue %s; dropped %s", reason, name)
        if self._on_drop is None:
            return
        try:
            self._on_drop(name)
        except Exception as exc:  # noqa: BLE001
            LOGGER.error("Sentry queue drop handler raised an exception; continuing", exc_info=exc)

    def _drain_pending_items(self) -> None:
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                break
            else:
                if item is not None:
                    self._handle_drop(item[0], reason="stopping")
                self._queue.task_done()


__all__ = ["QueuedReporter"]
