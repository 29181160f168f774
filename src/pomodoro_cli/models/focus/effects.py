"""Fire-and-forget execution of timer side effects (history writes, alerts)."""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any

logger = logging.getLogger(__name__)


class EffectRunner:
    """Runs side effects without letting their failures reach the caller.

    With no executor, effects run inline; this keeps tests deterministic.
    With an executor, effects are submitted and never waited on.
    """

    def __init__(self, executor: Executor | None = None):
        self._executor = executor

    @classmethod
    def background(cls) -> EffectRunner:
        """Runner backed by a single worker thread, preserving submit order."""
        return cls(ThreadPoolExecutor(max_workers=1, thread_name_prefix="pomodoro-effects"))

    def submit(self, description: str, fn: Callable[..., Any], *args: Any) -> None:
        """Run ``fn(*args)``; exceptions are logged and dropped."""
        if self._executor is None:
            self._run(description, fn, args)
            return

        try:
            self._executor.submit(self._run, description, fn, args)
        except RuntimeError as e:
            # Executor already shut down
            logger.warning("dropped effect %s: %s", description, e)

    def shutdown(self, wait: bool = True) -> None:
        """Drain pending effects."""
        if self._executor is not None:
            self._executor.shutdown(wait=wait)

    @staticmethod
    def _run(description: str, fn: Callable[..., Any], args: tuple) -> None:
        try:
            fn(*args)
        except Exception:
            logger.exception("effect failed: %s", description)
