# filecipher/core/worker.py
# -*- coding: utf-8 -*-
"""
Background worker used by the asynchronous API. Each call runs on its own
thread and reports back exactly once, through a Future and an optional
completion callback.
"""

import logging
import threading
from concurrent.futures import Future
from typing import Any, Callable

from ..utils.exceptions import FileCipherError, UnknownCipherError

logger = logging.getLogger(__name__)


class BackgroundTask(threading.Thread):
    """
    Thread that runs a single operation and resolves its Future.

    The Future is resolved first, then ``callback(error, result)`` is
    invoked, so a callback that inspects the Future sees the final state.
    Errors outside the application hierarchy are wrapped in
    UnknownCipherError. Cancellation is not supported: the Future is marked
    running as soon as the task is created. The thread is not a daemon, so
    interpreter shutdown waits for the operation and its callback.
    """

    def __init__(self, target: Callable[..., Any], *args: Any,
                 callback: Callable[[FileCipherError | None, Any], None] | None = None,
                 name: str | None = None):
        super().__init__(name=name or f"filecipher-{getattr(target, '__name__', 'task')}")
        self.target = target
        self.args = args
        self.callback = callback
        self.future: Future = Future()
        self.future.set_running_or_notify_cancel()
        logger.debug(f"BackgroundTask '{self.name}' initialized.")

    def run(self):
        error: FileCipherError | None = None
        result: Any = None

        try:
            result = self.target(*self.args)
        except FileCipherError as e:
            # Logging already done where the error was classified
            error = e
        except Exception as e:
            msg = f"Unexpected error in background task '{self.name}': {e}"
            logger.critical(msg, exc_info=True)
            error = UnknownCipherError(msg)
            error.__cause__ = e

        if error is not None:
            self.future.set_exception(error)
        else:
            self.future.set_result(result)
        logger.debug(f"BackgroundTask '{self.name}' finished. Success: {error is None}.")

        if self.callback is not None:
            try:
                self.callback(error, result)
            except Exception:
                # Nothing above this thread can receive it
                logger.exception(f"Completion callback of '{self.name}' raised.")


def run_in_background(target: Callable[..., Any], *args: Any,
                      callback: Callable[[FileCipherError | None, Any], None] | None = None) -> Future:
    """Starts ``target(*args)`` on a new BackgroundTask and returns its Future."""
    task = BackgroundTask(target, *args, callback=callback)
    task.start()
    return task.future
