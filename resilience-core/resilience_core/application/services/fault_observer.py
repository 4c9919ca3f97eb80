from __future__ import annotations

import asyncio
import sys
import threading
from typing import Optional

from .error_reporter import ErrorReporter


class GlobalFaultObserver:
    """Funnels uncaught faults into ``ErrorReporter.log_error``.

    Covers ``sys.excepthook``, ``threading.excepthook`` and, when given a
    loop, the asyncio exception handler. Each fault is reported once and then
    handed to the previously installed hook. A fault raised while reporting a
    fault is dropped.
    """

    def __init__(self, reporter: ErrorReporter):
        self.reporter = reporter
        self._guard = threading.local()
        self._installed = False
        self._prev_excepthook = None
        self._prev_threading_hook = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._prev_loop_handler = None

    @property
    def installed(self) -> bool:
        return self._installed

    def install(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        if not self._installed:
            self._prev_excepthook = sys.excepthook
            self._prev_threading_hook = threading.excepthook
            sys.excepthook = self._sys_hook
            threading.excepthook = self._thread_hook
            self._installed = True
        if loop is not None and self._loop is None:
            self._loop = loop
            self._prev_loop_handler = loop.get_exception_handler()
            loop.set_exception_handler(self._loop_hook)

    def uninstall(self) -> None:
        if self._installed:
            sys.excepthook = self._prev_excepthook
            threading.excepthook = self._prev_threading_hook
            self._installed = False
        if self._loop is not None:
            if not self._loop.is_closed():
                self._loop.set_exception_handler(self._prev_loop_handler)
            self._loop = None
            self._prev_loop_handler = None

    def _report(self, error, action: str, additional_data: Optional[dict] = None) -> None:
        if getattr(self._guard, "active", False):
            return
        self._guard.active = True
        try:
            self.reporter.log_error(
                error,
                {"action": action, "component": "global", "additional_data": additional_data or {}},
            )
        except Exception:
            pass
        finally:
            self._guard.active = False

    def _sys_hook(self, exc_type, exc, tb) -> None:
        if exc is not None and exc.__traceback__ is None:
            exc = exc.with_traceback(tb)
        self._report(exc if exc is not None else exc_type, "uncaught_exception")
        if self._prev_excepthook is not None:
            self._prev_excepthook(exc_type, exc, tb)

    def _thread_hook(self, args) -> None:
        thread_name = args.thread.name if args.thread is not None else None
        self._report(
            args.exc_value if args.exc_value is not None else args.exc_type,
            "unhandled_thread_exception",
            {"thread": thread_name},
        )
        if self._prev_threading_hook is not None:
            self._prev_threading_hook(args)

    def _loop_hook(self, loop: asyncio.AbstractEventLoop, context: dict) -> None:
        exc = context.get("exception")
        message = context.get("message", "Unhandled exception in event loop")
        self._report(
            exc if exc is not None else f"Unhandled async fault: {message}",
            "unhandled_async_exception",
            {"message": message},
        )
        if self._prev_loop_handler is not None:
            self._prev_loop_handler(loop, context)
        else:
            loop.default_exception_handler(context)
