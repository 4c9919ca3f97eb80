from __future__ import annotations

import logging

from ...domain.entities.error_event import ErrorEvent
from ...domain.ports.error_sink_port import ErrorSinkPort

_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
}

_PREFIXES = {
    "error": "Error logged",
    "warning": "Warning logged",
    "info": "Info logged",
}


class LoggingErrorSinkAdapter(ErrorSinkPort):
    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("resilience_core.errors")

    def emit(self, event: ErrorEvent) -> None:
        payload = event.model_dump(exclude_none=True, exclude={"stack_trace"})
        payload["timestamp"] = event.timestamp.isoformat()
        self.logger.log(_LEVELS[event.level], "%s: %s", _PREFIXES[event.level], payload)
        if event.stack_trace:
            self.logger.debug("Stack trace for %s:\n%s", event.id, event.stack_trace)
