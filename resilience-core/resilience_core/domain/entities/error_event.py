from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Literal, Mapping, Optional

from pydantic import BaseModel, Field

from ...shared.runtime__shared_util import new_event_id, utc_now

ErrorLevel = Literal["error", "warning", "info"]

_CONTEXT_KEYS = ("user_id", "action", "component")


class ErrorContext(BaseModel):
    user_id: Optional[str] = None
    action: Optional[str] = None
    component: Optional[str] = None
    additional_data: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def coerce(cls, value: Any) -> Optional[ErrorContext]:
        """Accept a context model, a plain mapping, or anything else.

        Keys outside the known fields are folded into ``additional_data``.
        Values that are not mappings are kept verbatim under a single key
        rather than rejected.
        """
        if value is None or isinstance(value, ErrorContext):
            return value
        if not isinstance(value, Mapping):
            return cls(additional_data={"context": value})
        known = {k: value[k] for k in _CONTEXT_KEYS if k in value}
        raw_extra = value.get("additional_data")
        if isinstance(raw_extra, Mapping):
            extra = {str(k): v for k, v in raw_extra.items()}
        elif raw_extra is None:
            extra = {}
        else:
            extra = {"additional_data": raw_extra}
        for key, item in value.items():
            if key not in _CONTEXT_KEYS and key != "additional_data":
                extra[str(key)] = item
        return cls(**{k: (str(v) if v is not None else None) for k, v in known.items()}, additional_data=extra)


class ErrorEvent(BaseModel):
    id: str = Field(default_factory=new_event_id)
    timestamp: datetime = Field(default_factory=utc_now)
    level: ErrorLevel
    message: str
    stack_trace: Optional[str] = None
    context: Optional[ErrorContext] = None
    runtime: Optional[str] = None
    location: Optional[str] = None
    network_online: Optional[bool] = None
