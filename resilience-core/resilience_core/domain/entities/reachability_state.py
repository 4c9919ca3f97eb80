from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ...shared.runtime__shared_util import utc_now


class ReachabilityState(BaseModel):
    model_config = ConfigDict(frozen=True)

    online: bool = True
    changed_at: datetime = Field(default_factory=utc_now)

    def transition(self, online: bool) -> "ReachabilityState":
        return ReachabilityState(online=online)
