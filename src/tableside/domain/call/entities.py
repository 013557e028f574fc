from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from tableside.domain.common.ids import CallId, TableId

CALL_REASON = "Atención requerida"


class CallStatus(str, Enum):
    WAITING = "waiting"
    ATTENDED = "attended"


@dataclass
class Call:
    call_id: CallId
    table_id: TableId
    time: datetime
    reason: str = CALL_REASON
    status: CallStatus = CallStatus.WAITING
    attended_at: datetime | None = None
    elapsed_time: str = "0s"

    def attend(self, now: datetime) -> bool:
        if self.status != CallStatus.WAITING:
            return False
        self.status = CallStatus.ATTENDED
        self.attended_at = now
        return True
