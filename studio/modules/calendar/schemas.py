from pydantic import BaseModel
from studio.core.types import UtcDatetime


class CalendarSyncRequest(BaseModel):
    start_date: UtcDatetime
    end_date: UtcDatetime
