from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional
from enum import Enum
from studio.core.types import UtcDatetime


class AttendanceStatus(str, Enum):
    scheduled = "scheduled"
    present = "present"
    absent = "absent"
    cancelled = "cancelled"

class AttendanceCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)
    booking_id: Optional[str] = None
    class_id: Optional[str] = None
    client_id: str = Field(min_length=1)
    session_date: UtcDatetime
    status: AttendanceStatus = AttendanceStatus.scheduled
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_owner(self):
        if not self.booking_id and not self.class_id:
            raise ValueError("booking_id or class_id is required")
        return self

class AttendanceUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)
    status: Optional[AttendanceStatus] = None
    notes: Optional[str] = None
    session_date: Optional[UtcDatetime] = None

class BulkPresentRequest(BaseModel):
    class_id: str
    session_date: UtcDatetime
