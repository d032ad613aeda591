from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from typing import Annotated, List, Optional
from datetime import datetime
import uuid
from studio.core.types import UtcDatetime


def _ordered_schedule(value: List[datetime]) -> List[datetime]:
    return sorted(set(value))

# Session starts, deduplicated and in order.
Schedule = Annotated[List[UtcDatetime], AfterValidator(_ordered_schedule)]


class StudioClass(BaseModel):
    model_config = ConfigDict(extra="ignore")
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    description: Optional[str] = None
    instructor: Optional[str] = None
    schedule: Schedule = []
    session_length_minutes: Optional[int] = None
    capacity: Optional[int] = Field(default=None, ge=0)
    fee: Optional[float] = Field(default=None, ge=0)
    room_id: Optional[str] = None

class ClassCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    instructor: Optional[str] = None
    schedule: Schedule = []
    session_length_minutes: Optional[int] = None
    capacity: Optional[int] = Field(default=None, ge=0)
    fee: Optional[float] = Field(default=None, ge=0)
    room_id: Optional[str] = None

class ClassUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    instructor: Optional[str] = None
    schedule: Optional[Schedule] = None
    session_length_minutes: Optional[int] = None
    capacity: Optional[int] = Field(default=None, ge=0)
    fee: Optional[float] = Field(default=None, ge=0)
    room_id: Optional[str] = None
