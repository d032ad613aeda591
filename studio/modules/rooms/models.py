from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
import uuid


class Room(BaseModel):
    model_config = ConfigDict(extra="ignore")
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    type: Optional[str] = None
    hourly_rate: Optional[float] = Field(default=None, ge=0)
    capacity: Optional[int] = Field(default=None, ge=0)

class RoomCreate(BaseModel):
    name: str
    type: Optional[str] = None
    hourly_rate: Optional[float] = Field(default=None, ge=0)
    capacity: Optional[int] = Field(default=None, ge=0)

class RoomUpdate(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    hourly_rate: Optional[float] = Field(default=None, ge=0)
    capacity: Optional[int] = Field(default=None, ge=0)
