from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime, timezone
from enum import Enum
import uuid
from studio.core.intervals import normalize_datetime
from studio.core.types import UtcDatetime


class PaymentType(str, Enum):
    income = "income"
    expense = "expense"

class Payment(BaseModel):
    model_config = ConfigDict(use_enum_values=True, extra="ignore")
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    type: PaymentType
    amount: float = Field(ge=0)
    date: UtcDatetime = Field(default_factory=lambda: normalize_datetime(datetime.now(timezone.utc)))
    method: Optional[str] = None
    client_id: Optional[str] = None
    booking_id: Optional[str] = None
    class_id: Optional[str] = None
    enrollment_id: Optional[str] = None
    description: Optional[str] = None

class PaymentCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)
    type: PaymentType
    amount: float = Field(ge=0)
    date: Optional[UtcDatetime] = None
    method: Optional[str] = None
    client_id: Optional[str] = None
    booking_id: Optional[str] = None
    class_id: Optional[str] = None
    enrollment_id: Optional[str] = None
    description: Optional[str] = None

class PaymentUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)
    type: Optional[PaymentType] = None
    amount: Optional[float] = Field(default=None, ge=0)
    date: Optional[UtcDatetime] = None
    method: Optional[str] = None
    client_id: Optional[str] = None
    booking_id: Optional[str] = None
    class_id: Optional[str] = None
    enrollment_id: Optional[str] = None
    description: Optional[str] = None
