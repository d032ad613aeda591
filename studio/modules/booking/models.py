from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime, timezone
from enum import Enum
import uuid
from studio.core.types import UtcDatetime


class BookingStatus(str, Enum):
    scheduled = "scheduled"
    completed = "completed"
    canceled = "canceled"

TERMINAL_STATUSES = (BookingStatus.completed.value, BookingStatus.canceled.value)

class PaymentStatus(str, Enum):
    unpaid = "unpaid"
    partial = "partial"
    paid = "paid"

class AddOn(BaseModel):
    name: str
    amount: Optional[float] = None

class ExternalEventRef(BaseModel):
    calendar_id: Optional[str] = None
    event_id: str

class Booking(BaseModel):
    model_config = ConfigDict(use_enum_values=True, extra="ignore")

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    service_type: str
    service_code: Optional[str] = None
    client_id: Optional[str] = None
    staff_id: Optional[str] = None
    room_id: Optional[str] = None
    equipment_id: Optional[str] = None
    class_id: Optional[str] = None
    start_date: Optional[UtcDatetime] = None
    end_date: Optional[UtcDatetime] = None
    returned: bool = False
    status: BookingStatus = BookingStatus.scheduled
    payment_status: PaymentStatus = PaymentStatus.unpaid
    full_price: Optional[float] = None
    discounted_price: Optional[float] = None
    currency: Optional[str] = None
    add_ons: List[AddOn] = []
    price_notes: Optional[str] = None
    total_fee: Optional[float] = None
    external_event_ref: Optional[ExternalEventRef] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


def compute_total_fee(full_price: Optional[float], discounted_price: Optional[float]) -> Optional[float]:
    """The amount owed: the discounted price when there is one."""
    if discounted_price is not None:
        return discounted_price
    return full_price
