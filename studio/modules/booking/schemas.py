from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from studio.core.errors import ValidationError
from studio.core.types import UtcDatetime
from studio.modules.booking.models import BookingStatus, PaymentStatus
from studio.modules.catalog.catalog import ServiceKind, service_category


class AddOnInput(BaseModel):
    name: Optional[str] = None
    amount: Optional[float] = None

class _BookingRequestBase(BaseModel):
    model_config = ConfigDict(use_enum_values=True, extra="ignore")

    service_code: Optional[str] = None
    client_id: Optional[str] = None
    staff_id: Optional[str] = None
    start_date: Optional[UtcDatetime] = None
    end_date: Optional[UtcDatetime] = None
    status: BookingStatus = BookingStatus.scheduled
    payment_status: PaymentStatus = PaymentStatus.unpaid
    full_price: Optional[float] = None
    discounted_price: Optional[float] = None
    currency: Optional[str] = None
    add_ons: Optional[List[AddOnInput]] = None
    price_notes: Optional[str] = None

class RoomBookingRequest(_BookingRequestBase):
    service_type: Literal["room"]
    room_id: str = Field(min_length=1)
    # Set on room bookings generated for a class session.
    class_id: Optional[str] = None

class EquipmentBookingRequest(_BookingRequestBase):
    service_type: Literal["equipment"]
    equipment_id: str = Field(min_length=1)

class ClassSessionBookingRequest(_BookingRequestBase):
    service_type: Literal["class"]
    class_id: Optional[str] = None

class GenericServiceBookingRequest(_BookingRequestBase):
    service_type: Literal["service"]

BookingRequest = Annotated[
    Union[RoomBookingRequest, EquipmentBookingRequest, ClassSessionBookingRequest, GenericServiceBookingRequest],
    Field(discriminator="service_type"),
]

_booking_request_adapter = TypeAdapter(BookingRequest)

SERVICE_TYPES = [kind.value for kind in ServiceKind]


def validation_errors(error: PydanticValidationError) -> List[Dict[str, Any]]:
    return [
        {"loc": list(item["loc"]), "msg": item["msg"], "type": item["type"]}
        for item in error.errors()
    ]


def parse_booking_request(payload: Dict[str, Any]):
    """Turn a raw booking payload into the request variant for its kind.

    A known `service_code` decides the kind, whatever `service_type` says.
    """
    data = dict(payload or {})
    category = service_category(data.get("service_code"))
    if category:
        data["service_type"] = category

    if not data.get("service_type"):
        raise ValidationError("service_type is required")
    if data["service_type"] not in SERVICE_TYPES:
        raise ValidationError("Unsupported service_type")

    try:
        return _booking_request_adapter.validate_python(data)
    except PydanticValidationError as e:
        raise ValidationError("Invalid booking", validation_errors(e))


class BookingUpdate(BaseModel):
    """Fields a client may change on an existing booking."""
    model_config = ConfigDict(extra="ignore")

    service_type: Optional[str] = None
    service_code: Optional[str] = None
    client_id: Optional[str] = None
    staff_id: Optional[str] = None
    room_id: Optional[str] = None
    equipment_id: Optional[str] = None
    class_id: Optional[str] = None
    start_date: Optional[Any] = None
    end_date: Optional[Any] = None
    status: Optional[str] = None
    full_price: Optional[Any] = None
    discounted_price: Optional[Any] = None
    currency: Optional[str] = None
    add_ons: Optional[List[Any]] = None
    price_notes: Optional[str] = None
