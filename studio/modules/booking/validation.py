"""
Booking resolution
Fills catalog defaults, checks the per-kind rules and prices, then derives
the total fee. Nothing here touches the store.
"""
from typing import Any, Dict, List, Optional
from studio.core.config import DEFAULT_CURRENCY
from studio.core.errors import ValidationError
from studio.core.intervals import add_minutes
from studio.modules.booking.models import AddOn, compute_total_fee
from studio.modules.booking.schemas import (
    AddOnInput,
    ClassSessionBookingRequest,
    EquipmentBookingRequest,
    GenericServiceBookingRequest,
    RoomBookingRequest,
)
from studio.modules.catalog.catalog import ServiceDefinition, find_service


def _apply_catalog_defaults(request, service: Optional[ServiceDefinition]) -> None:
    if service is None:
        return
    defaults = service.defaults
    if request.full_price is None and defaults.full_price is not None:
        request.full_price = defaults.full_price
    if request.end_date is None and request.start_date is not None and defaults.duration_minutes:
        request.end_date = add_minutes(request.start_date, defaults.duration_minutes)
    if request.add_ons is None and defaults.add_ons:
        request.add_ons = [AddOnInput(name=item.name, amount=item.amount) for item in defaults.add_ons]


def _require_interval(request, label: str) -> None:
    if request.start_date is None or request.end_date is None:
        raise ValidationError(f"start_date and end_date are required for {label} bookings")


def _check_room(request: RoomBookingRequest, service) -> None:
    _require_interval(request, "room")

def _check_equipment(request: EquipmentBookingRequest, service) -> None:
    _require_interval(request, "equipment")

def _check_class_session(request: ClassSessionBookingRequest, service) -> None:
    if request.start_date is None:
        raise ValidationError("start_date is required for class bookings")
    if request.end_date is None and service is not None and service.billed_by_duration:
        raise ValidationError("end_date is required for class bookings billed by the hour")

def _check_service(request: GenericServiceBookingRequest, service) -> None:
    _require_interval(request, "service")

_KIND_RULES = {
    RoomBookingRequest: _check_room,
    EquipmentBookingRequest: _check_equipment,
    ClassSessionBookingRequest: _check_class_session,
    GenericServiceBookingRequest: _check_service,
}


def validate_prices(full_price: Optional[float], discounted_price: Optional[float]) -> None:
    if full_price is None:
        raise ValidationError("full_price is required for manual pricing")
    if full_price < 0:
        raise ValidationError("full_price cannot be negative")
    if discounted_price is not None:
        if discounted_price < 0:
            raise ValidationError("discounted_price cannot be negative")
        if discounted_price > full_price:
            raise ValidationError("discounted_price cannot exceed full_price")


def _clean_add_ons(add_ons: Optional[List[AddOnInput]]) -> List[Dict[str, Any]]:
    cleaned = []
    for item in add_ons or []:
        name = (item.name or "").strip()
        if not name:
            continue
        cleaned.append(AddOn(name=name, amount=item.amount).model_dump(exclude_none=True))
    return cleaned


def resolve_booking(request) -> Dict[str, Any]:
    """Booking fields for a parsed request, in this order: catalog defaults,
    kind rules, interval and price checks, fee derivation."""
    service = find_service(request.service_code)
    _apply_catalog_defaults(request, service)

    _KIND_RULES[type(request)](request, service)

    if request.start_date is not None and request.end_date is not None and request.end_date <= request.start_date:
        raise ValidationError("end_date must be after start_date")

    validate_prices(request.full_price, request.discounted_price)

    currency = (request.currency or "").strip().upper() or DEFAULT_CURRENCY
    notes = (request.price_notes or "").strip() or None

    return {
        "service_type": request.service_type,
        "service_code": request.service_code,
        "client_id": request.client_id,
        "staff_id": request.staff_id,
        "room_id": getattr(request, "room_id", None),
        "equipment_id": getattr(request, "equipment_id", None),
        "class_id": getattr(request, "class_id", None),
        "start_date": request.start_date,
        "end_date": request.end_date,
        "status": request.status,
        "payment_status": request.payment_status,
        "full_price": request.full_price,
        "discounted_price": request.discounted_price,
        "currency": currency,
        "add_ons": _clean_add_ons(request.add_ons),
        "price_notes": notes,
        "total_fee": compute_total_fee(request.full_price, request.discounted_price),
    }
