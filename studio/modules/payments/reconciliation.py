"""
Payment-status reconciliation
A booking's (or enrollment's) payment status is a function of the payments
linked to it and the fee it owes. It is recomputed after every payment
change and written back only when it differs.
"""
import logging
from typing import Optional
from studio.modules.booking.models import PaymentStatus
from studio.modules.booking.repository import BookingRepository
from studio.modules.classes.repository import ClassRepository
from studio.modules.enrollments.repository import EnrollmentRepository
from studio.modules.payments.repository import PaymentRepository

# Absorbs float rounding when comparing the amount paid with the fee.
PAID_EPSILON = 0.005


def compute_payment_status(total_paid: float, fee: Optional[float]) -> str:
    if total_paid <= 0:
        return PaymentStatus.unpaid.value
    if not fee or fee <= 0:
        return PaymentStatus.partial.value
    if total_paid >= fee - PAID_EPSILON:
        return PaymentStatus.paid.value
    return PaymentStatus.partial.value


class PaymentReconciler:
    def __init__(
        self,
        payment_repo: PaymentRepository,
        booking_repo: BookingRepository,
        enrollment_repo: EnrollmentRepository,
        class_repo: ClassRepository,
    ):
        self.payment_repo = payment_repo
        self.booking_repo = booking_repo
        self.enrollment_repo = enrollment_repo
        self.class_repo = class_repo

    async def total_paid(self, field: str, target_id: str) -> float:
        totals = await self.payment_repo.sum_by_type({field: target_id})
        return totals["income"] - totals["expense"]

    async def reconcile_booking(self, booking_id: str) -> Optional[str]:
        booking = await self.booking_repo.find_booking(booking_id)
        if not booking:
            return None
        status = compute_payment_status(await self.total_paid("booking_id", booking_id), booking.get("total_fee"))
        if booking.get("payment_status") != status:
            await self.booking_repo.set_payment_status(booking_id, status)
            logging.info(f"Booking {booking_id} payment status is now {status}")
        return status

    async def reconcile_enrollment(self, enrollment_id: str) -> Optional[str]:
        enrollment = await self.enrollment_repo.find_enrollment(enrollment_id)
        if not enrollment:
            return None
        studio_class = await self.class_repo.find_class(enrollment.get("class_id")) if enrollment.get("class_id") else None
        fee = (studio_class or {}).get("fee")
        status = compute_payment_status(await self.total_paid("enrollment_id", enrollment_id), fee)
        if enrollment.get("payment_status") != status:
            await self.enrollment_repo.set_payment_status(enrollment_id, status)
            logging.info(f"Enrollment {enrollment_id} payment status is now {status}")
        return status

    async def reconcile_payment_targets(self, *payments: Optional[dict]):
        """Reconcile every booking and enrollment the given payments point at."""
        booking_ids, enrollment_ids = set(), set()
        for payment in payments:
            if not payment:
                continue
            if payment.get("booking_id"):
                booking_ids.add(payment["booking_id"])
            if payment.get("enrollment_id"):
                enrollment_ids.add(payment["enrollment_id"])
        for booking_id in booking_ids:
            await self.reconcile_booking(booking_id)
        for enrollment_id in enrollment_ids:
            await self.reconcile_enrollment(enrollment_id)
