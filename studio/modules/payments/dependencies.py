from fastapi import Depends
from studio.modules.booking.repository import BookingRepository
from studio.modules.classes.repository import ClassRepository
from studio.modules.enrollments.repository import EnrollmentRepository
from studio.modules.payments.reconciliation import PaymentReconciler
from studio.modules.payments.repository import PaymentRepository
from studio.modules.payments.service import PaymentService

def get_payment_reconciler(
    payment_repo: PaymentRepository = Depends(),
    booking_repo: BookingRepository = Depends(),
    enrollment_repo: EnrollmentRepository = Depends(),
    class_repo: ClassRepository = Depends(),
) -> PaymentReconciler:
    return PaymentReconciler(payment_repo, booking_repo, enrollment_repo, class_repo)

def get_payment_service(
    payment_repo: PaymentRepository = Depends(),
    booking_repo: BookingRepository = Depends(),
    enrollment_repo: EnrollmentRepository = Depends(),
    reconciler: PaymentReconciler = Depends(get_payment_reconciler),
) -> PaymentService:
    return PaymentService(payment_repo, booking_repo, enrollment_repo, reconciler)
