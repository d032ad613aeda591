from fastapi import Depends
from studio.modules.classes.repository import ClassRepository
from studio.modules.clients.repository import ClientRepository
from studio.modules.enrollments.repository import EnrollmentRepository
from studio.modules.enrollments.service import EnrollmentService

def get_enrollment_service(
    enrollment_repo: EnrollmentRepository = Depends(),
    class_repo: ClassRepository = Depends(),
    client_repo: ClientRepository = Depends(),
) -> EnrollmentService:
    return EnrollmentService(enrollment_repo, class_repo, client_repo)
