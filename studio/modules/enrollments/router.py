from fastapi import APIRouter, Depends
from typing import Optional
from studio.modules.auth.utility import staff_or_admin
from studio.modules.enrollments.dependencies import get_enrollment_service
from studio.modules.enrollments.models import EnrollmentCreate, EnrollmentUpdate
from studio.modules.enrollments.service import EnrollmentService

enrollment_router = APIRouter(prefix="/enrollments", tags=["Enrollments"], dependencies=[Depends(staff_or_admin)])

@enrollment_router.post("/", status_code=201)
async def create_enrollment(data: EnrollmentCreate, enrollment_service: EnrollmentService = Depends(get_enrollment_service)):
    return await enrollment_service.create_enrollment(data)

@enrollment_router.get("/")
async def get_enrollments(
    class_id: Optional[str] = None,
    student_id: Optional[str] = None,
    enrollment_service: EnrollmentService = Depends(get_enrollment_service)
):
    return await enrollment_service.get_enrollments(class_id=class_id, student_id=student_id)

@enrollment_router.get("/{enrollment_id}")
async def get_enrollment(enrollment_id: str, enrollment_service: EnrollmentService = Depends(get_enrollment_service)):
    return await enrollment_service.get_enrollment(enrollment_id)

@enrollment_router.put("/{enrollment_id}")
async def update_enrollment(enrollment_id: str, data: EnrollmentUpdate, enrollment_service: EnrollmentService = Depends(get_enrollment_service)):
    return await enrollment_service.update_enrollment(enrollment_id, data)

@enrollment_router.delete("/{enrollment_id}")
async def delete_enrollment(enrollment_id: str, enrollment_service: EnrollmentService = Depends(get_enrollment_service)):
    return await enrollment_service.delete_enrollment(enrollment_id)
