import logging

from fastapi import APIRouter, Depends

from ojt_records.auth.token import SessionClaims
from ojt_records.dependencies import get_profile_service, require_admin, require_owner_or_admin
from ojt_records.schemas.student import StudentUpdate, student_payload
from ojt_records.services.profiles import ProfileService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["students"])


@router.get("/student/{userId}")
async def get_student(
    userId: str,
    session: SessionClaims = Depends(require_owner_or_admin),
    profiles: ProfileService = Depends(get_profile_service),
):
    student = profiles.get_by_account_id(userId)
    return {"success": True, "student": student_payload(student)}


@router.get("/students")
async def list_students(
    session: SessionClaims = Depends(require_admin),
    profiles: ProfileService = Depends(get_profile_service),
):
    """
    Get all students, newest first (admin).
    """
    students = profiles.list_all()
    return {"success": True, "students": [student_payload(s) for s in students]}


@router.put("/student/{userId}")
async def update_student(
    userId: str,
    update: StudentUpdate,
    session: SessionClaims = Depends(require_owner_or_admin),
    profiles: ProfileService = Depends(get_profile_service),
):
    student = profiles.update(userId, update.changes())
    logger.info(f"Student profile for account {userId} updated by {session.account_id}")
    return {"success": True, "student": student_payload(student)}


@router.delete("/student/{studentId}")
async def delete_student(
    studentId: str,
    session: SessionClaims = Depends(require_admin),
    profiles: ProfileService = Depends(get_profile_service),
):
    """
    Delete a student record together with its account (admin).
    """
    profiles.delete(studentId)
    return {"success": True}
