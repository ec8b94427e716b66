from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel

from ojt_records.models.student import StudentProfile


class StudentLogin(BaseModel):
    email: str
    password: str


class StudentFields(BaseModel):
    # Required for registration, checked by the profile service so a
    # missing field is reported the same way over every transport
    fullName: Optional[str] = None
    department: Optional[str] = None
    project: Optional[str] = None
    skills: Optional[Union[str, List[str]]] = None  # comma-separated
    school: Optional[str] = None
    course: Optional[str] = None
    yearLevel: Optional[str] = None
    contactNumber: Optional[str] = None
    address: Optional[str] = None
    startDate: Optional[str] = None
    endDate: Optional[str] = None


class StudentCreate(StudentFields):
    email: str
    password: str

    def profile_fields(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"email", "password"}, exclude_none=True)


class StudentUpdate(StudentFields):
    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class PasswordReset(BaseModel):
    email: str
    newPassword: str


def student_payload(profile: StudentProfile) -> Dict[str, Any]:
    """Wire representation of a StudentProfile"""
    return {
        "id": profile.id,
        "userId": profile.account_id,
        "email": profile.email,
        "fullName": profile.full_name,
        "department": profile.department,
        "project": profile.project,
        "skills": list(profile.skills or []),
        "school": profile.school,
        "course": profile.course,
        "yearLevel": profile.year_level,
        "contactNumber": profile.contact_number,
        "address": profile.address,
        "startDate": profile.start_date,
        "endDate": profile.end_date,
        "createdAt": profile.created_at.isoformat() if profile.created_at else None,
        "updatedAt": profile.updated_at.isoformat() if profile.updated_at else None,
    }
