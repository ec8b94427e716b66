"""
Student profile lifecycle: creation at registration, reads, partial
updates and the two-step delete of a student and its account.
"""
import logging
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Union

from ojt_records.database import utcnow
from ojt_records.errors import NotFound, ValidationFailure
from ojt_records.models.account import Account
from ojt_records.models.student import StudentProfile
from ojt_records.stores.credentials import CredentialStore
from ojt_records.stores.students import StudentRecordStore

logger = logging.getLogger(__name__)

# Profile field name -> StudentProfile column
FIELD_COLUMNS = {
    "fullName": "full_name",
    "department": "department",
    "project": "project",
    "skills": "skills",
    "school": "school",
    "course": "course",
    "yearLevel": "year_level",
    "contactNumber": "contact_number",
    "address": "address",
    "startDate": "start_date",
    "endDate": "end_date",
}

REQUIRED_FIELDS = (
    "fullName",
    "department",
    "school",
    "course",
    "yearLevel",
    "contactNumber",
    "address",
    "startDate",
    "endDate",
)

PROJECT_DEPARTMENT = "IT"


def split_skills(value: Union[str, Iterable[str], None]) -> List[str]:
    """Turn "go, rust, ,c" (or a list) into ["go", "rust", "c"]."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(skill).strip() for skill in value if skill is not None and str(skill).strip()]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class ProfileService:
    def __init__(
        self,
        store: StudentRecordStore,
        accounts: CredentialStore,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.accounts = accounts
        self.clock = clock

    def create_for_account(self, account: Account, fields: Mapping[str, Any]) -> StudentProfile:
        """
        Create the profile owned by a freshly registered account.

        The project is only kept for the IT department, and skills arrive
        as a comma-separated string.
        """
        missing = [name for name in REQUIRED_FIELDS if _is_blank(fields.get(name))]
        if missing:
            raise ValidationFailure(f"Missing required fields: {', '.join(missing)}")

        department = fields["department"]
        now = self.clock()
        profile = self.store.create(
            account_id=account.id,
            email=account.email,
            full_name=fields["fullName"],
            department=department,
            project=fields.get("project") if department == PROJECT_DEPARTMENT else None,
            skills=split_skills(fields.get("skills")),
            school=fields["school"],
            course=fields["course"],
            year_level=fields["yearLevel"],
            contact_number=fields["contactNumber"],
            address=fields["address"],
            start_date=fields["startDate"],
            end_date=fields["endDate"],
            created_at=now,
            updated_at=now,
        )
        logger.info(f"Created student profile {profile.id} for account {account.id}")
        return profile

    def get_by_account_id(self, account_id: str) -> StudentProfile:
        profile = self.store.find_by_account_id(account_id)
        if profile is None:
            raise NotFound()
        return profile

    def list_all(self) -> List[StudentProfile]:
        return self.store.list_newest_first()

    def update(self, account_id: str, partial_fields: Mapping[str, Any]) -> StudentProfile:
        """
        Overwrite the fields present in partial_fields and refresh updatedAt.

        Fields that are absent keep their stored value. Linkage fields
        (id, account, email, timestamps) are never taken from the input.
        """
        changes: Dict[str, Any] = {}
        cleared: List[str] = []
        for name, value in partial_fields.items():
            column = FIELD_COLUMNS.get(name)
            if column is None:
                continue
            if name in REQUIRED_FIELDS and _is_blank(value):
                cleared.append(name)
                continue
            changes[column] = split_skills(value) if name == "skills" else value

        if cleared:
            raise ValidationFailure(f"Missing required fields: {', '.join(cleared)}")

        changes["updated_at"] = self.clock()
        profile = self.store.update(account_id, changes)
        if profile is None:
            raise NotFound()
        return profile

    def delete(self, student_record_id: str) -> None:
        """
        Delete a student by profile id: the account first, then the profile.

        The two deletes are separate commits. If the second one fails the
        profile is left behind pointing at an account that no longer exists.
        """
        profile = self.store.find_by_id(student_record_id)
        if profile is None:
            raise NotFound()
        record_id, account_id = profile.id, profile.account_id

        self.accounts.delete_by_id(account_id)
        self.store.delete_by_id(record_id)
        logger.info(f"Deleted student {record_id} and account {account_id}")
