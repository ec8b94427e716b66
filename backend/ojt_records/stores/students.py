from typing import Any, Dict, List, Optional

from ojt_records.models.student import StudentProfile
from ojt_records.stores.base import SqlStore


class StudentRecordStore(SqlStore):
    """StudentProfile rows, linked to accounts by account_id."""

    def find_by_id(self, record_id: str) -> Optional[StudentProfile]:
        with self.guarded("student lookup by id"):
            return self.db.query(StudentProfile).filter(StudentProfile.id == record_id).first()

    def find_by_account_id(self, account_id: str) -> Optional[StudentProfile]:
        with self.guarded("student lookup by account"):
            return (
                self.db.query(StudentProfile)
                .filter(StudentProfile.account_id == account_id)
                .first()
            )

    def list_newest_first(self) -> List[StudentProfile]:
        with self.guarded("student listing"):
            return (
                self.db.query(StudentProfile)
                .order_by(StudentProfile.created_at.desc(), StudentProfile.id.desc())
                .all()
            )

    def create(self, **fields: Any) -> StudentProfile:
        profile = StudentProfile(**fields)
        with self.guarded("student insert"):
            self.db.add(profile)
            self.db.commit()
            self.db.refresh(profile)
        return profile

    def update(self, account_id: str, changes: Dict[str, Any]) -> Optional[StudentProfile]:
        """Apply column changes to the profile of account_id, None when absent."""
        with self.guarded("student update"):
            profile = (
                self.db.query(StudentProfile)
                .filter(StudentProfile.account_id == account_id)
                .first()
            )
            if profile is None:
                return None

            for column, value in changes.items():
                setattr(profile, column, value)

            self.db.commit()
            self.db.refresh(profile)
        return profile

    def delete_by_id(self, record_id: str) -> None:
        with self.guarded("student delete"):
            self.db.query(StudentProfile).filter(StudentProfile.id == record_id).delete()
            self.db.commit()
