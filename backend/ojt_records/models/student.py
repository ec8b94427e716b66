from sqlalchemy import Column, DateTime, JSON, String

from ojt_records.database import Base
from ojt_records.models.account import new_id


class StudentProfile(Base):
    __tablename__ = "student_profiles"

    id = Column(String(32), primary_key=True, default=new_id)
    # No foreign key cascade: account and profile are deleted in two steps
    account_id = Column(String(32), nullable=False, index=True)
    email = Column(String, nullable=False)
    full_name = Column(String, nullable=False)
    department = Column(String, nullable=False)
    project = Column(String)  # IT department only
    skills = Column(JSON, nullable=False, default=list)
    school = Column(String, nullable=False)
    course = Column(String, nullable=False)
    year_level = Column(String, nullable=False)
    contact_number = Column(String, nullable=False)
    address = Column(String, nullable=False)
    start_date = Column(String, nullable=False)
    end_date = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, index=True)
    updated_at = Column(DateTime, nullable=False)
