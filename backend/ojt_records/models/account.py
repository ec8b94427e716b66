import uuid

from sqlalchemy import Column, DateTime, String

from ojt_records.database import Base, utcnow

ROLE_ADMIN = "admin"
ROLE_STUDENT = "student"


def new_id() -> str:
    return uuid.uuid4().hex


class Account(Base):
    __tablename__ = "accounts"

    id = Column(String(32), primary_key=True, default=new_id)
    # Unique at the storage layer as well, so concurrent registrations
    # cannot both insert the same email
    email = Column(String, nullable=False, unique=True, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default=ROLE_STUDENT)
    created_at = Column(DateTime, nullable=False, default=utcnow)
