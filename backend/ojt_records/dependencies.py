"""FastAPI wiring: services per request, and the two-role check."""
from datetime import timedelta
from functools import lru_cache
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from ojt_records.auth.passwords import PasswordHasher
from ojt_records.auth.token import SessionClaims, TokenIssuer, get_token_issuer
from ojt_records.config import Settings, get_settings
from ojt_records.database import get_db, utcnow
from ojt_records.errors import Forbidden, InvalidToken
from ojt_records.models.account import ROLE_ADMIN
from ojt_records.services.auth import AuthService
from ojt_records.services.profiles import ProfileService
from ojt_records.stores.credentials import CredentialStore
from ojt_records.stores.students import StudentRecordStore

# OAuth2 scheme for token extraction; a missing token is reported by get_current_session
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/login", auto_error=False)


@lru_cache()
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=get_settings().bcrypt_rounds)


def get_clock():
    return utcnow


def get_profile_service(db: Session = Depends(get_db), clock=Depends(get_clock)) -> ProfileService:
    return ProfileService(StudentRecordStore(db), CredentialStore(db), clock=clock)


def get_auth_service(
    db: Session = Depends(get_db),
    profiles: ProfileService = Depends(get_profile_service),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(
        CredentialStore(db),
        profiles,
        hasher,
        tokens,
        session_ttl=timedelta(days=settings.session_ttl_days),
    )


def get_current_session(
    token: Optional[str] = Depends(oauth2_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> SessionClaims:
    """Dependency to get the claims of the bearer token, for an account that still exists"""
    if not token:
        raise InvalidToken("Authentication required")

    return auth.authenticate(token)


def require_admin(session: SessionClaims = Depends(get_current_session)) -> SessionClaims:
    if session.role != ROLE_ADMIN:
        raise Forbidden("Admin access required")
    return session


def require_owner_or_admin(userId: str, session: SessionClaims = Depends(get_current_session)) -> SessionClaims:
    """Students may only touch their own profile"""
    if session.role != ROLE_ADMIN and session.account_id != userId:
        raise Forbidden()
    return session
