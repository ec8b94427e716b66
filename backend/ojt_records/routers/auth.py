from fastapi import APIRouter, Depends

from ojt_records.auth.token import SessionClaims
from ojt_records.dependencies import get_auth_service, get_current_session
from ojt_records.schemas.student import PasswordReset, StudentCreate, StudentLogin
from ojt_records.services.auth import AuthService

router = APIRouter(tags=["authentication"])


@router.post("/login")
async def login(credentials: StudentLogin, auth: AuthService = Depends(get_auth_service)):
    grant = auth.login(credentials.email, credentials.password)
    return {
        "success": True,
        "role": grant.account.role,
        "token": grant.token,
        "user": grant.account.as_dict(),
    }


@router.post("/register")
async def register(student: StudentCreate, auth: AuthService = Depends(get_auth_service)):
    grant = auth.register(student.email, student.password, student.profile_fields())
    return {
        "success": True,
        "token": grant.token,
        "user": grant.account.as_dict(),
    }


@router.post("/reset-password")
async def reset_password(reset: PasswordReset, auth: AuthService = Depends(get_auth_service)):
    auth.reset_password(reset.email, reset.newPassword)
    return {"success": True}


@router.get("/me")
async def me(session: SessionClaims = Depends(get_current_session)):
    """
    Get the account behind the bearer token.
    """
    return {"success": True, "user": {"id": session.account_id, "role": session.role}}
