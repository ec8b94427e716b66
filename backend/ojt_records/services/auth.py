"""
Login, registration, password reset and the admin seed.

Registration is two independent writes: the account, then its profile.
A profile failure after the account insert leaves an account with no
profile that still blocks its email.
"""
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Mapping

from ojt_records.auth.passwords import PasswordHasher
from ojt_records.auth.token import SessionClaims, TokenIssuer
from ojt_records.errors import EmailNotFound, EmailTaken, InvalidCredentials, InvalidToken
from ojt_records.models.account import Account, ROLE_ADMIN, ROLE_STUDENT
from ojt_records.services.profiles import ProfileService
from ojt_records.stores.credentials import CredentialStore

logger = logging.getLogger(__name__)

SESSION_TTL = timedelta(days=7)


@dataclass(frozen=True)
class AccountView:
    id: str
    email: str
    role: str

    @classmethod
    def from_account(cls, account: Account) -> "AccountView":
        return cls(id=account.id, email=account.email, role=account.role)

    def as_dict(self):
        return {"id": self.id, "email": self.email, "role": self.role}


@dataclass(frozen=True)
class SessionGrant:
    token: str
    account: AccountView


class AuthService:
    def __init__(
        self,
        credentials: CredentialStore,
        profiles: ProfileService,
        hasher: PasswordHasher,
        tokens: TokenIssuer,
        session_ttl: timedelta = SESSION_TTL,
    ):
        self.credentials = credentials
        self.profiles = profiles
        self.hasher = hasher
        self.tokens = tokens
        self.session_ttl = session_ttl

    def _grant(self, account: Account) -> SessionGrant:
        token = self.tokens.issue({"sub": account.id, "role": account.role}, self.session_ttl)
        return SessionGrant(token=token, account=AccountView.from_account(account))

    def login(self, email: str, password: str) -> SessionGrant:
        account = self.credentials.find_by_email(email)
        if account is None:
            self.hasher.dummy_verify()
            raise InvalidCredentials()
        if not self.hasher.verify(password, account.password_hash):
            raise InvalidCredentials()
        return self._grant(account)

    def register(self, email: str, password: str, profile_fields: Mapping[str, Any]) -> SessionGrant:
        if self.credentials.find_by_email(email) is not None:
            raise EmailTaken()

        account = self.credentials.create(email, self.hasher.hash(password), ROLE_STUDENT)
        logger.info(f"Registered student account {account.id}")

        self.profiles.create_for_account(account, profile_fields)
        return self._grant(account)

    def reset_password(self, email: str, new_password: str) -> None:
        # No old-password check: anyone who knows the email can reset it
        account = self.credentials.find_by_email(email)
        if account is None:
            raise EmailNotFound()
        self.credentials.update_password(account.id, self.hasher.hash(new_password))
        logger.info(f"Password reset for account {account.id}")

    def authenticate(self, token: str) -> SessionClaims:
        """Claims of a valid token whose account still exists."""
        claims = SessionClaims.from_payload(self.tokens.verify(token))
        if self.credentials.find_by_id(claims.account_id) is None:
            raise InvalidToken()
        return claims

    def bootstrap_admin(self, email: str, password: str) -> Account:
        """Create the admin account unless it already exists."""
        account = self.credentials.find_by_email(email)
        if account is not None:
            return account

        account = self.credentials.create(email, self.hasher.hash(password), ROLE_ADMIN)
        logger.info(f"Admin account created: {email}")
        return account
