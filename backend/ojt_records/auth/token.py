from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict

from jose import JWTError, jwt

from ojt_records.config import get_settings
from ojt_records.errors import InvalidToken


@dataclass(frozen=True)
class SessionClaims:
    account_id: str
    role: str

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "SessionClaims":
        account_id = payload.get("sub")
        role = payload.get("role")
        if not account_id or not role:
            raise InvalidToken()
        return cls(account_id=account_id, role=role)


class TokenIssuer:
    """Signs and checks self-contained session tokens (JWT)."""

    def __init__(self, secret_key: str, algorithm: str = "HS256"):
        self._secret_key = secret_key
        self._algorithm = algorithm

    def issue(self, claims: Dict[str, Any], ttl: timedelta) -> str:
        """Create a JWT carrying claims that expires ttl from now"""
        issued_at = datetime.now(timezone.utc)
        to_encode = claims.copy()
        to_encode.update({"iat": issued_at, "exp": issued_at + ttl})
        return jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """Return the claims of a valid token, raise InvalidToken otherwise"""
        try:
            return jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as e:
            raise InvalidToken() from e


@lru_cache()
def get_token_issuer() -> TokenIssuer:
    # The signing key is loaded once and never rotated while the process runs
    settings = get_settings()
    return TokenIssuer(settings.secret_key, settings.algorithm)
