from passlib.context import CryptContext

from ojt_records.errors import ValidationFailure


class PasswordHasher:
    """One-way salted hashing for stored passwords (bcrypt)."""

    def __init__(self, rounds: int = 10):
        self._context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds
        )

    def hash(self, plaintext: str) -> str:
        try:
            return self._context.hash(plaintext)
        except (ValueError, TypeError) as e:
            # bcrypt refuses some inputs, e.g. NUL bytes
            raise ValidationFailure("Password contains unsupported characters") from e

    def verify(self, plaintext: str, digest: str) -> bool:
        try:
            return self._context.verify(plaintext, digest)
        except (ValueError, TypeError):
            # Unrecognised or corrupt digest
            return False

    def dummy_verify(self) -> None:
        """Spend the time of a real verify when there is no digest to check."""
        self._context.dummy_verify()
