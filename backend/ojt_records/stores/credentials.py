from typing import Optional

from ojt_records.errors import EmailTaken
from ojt_records.models.account import Account
from ojt_records.stores.base import SqlStore


class CredentialStore(SqlStore):
    """One Account row per login: email, salted hash and role."""

    def find_by_email(self, email: str) -> Optional[Account]:
        with self.guarded("account lookup by email"):
            return self.db.query(Account).filter(Account.email == email).first()

    def find_by_id(self, account_id: str) -> Optional[Account]:
        with self.guarded("account lookup by id"):
            return self.db.query(Account).filter(Account.id == account_id).first()

    def create(self, email: str, password_hash: str, role: str) -> Account:
        account = Account(email=email, password_hash=password_hash, role=role)
        with self.guarded("account insert", on_conflict=EmailTaken):
            self.db.add(account)
            self.db.commit()
            self.db.refresh(account)
        return account

    def update_password(self, account_id: str, password_hash: str) -> None:
        with self.guarded("password update"):
            self.db.query(Account).filter(Account.id == account_id).update(
                {Account.password_hash: password_hash}
            )
            self.db.commit()

    def delete_by_id(self, account_id: str) -> None:
        # Deleting a missing account is a no-op
        with self.guarded("account delete"):
            self.db.query(Account).filter(Account.id == account_id).delete()
            self.db.commit()
