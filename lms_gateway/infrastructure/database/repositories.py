"""Data access layer for lenders and their login accounts"""

from datetime import datetime, timezone
from sqlalchemy.orm import Session
from lms_gateway.infrastructure.database.models import Account as AccountRow, Lender as LenderRow
from lms_gateway.domain.credentials import CredentialStore
from lms_gateway.domain.exceptions import AccountNotFoundError, LenderNotFoundError
from lms_gateway.domain.models import Account, BusinessProfile, Lender


def _to_account(row: AccountRow) -> Account:
    return Account(
        id=row.id,
        lender_id=row.lender_id,
        username=row.username,
        password_hash=row.password_hash,
        is_locked=bool(row.is_locked),
        last_login=row.last_login,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_lender(row: LenderRow) -> Lender:
    return Lender(
        id=row.id,
        business_name=row.business_name,
        phone_number=row.phone_number,
        email=row.email,
        interest_rate_percent=row.interest_rate_percent,
        is_active=bool(row.is_active),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class AccountRepository(CredentialStore):
    """SQLAlchemy-backed credential store"""

    def __init__(self, db: Session):
        self.db = db

    def create_lender_and_account(
        self,
        profile: BusinessProfile,
        username: str,
        password_hash: str,
        interest_rate: float,
    ) -> int:
        """
        Persist a new lender and its account as one transaction.

        Any failure (duplicate email/username, rate out of range, lost
        connection) rolls back both inserts and re-raises the store error.
        """
        try:
            db_lender = LenderRow(
                business_name=profile.business_name,
                phone_number=profile.phone_number,
                email=profile.email,
                interest_rate_percent=interest_rate,
            )
            self.db.add(db_lender)
            self.db.flush()  # Get lender ID without committing

            db_account = AccountRow(
                lender_id=db_lender.id,
                username=username,
                password_hash=password_hash,
            )
            self.db.add(db_account)
            self.db.flush()

            account_id = db_account.id
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        return account_id

    def get_account_by_username(self, username: str) -> Account:
        row = self.db.query(AccountRow).filter(AccountRow.username == username).first()
        if row is None:
            raise AccountNotFoundError(f"account not found: {username!r}")
        return _to_account(row)

    def get_account_by_id(self, account_id: int) -> Account:
        row = self.db.query(AccountRow).filter(AccountRow.id == account_id).first()
        if row is None:
            raise AccountNotFoundError(f"account not found: {account_id}")
        return _to_account(row)

    def get_lender_by_account_id(self, account_id: int) -> Lender:
        """Resolve account -> lender_id -> lender"""
        lender_id = (
            self.db.query(AccountRow.lender_id)
            .filter(AccountRow.id == account_id)
            .scalar()
        )
        if lender_id is None:
            raise AccountNotFoundError(f"account not found: {account_id}")

        row = self.db.query(LenderRow).filter(LenderRow.id == lender_id).first()
        if row is None:
            # Only reachable if foreign keys were not enforced
            raise LenderNotFoundError(f"lender {lender_id} not found for account {account_id}")
        return _to_lender(row)

    def update_last_login(self, account_id: int) -> None:
        """Set last_login to now; zero matched rows is not an error"""
        try:
            (
                self.db.query(AccountRow)
                .filter(AccountRow.id == account_id)
                .update({AccountRow.last_login: datetime.now(timezone.utc)}, synchronize_session=False)
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
