"""Credential store contract consumed by the session layer"""

from abc import ABC, abstractmethod

from lms_gateway.domain.models import Account, BusinessProfile, Lender


class CredentialStore(ABC):
    """Durable Lender/Account persistence"""

    @abstractmethod
    def create_lender_and_account(
        self,
        profile: BusinessProfile,
        username: str,
        password_hash: str,
        interest_rate: float,
    ) -> int:
        """Insert a lender and its first account atomically; return the account id"""

    @abstractmethod
    def get_account_by_username(self, username: str) -> Account:
        """Raises AccountNotFoundError when no account has this username"""

    @abstractmethod
    def get_account_by_id(self, account_id: int) -> Account:
        """Raises AccountNotFoundError when no account has this id"""

    @abstractmethod
    def get_lender_by_account_id(self, account_id: int) -> Lender:
        """Raises AccountNotFoundError or LenderNotFoundError"""

    @abstractmethod
    def update_last_login(self, account_id: int) -> None:
        """Touch last_login; unknown ids are a silent no-op"""
