"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class BusinessProfile:
    """Lender details captured at onboarding"""

    business_name: str
    phone_number: str
    email: str


@dataclass
class Lender:
    """Tenant business owning one or more login accounts"""

    id: int
    business_name: str
    phone_number: str
    email: str
    interest_rate_percent: float
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class Account:
    """Login credential bound to exactly one lender"""

    id: int
    lender_id: int
    username: str
    password_hash: str  # never serialized outward
    is_locked: bool = False
    last_login: Optional[datetime] = None  # None means never logged in
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class Identity:
    """Who a token speaks for"""

    account_id: int
    lender_id: int


@dataclass(frozen=True)
class TokenClaims:
    """Decoded, verified token payload"""

    account_id: int
    lender_id: int
    token_type: str  # "access" or "refresh"
    issued_at: datetime
    expires_at: datetime

    @property
    def identity(self) -> Identity:
        return Identity(account_id=self.account_id, lender_id=self.lender_id)


@dataclass(frozen=True)
class TokenPair:
    """Access and refresh tokens minted together"""

    access_token: str
    refresh_token: str
