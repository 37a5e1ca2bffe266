"""Pytest fixtures for testing"""

import pytest
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, Generator
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker, Session
from lms_gateway.api.dependencies import get_jwt_secret
from lms_gateway.api.main import create_app
from lms_gateway.domain.credentials import CredentialStore
from lms_gateway.domain.exceptions import AccountNotFoundError, LenderNotFoundError
from lms_gateway.domain.models import Account, BusinessProfile, Lender
from lms_gateway.infrastructure.database.models import Base
from lms_gateway.infrastructure.database.session import build_engine, get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
TEST_SECRET = "test-secret-0123456789abcdef0123456789abcdef"
engine = build_engine(TEST_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class InMemoryCredentialStore(CredentialStore):
    """Dict-backed store honouring the same uniqueness and not-found rules"""

    def __init__(self):
        self.lenders: Dict[int, Lender] = {}
        self.accounts: Dict[int, Account] = {}

    def create_lender_and_account(
        self,
        profile: BusinessProfile,
        username: str,
        password_hash: str,
        interest_rate: float,
    ) -> int:
        if any(l.email == profile.email for l in self.lenders.values()):
            raise ValueError(f"duplicate email {profile.email}")
        if any(a.username == username for a in self.accounts.values()):
            raise ValueError(f"duplicate username {username}")

        lender_id = len(self.lenders) + 1
        account_id = len(self.accounts) + 1
        self.lenders[lender_id] = Lender(
            id=lender_id,
            business_name=profile.business_name,
            phone_number=profile.phone_number,
            email=profile.email,
            interest_rate_percent=interest_rate,
            is_active=True,
        )
        self.accounts[account_id] = Account(
            id=account_id,
            lender_id=lender_id,
            username=username,
            password_hash=password_hash,
        )
        return account_id

    def get_account_by_username(self, username: str) -> Account:
        for account in self.accounts.values():
            if account.username == username:
                return account
        raise AccountNotFoundError(username)

    def get_account_by_id(self, account_id: int) -> Account:
        if account_id not in self.accounts:
            raise AccountNotFoundError(str(account_id))
        return self.accounts[account_id]

    def get_lender_by_account_id(self, account_id: int) -> Lender:
        account = self.get_account_by_id(account_id)
        if account.lender_id not in self.lenders:
            raise LenderNotFoundError(str(account.lender_id))
        return self.lenders[account.lender_id]

    def update_last_login(self, account_id: int) -> None:
        if account_id in self.accounts:
            self.accounts[account_id] = replace(self.accounts[account_id], last_login=datetime.now(timezone.utc))


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app(init_schema=False)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_jwt_secret] = lambda: TEST_SECRET
    return TestClient(app)


@pytest.fixture
def secret() -> str:
    return TEST_SECRET


@pytest.fixture
def memory_store() -> InMemoryCredentialStore:
    return InMemoryCredentialStore()


@pytest.fixture
def business_profile() -> BusinessProfile:
    return BusinessProfile(
        business_name="Lender Business",
        phone_number="123-456-7890",
        email="lender@example.com",
    )
