"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional


class RegisterRequest(BaseModel):
    """Request body for POST /v1/auth/register"""

    business_name: str = Field(..., min_length=1, description="Lender business name")
    phone_number: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3, description="Lender contact email (unique)")
    interest_rate: float = Field(..., ge=0, le=100, description="Base interest rate percent")
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)


class RegisterResponse(BaseModel):
    """Response for POST /v1/auth/register"""

    account_id: int


class LoginRequest(BaseModel):
    """Request body for POST /v1/auth/login"""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RefreshRequest(BaseModel):
    """Request body for POST /v1/auth/refresh"""

    refresh_token: str = Field(..., min_length=1)


class TokenPairResponse(BaseModel):
    """Token pair returned by login and refresh"""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class MeResponse(BaseModel):
    """Response for GET /v1/auth/me"""

    account_id: int
    lender_id: int
    username: str
    last_login: Optional[datetime] = None
    business_name: str
    email: str
    phone_number: str
    interest_rate_percent: float
    is_active: bool
