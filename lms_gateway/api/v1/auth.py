"""/v1/auth - lender onboarding, login, token refresh and identity lookup"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.exc import IntegrityError

from lms_gateway.api.v1.schemas import (
    RegisterRequest,
    RegisterResponse,
    LoginRequest,
    RefreshRequest,
    TokenPairResponse,
    MeResponse,
)
from lms_gateway.api.dependencies import (
    get_account_repository,
    get_auth_service,
    get_current_identity,
    get_request_id,
)
from lms_gateway.domain.exceptions import (
    AccountLockedError,
    AccountNotFoundError,
    EmptySecretError,
    LenderNotFoundError,
    PasswordMismatchError,
    PasswordTooLongError,
    TokenError,
    WeakPasswordError,
)
from lms_gateway.domain.models import BusinessProfile, Identity, TokenPair
from lms_gateway.domain.sessions import AuthService
from lms_gateway.infrastructure.database.repositories import AccountRepository
from lms_gateway.infrastructure.observability.logging import log_auth_event
from lms_gateway.infrastructure.observability.metrics import (
    record_login,
    record_registration,
    record_token_rejection,
)

router = APIRouter()


def _elapsed_ms(start_time: float) -> float:
    return (time.time() - start_time) * 1000


def _token_response(pair: TokenPair) -> TokenPairResponse:
    return TokenPairResponse(access_token=pair.access_token, refresh_token=pair.refresh_token)


@router.post("/auth/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    request_body: RegisterRequest,
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Onboard a lender together with its first login account.

    Lender and account are written in one transaction: a duplicate
    username or email leaves no trace of either row.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    profile = BusinessProfile(
        business_name=request_body.business_name,
        phone_number=request_body.phone_number,
        email=request_body.email,
    )

    try:
        account_id = auth_service.register(
            profile,
            username=request_body.username,
            password=request_body.password,
            interest_rate=request_body.interest_rate,
        )

    except (WeakPasswordError, PasswordTooLongError) as e:
        record_registration("weak_password")
        raise HTTPException(status_code=400, detail=str(e))

    except IntegrityError:
        record_registration("conflict")
        logging.warning("Registration conflict", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail="Username or email already registered")

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_registration("created")
    log_auth_event(request_id, "register", "created", _elapsed_ms(start_time), account_id=account_id)
    return RegisterResponse(account_id=account_id)


@router.post("/auth/login", response_model=TokenPairResponse)
def login(
    request_body: LoginRequest,
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Exchange username/password for an access + refresh token pair.

    Unknown usernames and wrong passwords are reported identically.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        pair = auth_service.login(request_body.username, request_body.password)

    except (AccountNotFoundError, PasswordMismatchError) as e:
        record_login("invalid_credentials")
        log_auth_event(request_id, "login", "rejected", _elapsed_ms(start_time), reason=type(e).__name__)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    except AccountLockedError:
        record_login("locked")
        log_auth_event(request_id, "login", "rejected", _elapsed_ms(start_time), reason="AccountLockedError")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is locked")

    except EmptySecretError:
        logging.error("JWT secret is not configured", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_login("success")
    log_auth_event(request_id, "login", "success", _elapsed_ms(start_time))
    return _token_response(pair)


@router.post("/auth/refresh", response_model=TokenPairResponse)
def refresh(
    request_body: RefreshRequest,
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Trade a valid refresh token for a fresh token pair"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        pair = auth_service.refresh(request_body.refresh_token)

    except EmptySecretError:
        logging.error("JWT secret is not configured", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    except TokenError as e:
        record_token_rejection(e)
        log_auth_event(request_id, "refresh", "rejected", _elapsed_ms(start_time), reason=type(e).__name__)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    except AccountNotFoundError:
        log_auth_event(request_id, "refresh", "rejected", _elapsed_ms(start_time), reason="AccountNotFoundError")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account no longer exists")

    except AccountLockedError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is locked")

    log_auth_event(request_id, "refresh", "success", _elapsed_ms(start_time))
    return _token_response(pair)


@router.get("/auth/me", response_model=MeResponse)
def me(
    identity: Identity = Depends(get_current_identity),
    repo: AccountRepository = Depends(get_account_repository),
):
    """
    Return the authenticated account with its owning lender.

    Returns:
        Account and lender profile; the password hash is never included
    """
    try:
        account = repo.get_account_by_id(identity.account_id)
        lender = repo.get_lender_by_account_id(identity.account_id)
    except (AccountNotFoundError, LenderNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))

    return MeResponse(
        account_id=account.id,
        lender_id=lender.id,
        username=account.username,
        last_login=account.last_login,
        business_name=lender.business_name,
        email=lender.email,
        phone_number=lender.phone_number,
        interest_rate_percent=lender.interest_rate_percent,
        is_active=lender.is_active,
    )
