"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from lms_gateway.config import settings
from lms_gateway.domain.exceptions import EmptySecretError, TokenError
from lms_gateway.domain.models import Identity
from lms_gateway.domain.sessions import AuthService
from lms_gateway.infrastructure.database.repositories import AccountRepository
from lms_gateway.infrastructure.database.session import get_db
from lms_gateway.infrastructure.observability.metrics import record_token_rejection

bearer_scheme = HTTPBearer(auto_error=False)


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_jwt_secret() -> str:
    """Provide the token signing secret"""
    return settings.jwt_secret


def get_account_repository(db: Session = Depends(get_db)) -> AccountRepository:
    """Provide credential store bound to the request session"""
    return AccountRepository(db)


def get_auth_service(
    repo: AccountRepository = Depends(get_account_repository),
    secret: str = Depends(get_jwt_secret),
) -> AuthService:
    """Provide auth flows wired to the request's store and the configured secret"""
    return AuthService(repo, secret)


def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> Identity:
    """Require a valid bearer access token"""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return auth_service.authenticate(credentials.credentials)
    except EmptySecretError:
        raise HTTPException(status_code=500, detail="Internal server error")
    except TokenError as e:
        record_token_rejection(e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
