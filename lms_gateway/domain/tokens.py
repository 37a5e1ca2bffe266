"""
Signed session tokens (HMAC JWT) for access/refresh pairs.

Tokens carry the (account_id, lender_id) identity plus issued-at and
expiry timestamps. Validation is stateless: no revocation list exists, a
token stays valid until its embedded expiry.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt

from lms_gateway.domain.exceptions import (
    EmptySecretError,
    InvalidSignatureError,
    MalformedTokenError,
    TokenExpiredError,
)
from lms_gateway.domain.models import Identity, TokenClaims, TokenPair

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"

ACCESS_TOKEN_DURATION = timedelta(minutes=15)
REFRESH_TOKEN_DURATION = timedelta(days=7)

TOKEN_DURATIONS = {
    ACCESS_TOKEN: ACCESS_TOKEN_DURATION,
    REFRESH_TOKEN: REFRESH_TOKEN_DURATION,
}

# Tolerated clock skew when checking expiry
LEEWAY = timedelta(seconds=5)

SIGNING_ALGORITHM = "HS256"
ACCEPTED_ALGORITHMS = ["HS256", "HS384", "HS512"]


def _issue(identity: Identity, secret: str, token_type: str, now: datetime | None) -> str:
    if not secret:
        raise EmptySecretError()

    if now is None:
        now = datetime.now(timezone.utc)
    # NumericDate has whole-second resolution
    issued_at = now.replace(microsecond=0)

    payload: Dict[str, Any] = {
        "account_id": identity.account_id,
        "lender_id": identity.lender_id,
        "token_type": token_type,
        "iat": issued_at,
        "exp": issued_at + TOKEN_DURATIONS[token_type],
    }
    return jwt.encode(payload, secret, algorithm=SIGNING_ALGORITHM)


def issue_access_token(identity: Identity, secret: str, now: datetime | None = None) -> str:
    """
    Mint a 15-minute access token.

    Raises:
        EmptySecretError: secret is empty
    """
    return _issue(identity, secret, ACCESS_TOKEN, now)


def issue_refresh_token(identity: Identity, secret: str, now: datetime | None = None) -> str:
    """
    Mint a 7-day refresh token.

    Raises:
        EmptySecretError: secret is empty
    """
    return _issue(identity, secret, REFRESH_TOKEN, now)


def issue_token_pair(identity: Identity, secret: str, now: datetime | None = None) -> TokenPair:
    """Mint an access and a refresh token for the same identity at the same instant"""
    if now is None:
        now = datetime.now(timezone.utc)
    return TokenPair(
        access_token=issue_access_token(identity, secret, now),
        refresh_token=issue_refresh_token(identity, secret, now),
    )


def _is_id(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_token(token: str, secret: str) -> TokenClaims:
    """
    Verify a token and return its claims.

    Checks run in order: secret present, structure, signature/algorithm,
    expiry (with LEEWAY of clock skew tolerated).

    Raises:
        EmptySecretError: secret is empty
        MalformedTokenError: not a decodable signed token, identity claims missing,
            or issued-at later than now + LEEWAY
        InvalidSignatureError: MAC mismatch or algorithm outside the HMAC family
        TokenExpiredError: expiry has passed
    """
    if not secret:
        raise EmptySecretError()

    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=ACCEPTED_ALGORITHMS,
            leeway=LEEWAY,
            options={"require": ["exp", "iat"]},
        )
    # InvalidSignatureError subclasses DecodeError, so it must be caught first
    except jwt.InvalidSignatureError as e:
        raise InvalidSignatureError("token signature does not verify") from e
    except jwt.InvalidAlgorithmError as e:
        raise InvalidSignatureError(f"unexpected signing method: {e}") from e
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError("token has expired") from e
    # Correctly signed, but claims it was minted later than now + LEEWAY
    except jwt.ImmatureSignatureError as e:
        raise MalformedTokenError("token issued-at is in the future") from e
    except jwt.InvalidTokenError as e:
        raise MalformedTokenError(f"malformed token: {e}") from e

    account_id = payload.get("account_id")
    lender_id = payload.get("lender_id")
    token_type = payload.get("token_type")
    if not _is_id(account_id) or not _is_id(lender_id) or token_type not in TOKEN_DURATIONS:
        raise MalformedTokenError("token is missing identity claims")

    return TokenClaims(
        account_id=account_id,
        lender_id=lender_id,
        token_type=token_type,
        issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )


def extract_identity(token: str, secret: str) -> Identity:
    """Validate a token and project its identity; same errors as validate_token"""
    return validate_token(token, secret).identity
