"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class AccountNotFoundError(DomainException):
    """No account matches the given username or identifier"""

    pass


class LenderNotFoundError(DomainException):
    """Account exists but its owning lender could not be resolved"""

    pass


class PasswordMismatchError(DomainException):
    """Plaintext does not match the stored hash"""

    def __init__(self, message: str = "password does not match"):
        super().__init__(message)


class PasswordTooLongError(DomainException, ValueError):
    """Plaintext exceeds the 72-byte bcrypt input limit"""

    pass


class WeakPasswordError(DomainException):
    """Password fails a strength rule; message names the first rule violated"""

    pass


class AccountLockedError(DomainException):
    """Account is locked and may not obtain tokens"""

    pass


class TokenError(DomainException):
    """Base exception for token issuance and validation"""

    pass


class EmptySecretError(TokenError):
    """Signing secret is empty (caller misconfiguration)"""

    def __init__(self, message: str = "signing secret must not be empty"):
        super().__init__(message)


class MalformedTokenError(TokenError):
    """Token is not a structurally valid signed token"""

    pass


class InvalidSignatureError(TokenError):
    """Signature does not verify or the declared algorithm is not accepted"""

    pass


class TokenExpiredError(TokenError):
    """Token expiry is in the past (beyond leeway)"""

    pass


class WrongTokenTypeError(TokenError):
    """An access token was presented where a refresh token is required, or vice versa"""

    pass
