"""Login, refresh and registration flows over the credential store and token engine"""

from lms_gateway.domain.credentials import CredentialStore
from lms_gateway.domain.exceptions import AccountLockedError, WrongTokenTypeError
from lms_gateway.domain.models import BusinessProfile, Identity, TokenPair
from lms_gateway.domain.passwords import hash_password, validate_password_strength, verify_password
from lms_gateway.domain.tokens import ACCESS_TOKEN, REFRESH_TOKEN, issue_token_pair, validate_token


class AuthService:
    """Composes credential lookup, password checks and token issuance"""

    def __init__(self, store: CredentialStore, secret: str):
        self.store = store
        self.secret = secret

    def register(self, profile: BusinessProfile, username: str, password: str, interest_rate: float) -> int:
        """
        Onboard a lender with its first account.

        Hashing happens before the store transaction opens.

        Raises:
            WeakPasswordError: password fails a strength rule
            Store errors (e.g. IntegrityError on duplicate username/email) unchanged
        """
        validate_password_strength(password)
        password_hash = hash_password(password)
        return self.store.create_lender_and_account(profile, username, password_hash, interest_rate)

    def login(self, username: str, password: str) -> TokenPair:
        """
        Exchange credentials for a token pair.

        Raises:
            AccountNotFoundError: unknown username
            AccountLockedError: account is locked
            PasswordMismatchError: wrong password
        """
        account = self.store.get_account_by_username(username)
        # Lock status is only revealed to callers who know the password
        verify_password(account.password_hash, password)

        if account.is_locked:
            raise AccountLockedError(f"account {account.id} is locked")

        self.store.update_last_login(account.id)
        return issue_token_pair(Identity(account.id, account.lender_id), self.secret)

    def refresh(self, refresh_token: str) -> TokenPair:
        """Mint a new pair from a valid refresh token for a still-usable account"""
        claims = validate_token(refresh_token, self.secret)
        if claims.token_type != REFRESH_TOKEN:
            raise WrongTokenTypeError("a refresh token is required")

        account = self.store.get_account_by_id(claims.account_id)
        if account.is_locked:
            raise AccountLockedError(f"account {account.id} is locked")

        return issue_token_pair(Identity(account.id, account.lender_id), self.secret)

    def authenticate(self, access_token: str) -> Identity:
        """Resolve a bearer access token to the identity it carries"""
        claims = validate_token(access_token, self.secret)
        if claims.token_type != ACCESS_TOKEN:
            raise WrongTokenTypeError("an access token is required")
        return claims.identity
