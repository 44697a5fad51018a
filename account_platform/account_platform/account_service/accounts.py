"""
Registration and login orchestration.
"""
import logging
from dataclasses import dataclass

from .auth import PasswordHasher, TokenIssuer
from .errors import InvalidCredentialsError, MissingFieldError
from .repository import AccountStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssuedToken:
    user_id: int
    token: str


def _require(**fields) -> None:
    for name, value in fields.items():
        if not value:
            raise MissingFieldError(f"Missing required field: {name}")


class AccountService:
    def __init__(self, store: AccountStore, hasher: PasswordHasher, issuer: TokenIssuer):
        self.store = store
        self.hasher = hasher
        self.issuer = issuer

    def register(self, email: str, password: str) -> IssuedToken:
        """
        Create a user and return a token for it.

        Raises:
            MissingFieldError: email or password is empty
            DuplicateEmailError: the email is already registered
        """
        _require(email=email, password=password)

        hashed_pw = self.hasher.hash(password)
        user = self.store.create_user(email, hashed_pw)
        logger.info("Registered user_id=%s", user.id)
        return IssuedToken(user_id=user.id, token=self.issuer.issue_for(user.id))

    def login(self, email: str, password: str) -> IssuedToken:
        """
        Check credentials and return a fresh token.

        An unknown email and a wrong password raise the same
        ``InvalidCredentialsError``.
        """
        _require(email=email, password=password)

        user = self.store.find_user_by_email(email)
        if user is None:
            self.hasher.dummy_verify()
            raise InvalidCredentialsError()
        if not self.hasher.verify(password, user.password):
            raise InvalidCredentialsError()

        return IssuedToken(user_id=user.id, token=self.issuer.issue_for(user.id))
