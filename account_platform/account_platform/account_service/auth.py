from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib import exc as passlib_exc
from passlib.context import CryptContext

from .errors import CredentialFormatError, InvalidTokenError, MissingTokenError

DEFAULT_ALGORITHM = "HS256"
DEFAULT_HASH_ROUNDS = 29000
# Signed 64-bit range of the users.id column
MAX_USER_ID = 2 ** 63 - 1


class PasswordHasher:
    """
    Salted one-way password hashing.

    Hashes are passlib modular-crypt strings
    (``$pbkdf2-sha256$<rounds>$<salt>$<digest>``), so verification reads the
    salt and cost from the stored value itself.
    """

    # Use pbkdf2_sha256 to avoid external bcrypt backend issues in some environments
    scheme = "pbkdf2_sha256"

    def __init__(self, rounds: int = DEFAULT_HASH_ROUNDS):
        self.rounds = rounds
        self._context = CryptContext(
            schemes=[self.scheme],
            deprecated="auto",
            pbkdf2_sha256__default_rounds=rounds,
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, stored: str) -> bool:
        """
        Constant-time check of ``password`` against ``stored``.

        A mismatch is a plain ``False``, and so is a password passlib refuses
        to hash (over its size limit). A stored value that is not a
        recognisable hash raises ``CredentialFormatError``.
        """
        try:
            return self._context.verify(password, stored)
        except passlib_exc.PasswordValueError:
            return False
        except (ValueError, TypeError) as exc:
            raise CredentialFormatError() from exc

    def dummy_verify(self) -> None:
        # Spend the same time as a real verify when there is no user to check against
        self._context.dummy_verify()


@dataclass(frozen=True)
class TokenClaims:
    user_id: int


class TokenIssuer:
    """
    Issues and verifies HMAC-signed JWTs carrying the user id in ``sub``.

    Tokens only expire when ``expire_minutes`` is set.
    """

    def __init__(self, secret: str, algorithm: str = DEFAULT_ALGORITHM,
                 expire_minutes: Optional[int] = None):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, claims: TokenClaims) -> str:
        now = datetime.now(timezone.utc)
        payload = {"sub": str(claims.user_id), "iat": now}
        if self.expire_minutes:
            payload["exp"] = now + timedelta(minutes=self.expire_minutes)
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def issue_for(self, user_id: int) -> str:
        return self.issue(TokenClaims(user_id=user_id))

    def verify(self, token: Optional[str]) -> TokenClaims:
        """
        Check signature and structure of ``token`` and return its claims.

        Raises:
            MissingTokenError: no token was supplied
            InvalidTokenError: the token fails decoding or its subject is
                not a valid user id
        """
        if not token:
            raise MissingTokenError()
        try:
            data = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "iat"]},
            )
            user_id = int(data["sub"])
            if not 0 < user_id <= MAX_USER_ID:
                raise ValueError("subject out of range")
            return TokenClaims(user_id=user_id)
        except (jwt.InvalidTokenError, ValueError, TypeError) as exc:
            raise InvalidTokenError() from exc
