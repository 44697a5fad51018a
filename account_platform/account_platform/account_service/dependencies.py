"""
FastAPI dependencies shared by the routers.

``get_current_identity`` is the gate in front of every protected route: it
resolves the bearer token to an ``Identity`` or rejects the request before
the route handler runs.
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from .accounts import AccountService
from .auth import PasswordHasher, TokenIssuer
from .db import get_db
from .errors import MissingTokenError, TokenError
from .repository import AccountStore
from .utils.event_logger import log_auth_event


@dataclass(frozen=True)
class Identity:
    """The authenticated caller of a request."""
    user_id: int


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_account_store(db: Session = Depends(get_db)) -> AccountStore:
    return AccountStore(db)


def get_account_service(
    store: AccountStore = Depends(get_account_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> AccountService:
    return AccountService(store, hasher, issuer)


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Return the token of a ``Bearer <token>`` header value.

    Raises ``MissingTokenError`` unless the value is the Bearer scheme
    followed by a non-empty token.
    """
    if not authorization:
        raise MissingTokenError()
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise MissingTokenError()
    return token


def get_current_identity(
    request: Request,
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> Identity:
    try:
        token = extract_bearer_token(authorization)
        claims = issuer.verify(token)
    except TokenError as exc:
        log_auth_event("token_rejected", None, request, {"reason": exc.__class__.__name__})
        raise
    return Identity(user_id=claims.user_id)
