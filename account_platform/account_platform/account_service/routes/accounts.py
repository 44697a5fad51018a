"""
Registration and login endpoints.
"""
import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.exc import SQLAlchemyError

from ..accounts import AccountService
from ..dependencies import get_account_service
from ..errors import CredentialFormatError, InternalError, InvalidCredentialsError, ServiceError
from ..schemas import Credentials, TokenResponse
from ..utils.event_logger import log_auth_event

router = APIRouter(tags=["accounts"])
logger = logging.getLogger(__name__)


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: Credentials,
    request: Request,
    service: AccountService = Depends(get_account_service),
):
    try:
        issued = service.register(payload.email, payload.password)
    except ServiceError:
        raise
    except SQLAlchemyError as e:
        # Exception text may carry bound parameters, so only the type is logged
        logger.error("Registration failed: %s", e.__class__.__name__)
        raise InternalError("Failed to register user") from e
    except Exception as e:
        logger.exception("Unexpected registration error")
        raise InternalError("Failed to register user") from e

    log_auth_event("register_success", issued.user_id, request)
    return TokenResponse(token=issued.token)


@router.post("/login", response_model=TokenResponse)
def login(
    payload: Credentials,
    request: Request,
    service: AccountService = Depends(get_account_service),
):
    try:
        issued = service.login(payload.email, payload.password)
    except InvalidCredentialsError:
        log_auth_event("login_failure", None, request)
        raise
    except CredentialFormatError:
        logger.error("Stored password hash is malformed")
        raise
    except ServiceError:
        raise
    except SQLAlchemyError as e:
        logger.error("Login failed: %s", e.__class__.__name__)
        raise InternalError("Failed to log in") from e
    except Exception as e:
        logger.exception("Unexpected login error")
        raise InternalError("Failed to log in") from e

    log_auth_event("login_success", issued.user_id, request)
    return TokenResponse(token=issued.token)
