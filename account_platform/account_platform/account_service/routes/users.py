import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from ..dependencies import Identity, get_account_store, get_current_identity
from ..errors import InternalError, NotFoundError
from ..repository import AccountStore
from ..schemas import UserResponse

router = APIRouter(prefix="/user", tags=["users"])
logger = logging.getLogger(__name__)


@router.get("/me", response_model=UserResponse)
def get_current_user(
    identity: Identity = Depends(get_current_identity),
    store: AccountStore = Depends(get_account_store),
):
    """Profile of the token's owner. 404 if the user record no longer exists."""
    try:
        user = store.find_user_by_id(identity.user_id)
    except SQLAlchemyError as e:
        logger.error("User lookup failed for user_id=%s: %s", identity.user_id, e.__class__.__name__)
        raise InternalError() from e
    except Exception as e:
        logger.exception("Unexpected error looking up user_id=%s", identity.user_id)
        raise InternalError() from e

    if user is None:
        raise NotFoundError("User not found")
    return user
