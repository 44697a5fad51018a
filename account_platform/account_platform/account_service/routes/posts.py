"""
Post endpoints, always scoped to the authenticated caller.
"""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError

from ..dependencies import Identity, get_account_store, get_current_identity
from ..errors import InternalError, MissingFieldError
from ..repository import AccountStore
from ..schemas import PostCreate, PostResponse

router = APIRouter(tags=["posts"])
logger = logging.getLogger(__name__)


@router.post("/post/create", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    payload: PostCreate,
    identity: Identity = Depends(get_current_identity),
    store: AccountStore = Depends(get_account_store),
):
    if not payload.text:
        raise MissingFieldError("Missing required field: text")

    # Owner comes from the token, never from the body
    try:
        post = store.create_post(identity.user_id, payload.text)
    except SQLAlchemyError as e:
        logger.error("Post creation failed for user_id=%s: %s", identity.user_id, e.__class__.__name__)
        raise InternalError("Failed to create post") from e
    except Exception as e:
        logger.exception("Unexpected error creating post for user_id=%s", identity.user_id)
        raise InternalError("Failed to create post") from e
    return post


@router.get("/posts", response_model=list[PostResponse])
def list_posts(
    identity: Identity = Depends(get_current_identity),
    store: AccountStore = Depends(get_account_store),
):
    try:
        return store.list_posts_for_user(identity.user_id)
    except SQLAlchemyError as e:
        logger.error("Post listing failed for user_id=%s: %s", identity.user_id, e.__class__.__name__)
        raise InternalError("Failed to list posts") from e
    except Exception as e:
        logger.exception("Unexpected error listing posts for user_id=%s", identity.user_id)
        raise InternalError("Failed to list posts") from e
