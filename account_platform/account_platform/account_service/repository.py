"""
Datastore access for users and posts.
"""
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .errors import DuplicateEmailError
from .models import Post, User


class AccountStore:
    """
    Users and posts persisted through one SQLAlchemy session.

    Each write commits on its own. A failed write is rolled back before the
    error propagates, so the session stays usable for the caller.
    """

    def __init__(self, db: Session):
        self.db = db

    def create_user(self, email: str, password_hash: str) -> User:
        user = User(email=email, password=password_hash)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            # users.email carries the only unique constraint
            self.db.rollback()
            raise DuplicateEmailError() from exc
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user)
        return user

    def find_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def find_user_by_id(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def create_post(self, user_id: int, text: str) -> Post:
        post = Post(user_id=user_id, text=text)
        self.db.add(post)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(post)
        return post

    def list_posts_for_user(self, user_id: int) -> List[Post]:
        return self.db.query(Post).filter(Post.user_id == user_id).order_by(Post.id.asc()).all()
