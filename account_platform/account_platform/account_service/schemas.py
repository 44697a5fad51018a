from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from typing import Optional

# 1024 characters stay under passlib's 4096-byte password limit even at
# four UTF-8 bytes per character.
MAX_PASSWORD_LENGTH = 1024

# Request fields default to None so an absent field reaches the
# service's own check and is reported as 400 rather than 422.

class Credentials(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = Field(default=None, max_length=MAX_PASSWORD_LENGTH)


class TokenResponse(BaseModel):
    token: str


class UserResponse(BaseModel):
    id: int
    email: str

    model_config = ConfigDict(from_attributes=True)


# Posts
class PostCreate(BaseModel):
    text: Optional[str] = None


class PostResponse(BaseModel):
    id: int
    text: str
    user_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
