from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# --- Enums / Literals ---
AuthEvent = Literal["INITIAL_SESSION", "SIGNED_IN", "SIGNED_OUT", "TOKEN_REFRESHED"]
ArticleId = int | str

# --- User & Auth ---

class User(BaseModel):
    id: str
    email: str | None = None

class Session(BaseModel):
    access_token: str
    refresh_token: str | None = None
    expires_at: datetime | None = None
    user: User

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at <= now

# --- Articles ---

class Article(BaseModel):
    """A row of the `posts` table. Wire names are `content` and `user_id`."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: ArticleId
    title: str
    body: str = Field(alias="content")
    author_id: str = Field(alias="user_id")
    created_at: datetime

class NewArticle(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    body: str = Field(alias="content")
    author_id: str = Field(alias="user_id")

    def to_row(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)
