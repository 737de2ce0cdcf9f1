from typing import Literal

from pydantic import BaseModel, Field


class SiteConfig(BaseModel):
    title: str = "StackScroll"
    base_url: str = "http://localhost:8550"
    share_path_prefix: str = "/blog"

class StoreConfig(BaseModel):
    backend: Literal["supabase", "memory"] = "memory"
    url: str | None = None
    anon_key: str | None = None
    table: str = "posts"
    timeout_seconds: float = Field(default=10.0, gt=0)
    # memory backend only
    auto_confirm: bool = True

class ListingConfig(BaseModel):
    preview_chars: int = Field(default=200, ge=1)

class AuthConfig(BaseModel):
    min_password_length: int = Field(default=6, ge=1)

class SessionConfig(BaseModel):
    persist: bool = True
    path: str = ".stackscroll/session.json"

class AppConfig(BaseModel):
    site: SiteConfig = Field(default_factory=SiteConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    listing: ListingConfig = Field(default_factory=ListingConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
