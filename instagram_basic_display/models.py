"""
Typed models for Instagram Basic Display payloads using Pydantic.

Responses are normalized into ``FieldRecord`` views by default; these models
are for callers who want validated, typed objects via ``Response.parse``.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ShortLivedToken(BaseModel):
    """Result of exchanging an authorization code."""
    access_token: str
    user_id: int = Field(..., description="App-scoped Instagram user ID")


class LongLivedToken(BaseModel):
    """Long-lived token, from an exchange or a refresh."""
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Seconds until the token expires")


class UserProfile(BaseModel):
    """Instagram user node."""
    id: str
    username: Optional[str] = None
    account_type: Optional[str] = None
    media_count: Optional[int] = None


class MediaChild(BaseModel):
    """Album child node."""
    id: str
    media_type: Optional[str] = None
    media_url: Optional[str] = None
    thumbnail_url: Optional[str] = None


class Children(BaseModel):
    data: list[MediaChild] = Field(default_factory=list)


class MediaItem(BaseModel):
    """Instagram media node (image, video or carousel album)."""
    id: str
    caption: Optional[str] = None
    media_type: Optional[str] = Field(None, description="IMAGE, VIDEO or CAROUSEL_ALBUM")
    media_url: Optional[str] = None
    permalink: Optional[str] = None
    thumbnail_url: Optional[str] = None
    timestamp: Optional[str] = None
    username: Optional[str] = None
    children: Optional[Children] = None


class Cursors(BaseModel):
    before: Optional[str] = None
    after: Optional[str] = None


class Paging(BaseModel):
    """Pagination block attached to edge responses."""
    cursors: Optional[Cursors] = None
    next: Optional[str] = None
    previous: Optional[str] = None


class MediaFeed(BaseModel):
    """One page of a user's media edge."""
    data: list[MediaItem] = Field(default_factory=list)
    paging: Optional[Paging] = None


class ApiError(BaseModel):
    """Normalized error returned by the API."""
    message: Optional[str] = None
    type: Optional[str] = None
    code: Optional[int] = None
    error_subcode: Optional[int] = None
    fbtrace_id: Optional[str] = None
