"""
Configuration settings for the Instagram Basic Display client.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from .errors import ConfigurationMissing


# Environment variables holding the app credentials
ENV_CLIENT_ID = "INSTAGRAM_CLIENT_ID"
ENV_CLIENT_SECRET = "INSTAGRAM_CLIENT_SECRET"
ENV_REDIRECT_URI = "INSTAGRAM_REDIRECT_URI"

# Instagram endpoints
INSTAGRAM_API_URL = "https://api.instagram.com"
GRAPH_API_URL = "https://graph.instagram.com"
OAUTH_ACCESS_TOKEN_URL = f"{INSTAGRAM_API_URL}/oauth/access_token"
LONG_LIVED_TOKEN_URL = f"{GRAPH_API_URL}/access_token"
REFRESH_TOKEN_URL = f"{GRAPH_API_URL}/refresh_access_token"

# OAuth grant types
GRANT_AUTHORIZATION_CODE = "authorization_code"
GRANT_EXCHANGE_TOKEN = "ig_exchange_token"
GRANT_REFRESH_TOKEN = "ig_refresh_token"

# Default field selections
DEFAULT_PROFILE_FIELDS = ("id", "username")
DEFAULT_MEDIA_FIELDS = ("id", "media_url")

DEFAULT_USER_AGENT = "instagram-basic-display-python/1.0.0"

# Query parameters that must never reach the logs
SECRET_PARAMS = ("access_token", "client_secret", "code")


def _from_env(name: str, env_var: str) -> str:
    value = os.environ.get(env_var)
    if not value:
        raise ConfigurationMissing(name, env_var)
    return value


@dataclass
class Configuration:
    """
    Credentials and transport settings used to talk to the Instagram API.

    ``client_id``, ``client_secret`` and ``redirect_uri`` fall back to the
    INSTAGRAM_CLIENT_ID / INSTAGRAM_CLIENT_SECRET / INSTAGRAM_REDIRECT_URI
    environment variables. They are resolved once, at construction.

    Instances are plain mutable objects and are not safe to mutate from
    several threads at once. Share one per thread, or guard updates to
    ``auth_token`` with a lock.
    """

    # App credentials
    client_id: Optional[str] = None
    client_secret: Optional[str] = field(default=None, repr=False)
    redirect_uri: Optional[str] = None

    # Token used for profile/media requests
    auth_token: Optional[str] = field(default=None, repr=False)

    # Request settings
    request_timeout: float = 30.0
    proxy_url: Optional[str] = None
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self):
        self.client_id = self.client_id or _from_env("client_id", ENV_CLIENT_ID)
        self.client_secret = self.client_secret or _from_env("client_secret", ENV_CLIENT_SECRET)
        self.redirect_uri = self.redirect_uri or _from_env("redirect_uri", ENV_REDIRECT_URI)

    def set_auth_token(self, token: Optional[str]) -> None:
        """Replace the stored auth token for all subsequent requests."""
        self.auth_token = token
