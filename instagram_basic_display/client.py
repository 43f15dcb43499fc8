"""
Instagram Basic Display client.

Bundles token and profile operations behind one object.
"""

import dataclasses
import logging
from typing import Any, Optional

import httpx

from .auth import Auth
from .config import Configuration, DEFAULT_MEDIA_FIELDS, DEFAULT_PROFILE_FIELDS
from .profile import Fields, Profile
from .response import Response
from .transport import HttpTransport

logger = logging.getLogger(__name__)


class InstagramBasicDisplay:
    """
    Client for the Instagram Basic Display API.

    Example:
        with InstagramBasicDisplay() as ig:
            token = ig.exchange_for_long_lived_token(access_code=code)
            ig.configure(auth_token=token.payload.access_token)
            feed = ig.get_media_feed(limit=10)
            while feed.has_next_page:
                feed = ig.get_media_feed_from_link(feed.next_page_link)

    App credentials come from INSTAGRAM_CLIENT_ID, INSTAGRAM_CLIENT_SECRET and
    INSTAGRAM_REDIRECT_URI unless passed as keyword overrides.
    """

    def __init__(
        self,
        auth_token: Optional[str] = None,
        configuration: Optional[Configuration] = None,
        http_client: Optional[httpx.Client] = None,
        **overrides: Any,
    ):
        """
        Initialize the client.

        Args:
            auth_token: Token used for profile/media requests
            configuration: Ready-made configuration (overrides are then ignored)
            http_client: httpx client to send requests with, e.g. one built
                on ``httpx.MockTransport`` in tests
            **overrides: Configuration fields such as ``client_id``
        """
        if configuration is None:
            configuration = Configuration(auth_token=auth_token, **overrides)
        elif auth_token is not None:
            configuration.set_auth_token(auth_token)

        self.configuration = configuration
        self.transport = HttpTransport(configuration, client=http_client)
        self.auth = Auth(configuration, self.transport)
        self.profile = Profile(configuration, self.transport)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Close the underlying HTTP client."""
        self.transport.close()

    def configure(self, **values: Any) -> None:
        """
        Update configuration fields, e.g. ``configure(auth_token="...")``.

        Raises:
            AttributeError: For names that are not configuration fields
        """
        known = {f.name for f in dataclasses.fields(Configuration)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise AttributeError(f"Unknown configuration field(s): {', '.join(unknown)}")
        for name, value in values.items():
            setattr(self.configuration, name, value)
        if "auth_token" in values:
            logger.info("Auth token updated")

    # Token operations

    def exchange_code_for_short_lived_token(self, access_code: str) -> Response:
        return self.auth.exchange_code_for_short_lived_token(access_code)

    def exchange_for_long_lived_token(
        self,
        short_lived_token: Optional[str] = None,
        access_code: Optional[str] = None,
    ) -> Response:
        return self.auth.exchange_for_long_lived_token(
            short_lived_token=short_lived_token, access_code=access_code
        )

    def refresh_long_lived_token(self, token: str) -> Response:
        return self.auth.refresh_long_lived_token(token)

    # Profile operations

    def get_profile(
        self,
        user_id: Optional[str] = None,
        fields: Fields = DEFAULT_PROFILE_FIELDS,
        auth_token: Optional[str] = None,
        **params: Any,
    ) -> Response:
        return self.profile.get_profile(user_id, fields, auth_token, **params)

    def get_media_feed(
        self,
        user_id: Optional[str] = None,
        fields: Fields = DEFAULT_MEDIA_FIELDS,
        paginated_url: Optional[str] = None,
        auth_token: Optional[str] = None,
        **params: Any,
    ) -> Response:
        return self.profile.get_media_feed(user_id, fields, paginated_url, auth_token, **params)

    def get_media_feed_from_link(
        self,
        page_link: str,
        auth_token: Optional[str] = None,
        **params: Any,
    ) -> Response:
        return self.profile.get_media_feed_from_link(page_link, auth_token, **params)

    def get_media_node(
        self,
        media_id: str,
        fields: Fields = DEFAULT_MEDIA_FIELDS,
        auth_token: Optional[str] = None,
        **params: Any,
    ) -> Response:
        return self.profile.get_media_node(media_id, fields, auth_token, **params)
