"""
Profile and media reads for the Instagram Basic Display API.
"""

import logging
from typing import Any, Iterable, Optional, Union

from .config import (
    Configuration,
    GRAPH_API_URL,
    DEFAULT_PROFILE_FIELDS,
    DEFAULT_MEDIA_FIELDS,
)
from .errors import MissingAuthToken
from .response import Response
from .transport import HttpTransport

logger = logging.getLogger(__name__)

Fields = Union[str, Iterable[str]]


def join_fields(fields: Fields) -> str:
    """Render a field selection as the comma separated list the API expects."""
    if isinstance(fields, str):
        return fields
    return ",".join(str(f) for f in fields)


class Profile:
    """
    Reads a user's profile and media.

    Every call needs an access token: either ``auth_token`` passed to the
    call, which applies to that request only, or the token stored on the
    configuration.
    """

    def __init__(self, configuration: Configuration, transport: HttpTransport):
        self.configuration = configuration
        self.transport = transport

    def get_profile(
        self,
        user_id: Optional[str] = None,
        fields: Fields = DEFAULT_PROFILE_FIELDS,
        auth_token: Optional[str] = None,
        **params: Any,
    ) -> Response:
        """
        Fetch a user's profile.

        Args:
            user_id: User to query; defaults to the token's owner ("me")
            fields: Fields to retrieve, see
                https://developers.facebook.com/docs/instagram-basic-display-api/reference/user#fields
            auth_token: Token for this request only
            **params: Extra query parameters

        Raises:
            MissingAuthToken: If no token is available
        """
        token = self._resolve_token(auth_token)
        return self._request(self._user_url(user_id), token, fields, params)

    def get_media_feed(
        self,
        user_id: Optional[str] = None,
        fields: Fields = DEFAULT_MEDIA_FIELDS,
        paginated_url: Optional[str] = None,
        auth_token: Optional[str] = None,
        **params: Any,
    ) -> Response:
        """
        Fetch one page of a user's media.

        Args:
            user_id: User to query; defaults to "me"
            fields: Media fields to retrieve
            paginated_url: A ``next_page_link``/``previous_page_link`` from an
                earlier response; used as the target instead of the user's edge
            auth_token: Token for this request only
            **params: Extra query parameters, e.g. ``limit=25``

        Raises:
            MissingAuthToken: If no token is available
        """
        token = self._resolve_token(auth_token)
        url = paginated_url or f"{self._user_url(user_id)}/media"
        return self._request(url, token, fields, params)

    def get_media_feed_from_link(
        self,
        page_link: str,
        auth_token: Optional[str] = None,
        **params: Any,
    ) -> Response:
        """
        Follow a pagination link as returned by the API.

        The link's own field selection and cursor are kept; only the token
        and any extra params are overlaid.
        """
        token = self._resolve_token(auth_token)
        return self._request(page_link, token, None, params)

    def get_media_node(
        self,
        media_id: str,
        fields: Fields = DEFAULT_MEDIA_FIELDS,
        auth_token: Optional[str] = None,
        **params: Any,
    ) -> Response:
        """Fetch a single media node (image, video or album)."""
        token = self._resolve_token(auth_token)
        return self._request(f"{GRAPH_API_URL}/{media_id}", token, fields, params)

    def _resolve_token(self, auth_token: Optional[str]) -> str:
        token = auth_token or self.configuration.auth_token
        if not token:
            raise MissingAuthToken(
                "No auth token: pass auth_token or set one on the configuration"
            )
        return token

    @staticmethod
    def _user_url(user_id: Optional[str]) -> str:
        return f"{GRAPH_API_URL}/{user_id or 'me'}"

    def _request(
        self,
        url: str,
        token: str,
        fields: Optional[Fields],
        extra: dict[str, Any],
    ) -> Response:
        params: dict[str, Any] = {}
        if fields is not None:
            params["fields"] = join_fields(fields)
        params["access_token"] = token
        params.update(extra)

        raw = self.transport.get(url, params)
        response = Response(raw)
        if response.error is not None:
            logger.debug(f"API error ({response.status}): {response.error!r}")
        return response
