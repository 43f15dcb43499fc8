"""
Token operations for the Instagram Basic Display API.

Covers the code -> short-lived token -> long-lived token exchanges and
long-lived token refresh. Obtaining the authorization code (the browser
login window) is left to the caller:
https://developers.facebook.com/docs/instagram-basic-display-api/overview#authentication-window
"""

import logging
from typing import Optional

from .config import (
    Configuration,
    OAUTH_ACCESS_TOKEN_URL,
    LONG_LIVED_TOKEN_URL,
    REFRESH_TOKEN_URL,
    GRANT_AUTHORIZATION_CODE,
    GRANT_EXCHANGE_TOKEN,
    GRANT_REFRESH_TOKEN,
)
from .response import Response
from .transport import HttpTransport

logger = logging.getLogger(__name__)


class Auth:
    """Exchanges and refreshes access tokens."""

    def __init__(self, configuration: Configuration, transport: HttpTransport):
        self.configuration = configuration
        self.transport = transport

    def exchange_code_for_short_lived_token(self, access_code: str) -> Response:
        """
        Exchange an authorization code for a short-lived (one hour) token.

        Args:
            access_code: Code returned to the redirect URI by the login window

        Returns:
            Response holding ``access_token`` and ``user_id``, or an error
        """
        logger.info("Exchanging authorization code for short-lived token")
        raw = self.transport.post_form(
            OAUTH_ACCESS_TOKEN_URL,
            {
                "client_id": self.configuration.client_id,
                "client_secret": self.configuration.client_secret,
                "grant_type": GRANT_AUTHORIZATION_CODE,
                "redirect_uri": self.configuration.redirect_uri,
                "code": access_code,
            },
        )
        return Response(raw)

    def exchange_for_long_lived_token(
        self,
        short_lived_token: Optional[str] = None,
        access_code: Optional[str] = None,
    ) -> Response:
        """
        Exchange a short-lived token, or an authorization code, for a
        long-lived (60 day) token.

        With only ``access_code``, the code is first exchanged for a
        short-lived token. If that exchange is not successful its Response is
        returned and no second request is made.

        Raises:
            FieldNotFound: If a successful code exchange carries no
                ``access_token``

        Returns:
            Response holding ``access_token``, ``token_type`` and
            ``expires_in``, or an error
        """
        if short_lived_token is None:
            if access_code is None:
                raise ValueError("Either short_lived_token or access_code is required")

            short_lived = self.exchange_code_for_short_lived_token(access_code)
            if not short_lived.success:
                logger.warning(
                    f"Short-lived token exchange failed "
                    f"({short_lived.status} {short_lived.reason_phrase}), "
                    f"skipping long-lived exchange"
                )
                return short_lived
            short_lived_token = short_lived.payload.access_token

        logger.info("Exchanging short-lived token for long-lived token")
        raw = self.transport.get(
            LONG_LIVED_TOKEN_URL,
            {
                "client_secret": self.configuration.client_secret,
                "grant_type": GRANT_EXCHANGE_TOKEN,
                "access_token": short_lived_token,
            },
        )
        return Response(raw)

    def refresh_long_lived_token(self, token: str) -> Response:
        """Refresh a long-lived token for a new validity period."""
        logger.info("Refreshing long-lived token")
        raw = self.transport.get(
            REFRESH_TOKEN_URL,
            {
                "grant_type": GRANT_REFRESH_TOKEN,
                "access_token": token,
            },
        )
        return Response(raw)
