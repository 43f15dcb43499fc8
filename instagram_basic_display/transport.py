"""
HTTP transport for the Instagram Basic Display client.

A thin wrapper over httpx.Client: one call, one request. No retries.
"""

import logging
from typing import Any, Mapping, Optional, Union

import httpx

from .config import Configuration, SECRET_PARAMS

logger = logging.getLogger(__name__)

URLTypes = Union[str, httpx.URL]


def merge_query(url: URLTypes, params: Optional[Mapping[str, Any]] = None) -> httpx.URL:
    """
    Merge params into the query string already present on url.

    New params win on key collision; every key appears once. ``None`` values
    are dropped.
    """
    target = httpx.URL(url)
    if params:
        filtered = {k: v for k, v in params.items() if v is not None}
        if filtered:
            target = target.copy_merge_params(filtered)
    return target


def redact_url(url: URLTypes) -> str:
    """Render a URL for logging with credentials masked."""
    target = httpx.URL(url)
    params = target.params
    for key in SECRET_PARAMS:
        if key in params:
            params = params.set(key, "***")
    return str(target.copy_with(params=params))


class HttpTransport:
    """
    Issues form POSTs and GETs against the Instagram API.

    Network errors (``httpx.HTTPError``) are raised to the caller as-is.
    Timeouts and proxies come from the configuration, or from the injected
    ``httpx.Client`` when one is supplied.
    """

    def __init__(
        self,
        config: Optional[Configuration] = None,
        client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the transport.

        Args:
            config: Configuration providing timeout, proxy and user agent
            client: Pre-built httpx client; not closed by this transport
        """
        self.config = config
        self._client = client
        self._owns_client = client is None
        self.request_count = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def client(self) -> httpx.Client:
        """The underlying httpx client, created on first use."""
        if self._client is None:
            timeout = self.config.request_timeout if self.config else 30.0
            proxy = self.config.proxy_url if self.config else None
            user_agent = self.config.user_agent if self.config else None
            headers = {"Accept": "application/json"}
            if user_agent:
                headers["User-Agent"] = user_agent
            self._client = httpx.Client(
                timeout=httpx.Timeout(timeout),
                follow_redirects=True,
                proxy=proxy,
                headers=headers,
            )
            self._owns_client = True
        return self._client

    def close(self):
        """Close the HTTP client if this transport created it."""
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def post_form(self, url: URLTypes, data: Mapping[str, Any]) -> httpx.Response:
        """POST a form-encoded body to url."""
        logger.debug(f"POST {redact_url(url)}")
        response = self.client.post(url, data=dict(data))
        self.request_count += 1
        logger.debug(f"POST {redact_url(url)} -> {response.status_code} {response.reason_phrase}")
        return response

    def get(self, url: URLTypes, params: Optional[Mapping[str, Any]] = None) -> httpx.Response:
        """GET url with params merged into its existing query string."""
        target = merge_query(url, params)
        logger.debug(f"GET {redact_url(target)}")
        response = self.client.get(target)
        self.request_count += 1
        logger.debug(f"GET {redact_url(target)} -> {response.status_code} {response.reason_phrase}")
        return response
