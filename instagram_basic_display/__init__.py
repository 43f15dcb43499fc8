"""
Instagram Basic Display - client for Instagram's Basic Display API.

This client:
- Exchanges authorization codes for short- and long-lived tokens
- Refreshes long-lived tokens
- Reads profiles, media feeds (with pagination links) and media nodes
- Normalizes the API's success and error bodies into one Response shape
"""

from .client import InstagramBasicDisplay
from .config import Configuration
from .errors import (
    InstagramBasicDisplayError,
    ConfigurationMissing,
    MissingAuthToken,
    FieldNotFound,
    MalformedBody,
)
from .response import Response, FieldRecord

__version__ = "1.0.0"
__all__ = [
    "InstagramBasicDisplay",
    "Configuration",
    "Response",
    "FieldRecord",
    "InstagramBasicDisplayError",
    "ConfigurationMissing",
    "MissingAuthToken",
    "FieldNotFound",
    "MalformedBody",
]
