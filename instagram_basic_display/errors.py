"""
Exceptions raised by the Instagram Basic Display client.

Remote API failures are not exceptions: they come back as data on
``Response.error``. Network failures are raised by httpx and are not wrapped.
"""


class InstagramBasicDisplayError(Exception):
    """Base class for errors raised by this package."""
    pass


class ConfigurationMissing(InstagramBasicDisplayError):
    """Raised when a required configuration value cannot be resolved."""

    def __init__(self, name: str, env_var: str):
        super().__init__(
            f"Missing configuration value '{name}': pass it explicitly or set {env_var}"
        )
        self.name = name
        self.env_var = env_var


class MissingAuthToken(InstagramBasicDisplayError):
    """Raised before a profile/media request when no auth token is available."""
    pass


class FieldNotFound(InstagramBasicDisplayError, AttributeError, KeyError):
    """
    Raised when a field is absent from a parsed response body.

    Both an AttributeError and a KeyError, so attribute and item access on a
    record fail the same way and ``hasattr``/``in``/``.get`` keep working.
    """

    def __init__(self, field: str, available: tuple[str, ...] = ()):
        message = f"Field '{field}' not present in response"
        if available:
            message += f" (available: {', '.join(available)})"
        super().__init__(message)
        self.field = field
        self.available = available

    def __str__(self) -> str:
        return self.args[0] if self.args else ""


class MalformedBody(InstagramBasicDisplayError, ValueError):
    """Raised when a response body is not a JSON object."""

    def __init__(self, message: str, status_code: int = 0):
        super().__init__(message)
        self.status_code = status_code
