"""
Response normalization for the Instagram Basic Display API.

The API reports errors in two shapes depending on the endpoint:

    {"error": {"message": "...", "type": "OAuthException", "code": 190}}
    {"error_type": "OAuthException", "code": 400, "error_message": "..."}

``Response.error`` folds both into one record with ``message``, ``type`` and
``code`` fields.
"""

import copy
import logging
from collections.abc import Mapping
from typing import Any, Iterator, Optional, TypeVar

import httpx
from pydantic import BaseModel

from .errors import FieldNotFound, MalformedBody
from .models import ApiError

logger = logging.getLogger(__name__)

ERROR_PREFIX = "error_"

M = TypeVar("M", bound=BaseModel)


class FieldRecord(Mapping):
    """
    Read-only view of a JSON object.

    Fields are reachable as attributes (``record.access_token``) or items
    (``record["access_token"]``); a missing field raises FieldNotFound
    either way. Fields take precedence over methods: for a body with an
    ``items`` key, ``record.items`` is that value. The mapping methods stay
    reachable through the class, e.g. ``FieldRecord.to_dict(record)``.

    Values are deep-copied in, so mutating nested lists or dicts read from a
    record never touches the Response it came from.
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: Optional[Mapping[str, Any]] = None):
        if isinstance(fields, FieldRecord):
            fields = object.__getattribute__(fields, "_fields")
        object.__setattr__(self, "_fields", copy.deepcopy(dict(fields or {})))

    def __getattribute__(self, name: str) -> Any:
        if not name.startswith("_"):
            fields = object.__getattribute__(self, "_fields")
            if name in fields:
                return fields[name]
        return object.__getattribute__(self, name)

    def __getattr__(self, name: str) -> Any:
        if name == "_fields" or (name.startswith("__") and name.endswith("__")):
            raise AttributeError(name)
        return self[name]

    def __getitem__(self, key: str) -> Any:
        try:
            return self._fields[key]
        except KeyError:
            raise FieldNotFound(key, tuple(self._fields)) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, FieldRecord):
            return self._fields == object.__getattribute__(other, "_fields")
        if isinstance(other, Mapping):
            return self._fields == {key: other[key] for key in other}
        return NotImplemented

    __hash__ = None

    def __setattr__(self, name: str, value: Any):
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __delattr__(self, name: str):
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __dir__(self):
        return sorted(set(super().__dir__()) | set(self._fields))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._fields!r})"

    def to_dict(self) -> dict[str, Any]:
        """Return a deep copy of the underlying fields."""
        return copy.deepcopy(self._fields)


class Response:
    """
    Wraps one HTTP reply from the Instagram API.

    ``success`` and ``error`` are independent signals: ``success`` only
    compares the transport reason phrase with "OK", while ``error`` only
    looks at the body. A reply can be "OK" and still carry an error body.
    """

    def __init__(self, raw: httpx.Response):
        """
        Parse the reply body.

        Raises:
            MalformedBody: If the body is not a JSON object
        """
        self._raw = raw
        try:
            body = raw.json()
        except ValueError as e:
            raise MalformedBody(
                f"Invalid JSON in response body (HTTP {raw.status_code}): {e}",
                status_code=raw.status_code,
            ) from e

        if not isinstance(body, dict):
            raise MalformedBody(
                f"Expected a JSON object, got {type(body).__name__} (HTTP {raw.status_code})",
                status_code=raw.status_code,
            )
        self._body = body

    def __repr__(self) -> str:
        return f"<Response [{self.status} {self.reason_phrase}]>"

    @property
    def raw(self) -> httpx.Response:
        return self._raw

    @property
    def status(self) -> str:
        """HTTP status code as a string, e.g. "200"."""
        return str(self._raw.status_code)

    @property
    def status_code(self) -> int:
        return self._raw.status_code

    @property
    def reason_phrase(self) -> str:
        return self._raw.reason_phrase

    @property
    def body(self) -> dict[str, Any]:
        """Parsed JSON body (a deep copy; the response itself is not modified)."""
        return copy.deepcopy(self._body)

    @property
    def success(self) -> bool:
        """True iff the reason phrase is exactly "OK"."""
        return self._raw.reason_phrase == "OK"

    @property
    def payload(self) -> FieldRecord:
        """Top-level fields of the body."""
        return FieldRecord(self._body)

    @property
    def error(self) -> Optional[FieldRecord]:
        """
        Normalized error fields, or None when the body carries no error.

        A nested ``error`` object is returned unchanged. Flat ``error_*``
        keys are returned with the prefix stripped; the OAuth endpoint sends
        its code unprefixed, so a bare ``code`` is kept as well.
        """
        nested = self._body.get("error")
        if nested is not None:
            if isinstance(nested, dict):
                return FieldRecord(nested)
            return FieldRecord({"message": nested})

        if "error_message" not in self._body:
            return None

        fields = {
            key[len(ERROR_PREFIX):]: value
            for key, value in self._body.items()
            if key.startswith(ERROR_PREFIX)
        }
        if "code" not in fields and "code" in self._body:
            fields["code"] = self._body["code"]
        return FieldRecord(fields)

    @property
    def paging(self) -> Optional[dict[str, Any]]:
        """The body's ``paging`` block, if any."""
        paging = self._body.get("paging")
        return copy.deepcopy(paging) if isinstance(paging, dict) else None

    @property
    def next_page_link(self) -> Optional[str]:
        return (self.paging or {}).get("next")

    @property
    def previous_page_link(self) -> Optional[str]:
        return (self.paging or {}).get("previous")

    @property
    def has_next_page(self) -> bool:
        return self.next_page_link is not None

    @property
    def has_previous_page(self) -> bool:
        return self.previous_page_link is not None

    def parse(self, model: type[M]) -> M:
        """
        Validate the body into a Pydantic model.

        Raises:
            pydantic.ValidationError: If the body does not fit the model
        """
        return model.model_validate(self._body)

    def parse_error(self) -> Optional[ApiError]:
        """Typed version of ``error``."""
        error = self.error
        if error is None:
            return None
        return ApiError.model_validate(FieldRecord.to_dict(error))
