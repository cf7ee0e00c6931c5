"""Closed error taxonomy for API calls.

Every failure that crosses the client boundary is exactly one of the
variants below. The set is closed: each ``ErrorKind`` maps to a single
class, and defining a second class for an existing kind is a ``TypeError``.

Variants carry their own data:

* ``ApiCommonError(code, message)`` and ``ApiServerError(code, message)``:
  the only variants exposing ``code``.
* ``ApiNetworkError(status_code, message)``: HTTP status kept for the title.
* ``ApiInternalError(message)``: client-side failure description.
* ``ApiCancelledError``, ``ApiUnexpectedError``, ``ApiUnauthorizedError``,
  ``ApiBadRequestError``: no data, localized default message.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar

from restbase.config.messages import Messages, default_messages


class ErrorKind(str, Enum):
    """Discriminator of the error variants."""

    COMMON = "common"
    SERVER = "server"
    NETWORK = "network"
    INTERNAL = "internal"
    CANCELLED = "cancelled"
    UNEXPECTED = "unexpected"
    UNAUTHORIZED = "unauthorized"
    BAD_REQUEST = "bad_request"


class ApiError(Exception):
    """Base of the closed error set. Never instantiated directly."""

    kind: ClassVar[ErrorKind]
    message_key: ClassVar[str] = "error_unexpected"

    _variants: ClassVar[dict[ErrorKind, type[ApiError]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        kind = cls.__dict__.get("kind")
        if kind is None:
            raise TypeError(f"{cls.__name__} must declare an error kind")
        if kind in ApiError._variants:
            existing = ApiError._variants[kind].__name__
            raise TypeError(f"Error kind '{kind.value}' is already defined by {existing}")
        ApiError._variants[kind] = cls

    def __init__(self, message: str | None = None) -> None:
        self._message = message
        super().__init__(self.message)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def code(self) -> int | None:
        """Numeric code; only Common and Server errors carry one."""
        return None

    @property
    def message(self) -> str:
        return self.localized_message(default_messages())

    def localized_message(self, messages: Messages) -> str:
        """Carried message, or the localized default text for this variant."""
        if self._message is not None:
            return self._message
        return getattr(messages, self.message_key)

    def title(self, messages: Messages | None = None, production: bool = False) -> str:
        """Dialog title; non-production builds append the code for diagnostics."""
        messages = messages or default_messages()
        if not production and self.code is not None:
            return f"{messages.error}: {self.code}"
        return messages.error

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def _fields(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind.value, **self._fields()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ApiError:
        """Rebuild an error serialized with ``to_dict``."""
        try:
            kind = ErrorKind(data.get("type"))
        except ValueError:
            raise ValueError(f"Unknown API error type: {data.get('type')!r}") from None
        fields = {key: value for key, value in data.items() if key != "type"}
        return ApiError._variants[kind](**fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ApiError):
            return NotImplemented
        return type(self) is type(other) and self._fields() == other._fields()

    def __hash__(self) -> int:
        return hash((self.kind, tuple(sorted(self._fields().items()))))

    def __repr__(self) -> str:
        args = ", ".join(f"{key}={value!r}" for key, value in self._fields().items())
        return f"{type(self).__name__}({args})"


class ApiCommonError(ApiError):
    """Failure reported inside a response's result block."""

    kind = ErrorKind.COMMON
    __match_args__ = ("code", "message")

    def __init__(self, code: int | None, message: str) -> None:
        self._code = code
        super().__init__(message)

    @property
    def code(self) -> int | None:
        return self._code

    def title(self, messages: Messages | None = None, production: bool = False) -> str:
        return (messages or default_messages()).error

    def _fields(self) -> dict[str, Any]:
        return {"code": self._code, "message": self._message}


class ApiServerError(ApiError):
    """4xx response (other than 401)."""

    kind = ErrorKind.SERVER
    __match_args__ = ("code", "message")

    def __init__(self, code: int | None, message: str) -> None:
        self._code = code
        super().__init__(message)

    @property
    def code(self) -> int | None:
        return self._code

    def _fields(self) -> dict[str, Any]:
        return {"code": self._code, "message": self._message}


class ApiNetworkError(ApiError):
    """5xx/other non-2xx response, or a transport failure with no response."""

    kind = ErrorKind.NETWORK
    __match_args__ = ("status_code", "message")

    def __init__(self, status_code: int | None, message: str) -> None:
        self.status_code = status_code
        super().__init__(message)

    def title(self, messages: Messages | None = None, production: bool = False) -> str:
        messages = messages or default_messages()
        if self.status_code == 500:
            return messages.error_internal_server
        return messages.error

    def _fields(self) -> dict[str, Any]:
        return {"status_code": self.status_code, "message": self._message}


class ApiInternalError(ApiError):
    """Client-side failure: decoding errors, unexpected exceptions."""

    kind = ErrorKind.INTERNAL
    __match_args__ = ("message",)

    def __init__(self, message: str) -> None:
        super().__init__(message)

    def _fields(self) -> dict[str, Any]:
        return {"message": self._message}


class ApiCancelledError(ApiError):
    """The request was cancelled through its cancel token."""

    kind = ErrorKind.CANCELLED

    def __init__(self) -> None:
        super().__init__()


class ApiUnexpectedError(ApiError):
    kind = ErrorKind.UNEXPECTED

    def __init__(self) -> None:
        super().__init__()


class ApiUnauthorizedError(ApiError):
    """HTTP 401; the body is never consulted."""

    kind = ErrorKind.UNAUTHORIZED
    message_key = "error_unauthorized"

    def __init__(self) -> None:
        super().__init__()


class ApiBadRequestError(ApiError):
    kind = ErrorKind.BAD_REQUEST
    message_key = "error_bad_request"

    def __init__(self) -> None:
        super().__init__()
