"""Generic response envelope models and decoders.

Single-item responses are wrapped as::

    { data: T, result: { code, message, message_content?: { en?, tc? }, action? } }

List responses as ``{ ut, data: [T] }`` and paged responses as
``{ data: [T], page, total }``. Envelopes are immutable; they are built once
per response and folded into domain state.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from restbase.errors.api_error import ApiCommonError
from restbase.locales import is_alternate_script

T = TypeVar("T")

SUCCESS_CODES = frozenset({0, 200})


class EnvelopeDecodeError(ValueError):
    """Raised when a response body does not fit the expected envelope."""


class MessageContent(BaseModel):
    """Per-language variants of a result message."""

    model_config = ConfigDict(frozen=True)

    en: str | None = None
    tc: str | None = None


class ResultStatus(BaseModel):
    """The ``result`` block of an envelope."""

    model_config = ConfigDict(frozen=True)

    code: int
    message: str
    message_content: MessageContent | None = None
    action: str | None = None

    @property
    def is_success(self) -> bool:
        return self.code in SUCCESS_CODES

    def localized_message(self, language_code: str | None) -> str:
        """Traditional Chinese locales prefer ``tc``, all others ``en``; both fall back to ``message``."""
        if self.message_content is None:
            return self.message
        if is_alternate_script(language_code):
            return self.message_content.tc or self.message
        return self.message_content.en or self.message

    def to_error(self) -> ApiCommonError:
        return ApiCommonError(self.code, self.message)


class SingleEnvelope(BaseModel, Generic[T]):
    """Envelope for a single payload. The payload exists only on success."""

    model_config = ConfigDict(frozen=True)

    data: T | None = None
    result: ResultStatus

    @model_validator(mode="before")
    @classmethod
    def _drop_payload_on_failure(cls, values: Any) -> Any:
        if isinstance(values, dict):
            result = values.get("result")
            try:
                status = result if isinstance(result, ResultStatus) else ResultStatus.model_validate(result)
            except ValidationError:
                # Left for field validation to report.
                return values
            if not status.is_success and values.get("data") is not None:
                values = {**values, "data": None}
        return values

    @model_validator(mode="after")
    def _require_payload_on_success(self) -> SingleEnvelope[T]:
        if self.result.is_success and self.data is None:
            raise ValueError("successful result must carry a data payload")
        return self

    def unwrap(self) -> T:
        """Return the payload, or raise the result status as an ``ApiCommonError``."""
        if not self.result.is_success:
            raise self.result.to_error()
        return self.data  # type: ignore[return-value]

    def localized_message(self, language_code: str | None) -> str:
        return self.result.localized_message(language_code)


class NoDataEnvelope(BaseModel):
    """Envelope for status-only responses."""

    model_config = ConfigDict(frozen=True)

    result: ResultStatus

    def raise_for_result(self) -> None:
        if not self.result.is_success:
            raise self.result.to_error()

    def localized_message(self, language_code: str | None) -> str:
        return self.result.localized_message(language_code)


class ListEnvelope(BaseModel, Generic[T]):
    """Envelope for an ordered list plus its update timestamp ``ut``."""

    model_config = ConfigDict(frozen=True)

    ut: str = ""
    data: list[T] = Field(default_factory=list)

    @field_validator("data", mode="before")
    @classmethod
    def _null_data_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("ut", mode="before")
    @classmethod
    def _null_ut_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def iso_timestamp(self) -> str:
        """``ut`` in ISO 8601 form (``2024-01-02 03:04:05`` -> ``2024-01-02T03:04:05``)."""
        return self.ut.replace(" ", "T", 1) if self.ut else ""

    @property
    def updated_at(self) -> datetime | None:
        if not self.ut:
            return None
        try:
            return datetime.fromisoformat(self.iso_timestamp)
        except ValueError:
            return None


class PageEnvelope(BaseModel, Generic[T]):
    """Envelope for one page of results."""

    model_config = ConfigDict(frozen=True)

    data: list[T] = Field(default_factory=list)
    page: int = Field(ge=0)
    total: int = Field(ge=0)

    @field_validator("data", mode="before")
    @classmethod
    def _null_data_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @model_validator(mode="after")
    def _total_covers_page(self) -> PageEnvelope[T]:
        if self.total < len(self.data):
            raise ValueError(f"total ({self.total}) is smaller than the page size ({len(self.data)})")
        return self


# ---------------------------------------------------------------------------
# Decoders
# ---------------------------------------------------------------------------


def decode_single(raw: Any, decode: Callable[[Any], T]) -> SingleEnvelope[T]:
    """Decode ``raw`` JSON into a ``SingleEnvelope`` using ``decode`` for the payload."""
    envelope = _validate(SingleEnvelope[Any], raw)
    if envelope.data is None:
        return SingleEnvelope[Any](data=None, result=envelope.result)
    return SingleEnvelope[Any](data=_decode_item(decode, envelope.data), result=envelope.result)


def decode_no_data(raw: Any) -> NoDataEnvelope:
    return _validate(NoDataEnvelope, raw)


def decode_list(raw: Any, decode: Callable[[Any], T]) -> ListEnvelope[T]:
    envelope = _validate(ListEnvelope[Any], raw)
    return ListEnvelope[Any](ut=envelope.ut, data=[_decode_item(decode, item) for item in envelope.data])


def decode_page(raw: Any, decode: Callable[[Any], T]) -> PageEnvelope[T]:
    envelope = _validate(PageEnvelope[Any], raw)
    return PageEnvelope[Any](
        data=[_decode_item(decode, item) for item in envelope.data],
        page=envelope.page,
        total=envelope.total,
    )


def _validate(model: Any, raw: Any) -> Any:
    if not isinstance(raw, dict):
        raise EnvelopeDecodeError(f"Expected a JSON object, got {type(raw).__name__}")
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        raise EnvelopeDecodeError(f"Malformed response envelope: {exc}") from exc


def _decode_item(decode: Callable[[Any], T], item: Any) -> T:
    try:
        return decode(item)
    except Exception as exc:
        raise EnvelopeDecodeError(f"Malformed response payload: {exc}") from exc
