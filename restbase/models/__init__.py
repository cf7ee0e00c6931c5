"""Public models for the API client layer."""

from restbase.models.auth import LoginRequest, LoginResponse, UserDTO
from restbase.models.envelopes import (
    EnvelopeDecodeError,
    ListEnvelope,
    MessageContent,
    NoDataEnvelope,
    PageEnvelope,
    ResultStatus,
    SingleEnvelope,
    decode_list,
    decode_no_data,
    decode_page,
    decode_single,
)

__all__ = [
    "EnvelopeDecodeError",
    "ListEnvelope",
    "LoginRequest",
    "LoginResponse",
    "MessageContent",
    "NoDataEnvelope",
    "PageEnvelope",
    "ResultStatus",
    "SingleEnvelope",
    "UserDTO",
    "decode_list",
    "decode_no_data",
    "decode_page",
    "decode_single",
]
