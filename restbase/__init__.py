"""Async REST client layer: typed errors, response envelopes, interceptors and result folding."""

from restbase.cancellation import CancelToken, RequestCancelledError
from restbase.errors import ApiError, ErrorClassifier, ErrorKind
from restbase.folding import error_message, error_title, fold_result, get_or_raise, try_get, unwrap_payload
from restbase.http import ApiClient
from restbase.result import Failure, Result, Success
from restbase.wiring import build_api_client

__all__ = [
    "ApiClient",
    "ApiError",
    "CancelToken",
    "ErrorClassifier",
    "ErrorKind",
    "Failure",
    "RequestCancelledError",
    "Result",
    "Success",
    "build_api_client",
    "error_message",
    "error_title",
    "fold_result",
    "get_or_raise",
    "try_get",
    "unwrap_payload",
]
