"""Error taxonomy and classifier."""

from restbase.errors.api_error import (
    ApiBadRequestError,
    ApiCancelledError,
    ApiCommonError,
    ApiError,
    ApiInternalError,
    ApiNetworkError,
    ApiServerError,
    ApiUnauthorizedError,
    ApiUnexpectedError,
    ErrorKind,
)
from restbase.errors.classifier import ErrorClassifier

__all__ = [
    "ApiBadRequestError",
    "ApiCancelledError",
    "ApiCommonError",
    "ApiError",
    "ApiInternalError",
    "ApiNetworkError",
    "ApiServerError",
    "ApiUnauthorizedError",
    "ApiUnexpectedError",
    "ErrorClassifier",
    "ErrorKind",
]
