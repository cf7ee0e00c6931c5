"""Helpers that fold async API calls into ``Result`` values.

``try_get`` is the boundary: whatever the wrapped call raises (other than
task cancellation) comes back as a ``Failure`` holding exactly one
``ApiError`` variant.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from restbase.config.messages import Messages, default_messages
from restbase.errors.api_error import ApiError
from restbase.errors.classifier import ErrorClassifier
from restbase.models.envelopes import ListEnvelope, PageEnvelope, SingleEnvelope
from restbase.result import Failure, Result, Success

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")
W = TypeVar("W")

_DEFAULT_CLASSIFIER = ErrorClassifier()


async def get_or_raise(call: Awaitable[T], classifier: ErrorClassifier | None = None) -> T:
    """Await ``call``; re-raise ``ApiError`` and classify any other exception."""
    try:
        return await call
    except ApiError:
        raise
    except Exception as exc:
        raise (classifier or _DEFAULT_CLASSIFIER).classify(exc) from exc


async def try_get(
    call: Awaitable[T],
    transform: Callable[[T], R | Awaitable[R]] | None = None,
    classifier: ErrorClassifier | None = None,
) -> Result[R]:
    """Await ``call``, apply ``transform`` and wrap the outcome.

    Exactly one of ``Success``/``Failure`` is returned; exceptions raised by
    the call or the transform never escape.
    """
    classifier = classifier or _DEFAULT_CLASSIFIER
    try:
        value = await get_or_raise(call, classifier)
        transformed = transform(value) if transform is not None else value
        if inspect.isawaitable(transformed):
            transformed = await transformed
        return Success(transformed)
    except ApiError as exc:
        return Failure(exc)
    except Exception as exc:
        logger.warning("Transform failed: %s", exc)
        return Failure(classifier.classify(exc))


async def fold_result(
    result: Result[T] | Awaitable[Result[T]],
    on_success: Callable[[T], W],
    on_failure: Callable[[ApiError], W],
) -> W:
    """Fold a result, or an awaitable producing one, into a single value."""
    if inspect.isawaitable(result):
        try:
            result = await result
        except ApiError as exc:
            return on_failure(exc)
    return result.fold(on_success, on_failure)


def unwrap_payload(result: Result[Any]) -> Result[Any]:
    """Turn ``Result[envelope]`` into ``Result[payload]``.

    Single envelopes with a failed result status become a ``Failure``
    holding the status as an ``ApiCommonError``.
    """
    if isinstance(result, Failure):
        return result

    envelope = result.value
    if isinstance(envelope, SingleEnvelope):
        try:
            return Success(envelope.unwrap())
        except ApiError as exc:
            return Failure(exc)
    if isinstance(envelope, (ListEnvelope, PageEnvelope)):
        return Success(envelope.data)
    raise TypeError(f"Cannot unwrap payload from {type(envelope).__name__}")


def error_message(source: Result[Any] | ApiError, messages: Messages | None = None) -> str | None:
    """Localized message for a failure, or None for a success."""
    error = source if isinstance(source, ApiError) else source.error_or_none()
    if error is None:
        return None
    return error.localized_message(messages or default_messages())


def error_title(
    source: Result[Any] | ApiError,
    messages: Messages | None = None,
    production: bool = False,
) -> str | None:
    """Localized dialog title for a failure, or None for a success."""
    error = source if isinstance(source, ApiError) else source.error_or_none()
    if error is None:
        return None
    return error.title(messages, production=production)
