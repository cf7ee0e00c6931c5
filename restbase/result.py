"""Success/failure result values typed over the ``ApiError`` set."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from restbase.errors.api_error import ApiError

T = TypeVar("T")
R = TypeVar("R")
W = TypeVar("W")


@dataclass(frozen=True)
class Success(Generic[T]):
    """A successful outcome carrying ``value``."""

    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    def fold(self, on_success: Callable[[T], W], on_failure: Callable[[ApiError], W]) -> W:
        return on_success(self.value)

    def map(self, transform: Callable[[T], R]) -> Success[R]:
        return Success(transform(self.value))

    def get_or_none(self) -> T | None:
        return self.value

    def error_or_none(self) -> ApiError | None:
        return None

    def get_or_raise(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    """A failed outcome carrying one ``ApiError`` variant."""

    error: ApiError

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    def fold(self, on_success: Callable[[object], W], on_failure: Callable[[ApiError], W]) -> W:
        return on_failure(self.error)

    def map(self, transform: Callable[[object], object]) -> Failure:
        return self

    def get_or_none(self) -> None:
        return None

    def error_or_none(self) -> ApiError:
        return self.error

    def get_or_raise(self) -> None:
        raise self.error


Result = Union[Success[T], Failure]
