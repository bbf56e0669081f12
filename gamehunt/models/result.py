"""Success/failure result container returned by repositories."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a single-shot operation.

    Holds either a value (success) or the exception that was raised
    (failure), never both.
    """
    value: T | None = None
    error: Exception | None = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> "Result[T]":
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None

    def get_or_none(self) -> T | None:
        return self.value if self.is_success else None

    def exception_or_none(self) -> Exception | None:
        return self.error

    def fold(
        self,
        on_success: Callable[[T], R],
        on_failure: Callable[[Exception], R],
    ) -> R:
        """Apply one of two functions depending on the outcome.

        Args:
            on_success: Called with the value on success
            on_failure: Called with the exception on failure

        Returns:
            Whatever the selected function returns
        """
        if self.error is not None:
            return on_failure(self.error)
        return on_success(self.value)  # type: ignore[arg-type]
