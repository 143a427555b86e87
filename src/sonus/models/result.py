"""Success/failure results for operations that must not raise."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Literal, Never, TypeVar, Union

from .errors import SonusError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying ``value``."""

    value: T

    @property
    def ok(self) -> Literal[True]:
        """Always ``True``."""
        return True

    def unwrap(self) -> T:
        """Return the carried value."""
        return self.value

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Err:
    """Failed outcome carrying the error that explains it."""

    error: SonusError

    @property
    def ok(self) -> Literal[False]:
        """Always ``False``."""
        return False

    @property
    def reason(self) -> str:
        """Human readable failure reason."""
        return str(self.error)

    def unwrap(self) -> Never:
        """Raise the carried error."""
        raise self.error

    def __bool__(self) -> bool:
        return False


Result = Union[Ok[T], Err]

__all__ = ["Err", "Ok", "Result"]
