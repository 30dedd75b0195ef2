"""UI state shared by the dashboard and history view models."""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Success(Generic[T]):
    data: T


@dataclass(frozen=True)
class Error:
    message: str  # short, user-facing


UiState: TypeAlias = Loading | Success | Error


def state_kind(state: UiState) -> str:
    if isinstance(state, Success):
        return "success"
    if isinstance(state, Error):
        return "error"
    return "loading"
