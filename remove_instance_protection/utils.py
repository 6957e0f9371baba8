"""Shared helpers for batching and provider error handling."""
from __future__ import annotations

from typing import Iterable, Sequence, Tuple, Type, TypeVar

from botocore.exceptions import BotoCoreError, ClientError

T = TypeVar("T")

REMOTE_ERRORS: Tuple[Type[Exception], ...] = (ClientError, BotoCoreError)


def batch_iterable(items: Sequence[T], size: int) -> Iterable[Sequence[T]]:
    """Yield contiguous slices of *items* with at most ``size`` members."""

    if size < 1:
        raise ValueError(f"Batch size must be at least 1, got {size}")
    for i in range(0, len(items), size):
        yield items[i : i + size]


def error_code(exc: Exception) -> str:
    """Return the provider error code for *exc*, or an empty string."""

    if isinstance(exc, ClientError):
        return exc.response.get("Error", {}).get("Code", "")
    return ""


__all__ = ["REMOTE_ERRORS", "batch_iterable", "error_code"]
