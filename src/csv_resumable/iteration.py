"""Lazy iterators that carry a size estimate."""

from __future__ import annotations

from typing import Callable, Generic, Iterator, Optional, TypeVar

T = TypeVar("T")

_UNSET = object()


class SizedIterator(Generic[T]):
    """Non-restartable iterator with a deferred size estimate.

    The estimate is computed on first access to ``size`` (or on a call to
    ``operator.length_hint``) and cached, so an expensive estimator runs at
    most once per iterator.

    Example:
        >>> import operator
        >>> it = SizedIterator(iter("abc"), lambda: 3)
        >>> it.size
        3
        >>> next(it)
        'a'
        >>> operator.length_hint(it)
        2
    """

    def __init__(
        self,
        iterator: Iterator[T],
        estimate: Callable[[], Optional[int]],
    ) -> None:
        self._iterator = iterator
        self._estimate = estimate
        self._size: object = _UNSET
        self._consumed = 0

    def __iter__(self) -> "SizedIterator[T]":
        return self

    def __next__(self) -> T:
        item = next(self._iterator)
        self._consumed += 1
        return item

    @property
    def size(self) -> int | None:
        """Estimated number of items when the iterator was created.

        None if the estimate is unavailable.
        """
        if self._size is _UNSET:
            self._size = self._estimate()
        return self._size  # type: ignore[return-value]

    @property
    def consumed(self) -> int:
        """Number of items pulled so far."""
        return self._consumed

    def __length_hint__(self) -> int:
        size = self.size
        if size is None:
            return NotImplemented
        return max(size - self._consumed, 0)

    def __repr__(self) -> str:
        size = "?" if self._size is _UNSET else self._size
        return f"SizedIterator(size={size}, consumed={self._consumed})"
