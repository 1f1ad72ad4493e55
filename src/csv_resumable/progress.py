"""Progress reporting from a cursor and an estimated total."""

from __future__ import annotations

from .exceptions import InvalidArgumentError
from .models import Cursor


def processed_count(cursor: Cursor) -> int:
    """Number of items handled once everything through cursor is processed.

    Raises:
        InvalidArgumentError: If cursor is neither None nor an integer >= -1
    """
    if cursor is None:
        return 0
    if isinstance(cursor, bool) or not isinstance(cursor, int) or cursor < -1:
        raise InvalidArgumentError(
            f"cursor must be None or an integer >= -1, got {cursor!r}"
        )
    return cursor + 1


def percent_complete(cursor: Cursor, total: int | None) -> float | None:
    """Progress percentage (0.0 to 100.0) after processing through cursor.

    Args:
        cursor: Index of the last processed row or batch, or None
        total: Estimated total rows or batches, or None if unknown

    Returns:
        The percentage, or None when the total is unknown (indeterminate)
    """
    if total is None:
        return None
    if total <= 0:
        return 100.0
    return min(processed_count(cursor) / total * 100.0, 100.0)


def format_progress(cursor: Cursor, total: int | None) -> str:
    """Human-readable progress, e.g. "5/10 (50.0%)"."""
    done = processed_count(cursor)
    pct = percent_complete(cursor, total)
    if pct is None:
        return f"{done:,}/? (indeterminate)"
    return f"{done:,}/{total:,} ({pct:.1f}%)"
