"""Cursor-based resumable enumeration of CSV rows and batches."""

from __future__ import annotations

import itertools
import logging
import math
from typing import Iterator

from .counting import LineCounter, count_lines_wc
from .exceptions import InvalidArgumentError
from .iteration import SizedIterator
from .models import Batch, Cursor, Row
from .progress import processed_count
from .source import CsvSource

logger = logging.getLogger(__name__)


class CsvEnumerator:
    """Resumable enumeration over a CsvSource.

    A job that processes a CSV file in several invocations stores the
    cursor yielded with each item after processing it, and passes it back
    on the next invocation. The enumerator then skips everything up to and
    including that cursor.

    Example:
        >>> source = CsvSource.open("products.csv", headers=True, converters=["integer"])
        >>> for row, cursor in CsvEnumerator(source).rows(cursor=saved_cursor):
        ...     process(row)
        ...     save_cursor(cursor)

    Example:
        >>> rows = CsvEnumerator(source).batches(cursor=saved_cursor, batch_size=500)
        >>> print(f"{rows.size} batches to go")
        >>> for batch, cursor in rows:
        ...     process_many(batch)
        ...     save_cursor(cursor)
    """

    def __init__(
        self,
        source: CsvSource,
        line_counter: LineCounter | None = count_lines_wc,
    ) -> None:
        """Create an enumerator.

        Args:
            source: An open CsvSource, positioned at the start of the file
            line_counter: Counts lines of the source file for size estimates.
                None disables estimation.

        Raises:
            InvalidArgumentError: If source is not a CsvSource
        """
        if not isinstance(source, CsvSource):
            raise InvalidArgumentError(
                f"CsvEnumerator takes a CsvSource object, got {type(source).__name__}"
            )
        if line_counter is not None and not callable(line_counter):
            raise InvalidArgumentError("line_counter must be callable or None")

        self._source = source
        self._line_counter = line_counter

    @property
    def source(self) -> CsvSource:
        """The wrapped source."""
        return self._source

    def rows(self, cursor: Cursor = None) -> SizedIterator[tuple[Row, int]]:
        """Enumerate rows after the cursor.

        Args:
            cursor: Index of the last processed row, or None to start at 0

        Returns:
            Iterator of (row, index) pairs; ``size`` is the estimated
            number of remaining rows
        """
        skipped = processed_count(cursor)
        logger.debug("Enumerating rows of %r from index %d", self._source, skipped)

        indexed = ((row, index) for index, row in enumerate(self._source))
        remaining = itertools.islice(indexed, skipped, None)

        def estimate() -> int | None:
            total = self.estimated_total_rows()
            if total is None:
                return None
            return max(total - skipped, 0)

        return SizedIterator(remaining, estimate)

    def batches(
        self, cursor: Cursor = None, batch_size: int = 100
    ) -> SizedIterator[tuple[Batch, int]]:
        """Enumerate fixed-size batches of rows after the cursor.

        The last batch may be shorter than batch_size.

        Args:
            cursor: Index of the last processed batch, or None to start at 0
            batch_size: Rows per batch

        Returns:
            Iterator of (batch, batch_index) pairs; ``size`` is the
            estimated number of remaining batches

        Raises:
            InvalidArgumentError: If batch_size is not a positive integer
        """
        if isinstance(batch_size, bool) or not isinstance(batch_size, int) or batch_size < 1:
            raise InvalidArgumentError(
                f"batch_size must be a positive integer, got {batch_size!r}"
            )
        skipped = processed_count(cursor)
        logger.debug(
            "Enumerating batches of %d rows of %r from batch %d",
            batch_size,
            self._source,
            skipped,
        )

        rows = itertools.islice(self._source, skipped * batch_size, None)
        remaining = zip(_each_slice(rows, batch_size), itertools.count(skipped))

        def estimate() -> int | None:
            total = self.estimated_total_rows()
            if total is None:
                return None
            return max(math.ceil(total / batch_size) - skipped, 0)

        return SizedIterator(remaining, estimate)

    def estimated_total_rows(self) -> int | None:
        """Estimate the number of data rows in the source file.

        Counts lines of the file, less one for a header row. Returns None
        if the source has no path, estimation is disabled, or counting
        failed.
        """
        path = self._source.path
        if path is None or self._line_counter is None:
            return None

        count = self._line_counter(path)
        if count is None:
            return None
        if self._source.has_header_row:
            count -= 1
        logger.debug("Estimated %d data rows in %s", max(count, 0), path)
        return max(count, 0)


def _each_slice(rows: Iterator[Row], size: int) -> Iterator[Batch]:
    while True:
        batch = list(itertools.islice(rows, size))
        if not batch:
            return
        yield batch
