"""csv-resumable: resume CSV processing jobs from a saved cursor.

Example:
    >>> from csv_resumable import CsvEnumerator, CsvSource
    >>> source = CsvSource.open("products.csv", headers=True, converters=["integer"])
    >>> enumerator = CsvEnumerator(source)
    >>>
    >>> # Resume after row 1000
    >>> rows = enumerator.rows(cursor=1000)
    >>> print(f"About {rows.size} rows left")
    >>> for row, cursor in rows:
    ...     process(row["sku"])
    ...     save_cursor(cursor)
    >>>
    >>> # Batches of 500 rows, resuming after batch 3
    >>> for batch, cursor in enumerator.batches(cursor=3, batch_size=500):
    ...     process_many(batch)
    ...     save_cursor(cursor)
"""

from .counting import LineCounter, count_lines, count_lines_wc
from .enumerator import CsvEnumerator
from .exceptions import InvalidArgumentError
from .iteration import SizedIterator
from .models import Batch, Cursor, Row
from .progress import format_progress, percent_complete
from .source import CsvSource

__version__ = "0.1.0"
__all__ = [
    # Core
    "CsvEnumerator",
    "CsvSource",
    "Row",
    "Batch",
    "Cursor",
    "SizedIterator",
    # Size estimates
    "LineCounter",
    "count_lines",
    "count_lines_wc",
    # Progress
    "percent_complete",
    "format_progress",
    # Exceptions
    "InvalidArgumentError",
]
