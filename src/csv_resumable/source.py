"""Forward-only row source over delimited text."""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import IO, Any, Callable, Sequence, Union

from .exceptions import InvalidArgumentError
from .models import Row

logger = logging.getLogger(__name__)

Converter = Callable[[str], Any]


def _numeric(value: str) -> Union[int, float]:
    try:
        return int(value)
    except ValueError:
        return float(value)


CONVERTERS: dict[str, Converter] = {
    "integer": int,
    "float": float,
    "numeric": _numeric,
}


def _resolve_converters(
    converters: Sequence[Union[str, Converter]],
) -> tuple[Converter, ...]:
    resolved: list[Converter] = []
    for converter in converters:
        if isinstance(converter, str):
            try:
                resolved.append(CONVERTERS[converter])
            except KeyError:
                raise InvalidArgumentError(
                    f"Unknown converter {converter!r}. "
                    f"Expected one of: {', '.join(sorted(CONVERTERS))}"
                ) from None
        elif callable(converter):
            resolved.append(converter)
        else:
            raise InvalidArgumentError(
                f"Converter must be a name or a callable, got {type(converter).__name__}"
            )
    return tuple(resolved)


class CsvSource:
    """An open, configured handle that yields Rows in file order.

    The source is forward-only and single-consumer: each Row is read from
    the underlying stream when it is pulled, and rows already pulled cannot
    be read again. Reopen the file to start over.

    Example:
        >>> with CsvSource.open("products.csv", headers=True) as source:
        ...     for row in source:
        ...         print(row["sku"])
    """

    def __init__(
        self,
        stream: IO[str],
        *,
        path: Union[str, Path, None] = None,
        headers: Union[bool, Sequence[str]] = False,
        delimiter: str = ",",
        quotechar: str = '"',
        strict: bool = False,
        converters: Sequence[Union[str, Converter]] = (),
        owns_stream: bool = False,
    ) -> None:
        """Wrap an already-open text stream.

        Args:
            stream: Text stream positioned at the start of the data
            path: File the stream reads from, if any. Used for size estimates
            headers: True if the first line is a header row, a sequence of
                names to use as headers when the file has none, or False
            delimiter: Field separator
            quotechar: Quote character
            strict: Raise csv.Error on malformed quoting instead of guessing
            converters: Names ("integer", "float", "numeric") or callables
                tried in order on every field
            owns_stream: Close the stream when the source is closed
        """
        self._stream = stream
        self._path = Path(path) if path is not None else None
        self._owns_stream = owns_stream
        self._converters = _resolve_converters(converters)

        if isinstance(headers, bool):
            self._has_header_row = headers
            self._headers: tuple[str, ...] | None = None
        elif isinstance(headers, str):
            raise InvalidArgumentError(
                "headers must be a bool or a sequence of names, not a string"
            )
        else:
            self._has_header_row = False
            self._headers = tuple(headers)
        self._header_pending = self._has_header_row

        self._reader = csv.reader(
            stream, delimiter=delimiter, quotechar=quotechar, strict=strict
        )

    @classmethod
    def open(
        cls,
        path: Union[str, Path],
        *,
        encoding: str = "utf-8",
        **options: Any,
    ) -> "CsvSource":
        """Open a file and wrap it. The returned source closes the file.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        file_path = Path(path)
        stream = open(file_path, "r", encoding=encoding, newline="")
        try:
            return cls(stream, path=file_path, owns_stream=True, **options)
        except Exception:
            stream.close()
            raise

    @classmethod
    def from_string(cls, text: str, **options: Any) -> "CsvSource":
        """Wrap in-memory text. The source has no path."""
        return cls(io.StringIO(text, newline=""), **options)

    @property
    def path(self) -> Path | None:
        """Path of the underlying file, or None for in-memory streams."""
        return self._path

    @property
    def headers(self) -> tuple[str, ...] | None:
        """Header names, once known.

        For headers=True this is None until the header row has been read.
        """
        return self._headers

    @property
    def has_header_row(self) -> bool:
        """True if the first line of the file is a header row."""
        return self._has_header_row

    @property
    def line_num(self) -> int:
        """Number of physical lines read from the stream so far."""
        return self._reader.line_num

    def __iter__(self) -> "CsvSource":
        return self

    def __next__(self) -> Row:
        if self._header_pending:
            self._header_pending = False
            self._headers = tuple(next(self._reader))
            logger.debug("Read header row: %s", self._headers)

        fields = next(self._reader)
        if self._converters:
            fields = [self._convert(value) for value in fields]
        return Row(tuple(fields), self._headers)

    def _convert(self, value: str) -> Any:
        for converter in self._converters:
            try:
                return converter(value)
            except (ValueError, TypeError):
                continue
        return value

    def close(self) -> None:
        """Close the underlying stream if this source opened it."""
        if self._owns_stream:
            self._stream.close()

    def __enter__(self) -> "CsvSource":
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit context manager and close the stream."""
        self.close()

    def __repr__(self) -> str:
        return f"CsvSource({self._path!r}, header_row={self._has_header_row})"
