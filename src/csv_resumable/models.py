"""Data models for csv-resumable."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Union

from .exceptions import InvalidArgumentError

# Zero-based index of the last processed row or batch; None if nothing
# has been processed yet.
Cursor = Optional[int]


@dataclass(frozen=True, slots=True)
class Row:
    """One parsed record from a CsvSource.

    Attributes:
        fields: Field values in file order (converted where a converter applied)
        headers: Header names when the source has headers, otherwise None
    """

    fields: tuple[Any, ...]
    headers: tuple[str, ...] | None = None

    def __getitem__(self, key: Union[int, str]) -> Any:
        """Get a field by position (row[0]) or by header name (row["sku"])."""
        if isinstance(key, str):
            if self.headers is None or key not in self.headers:
                raise KeyError(key)
            position = self.headers.index(key)
            if position >= len(self.fields):
                raise KeyError(key)
            return self.fields[position]
        return self.fields[key]

    def get(self, key: Union[int, str], default: Any = None) -> Any:
        """Like __getitem__, but return default for a missing field."""
        try:
            return self[key]
        except (KeyError, IndexError):
            return default

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.fields)

    def to_dict(self) -> dict[str, Any]:
        """Map header names to field values.

        Missing trailing fields map to None; extra fields are dropped.

        Raises:
            InvalidArgumentError: If the row has no headers
        """
        if self.headers is None:
            raise InvalidArgumentError("Row.to_dict() requires a source with headers")
        result: dict[str, Any] = {}
        for position, name in enumerate(self.headers):
            if name in result:
                continue
            result[name] = self.fields[position] if position < len(self.fields) else None
        return result


Batch = List[Row]
