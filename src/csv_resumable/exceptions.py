"""Custom exceptions for csv-resumable."""


class InvalidArgumentError(ValueError):
    """Raised when an argument is of the wrong kind or out of range.

    This covers:
    - Constructing an enumerator with something that is not a CsvSource
    - A non-positive batch size
    - A cursor that is neither None nor an integer >= -1
    - An unknown converter or line counter name

    Errors raised while reading or parsing the file (``csv.Error``,
    ``OSError``) are never wrapped in this class.
    """
