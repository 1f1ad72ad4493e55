"""Tests for progress reporting and SizedIterator."""

import operator

import pytest

from csv_resumable import InvalidArgumentError, SizedIterator, format_progress, percent_complete
from csv_resumable.progress import processed_count


class TestProcessedCount:
    """Tests for processed_count."""

    def test_counts(self):
        """None and -1 mean nothing processed; otherwise cursor + 1."""
        assert processed_count(None) == 0
        assert processed_count(-1) == 0
        assert processed_count(4) == 5

    @pytest.mark.parametrize("cursor", [-2, 1.5, "3", True])
    def test_malformed_cursor(self, cursor):
        """Cursors other than None or an int >= -1 are rejected."""
        with pytest.raises(InvalidArgumentError):
            processed_count(cursor)


class TestPercentComplete:
    """Tests for percent_complete."""

    def test_no_cursor(self):
        """Nothing processed is 0%."""
        assert percent_complete(None, 10) == 0.0

    def test_partial(self):
        """Processing through index 4 of 10 is 50%."""
        assert percent_complete(4, 10) == 50.0

    def test_complete(self):
        """Processing the last index is 100%."""
        assert percent_complete(9, 10) == 100.0

    def test_clamped(self):
        """A cursor beyond the estimate never exceeds 100%."""
        assert percent_complete(20, 10) == 100.0

    def test_unknown_total(self):
        """Unknown totals are indeterminate."""
        assert percent_complete(4, None) is None

    def test_empty_total(self):
        """An empty file counts as complete."""
        assert percent_complete(None, 0) == 100.0


class TestFormatProgress:
    """Tests for format_progress."""

    def test_known_total(self):
        """Known totals show a percentage."""
        assert format_progress(4, 10) == "5/10 (50.0%)"

    def test_unknown_total(self):
        """Unknown totals are shown as indeterminate."""
        assert format_progress(4, None) == "5/? (indeterminate)"

    def test_thousands_separator(self):
        """Large counts are grouped."""
        assert format_progress(999, 2000) == "1,000/2,000 (50.0%)"


class TestSizedIterator:
    """Tests for SizedIterator."""

    def test_iterates(self):
        """Items pass through unchanged."""
        assert list(SizedIterator(iter([1, 2, 3]), lambda: 3)) == [1, 2, 3]

    def test_estimate_is_deferred_and_cached(self):
        """The estimate runs on first access only."""
        calls = []

        def estimate():
            calls.append(1)
            return 5

        it = SizedIterator(iter(range(5)), estimate)
        assert calls == []
        assert it.size == 5
        assert it.size == 5
        assert calls == [1]

    def test_length_hint(self):
        """length_hint reports the estimate minus items pulled."""
        it = SizedIterator(iter(range(3)), lambda: 3)
        next(it)
        assert it.consumed == 1
        assert operator.length_hint(it) == 2
        list(it)
        assert operator.length_hint(it) == 0

    def test_length_hint_unknown(self):
        """length_hint falls back to the default when the size is unknown."""
        it = SizedIterator(iter(range(3)), lambda: None)
        assert operator.length_hint(it, 7) == 7

    def test_iter_returns_self(self):
        """The iterator is its own iterator."""
        it = SizedIterator(iter([]), lambda: 0)
        assert iter(it) is it
