"""
Unit tests for the pairwise pass and its compacted skip matrix.
Uses stub comparators so no file I/O is involved.
"""
import pytest

from dedup.core.exceptions import ComparisonCancelledError
from dedup.core.models import Selection
from dedup.core.pairwise import PairwiseDeduplicator, find_duplicate_indexes, skip_offset


class CountingComparator:
    """Stub comparator: answers from a table and records every call."""

    def __init__(self, answers=None, default=Selection.NONE, errors=None):
        self.answers = answers or {}
        self.default = default
        self.errors = errors or {}
        self.calls = []

    def __call__(self, left, right):
        self.calls.append((left, right))
        if (left, right) in self.errors:
            raise self.errors[(left, right)]
        return self.answers.get((left, right), self.default)


class TestSkipOffset:
    """The slot function must be a bijection onto [0, n*(n-1)/2)."""

    @pytest.mark.parametrize("n, expected", [
        (2, [(0, 1, 0)]),
        (3, [(0, 1, 0), (0, 2, 1), (1, 2, 2)]),
        (4, [(0, 1, 0), (0, 2, 1), (0, 3, 2), (1, 2, 3), (1, 3, 4), (2, 3, 5)]),
        (5, [(0, 1, 0), (0, 2, 1), (0, 3, 2), (0, 4, 3), (1, 2, 4),
             (1, 3, 5), (1, 4, 6), (2, 3, 7), (2, 4, 8), (3, 4, 9)]),
        (6, [(0, 1, 0), (0, 2, 1), (1, 2, 5)]),
    ])
    def test_known_offsets(self, n, expected):
        for row, col, slot in expected:
            assert skip_offset(n, row, col) == slot

    @pytest.mark.parametrize("n", range(2, 51))
    def test_bijection(self, n):
        """Every pair lands in range and no two pairs share a slot."""
        size = n * (n - 1) // 2
        slots = [skip_offset(n, row, col) for row in range(n - 1) for col in range(row + 1, n)]
        assert all(0 <= s < size for s in slots)
        assert len(set(slots)) == len(slots) == size

    def test_row_major_order_is_consecutive(self):
        """Visiting pairs in scan order walks the slots 0, 1, 2, ..."""
        n = 7
        slots = [skip_offset(n, row, col) for row in range(n - 1) for col in range(row + 1, n)]
        assert slots == list(range(len(slots)))


class TestPairwiseDeduplicator:
    """Scan order, skip soundness and failure handling."""

    def test_no_duplicates_compares_every_pair_in_order(self):
        items = ["a", "b", "c", "d"]
        compare = CountingComparator()

        assert find_duplicate_indexes(items, compare) == []
        assert compare.calls == [
            ("a", "b"), ("a", "c"), ("a", "d"),
            ("b", "c"), ("b", "d"),
            ("c", "d"),
        ]

    def test_left_skips_rest_of_row(self):
        """Once row is the duplicate, no further pair in its row is compared."""
        items = ["a", "b", "c", "d"]
        compare = CountingComparator(answers={("a", "b"): Selection.LEFT})

        assert find_duplicate_indexes(items, compare) == [0]
        assert ("a", "c") not in compare.calls
        assert ("a", "d") not in compare.calls
        assert compare.calls == [("a", "b"), ("b", "c"), ("b", "d"), ("c", "d")]

    def test_right_skips_row_of_col(self):
        """Once col is the duplicate, its own row is never compared."""
        items = ["a", "b", "c", "d"]
        compare = CountingComparator(answers={("a", "b"): Selection.RIGHT})

        assert find_duplicate_indexes(items, compare) == [1]
        assert ("b", "c") not in compare.calls
        assert ("b", "d") not in compare.calls
        assert compare.calls == [("a", "b"), ("a", "c"), ("a", "d"), ("c", "d")]

    def test_all_identical_with_right_selection(self):
        """Everything after the first item is a duplicate; only row 0 is ever compared."""
        items = [f"f{i}" for i in range(6)]
        compare = CountingComparator(default=Selection.RIGHT)
        dedup = PairwiseDeduplicator()

        assert dedup.find_indexes(items, compare) == [1, 2, 3, 4, 5]
        assert compare.calls == [("f0", f"f{i}") for i in range(1, 6)]
        assert dedup.counters.comparisons == 5
        assert dedup.counters.skipped == 10

    def test_skip_soundness_for_decided_rows(self):
        """No compare call ever has a decided item in the row role afterwards."""
        items = list(range(8))
        answers = {(0, 3): Selection.RIGHT, (1, 2): Selection.LEFT, (4, 6): Selection.RIGHT}
        compare = CountingComparator(answers=answers)

        result = find_duplicate_indexes(items, compare)
        assert result == [1, 3, 6]

        decided_at = {}
        for position, (left, right) in enumerate(compare.calls):
            selection = answers.get((left, right), Selection.NONE)
            if selection is Selection.LEFT:
                decided_at.setdefault(left, position)
            elif selection is Selection.RIGHT:
                decided_at.setdefault(right, position)
        for position, (left, _right) in enumerate(compare.calls):
            if left in decided_at:
                assert position <= decided_at[left]

    def test_result_contains_each_index_once(self):
        """An index decided twice (as col of two rows) appears once."""
        items = ["a", "b", "c"]
        compare = CountingComparator(answers={
            ("a", "c"): Selection.RIGHT,
            ("b", "c"): Selection.RIGHT,
        })
        assert find_duplicate_indexes(items, compare) == [2]

    def test_result_is_in_index_order(self):
        items = ["a", "b", "c", "d"]
        compare = CountingComparator(answers={
            ("a", "d"): Selection.RIGHT,
            ("b", "c"): Selection.LEFT,
        })
        assert find_duplicate_indexes(items, compare) == [1, 3]

    def test_comparison_error_is_skipped_not_fatal(self, caplog):
        """A failing pair is logged and treated as not duplicate; the pass continues."""
        items = ["a", "b", "c"]
        compare = CountingComparator(
            answers={("b", "c"): Selection.RIGHT},
            errors={("a", "b"): PermissionError("denied")},
        )
        dedup = PairwiseDeduplicator()

        assert dedup.find_indexes(items, compare) == [2]
        assert len(compare.calls) == 3
        assert dedup.counters.failures == 1
        assert "Comparison failure" in caplog.text

    def test_cancellation_skips_pair_by_default(self):
        items = ["a", "b", "c"]
        compare = CountingComparator(
            answers={("a", "c"): Selection.RIGHT},
            errors={("a", "b"): ComparisonCancelledError()},
        )
        dedup = PairwiseDeduplicator()

        assert dedup.find_indexes(items, compare) == [2]
        assert dedup.counters.cancelled is True
        assert len(compare.calls) == 3

    def test_cancellation_aborts_pass_when_requested(self):
        """abort_on_cancel stops at the cancelled pair and keeps what was decided before."""
        items = ["a", "b", "c", "d"]
        compare = CountingComparator(
            answers={("a", "b"): Selection.RIGHT},
            errors={("a", "c"): ComparisonCancelledError()},
        )
        dedup = PairwiseDeduplicator(abort_on_cancel=True)

        assert dedup.find_indexes(items, compare) == [1]
        assert compare.calls == [("a", "b"), ("a", "c")]

    def test_invalid_selection_raises(self):
        with pytest.raises(ValueError, match="Invalid selection"):
            find_duplicate_indexes(["a", "b"], lambda left, right: "nonsense")

    @pytest.mark.parametrize("items", [[], ["only"]])
    def test_fewer_than_two_items(self, items):
        compare = CountingComparator()
        assert find_duplicate_indexes(items, compare) == []
        assert compare.calls == []
