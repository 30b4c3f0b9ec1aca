"""Tests for the line diff engine and hunk extraction."""

import pytest

from agent_watch.utils.diff_engine import DiffLine, DiffOp, Hunk, compute_diff, diff_stats, extract_hunks


def ops(diff):
    return [d.op for d in diff]


def script(length, changed):
    """An edit script of ``length`` lines where indices in ``changed`` are deletions."""
    lines = []
    for k in range(length):
        if k in changed:
            lines.append(DiffLine(DiffOp.DELETE, f"line {k}", k + 1, None))
        else:
            lines.append(DiffLine(DiffOp.EQUAL, f"line {k}", k + 1, k + 1))
    return lines


class TestDiffLine:
    """Test the DiffLine data structure."""

    def test_line_number_invariant(self):
        """Test that line numbers must match the operation."""
        DiffLine(DiffOp.EQUAL, "x", 1, 1)
        DiffLine(DiffOp.DELETE, "x", 1, None)
        DiffLine(DiffOp.INSERT, "x", None, 1)
        with pytest.raises(ValueError):
            DiffLine(DiffOp.DELETE, "x", 1, 1)
        with pytest.raises(ValueError):
            DiffLine(DiffOp.INSERT, "x", 1, None)
        with pytest.raises(ValueError):
            DiffLine(DiffOp.EQUAL, "x", None, 1)

    def test_display_line_number(self):
        """Test that the old number is preferred, then the new one."""
        assert DiffLine(DiffOp.EQUAL, "x", 3, 5).line_number == 3
        assert DiffLine(DiffOp.INSERT, "x", None, 7).line_number == 7

    def test_is_change(self):
        """Test change detection."""
        assert not DiffLine(DiffOp.EQUAL, "x", 1, 1).is_change
        assert DiffLine(DiffOp.DELETE, "x", 1, None).is_change


class TestComputeDiff:
    """Test the LCS edit script."""

    def test_identical_sequences(self):
        """Test that self-diff is all EQUAL with matching line numbers."""
        lines = ["a", "b", "c", "b"]
        diff = compute_diff(lines, lines)
        assert ops(diff) == [DiffOp.EQUAL] * 4
        for index, d in enumerate(diff):
            assert d.old_line_number == d.new_line_number == index + 1

    def test_empty_old(self):
        """Test that diff([], B) is all inserts."""
        diff = compute_diff([], ["x", "y"])
        assert ops(diff) == [DiffOp.INSERT, DiffOp.INSERT]
        assert [d.new_line_number for d in diff] == [1, 2]

    def test_empty_new(self):
        """Test that diff(A, []) is all deletes."""
        diff = compute_diff(["x", "y", "z"], [])
        assert ops(diff) == [DiffOp.DELETE] * 3

    def test_both_empty(self):
        """Test the degenerate case."""
        assert compute_diff([], []) == []

    def test_replacement_deletes_before_inserts(self):
        """Test the tie-break: a replaced line is deleted, then inserted."""
        diff = compute_diff(["keep", "old", "tail"], ["keep", "new", "tail"])
        assert ops(diff) == [DiffOp.EQUAL, DiffOp.DELETE, DiffOp.INSERT, DiffOp.EQUAL]
        assert diff[1].content == "old"
        assert diff[1].old_line_number == 2
        assert diff[2].content == "new"
        assert diff[2].new_line_number == 2

    def test_replaced_block_groups_deletions(self):
        """Test that a multi-line replacement emits all deletions first."""
        diff = compute_diff(["a", "b"], ["c", "d"])
        assert ops(diff) == [DiffOp.DELETE, DiffOp.DELETE, DiffOp.INSERT, DiffOp.INSERT]

    def test_minimal_script(self):
        """Test that unchanged lines are kept as EQUAL."""
        old = ["a", "b", "c", "d"]
        new = ["a", "c", "d", "e"]
        diff = compute_diff(old, new)
        assert diff_stats(diff) == (1, 1)
        assert [d.content for d in diff if d.op is DiffOp.EQUAL] == ["a", "c", "d"]

    def test_deterministic(self):
        """Test repeated runs give the same script."""
        old = ["x", "a", "x", "b", "x"]
        new = ["a", "x", "b", "x", "c"]
        assert compute_diff(old, new) == compute_diff(old, new)

    def test_exact_string_equality(self):
        """Test that whitespace differences are changes."""
        diff = compute_diff(["a "], ["a"])
        assert ops(diff) == [DiffOp.DELETE, DiffOp.INSERT]


class TestExtractHunks:
    """Test grouping an edit script into hunks."""

    def test_no_changes(self):
        """Test that an all-EQUAL script has no hunks."""
        lines = ["a", "b", "c"]
        for context, gap in [(0, 0), (3, 3), (10, 50)]:
            assert extract_hunks(compute_diff(lines, lines), context, gap) == []

    def test_far_changes_split(self):
        """Test changes at 3 and 12 of 15 with context 2, gap 3 give two hunks."""
        diff = script(15, {3, 12})
        hunks = extract_hunks(diff, 2, 3)
        assert len(hunks) == 2
        assert [d.old_line_number for d in hunks[0]] == [2, 3, 4, 5, 6]
        assert [d.old_line_number for d in hunks[1]] == [11, 12, 13, 14, 15]

    def test_close_changes_merge(self):
        """Test that nearby changes share one hunk."""
        diff = script(15, {3, 7})
        hunks = extract_hunks(diff, 2, 3)
        assert len(hunks) == 1
        assert hunks[0].changes == 2
        assert hunks[0].lines[0].old_line_number == 2
        assert hunks[0].lines[-1].old_line_number == 10

    @pytest.mark.parametrize("second", [10, 11])
    def test_context_windows_within_gap_merge(self, second):
        """Test changes whose context windows are at most gap_threshold apart share a hunk.

        With context 2 and gap 3, changes up to 3 + 2 * 2 unchanged lines apart merge.
        """
        diff = script(15, {3, second})
        hunks = extract_hunks(diff, 2, 3)
        assert len(hunks) == 1
        numbers = [d.old_line_number for d in hunks[0]]
        assert numbers == list(range(2, second + 4))

    def test_replaced_lines_within_gap_keep_middle_lines(self):
        """Test no unchanged line is dropped between two nearby replacements."""
        old = [f"l{i}" for i in range(1, 16)]
        new = list(old)
        new[3] = "a"
        new[10] = "b"
        hunks = extract_hunks(compute_diff(old, new), 2, 3)
        assert len(hunks) == 1
        contents = [d.content for d in hunks[0]]
        assert contents == ["l2", "l3", "l4", "a", "l5", "l6", "l7", "l8", "l9", "l10", "l11", "b", "l12", "l13"]

    def test_context_clamped_to_bounds(self):
        """Test context windows at the edges of the script."""
        diff = script(4, {0, 3})
        hunks = extract_hunks(diff, 5, 0)
        assert len(hunks) == 1
        assert len(hunks[0]) == 4

    def test_zero_context(self):
        """Test hunks with no context lines."""
        diff = script(10, {2, 8})
        hunks = extract_hunks(diff, 0, 0)
        assert [len(h) for h in hunks] == [1, 1]
        assert all(isinstance(h, Hunk) for h in hunks)

    def test_hunks_do_not_overlap(self):
        """Test that a closed hunk never runs into the next one's context."""
        diff = script(30, {5, 14, 25})
        hunks = extract_hunks(diff, 3, 1)
        numbers = [d.old_line_number for h in hunks for d in h]
        assert numbers == sorted(set(numbers))

    def test_every_hunk_has_a_change(self):
        """Test the hunk invariant."""
        old = [f"l{i}" for i in range(40)]
        new = list(old)
        new[3] = "changed"
        new[20] = "changed"
        new.insert(35, "added")
        for hunk in extract_hunks(compute_diff(old, new), 2, 2):
            assert hunk.changes >= 1

    def test_negative_arguments_clamped(self):
        """Test that negative context and gap act like zero."""
        diff = script(10, {2, 8})
        assert extract_hunks(diff, -1, -1) == extract_hunks(diff, 0, 0)


class TestDiffStats:
    """Test change counting."""

    def test_counts(self):
        """Test deleted and inserted counts."""
        diff = compute_diff(["a", "b", "c"], ["a", "x", "y", "c"])
        assert diff_stats(diff) == (1, 2)
