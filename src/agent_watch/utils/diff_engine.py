"""Line diff computation for Agent Watch.

This module turns two in-memory line sequences into a tagged edit script
(an LCS backtrack) and groups that script into context-padded hunks suitable
for rendering tool-call edits. It is sized for short snippets: time and memory
are O(len(old) * len(new)).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence


class DiffOp(Enum):
    """Enumeration of diff line operations."""

    EQUAL = "equal"
    DELETE = "delete"
    INSERT = "insert"


@dataclass(frozen=True)
class DiffLine:
    """A single line of an edit script.

    ``old_line_number`` is set for EQUAL and DELETE lines, ``new_line_number``
    for EQUAL and INSERT lines; both are 1-based.
    """

    op: DiffOp
    content: str
    old_line_number: Optional[int] = None
    new_line_number: Optional[int] = None

    def __post_init__(self):
        has_old = self.op in (DiffOp.EQUAL, DiffOp.DELETE)
        has_new = self.op in (DiffOp.EQUAL, DiffOp.INSERT)
        if (self.old_line_number is not None) != has_old:
            raise ValueError(f"{self.op.value} line must {'' if has_old else 'not '}carry an old line number")
        if (self.new_line_number is not None) != has_new:
            raise ValueError(f"{self.op.value} line must {'' if has_new else 'not '}carry a new line number")

    @property
    def is_change(self) -> bool:
        return self.op is not DiffOp.EQUAL

    @property
    def line_number(self) -> int:
        """Number shown next to the line: old side when present, else new side."""
        if self.old_line_number is not None:
            return self.old_line_number
        return self.new_line_number  # type: ignore[return-value]


@dataclass(frozen=True)
class Hunk:
    """A contiguous run of diff lines holding at least one change."""

    lines: tuple[DiffLine, ...]

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self):
        return iter(self.lines)

    @property
    def changes(self) -> int:
        return sum(1 for d in self.lines if d.is_change)


def compute_diff(old_lines: Sequence[str], new_lines: Sequence[str]) -> list[DiffLine]:
    """Compute a minimal line edit script from ``old_lines`` to ``new_lines``.

    Lines are compared by exact string equality. When backtracking through the
    LCS table hits a tie (``table[i][j-1] >= table[i-1][j]``) the insert is
    taken first; since the script is built back to front, deletions of a
    replaced block therefore come out before its insertions. That ordering is
    part of the contract: hunk placement and highlighting depend on it.
    """
    m, n = len(old_lines), len(new_lines)

    table = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        old = old_lines[i - 1]
        row, prev_row = table[i], table[i - 1]
        for j in range(1, n + 1):
            if old == new_lines[j - 1]:
                row[j] = prev_row[j - 1] + 1
            else:
                row[j] = max(prev_row[j], row[j - 1])

    reversed_script: list[DiffLine] = []
    i, j = m, n
    while i > 0 or j > 0:
        if i > 0 and j > 0 and old_lines[i - 1] == new_lines[j - 1]:
            reversed_script.append(DiffLine(DiffOp.EQUAL, old_lines[i - 1], i, j))
            i -= 1
            j -= 1
        elif j > 0 and (i == 0 or table[i][j - 1] >= table[i - 1][j]):
            reversed_script.append(DiffLine(DiffOp.INSERT, new_lines[j - 1], None, j))
            j -= 1
        else:
            reversed_script.append(DiffLine(DiffOp.DELETE, old_lines[i - 1], i, None))
            i -= 1

    reversed_script.reverse()
    return reversed_script


def extract_hunks(diff: Sequence[DiffLine], context_size: int, gap_threshold: int) -> list[Hunk]:
    """Group an edit script into hunks padded with ``context_size`` unchanged lines.

    A change joins the open hunk unless the unchanged lines between the end of
    the previous change's context window and the start of this change's
    context window exceed ``gap_threshold``.
    The closing hunk keeps up to ``context_size`` trailing lines but never runs
    into the next hunk's leading context.
    """
    context_size = max(0, context_size)
    gap_threshold = max(0, gap_threshold)

    change_indices = [idx for idx, line in enumerate(diff) if line.is_change]
    if not change_indices:
        return []

    hunks: list[Hunk] = []
    hunk_start = max(0, change_indices[0] - context_size)

    for prev_idx, idx in zip(change_indices, change_indices[1:]):
        context_start = max(0, idx - context_size)
        gap = context_start - (prev_idx + context_size) - 1
        if gap > gap_threshold:
            prev_end = min(prev_idx + context_size + 1, len(diff), context_start)
            hunks.append(Hunk(tuple(diff[hunk_start:prev_end])))
            hunk_start = context_start

    hunk_end = min(change_indices[-1] + context_size + 1, len(diff))
    hunks.append(Hunk(tuple(diff[hunk_start:hunk_end])))
    return hunks


def diff_stats(diff: Sequence[DiffLine]) -> tuple[int, int]:
    """Return ``(deleted, inserted)`` line counts."""
    deleted = sum(1 for d in diff if d.op is DiffOp.DELETE)
    inserted = sum(1 for d in diff if d.op is DiffOp.INSERT)
    return deleted, inserted
