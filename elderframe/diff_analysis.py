"""Differences between key-value states and between texts."""

from __future__ import annotations

import math
from bisect import bisect_left
from collections import Counter
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

# An edit-script step: ("equal", i, j), ("delete", i, None) or ("insert", None, j).
_Op = tuple[str, "int | None", "int | None"]


@dataclass(frozen=True)
class Change:
    """One difference between two states: a key that was "added" or "modified"."""

    type: str
    path: Any
    old_value: Any = None
    new_value: Any = None


def compute_changes(source: Mapping[Any, Any], target: Mapping[Any, Any]) -> list[Change]:
    """Keys of *target* that are new or hold a different value than in *source*.

    Keys present only in *source* are not reported.
    """
    changes: list[Change] = []
    for key, new_value in target.items():
        if key in source:
            old_value = source[key]
            if old_value != new_value:
                changes.append(Change("modified", key, old_value, new_value))
        else:
            changes.append(Change("added", key, new_value=new_value))
    return changes


@dataclass(frozen=True)
class DiffLine:
    """A line of a text diff; numbered in the source for deletions and unchanged lines,
    in the target for additions."""

    line_number: int
    content: str
    type: str


@dataclass
class DiffResult:
    """The classified lines of a diff, the line similarity and the edit distance."""

    additions: list[DiffLine] = field(default_factory=list)
    deletions: list[DiffLine] = field(default_factory=list)
    unchanged: list[DiffLine] = field(default_factory=list)
    similarity: float = 0.0
    distance: int = 0


def _shift(ops: list[_Op], a_offset: int, b_offset: int) -> list[_Op]:
    return [
        (op, None if i is None else i + a_offset, None if j is None else j + b_offset)
        for op, i, j in ops
    ]


def _myers_script(a: list[str], b: list[str]) -> list[_Op]:
    """Shortest edit script by the greedy Myers algorithm."""
    m, n = len(a), len(b)
    v: dict[int, int] = {1: 0}
    trace: list[dict[int, int]] = []
    for d in range(m + n + 1):
        trace.append(dict(v))
        for k in range(-d, d + 1, 2):
            if k == -d or (k != d and v.get(k - 1, 0) < v.get(k + 1, 0)):
                x = v.get(k + 1, 0)
            else:
                x = v.get(k - 1, 0) + 1
            y = x - k
            while x < m and y < n and a[x] == b[y]:
                x += 1
                y += 1
            v[k] = x
            if x >= m and y >= n:
                return _backtrack(trace, m, n)
    return []


def _backtrack(trace: list[dict[int, int]], m: int, n: int) -> list[_Op]:
    ops: list[_Op] = []
    x, y = m, n
    for d in range(len(trace) - 1, -1, -1):
        v = trace[d]
        k = x - y
        if k == -d or (k != d and v.get(k - 1, 0) < v.get(k + 1, 0)):
            prev_k = k + 1
        else:
            prev_k = k - 1
        prev_x = v.get(prev_k, 0)
        prev_y = prev_x - prev_k
        while x > prev_x and y > prev_y:
            x -= 1
            y -= 1
            ops.append(("equal", x, y))
        if d > 0:
            if x == prev_x:
                ops.append(("insert", None, prev_y))
            else:
                ops.append(("delete", prev_x, None))
        x, y = prev_x, prev_y
    ops.reverse()
    return ops


def _longest_increasing(pairs: list[tuple[int, int]]) -> list[tuple[int, int]]:
    """Longest run of *pairs* whose second members increase, keeping their order."""
    tails: list[int] = []
    tail_values: list[int] = []
    previous = [-1] * len(pairs)
    for index, (_, j) in enumerate(pairs):
        pos = bisect_left(tail_values, j)
        if pos > 0:
            previous[index] = tails[pos - 1]
        if pos == len(tails):
            tails.append(index)
            tail_values.append(j)
        else:
            tails[pos] = index
            tail_values[pos] = j
    chain: list[tuple[int, int]] = []
    index = tails[-1] if tails else -1
    while index >= 0:
        chain.append(pairs[index])
        index = previous[index]
    chain.reverse()
    return chain


def _patience_script(a: list[str], b: list[str]) -> list[_Op]:
    """Anchor on lines unique to both sides, in order; diff the gaps with Myers."""
    count_a, count_b = Counter(a), Counter(b)
    position_b = {line: j for j, line in enumerate(b) if count_b[line] == 1}
    pairs = [
        (i, position_b[line])
        for i, line in enumerate(a)
        if count_a[line] == 1 and line in position_b
    ]
    anchors = _longest_increasing(pairs)
    if not anchors:
        return _myers_script(a, b)

    ops: list[_Op] = []
    a_start = b_start = 0
    for i, j in anchors:
        ops.extend(_shift(_myers_script(a[a_start:i], b[b_start:j]), a_start, b_start))
        ops.append(("equal", i, j))
        a_start, b_start = i + 1, j + 1
    ops.extend(_shift(_myers_script(a[a_start:], b[b_start:]), a_start, b_start))
    return ops


def _histogram_script(a: list[str], b: list[str]) -> list[_Op]:
    """Split repeatedly on the rarest line common to both ranges; Myers where none is."""
    ops: list[_Op] = []
    work: list[tuple] = [("range", 0, len(a), 0, len(b))]
    while work:
        item = work.pop()
        if item[0] == "equal":
            ops.append(item)
            continue
        _, a_lo, a_hi, b_lo, b_hi = item
        part_a, part_b = a[a_lo:a_hi], b[b_lo:b_hi]
        histogram = Counter(part_a) + Counter(part_b)
        in_b = set(part_b)
        anchor_i = None
        for offset, line in enumerate(part_a):
            if line in in_b and (
                anchor_i is None or histogram[line] < histogram[part_a[anchor_i]]
            ):
                anchor_i = offset
        if anchor_i is None:
            ops.extend(_shift(_myers_script(part_a, part_b), a_lo, b_lo))
            continue
        i = a_lo + anchor_i
        j = b_lo + part_b.index(part_a[anchor_i])
        work.append(("range", i + 1, a_hi, j + 1, b_hi))
        work.append(("equal", i, j))
        work.append(("range", a_lo, i, b_lo, j))
    return ops


_ALGORITHMS: dict[str, Callable[[list[str], list[str]], list[_Op]]] = {
    "myers": _myers_script,
    "patience": _patience_script,
    "histogram": _histogram_script,
}


def _similarity(source: list[str], target: list[str]) -> float:
    """Share of source lines that also occur in the target, over the longer length."""
    if not source and not target:
        return 1.0
    if not source or not target:
        return 0.0
    present = set(target)
    common = sum(1 for line in source if line in present)
    return common / max(len(source), len(target))


@dataclass
class DiffAnalyzer:
    """Line diffs by the "myers", "patience" or "histogram" algorithm.

    Any other algorithm name is treated as "myers".
    """

    algorithm: str = "myers"
    granularity: str = "line"
    context_lines: int = 3
    ignore_spaces: bool = False
    case_sensitive: bool = True

    def _preprocess(self, line: str) -> str:
        if not self.case_sensitive:
            line = line.lower()
        if self.ignore_spaces:
            line = line.replace(" ", "").replace("\t", "")
        return line

    def compute_diff(self, source: str, target: str) -> DiffResult:
        """Classify the lines of two texts as added, deleted or unchanged."""
        raw_source = source.split("\n")
        raw_target = target.split("\n")
        a = [self._preprocess(line) for line in raw_source]
        b = [self._preprocess(line) for line in raw_target]

        script = _ALGORITHMS.get(self.algorithm, _myers_script)(a, b)
        result = DiffResult(similarity=_similarity(a, b))
        for op, i, j in script:
            if op == "equal":
                result.unchanged.append(DiffLine(i + 1, raw_source[i], "unchanged"))
            elif op == "delete":
                result.deletions.append(DiffLine(i + 1, raw_source[i], "deletion"))
            else:
                result.additions.append(DiffLine(j + 1, raw_target[j], "addition"))
        result.distance = len(result.additions) + len(result.deletions)
        return result

    def edit_distance(self, source: str, target: str) -> int:
        """Levenshtein distance between two strings, by character."""
        previous = list(range(len(target) + 1))
        for i, s_char in enumerate(source, start=1):
            current = [i]
            for j, t_char in enumerate(target, start=1):
                if s_char == t_char:
                    current.append(previous[j - 1])
                else:
                    current.append(1 + min(previous[j], current[j - 1], previous[j - 1]))
            previous = current
        return previous[-1]


__all__ = [
    "Change",
    "DiffAnalyzer",
    "DiffLine",
    "DiffResult",
    "compute_changes",
    "math",
]