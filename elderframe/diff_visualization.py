"""Unified and side-by-side rendering of line differences between two texts."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass, field
from itertools import zip_longest

RESET = "\033[0m"
_COLORS = {
    "addition": "\033[32m",
    "deletion": "\033[31m",
    "modified": "\033[33m",
    "unchanged": RESET,
}
_SIDE_WIDTH = 40


@dataclass(frozen=True)
class VisualLine:
    """One displayed line with its kind, text, line number and colour code."""

    type: str
    content: str
    line_number: int
    color: str


@dataclass
class DiffHunk:
    """A block of displayed lines with the ranges it covers in both texts."""

    source_start: int
    source_count: int
    target_start: int
    target_count: int
    lines: list[VisualLine] = field(default_factory=list)


@dataclass(frozen=True)
class DiffSummary:
    """Counts of added, deleted and all displayed lines."""

    additions: int = 0
    deletions: int = 0
    total: int = 0


@dataclass
class VisualDiff:
    """A header naming both files, the hunks and their summary."""

    header: str
    hunks: list[DiffHunk] = field(default_factory=list)
    summary: DiffSummary = field(default_factory=DiffSummary)


@dataclass
class DiffVisualizer:
    """Compares two texts line by line, position against position."""

    color_output: bool = True
    show_line_numbers: bool = True
    context_lines: int = 3
    unified_format: bool = True

    def _color(self, kind: str) -> str:
        if not self.color_output:
            return ""
        return _COLORS.get(kind, RESET)

    def _line(self, kind: str, content: str, number: int) -> VisualLine:
        return VisualLine(kind, content, number, self._color(kind))

    def _unified_lines(
        self, source: list[str], target: list[str]
    ) -> Iterator[VisualLine]:
        for number, (s, t) in enumerate(zip_longest(source, target), start=1):
            if s is not None and t is not None:
                if s == t:
                    yield self._line("unchanged", " " + s, number)
                else:
                    yield self._line("deletion", "-" + s, number)
                    yield self._line("addition", "+" + t, number)
            elif s is not None:
                yield self._line("deletion", "-" + s, number)
            else:
                yield self._line("addition", "+" + t, number)

    def _side_by_side_lines(
        self, source: list[str], target: list[str]
    ) -> Iterator[VisualLine]:
        for number, (s, t) in enumerate(
            zip_longest(source, target, fillvalue=""), start=1
        ):
            kind = "unchanged"
            if s != t:
                if s and t:
                    kind = "modified"
                elif s:
                    kind = "deletion"
                else:
                    kind = "addition"
            yield self._line(kind, f"{s:<{_SIDE_WIDTH}} | {t}", number)

    def visualize(
        self,
        source_file: str,
        target_file: str,
        source_content: str,
        target_content: str,
    ) -> VisualDiff:
        """Build a one-hunk diff, unified or side by side as configured."""
        source = source_content.split("\n")
        target = target_content.split("\n")
        make = self._unified_lines if self.unified_format else self._side_by_side_lines
        hunk = DiffHunk(1, len(source), 1, len(target), list(make(source, target)))
        hunks = [hunk]
        return VisualDiff(
            header=f"--- {source_file}\n+++ {target_file}",
            hunks=hunks,
            summary=_summarize(hunks),
        )

    def render(self, diff: VisualDiff) -> str:
        """The diff as text, with optional line numbers and colour codes."""
        parts = [diff.header, "\n"]
        for hunk in diff.hunks:
            parts.append(
                f"@@ -{hunk.source_start},{hunk.source_count} "
                f"+{hunk.target_start},{hunk.target_count} @@\n"
            )
            for line in hunk.lines:
                if self.show_line_numbers:
                    parts.append(f"{line.line_number:4d}: ")
                if self.color_output:
                    parts.append(line.color)
                parts.append(line.content)
                if self.color_output:
                    parts.append(RESET)
                parts.append("\n")
        summary = diff.summary
        parts.append(
            f"\n{summary.additions} additions, {summary.deletions} deletions, "
            f"{summary.total} total changes\n"
        )
        return "".join(parts)


def _summarize(hunks: list[DiffHunk]) -> DiffSummary:
    kinds = Counter(line.type for hunk in hunks for line in hunk.lines)
    return DiffSummary(
        additions=kinds["addition"],
        deletions=kinds["deletion"],
        total=sum(kinds.values()),
    )