"""
Run the analyzer over a word list and measure how much of it parses.

This tells us:
- What % of words get at least one parsing
- Which stage answered (ambiguous table, invariables, irregular verbs, search)
- How many words come back with more than one parsing
- How hard the retry loop had to work
- Which words fail, and with what error

Usage:
    from nahuatl_morph import Analyzer, check_coverage, read_word_list

    words = read_word_list("corpus/words.txt")
    report = check_coverage(Analyzer(), words)
    print(report.summary())
    report.write_failures("failures.tsv")
"""

from __future__ import annotations

import csv
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from nahuatl_morph.engine import Analyzer
from nahuatl_morph.orthography import CLASSICAL


@dataclass
class CoverageReport:
    """Aggregated coverage statistics."""

    total_words: int = 0
    analyzed_words: int = 0
    failed_words: int = 0
    multi_parse_words: int = 0  # more than one parsing
    retried_words: int = 0  # search needed more than one attempt

    by_source: Counter = field(default_factory=Counter)  # source → count
    failures: list[tuple[str, str, int]] = field(default_factory=list)  # (word, error, attempts)
    parse_counts: Counter = field(default_factory=Counter)  # number of parsings → words

    def summary(self) -> str:
        if self.total_words == 0:
            return "No words checked."

        pct = lambda n, d: f"{100*n/d:.1f}%" if d > 0 else "N/A"

        lines = [
            "═══ Coverage Report ═══",
            "",
            f"Total words:     {self.total_words}",
            f"Analyzed:        {self.analyzed_words:5d}  ({pct(self.analyzed_words, self.total_words)})",
            f"Failed:          {self.failed_words:5d}  ({pct(self.failed_words, self.total_words)})",
            f"Multiple parses: {self.multi_parse_words:5d}  ({pct(self.multi_parse_words, self.total_words)})",
            f"Needed retries:  {self.retried_words:5d}",
            "",
            "─── By source ───",
        ]
        for source, count in self.by_source.most_common():
            lines.append(f"  {source:12s}  {count:5d}  ({pct(count, self.analyzed_words)})")

        lines.append("")
        lines.append("─── Parsings per word ───")
        for n in sorted(self.parse_counts):
            lines.append(f"  {n:3d}  x{self.parse_counts[n]}")

        if self.failures:
            lines.append("")
            lines.append("─── Sample failures ───")
            for word, _error, attempts in self.failures[:20]:
                lines.append(f"  {word:25s}  ({attempts} attempts)")

        return "\n".join(lines)

    def write_failures(self, path: str | Path) -> None:
        """Write failed words to a TSV file for manual review.

        Columns: word, attempts, error
        """
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, delimiter="\t")
            writer.writerow(["word", "attempts", "error"])
            for word, error, attempts in self.failures:
                writer.writerow([word, attempts, error])


def read_word_list(path: str | Path) -> list[str]:
    """One word per line; blank lines and # comments are skipped."""
    words = []
    with Path(path).open(encoding="utf-8") as f:
        for line in f:
            line = line.split("#", 1)[0].strip()
            if line:
                words.append(line)
    return words


def check_coverage(
    analyzer: Analyzer,
    words: Iterable[str],
    *,
    orthography: str = CLASSICAL,
) -> CoverageReport:
    """Analyze every word and tally the results."""
    report = CoverageReport()

    for word in words:
        report.total_words += 1
        result = analyzer.analyze(word, orthography)

        if result.attempts > 1:
            report.retried_words += 1

        if result.success:
            report.analyzed_words += 1
            report.by_source[result.source] += 1
            report.parse_counts[len(result.parsings)] += 1
            if len(result.parsings) > 1:
                report.multi_parse_words += 1
        else:
            report.failed_words += 1
            report.failures.append((word, result.error or "", result.attempts))

    return report
