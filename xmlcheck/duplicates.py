# duplicates.py
# Finds entry names that occur more than once and guesses their source lines.
#
# Line numbers are recovered by scanning the raw text for name="VALUE", not by
# re-parsing. That is formatting-dependent: single quotes, spaces around "=",
# attributes wrapped onto another line and values spelled with entity
# references (&amp; &quot; ...) are not found, so a finding can list fewer
# lines than its count.

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from .menu_parser import Entry
from .source import iter_lines


@dataclass(frozen=True)
class Finding:
    name: str
    count: int
    lines: Tuple[int, ...]
    entries: Tuple[Entry, ...] = ()

    @property
    def fully_located(self) -> bool:
        return len(self.lines) == self.count


def count_duplicates(entries: Iterable[Entry]) -> List[Tuple[str, int]]:
    """(name, count) for every name seen more than once, sorted by name."""
    counts = Counter(e.name for e in entries)
    return sorted((name, n) for name, n in counts.items() if n > 1)


def attribute_pattern(key: str, attribute: str = "name") -> str:
    return f'{attribute}="{key}"'


def find_lines_for_key(text: str, key: str, max_matches: int, attribute: str = "name") -> List[int]:
    lines: List[int] = []
    if max_matches < 1:
        return lines
    pattern = attribute_pattern(key, attribute)
    for number, line in iter_lines(text):
        if pattern in line:
            lines.append(number)
            if len(lines) >= max_matches:
                break
    return lines


def find_duplicates(entries: Sequence[Entry], text: str, attribute: str = "name") -> List[Finding]:
    findings = []
    for name, count in count_duplicates(entries):
        findings.append(Finding(
            name=name,
            count=count,
            lines=tuple(find_lines_for_key(text, name, count, attribute)),
            entries=tuple(e for e in entries if e.name == name),
        ))
    return findings
