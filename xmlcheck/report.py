# report.py
# Console and JSON output for a check run.
#   stdout: the duplicate report (or the "no duplicates" line)
#   stderr: parse error context with a caret under the failing column

import json
import sys
from typing import Sequence, TextIO

from .duplicates import Finding
from .exceptions import XmlSyntaxError
from .source import Source, line_text, locate


def format_line_list(lines: Sequence[int]) -> str:
    """(3), (3 and 7), (3, 7 and 12)"""
    if not lines:
        return "()"
    parts = [str(n) for n in lines]
    if len(parts) == 1:
        return f"({parts[0]})"
    return "(" + ", ".join(parts[:-1]) + " and " + parts[-1] + ")"


def print_syntax_error(error: XmlSyntaxError, text: str, stream: TextIO = None) -> None:
    stream = stream or sys.stderr
    line, col = locate(text, error.offset)
    print(f"XML parse error: {error.message}", file=stream)
    print(f"At line {line}, column {col}", file=stream)

    context = line_text(text, line)
    if context:
        print(context, file=stream)
        print(" " * (col - 1) + "^", file=stream)


def print_findings(findings: Sequence[Finding], entry_tag: str = "game", stream: TextIO = None) -> bool:
    """Print one line per duplicate name. Returns True if anything was duplicated."""
    stream = stream or sys.stdout
    if not findings:
        print(f"No duplicate {entry_tag} names found.", file=stream)
        return False

    for f in findings:
        print(f'Name "{f.name}" appears {f.count} times at lines {format_line_list(f.lines)}', file=stream)
    return True


def build_report(source: Source, findings: Sequence[Finding], skipped: Sequence[int] = ()) -> dict:
    return {
        "source": source.path,
        "duplicates": [
            {
                "name": f.name,
                "count": f.count,
                "lines": list(f.lines),
                "entries": [
                    {"index": e.index, "image": e.image, "sourceline": e.sourceline}
                    for e in f.entries
                ],
            }
            for f in findings
        ],
        "skipped_entry_lines": list(skipped),
    }


def write_json_report(path: str, source: Source, findings: Sequence[Finding], skipped: Sequence[int] = ()) -> str:
    with open(path, "w", encoding="utf-8", newline="\n") as rf:
        json.dump(build_report(source, findings, skipped), rf, indent=2, ensure_ascii=False)
    return path
