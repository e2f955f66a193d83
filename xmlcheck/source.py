# source.py
# Loads the document once and maps offsets in it to (line, column) pairs.
# Every position the checker reports refers to Source.text, so that buffer is
# what gets passed around, never a re-read of the file.

import codecs
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, NamedTuple, Tuple, Union

from .exceptions import SourceReadError


class Position(NamedTuple):
    line: int
    column: int


@dataclass(frozen=True)
class Source:
    path: str
    data: bytes
    text: str


XML_DECLARATION = re.compile(rb"""^\s*<\?xml[^>]*?\bencoding\s*=\s*["']([A-Za-z][A-Za-z0-9._-]*)["']""")


def document_encoding(data: bytes) -> str:
    """Encoding the XML parser will use: BOM first, then the declaration, else UTF-8."""
    if data.startswith(codecs.BOM_UTF8):
        return "utf-8-sig"
    if data.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        return "utf-16"
    m = XML_DECLARATION.match(data[:200])
    if m:
        try:
            name = codecs.lookup(m.group(1).decode("ascii")).name
        except LookupError:
            return "utf-8-sig"
        return "utf-8-sig" if name == "utf-8" else name
    return "utf-8-sig"


def decode(data: bytes) -> str:
    # bad bytes become U+FFFD so "\n" positions survive
    return data.decode(document_encoding(data), errors="replace")


def load_source(path: Union[str, Path]) -> Source:
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise SourceReadError(f"Failed to open file: {path} ({e.strerror or e})") from e
    return Source(path=str(path), data=data, text=decode(data))


def locate(text: str, offset: int) -> Position:
    """1-based (line, column) of ``offset``; out-of-range offsets are clamped."""
    offset = max(0, min(offset, len(text)))
    line = text.count("\n", 0, offset) + 1
    line_start = text.rfind("\n", 0, offset) + 1
    return Position(line, offset - line_start + 1)


def offset_of(text: str, line: int, column: int) -> int:
    """Inverse of locate(); the column is clamped to the line it names."""
    if line < 1:
        return 0
    start = 0
    for _ in range(line - 1):
        nl = text.find("\n", start)
        if nl < 0:
            return len(text)
        start = nl + 1
    end = text.find("\n", start)
    if end < 0:
        end = len(text)
    return start + max(0, min(column - 1, end - start))


def iter_lines(text: str) -> Iterator[Tuple[int, str]]:
    """Yield (line_number, line) with a trailing carriage return removed.

    Only "\\n" ends a line, the same rule locate() counts by.
    """
    for number, line in enumerate(text.split("\n"), start=1):
        if line.endswith("\r"):
            line = line[:-1]
        yield number, line


def line_text(text: str, line_number: int) -> str:
    if line_number < 1:
        return ""
    for number, line in iter_lines(text):
        if number == line_number:
            return line
    return ""
