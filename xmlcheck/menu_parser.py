# menu_parser.py
# Turns the lxml tree of a <menu> document into Entry records.
#
#   <menu>
#     <game name="pacman" index="true" image="pacman"/>
#     ...
#   </menu>
#
# lxml keeps no attribute positions, so this module only reports what the
# parser gives it: the entries in document order, or an XmlSyntaxError whose
# offset points into the same Source.text the caller holds on to.

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from lxml import etree

from .exceptions import MissingRootError, XmlSyntaxError
from .logging_config import get_logger
from .source import Source, offset_of

log = get_logger("menu_parser")

# lxml appends the position to its messages; the report prints it separately
POSITION_SUFFIX = re.compile(r",\s*line \d+,\s*column \d+\s*$")


@dataclass(frozen=True)
class MenuLayout:
    root_tag: str = "menu"
    entry_tag: str = "game"
    key_attribute: str = "name"
    index_attribute: str = "index"
    image_attribute: str = "image"


@dataclass(frozen=True)
class Entry:
    name: str
    index: str = ""
    image: str = ""
    sourceline: Optional[int] = None


@dataclass(frozen=True)
class ParsedMenu:
    entries: Tuple[Entry, ...]
    skipped: Tuple[int, ...] = ()


def make_parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True, remove_blank_text=False)


def load_tree(source: Source) -> etree._Element:
    """Parse ``source.data``; syntax errors come back as offsets into ``source.text``."""
    try:
        return etree.fromstring(source.data, parser=make_parser())
    except etree.XMLSyntaxError as e:
        line, column = e.position
        message = POSITION_SUFFIX.sub("", e.msg or str(e)) or "XML syntax error"
        raise XmlSyntaxError(message, offset_of(source.text, line or 1, column or 1)) from e


def parse_menu(source: Source, layout: MenuLayout = MenuLayout()) -> ParsedMenu:
    root = load_tree(source)
    if root.tag != layout.root_tag:
        raise MissingRootError(f"No <{layout.root_tag}> root node found")

    entries: List[Entry] = []
    skipped: List[int] = []
    for node in root.iterchildren(tag=layout.entry_tag):
        name = node.get(layout.key_attribute)
        if not name:
            # entries without a key are left out of every count
            skipped.append(node.sourceline)
            continue
        entries.append(Entry(
            name=name,
            index=node.get(layout.index_attribute, ""),
            image=node.get(layout.image_attribute, ""),
            sourceline=node.sourceline,
        ))

    log.debug("Parsed %d <%s> entries (%d without %s)",
              len(entries), layout.entry_tag, len(skipped), layout.key_attribute)
    return ParsedMenu(entries=tuple(entries), skipped=tuple(skipped))
