# COMMAND
# xmlcheck menu.xml
# python -m xmlcheck menu.xml --json menu.dupes.report.json
#
# Other layouts (or put the same keys in a YAML file and pass --config):
# xmlcheck list.xml --root datafile --entry game --key name
#
# Exit status:
#   0 no duplicates, 1 duplicates found, 2 usage error, 3 file could not be read,
#   4 XML syntax error, 5 expected root element missing, 6 bad config file

import argparse
import sys
from enum import IntEnum
from typing import List, Optional

from . import __version__
from .config import CheckerConfig
from .duplicates import find_duplicates
from .exceptions import ConfigError, MissingRootError, SourceReadError, XmlSyntaxError
from .logging_config import configure_logging, get_logger
from .menu_parser import parse_menu
from .report import print_findings, print_syntax_error, write_json_report
from .source import load_source

log = get_logger("cli")


class ExitCode(IntEnum):
    NO_DUPLICATES = 0
    DUPLICATES_FOUND = 1
    USAGE = 2
    IO_ERROR = 3
    XML_SYNTAX_ERROR = 4
    MISSING_ROOT = 5
    CONFIG_ERROR = 6


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="xmlcheck",
        description="Report <game> names that appear more than once in a menu XML file.",
    )
    ap.add_argument("xml", help="Path to the menu XML file")
    ap.add_argument("--config", help="YAML file with checker settings")
    ap.add_argument("--root", dest="root_tag", help="Root element name (default: menu)")
    ap.add_argument("--entry", dest="entry_tag", help="Entry element name (default: game)")
    ap.add_argument("--key", dest="key_attribute", help="Attribute compared for duplicates (default: name)")
    ap.add_argument("--json", dest="report_json", help="Also write a JSON report to this path")
    verbosity = ap.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def resolve_config(args: argparse.Namespace) -> CheckerConfig:
    cfg = CheckerConfig.from_yaml(args.config) if args.config else CheckerConfig()
    level = "DEBUG" if args.verbose else ("ERROR" if args.quiet else None)
    return cfg.override(
        root_tag=args.root_tag,
        entry_tag=args.entry_tag,
        key_attribute=args.key_attribute,
        report_json=args.report_json,
        log_level=level,
    )


def run(cfg: CheckerConfig, xml_path: str) -> ExitCode:
    source = load_source(xml_path)
    log.info("Loaded %s (%d bytes)", source.path, len(source.data))

    try:
        menu = parse_menu(source, cfg.layout())
    except XmlSyntaxError as e:
        print_syntax_error(e, source.text)
        return ExitCode.XML_SYNTAX_ERROR

    if menu.skipped:
        log.warning("Skipped %d <%s> entries without a %s attribute (lines %s)",
                    len(menu.skipped), cfg.entry_tag, cfg.key_attribute,
                    ", ".join(str(n) for n in menu.skipped))

    findings = find_duplicates(menu.entries, source.text, cfg.key_attribute)
    for f in findings:
        if not f.fully_located:
            log.warning('Located %d of %d occurrences of %s="%s" in the text; '
                        "the rest use a different attribute spelling",
                        len(f.lines), f.count, cfg.key_attribute, f.name)

    has_dupes = print_findings(findings, cfg.entry_tag)

    if cfg.report_json:
        out = write_json_report(cfg.report_json, source, findings, menu.skipped)
        log.info("JSON report: %s", out)

    return ExitCode.DUPLICATES_FOUND if has_dupes else ExitCode.NO_DUPLICATES


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = resolve_config(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.CONFIG_ERROR

    configure_logging(cfg.log_level)

    try:
        return run(cfg, args.xml)
    except SourceReadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.IO_ERROR
    except MissingRootError as e:
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.MISSING_ROOT
    except OSError as e:
        # writing the JSON report
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.IO_ERROR


if __name__ == "__main__":
    sys.exit(main())
