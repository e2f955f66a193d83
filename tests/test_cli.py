import json

import pytest

from xmlcheck.cli import ExitCode, main


def test_no_duplicates(write_xml, capsys):
    path = write_xml("""
        <menu>
          <game name="A"/>
          <game name="B"/>
        </menu>
    """)
    assert main([str(path)]) == ExitCode.NO_DUPLICATES == 0
    out, err = capsys.readouterr()
    assert out == "No duplicate game names found.\n"
    assert err == ""


def test_duplicates_found(menu_aabbb, capsys):
    assert main([str(menu_aabbb)]) == ExitCode.DUPLICATES_FOUND
    out, _ = capsys.readouterr()
    assert out.splitlines() == [
        'Name "A" appears 2 times at lines (4 and 7)',
        'Name "B" appears 3 times at lines (3, 6 and 8)',
    ]


def test_exit_codes_are_distinct():
    assert len({int(code) for code in ExitCode}) == len(ExitCode)


def test_missing_argument_is_usage_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == ExitCode.USAGE
    assert "usage:" in capsys.readouterr().err


def test_unreadable_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.xml")]) == ExitCode.IO_ERROR
    out, err = capsys.readouterr()
    assert out == ""
    assert err.startswith("Error: Failed to open file:")


def test_syntax_error_report(write_xml, capsys):
    path = write_xml("""
        <menu>
          <game name="A"/>
          <game name="A"></gme>
        </menu>
    """)
    assert main([str(path)]) == ExitCode.XML_SYNTAX_ERROR
    out, err = capsys.readouterr()
    assert out == ""
    lines = err.splitlines()
    assert lines[0].startswith("XML parse error: ")
    assert lines[1:] == [
        "At line 3, column 24",
        '  <game name="A"></gme>',
        " " * 23 + "^",
    ]
    assert not lines[0].endswith("column 24")


def test_missing_root(write_xml, capsys):
    path = write_xml("""
        <games>
          <game name="A"/>
          <game name="A"/>
        </games>
    """)
    assert main([str(path)]) == ExitCode.MISSING_ROOT
    out, err = capsys.readouterr()
    assert out == ""
    assert err == "Error: No <menu> root node found\n"


def test_layout_flags(write_xml, capsys):
    path = write_xml("""
        <games>
          <title id="x"/>
          <title id="x"/>
        </games>
    """)
    assert main([str(path), "--root", "games", "--entry", "title", "--key", "id"]) == ExitCode.DUPLICATES_FOUND
    assert capsys.readouterr().out == 'Name "x" appears 2 times at lines (2 and 3)\n'


def test_config_file_and_flag_precedence(write_xml, tmp_path, capsys):
    path = write_xml("""
        <games>
          <title id="x" name="y"/>
          <title id="x" name="z"/>
        </games>
    """)
    cfg = tmp_path / "checker.yml"
    cfg.write_text("root_tag: games\nentry_tag: title\nkey_attribute: id\n", encoding="utf-8")

    assert main([str(path), "--config", str(cfg)]) == ExitCode.DUPLICATES_FOUND
    capsys.readouterr()
    assert main([str(path), "--config", str(cfg), "--key", "name"]) == ExitCode.NO_DUPLICATES
    assert capsys.readouterr().out == "No duplicate title names found.\n"


def test_bad_config(write_xml, tmp_path, capsys):
    path = write_xml("<menu/>\n")
    cfg = tmp_path / "checker.yml"
    cfg.write_text("colour: blue\n", encoding="utf-8")
    assert main([str(path), "--config", str(cfg)]) == ExitCode.CONFIG_ERROR
    assert "Unknown config key" in capsys.readouterr().err


def test_json_report(menu_aabbb, tmp_path, capsys):
    report = tmp_path / "dupes.json"
    assert main([str(menu_aabbb), "--json", str(report)]) == ExitCode.DUPLICATES_FOUND
    data = json.loads(report.read_text(encoding="utf-8"))
    assert [(d["name"], d["count"], d["lines"]) for d in data["duplicates"]] == [
        ("A", 2, [4, 7]),
        ("B", 3, [3, 6, 8]),
    ]


def test_warns_about_skipped_and_unlocated_entries(write_xml, capsys):
    path = write_xml("""
        <menu>
          <game image="orphan"/>
          <game name="A"/>
          <game name='A'/>
        </menu>
    """)
    assert main([str(path)]) == ExitCode.DUPLICATES_FOUND
    out, err = capsys.readouterr()
    assert out == 'Name "A" appears 2 times at lines (3)\n'
    assert "Skipped 1 <game> entries without a name attribute (lines 2)" in err
    assert 'Located 1 of 2 occurrences of name="A"' in err


def test_quiet_hides_warnings(write_xml, capsys):
    path = write_xml("""
        <menu>
          <game image="orphan"/>
        </menu>
    """)
    assert main([str(path), "--quiet"]) == ExitCode.NO_DUPLICATES
    assert capsys.readouterr().err == ""
