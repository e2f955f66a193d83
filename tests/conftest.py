import sys
import textwrap
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from xmlcheck.logging_config import reset_logging  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_logging_state():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def write_xml(tmp_path):
    def _write(text, name="menu.xml", newline="\n"):
        path = tmp_path / name
        body = textwrap.dedent(text).lstrip("\n")
        path.write_bytes(body.replace("\n", newline).encode("utf-8"))
        return path

    return _write


MENU_AABBB = """\
<?xml version="1.0"?>
<menu>
  <game name="B" index="true" image="b1"/>
  <game name="A" index="true" image="a1"/>
  <game name="C"/>
  <game name="B" image="b2"/>
  <game name="A"/>
  <game name="B"/>
</menu>
"""


@pytest.fixture
def menu_aabbb(write_xml):
    return write_xml(MENU_AABBB)
