# config.py
# Optional YAML settings for the checker. Command-line flags win over the file,
# the file wins over the defaults below.
#
# Example checker.yml:
#   root_tag: menu
#   entry_tag: game
#   key_attribute: name
#   report_json: dupes.report.json
#   log_level: INFO

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .exceptions import ConfigError
from .menu_parser import MenuLayout

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def load_yaml(path):
    with open(path, "r", encoding="utf-8-sig") as f:  # BOM-safe
        return yaml.safe_load(f) or {}


@dataclass(frozen=True)
class CheckerConfig:
    root_tag: str = "menu"
    entry_tag: str = "game"
    key_attribute: str = "name"
    index_attribute: str = "index"
    image_attribute: str = "image"
    report_json: Optional[str] = None
    log_level: str = "WARNING"

    @classmethod
    def from_dict(cls, raw: Dict[str, Any], origin: str = "<config>") -> "CheckerConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(raw) - known)
        if unknown:
            raise ConfigError(f"Unknown config key(s) in {origin}: {', '.join(map(str, unknown))}")

        for key, value in raw.items():
            if key == "report_json" and value is None:
                continue
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"'{key}' must be a non-empty string ({origin})")

        cfg = cls(**raw)
        if cfg.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(f"'log_level' must be one of {', '.join(LOG_LEVELS)} ({origin})")
        return replace(cfg, log_level=cfg.log_level.upper())

    @classmethod
    def from_yaml(cls, path: str) -> "CheckerConfig":
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        try:
            raw = load_yaml(config_path)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse YAML {config_path}: {exc}") from exc
        except OSError as exc:
            raise ConfigError(f"Unable to read config {config_path}: {exc}") from exc

        if not isinstance(raw, dict):
            raise ConfigError(f"Config must be a mapping ({config_path})")
        return cls.from_dict(raw, str(config_path))

    def override(self, **values: Any) -> "CheckerConfig":
        """Copy with every non-None value applied (CLI flags)."""
        changes = {k: v for k, v in values.items() if v is not None}
        return replace(self, **changes) if changes else self

    def layout(self) -> MenuLayout:
        return MenuLayout(
            root_tag=self.root_tag,
            entry_tag=self.entry_tag,
            key_attribute=self.key_attribute,
            index_attribute=self.index_attribute,
            image_attribute=self.image_attribute,
        )
