"""Board settings, stored as YAML.

Example::

    column-names:
      todo: Backlog
      in-progress: Doing
      done: Shipped
    center-board: true
    delete-delay: 1.5
    block-language: todo
    link-schemes: [obsidian]

Unknown keys are ignored and bad values fall back to their defaults, so a
broken settings file never stops a board from loading.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .board.columns import DEFAULT_TITLES
from .board.gesture import DEFAULT_DELETE_DELAY
from .board.payload import DEFAULT_LINK_SCHEMES
from .board.types import Stage

logger = logging.getLogger(__name__)

DEFAULT_BLOCK_LANGUAGE = "todo"


@dataclass
class Settings:
    column_names: dict[Stage, str] = field(default_factory=lambda: dict(DEFAULT_TITLES))
    center_board: bool = False
    delete_delay: float = DEFAULT_DELETE_DELAY
    block_language: str = DEFAULT_BLOCK_LANGUAGE
    link_schemes: list[str] = field(default_factory=lambda: list(DEFAULT_LINK_SCHEMES))

    def to_dict(self) -> dict:
        return {
            "column-names": {s.value: name for s, name in self.column_names.items()},
            "center-board": self.center_board,
            "delete-delay": self.delete_delay,
            "block-language": self.block_language,
            "link-schemes": list(self.link_schemes),
        }


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_settings(yaml_str: str) -> Settings:
    """Build Settings from a YAML document."""
    try:
        data = yaml.safe_load(yaml_str)
    except yaml.YAMLError as exc:
        logger.warning("settings are not valid YAML, using defaults: %s", exc)
        return Settings()

    if data is None:
        return Settings()
    if not isinstance(data, dict):
        logger.warning("settings must be a mapping, using defaults")
        return Settings()
    return _settings_from_dict(data)


def load_settings(path: Path) -> Settings:
    """Load settings from a YAML file; a missing file yields defaults."""
    path = Path(path)
    if not path.exists():
        return Settings()
    return parse_settings(path.read_text())


def dump_settings(settings: Settings) -> str:
    return yaml.safe_dump(settings.to_dict(), sort_keys=False)


def save_settings(settings: Settings, path: Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_settings(settings))


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _settings_from_dict(data: dict) -> Settings:
    settings = Settings()

    names = data.get("column-names")
    if isinstance(names, dict):
        for key, value in names.items():
            try:
                stage = Stage(key)
            except ValueError:
                logger.warning("unknown column %r in settings", key)
                continue
            # An empty name falls back to the default title.
            if value:
                settings.column_names[stage] = str(value)

    center = data.get("center-board")
    if isinstance(center, bool):
        settings.center_board = center

    delay = data.get("delete-delay")
    if delay is not None:
        if isinstance(delay, (int, float)) and not isinstance(delay, bool) and delay >= 0:
            settings.delete_delay = float(delay)
        else:
            logger.warning("invalid delete-delay %r, using %s", delay, DEFAULT_DELETE_DELAY)

    language = data.get("block-language")
    if isinstance(language, str) and language.strip():
        settings.block_language = language.strip()

    schemes = data.get("link-schemes")
    if isinstance(schemes, list):
        settings.link_schemes = [str(s) for s in schemes if s]

    return settings
