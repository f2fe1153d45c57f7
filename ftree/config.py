"""Persistent JSON config helpers.

Stores rendering preferences: edge padding, theme, git refresh interval,
preview byte cap, and hidden-file visibility. All access is defensive:
malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

import structlog
from platformdirs import user_config_dir

from .git_status import DEFAULT_REFRESH_SECONDS
from .render import DEFAULT_EDGE_PADDING
from .render.preview import PREVIEW_BYTES_LIMIT
from .ui_theme import normalize_theme_name

logger = structlog.get_logger()

APP_NAME = "ftree"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(frozen=True)
class Settings:
    edge_padding: int = DEFAULT_EDGE_PADDING
    theme: str = "default"
    git_refresh_seconds: float = DEFAULT_REFRESH_SECONDS
    preview_bytes_limit: int = PREVIEW_BYTES_LIMIT
    show_hidden: bool = False


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.debug("ignoring unreadable config", path=str(CONFIG_PATH), error=str(exc))
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and ignored so an unwritable config never
    interrupts the viewer.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.debug("config write failed", path=str(CONFIG_PATH), error=str(exc))


def _coerce_nonnegative_int(value: object, default: int) -> int:
    """Booleans and non-integers are invalid and fall back to ``default``."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return default
    return value


def _coerce_positive_number(value: object, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return default
    return float(value)


def load_settings() -> Settings:
    """Merge persisted values over the defaults, dropping invalid ones."""
    data = load_config()
    defaults = Settings()
    theme = data.get("theme")
    show_hidden = data.get("show_hidden")
    preview_limit = data.get("preview_bytes_limit")
    return Settings(
        edge_padding=_coerce_nonnegative_int(data.get("edge_padding"), defaults.edge_padding),
        theme=normalize_theme_name(theme if isinstance(theme, str) else None),
        git_refresh_seconds=_coerce_positive_number(data.get("git_refresh_seconds"), defaults.git_refresh_seconds),
        preview_bytes_limit=(
            _coerce_nonnegative_int(preview_limit, defaults.preview_bytes_limit) or defaults.preview_bytes_limit
        ),
        show_hidden=show_hidden if isinstance(show_hidden, bool) else defaults.show_hidden,
    )


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)


def save_edge_padding(edge_padding: int) -> None:
    config = load_config()
    config["edge_padding"] = max(0, int(edge_padding))
    save_config(config)
