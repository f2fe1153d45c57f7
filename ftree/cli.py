"""Command-line front door for ftree.

Parses CLI options, loads settings and the directory tree, and prints one
rendered frame sized to the terminal (or to ``--height``/``--width``).
"""

from __future__ import annotations

import argparse
import shutil
import sys
from pathlib import Path

import structlog

from . import config
from .fs import open_tree
from .git_status import GitStatusCache
from .logs import LOG_LEVELS, setup_logging
from .render import Renderer
from .state import ViewState
from .ui_theme import available_theme_names, resolve_theme

logger = structlog.get_logger()


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _nonnegative_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render a directory tree with git status and a content preview."
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory or file. Defaults to current directory.")
    parser.add_argument("--select", metavar="NAME", help="Child of the directory to select.")
    parser.add_argument("--mark", metavar="NAME", help="Child of the directory to mark.")
    parser.add_argument("--height", type=_positive_int, default=None, help="Frame height (default: terminal rows).")
    parser.add_argument("--width", type=_positive_int, default=None, help="Frame width (default: terminal columns).")
    parser.add_argument("--edge-padding", type=_nonnegative_int, default=None, help="Rows kept around the selection.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default="monokai", help="Pygments style name for the preview.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--help-panel", action="store_true", help="Show the keybinding panel above the preview.")
    parser.add_argument("--show-hidden", action="store_true", help="Include dotfiles.")
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Persist --theme and --edge-padding to the config file.",
    )
    parser.add_argument("--log-level", default="WARNING", choices=LOG_LEVELS, help="Log level (default: WARNING).")
    parser.add_argument("--log-file", type=Path, default=None, help="Log file path.")
    return parser


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and print one frame for a directory or file.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args()
    setup_logging(args.log_level, args.log_file)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path) if args.path is not None else default_path
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")

    settings = config.load_settings()
    if args.save_defaults:
        if args.theme is not None:
            config.save_theme_name(args.theme)
        if args.edge_padding is not None:
            config.save_edge_padding(args.edge_padding)

    term = shutil.get_terminal_size((80, 24))
    height = args.height if args.height is not None else term.lines
    width = args.width if args.width is not None else term.columns

    tree = open_tree(
        path,
        show_hidden=args.show_hidden or settings.show_hidden,
        select=args.select,
        mark=args.mark,
    )
    renderer = Renderer(
        theme=resolve_theme(args.theme or settings.theme, no_color=args.no_color),
        edge_padding=args.edge_padding if args.edge_padding is not None else settings.edge_padding,
        git_cache=GitStatusCache(refresh_seconds=settings.git_refresh_seconds),
        preview_bytes_limit=settings.preview_bytes_limit,
        syntax_style=None if args.no_color else args.style,
    )
    logger.debug("rendering frame", path=str(tree.current_dir.path), height=height, width=width)
    state = ViewState(tree=tree, help_visible=args.help_panel)
    sys.stdout.write(renderer.render(state, height, width) + "\n")


if __name__ == "__main__":
    main()
