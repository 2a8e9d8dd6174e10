"""Command-line front door for projdash.

Parses CLI options, resolves the project root, and dispatches to the
interactive dashboard, a one-shot text render, a single quick action, or a
new tmux window.
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path

from .actions import QUICK_ACTION_KINDS, quick_action
from .ansi import center_ansi_line
from .capabilities import detect_capabilities
from .config import CONFIG_PATH, LOG_PATH, DashboardSettings, load_settings
from .document import DashboardDocument
from .host import HostEnvironment
from .projects import ProjectNotFoundError, find_project_root, open_in_new_window, prompt_for_project
from .render import render_dashboard
from .runtime import run_dashboard
from .ui_theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _configure_debug_logging() -> None:
    LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(LOG_PATH),
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _stdout_is_tty() -> bool:
    return sys.stdout.isatty()


def _is_interactive() -> bool:
    return sys.stdin.isatty() and _stdout_is_tty()


def document_to_text(document: DashboardDocument, width: int) -> str:
    """Render ``document`` as plain lines for non-interactive output."""
    out: list[str] = []
    for line in document.lines:
        out.append(center_ansi_line(line.text, width) if line.centered else line.text)
    return "\n".join(out) + "\n"


def _resolve_root(args: argparse.Namespace, settings: DashboardSettings, default_path: Path | None) -> Path:
    if args.pick:
        if args.path is not None:
            raise SystemExit("Cannot combine positional path with --pick.")
        if not settings.projects:
            raise SystemExit(f"No registered projects; list them under \"projects\" in {CONFIG_PATH}.")
        try:
            chosen = prompt_for_project(settings.projects)
        except ProjectNotFoundError as exc:
            raise SystemExit(str(exc)) from exc
        if chosen is None:
            raise SystemExit("No project selected.")
        return chosen.resolve()

    if args.path is not None:
        path = Path(args.path).expanduser()
        if not path.is_dir():
            raise SystemExit(f"Not a directory: {path}")
        return path.resolve()

    try:
        return find_project_root(default_path if default_path is not None else Path.cwd())
    except ProjectNotFoundError as exc:
        raise SystemExit(str(exc)) from exc


def _new_window_argv(args: argparse.Namespace) -> list[str]:
    argv = [sys.executable, "-m", "projdash"]
    if args.no_color:
        argv.append("--no-color")
    if args.theme:
        argv.extend(["--theme", args.theme])
    if args.recent_limit:
        argv.extend(["--recent-limit", str(args.recent_limit)])
    if args.git_limit:
        argv.extend(["--git-limit", str(args.git_limit)])
    return argv


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and open the dashboard for the chosen project.

    ``default_path`` is primarily for tests; when omitted the project is
    searched for upward from the current working directory.
    """
    parser = argparse.ArgumentParser(
        description="Show a status dashboard for a project: git changes, recent files and quick actions."
    )
    parser.add_argument("path", nargs="?", default=None, help="Project directory. Defaults to the current project.")
    parser.add_argument("--pick", action="store_true", help="Choose among the projects registered in the config.")
    parser.add_argument("--new-window", action="store_true", help="Open the dashboard in a new tmux window.")
    parser.add_argument("--render", action="store_true", help="Print the dashboard once and exit.")
    parser.add_argument(
        "-a",
        "--action",
        choices=sorted(QUICK_ACTION_KINDS),
        help="Run one quick action for the project and exit.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--recent-limit", type=_positive_int, default=None, help="Recent files to show (default: 10).")
    parser.add_argument("--git-limit", type=_positive_int, default=None, help="Changed files to show (default: 5).")
    parser.add_argument("--debug", action="store_true", help=f"Write a debug log to {LOG_PATH}.")
    args = parser.parse_args()

    if args.debug:
        _configure_debug_logging()

    settings = load_settings().with_overrides(
        recent_files_limit=args.recent_limit,
        git_files_limit=args.git_limit,
        theme=args.theme,
    )
    root = _resolve_root(args, settings, default_path)
    logger.debug("resolved project root %s", root)

    if args.new_window:
        error = open_in_new_window(root, _new_window_argv(args))
        if error:
            raise SystemExit(error)
        return

    interactive = _is_interactive()
    no_color = args.no_color or not _stdout_is_tty()
    capabilities = detect_capabilities(icons=settings.icons, no_color=no_color)
    theme = resolve_theme(settings.theme, no_color=no_color)

    if args.action is not None:
        host = HostEnvironment(capabilities, directory_browser=settings.directory_browser)
        error = host.perform(quick_action(args.action, root))
        if error:
            raise SystemExit(error)
        return

    if args.render or not interactive:
        document = render_dashboard(root, settings, capabilities, theme)
        width = shutil.get_terminal_size((80, 24)).columns
        sys.stdout.write(document_to_text(document, width))
        return

    run_dashboard(root, settings, capabilities, theme, title=f"{settings.view_name}: {root.name or root}")


if __name__ == "__main__":
    main()
