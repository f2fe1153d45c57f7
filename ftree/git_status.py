"""Git status provider and the time-gated status cache behind tree badges.

``fetch_git_status`` runs ``git status --porcelain=v1 -z`` for a directory.
``GitStatusCache`` keeps the last good result, refreshes it at most once per
interval, and maps tree nodes to badges by repository-relative path.
"""

from __future__ import annotations

import dataclasses
import subprocess
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from .render.tree import DisplayRow
    from .ui_theme import UITheme

logger = structlog.get_logger()

GIT_NOT_A_REPOSITORY_EXIT_CODE = 128
DEFAULT_REFRESH_SECONDS = 60.0
FAILURE_RETRY_SECONDS = 5.0
DEFAULT_TIMEOUT_SECONDS = 2.0

STAGED_CODES = frozenset("MADRCU")

BADGE_STAGED = "staged"
BADGE_MODIFIED = "modified"
BADGE_UNTRACKED = "untracked"

TREE_BADGES = {
    BADGE_STAGED: " [S]",
    BADGE_MODIFIED: " [M]",
    BADGE_UNTRACKED: " [U]",
}
HEADER_BADGES = {
    BADGE_STAGED: " [Staged]",
    BADGE_MODIFIED: " [Modified]",
    BADGE_UNTRACKED: " [Untracked]",
}


class GitStatusError(RuntimeError):
    """Raised when git status cannot be obtained (tool missing, timeout, failure)."""


@dataclass(frozen=True)
class GitStatusEntry:
    """Status facets of one repository-relative path."""

    path: str
    staged: bool = False
    modified: bool = False
    untracked: bool = False

    @classmethod
    def from_code(cls, code: str, path: str) -> "GitStatusEntry":
        """Classify a two-character porcelain status code.

        The index column decides ``staged``; ``M`` in either column means
        ``modified``; ``??`` is the only untracked code.
        """
        return cls(
            path=path,
            staged=code[:1] in STAGED_CODES,
            modified="M" in code,
            untracked=code == "??",
        )

    def badge_kind(self) -> str | None:
        if self.staged:
            return BADGE_STAGED
        if self.modified:
            return BADGE_MODIFIED
        if self.untracked:
            return BADGE_UNTRACKED
        return None


@dataclass(frozen=True)
class GitStatusSnapshot:
    repo_root: Path | None
    entries: dict[str, GitStatusEntry]


def parse_porcelain_status(output: str) -> dict[str, GitStatusEntry]:
    """Parse ``git status --porcelain=v1 -z`` output into entries keyed by path.

    Directory records (untracked directories end with ``/``) are keyed without
    the trailing slash.
    """
    entries: dict[str, GitStatusEntry] = {}
    tokens = output.split("\0")
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if len(token) < 4 or token[2] != " ":
            continue

        code = token[:2]
        path = token[3:].rstrip("/")
        if not path or code == "!!":
            continue
        entries[path] = GitStatusEntry.from_code(code, path)

        # Renamed/copied records carry the source path as the next token.
        if "R" in code or "C" in code:
            index += 1

    return entries


def _run_git(directory: Path, args: list[str], timeout_seconds: float) -> subprocess.CompletedProcess[str]:
    try:
        return subprocess.run(
            ["git", "-C", str(directory), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except FileNotFoundError as exc:
        raise GitStatusError("git executable not found") from exc
    except subprocess.TimeoutExpired as exc:
        raise GitStatusError(f"git {args[0]} timed out after {timeout_seconds:g}s") from exc
    except OSError as exc:
        raise GitStatusError(str(exc)) from exc


def _check(proc: subprocess.CompletedProcess[str], args: list[str]) -> None:
    if proc.returncode != 0:
        detail = proc.stderr.strip().splitlines()[-1:] or [f"exit status {proc.returncode}"]
        raise GitStatusError(f"git {args[0]}: {detail[0]}")


def fetch_git_status(directory: Path, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> GitStatusSnapshot:
    """Collect status entries for the repository containing ``directory``.

    A directory outside any repository yields an empty snapshot with no
    ``repo_root``; any other failure raises ``GitStatusError``.
    """
    toplevel_args = ["rev-parse", "--show-toplevel"]
    toplevel = _run_git(directory, toplevel_args, timeout_seconds)
    if toplevel.returncode == GIT_NOT_A_REPOSITORY_EXIT_CODE:
        return GitStatusSnapshot(repo_root=None, entries={})
    _check(toplevel, toplevel_args)

    lines = [line.strip() for line in toplevel.stdout.splitlines() if line.strip()]
    if not lines:
        # Inside the .git directory or a bare repository: nothing to annotate.
        return GitStatusSnapshot(repo_root=None, entries={})
    repo_root = Path(lines[0]).resolve()

    status_args = ["status", "--porcelain=v1", "-z", "--untracked-files=normal"]
    status = _run_git(directory, status_args, timeout_seconds)
    if status.returncode == GIT_NOT_A_REPOSITORY_EXIT_CODE:
        return GitStatusSnapshot(repo_root=None, entries={})
    _check(status, status_args)
    return GitStatusSnapshot(repo_root=repo_root, entries=parse_porcelain_status(status.stdout))


class GitStatusCache:
    """Last fetched git status plus the policy deciding when to fetch again.

    A cache that never fetched successfully is stale and is retried (at most
    every ``FAILURE_RETRY_SECONDS``); afterwards it refreshes once per
    ``refresh_seconds`` or when the browsed directory changes. Failed fetches
    keep the previous entries.
    """

    def __init__(
        self,
        refresh_seconds: float = DEFAULT_REFRESH_SECONDS,
        fetch: Callable[[Path], GitStatusSnapshot] | None = None,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self.refresh_seconds = refresh_seconds
        self._fetch = fetch or fetch_git_status
        self._monotonic = monotonic
        self._snapshot = GitStatusSnapshot(repo_root=None, entries={})
        self._attempted_directory: Path | None = None
        self._relative_paths: dict[Path, str | None] = {}
        self._last_success: float | None = None
        self._last_attempt: float | None = None
        self._last_failed = False
        self.last_error: str | None = None

    @property
    def entries(self) -> dict[str, GitStatusEntry]:
        return self._snapshot.entries

    @property
    def repo_root(self) -> Path | None:
        return self._snapshot.repo_root

    @property
    def is_stale(self) -> bool:
        return self._last_success is None

    def needs_refresh(self, directory: Path) -> bool:
        if self._last_attempt is None or directory != self._attempted_directory:
            return True
        now = self._monotonic()
        if self._last_failed:
            # Last attempt failed: back off before spawning git again.
            retry_after = FAILURE_RETRY_SECONDS if self.is_stale else self.refresh_seconds
            return now - self._last_attempt >= retry_after
        return now - self._last_success >= self.refresh_seconds

    def refresh(self, directory: Path, force: bool = False) -> str | None:
        """Fetch status for ``directory`` when due; return the current error message.

        The returned message is ``None`` once a fetch succeeds and persists
        across skipped refreshes after a failure.
        """
        if not force and not self.needs_refresh(directory):
            return self.last_error

        now = self._monotonic()
        self._last_attempt = now
        self._attempted_directory = directory
        try:
            snapshot = self._fetch(directory)
        except GitStatusError as exc:
            self.last_error = f"Git status error: {exc}"
            self._last_failed = True
            logger.warning("git status refresh failed", directory=str(directory), error=str(exc))
            return self.last_error

        self._snapshot = snapshot
        self._relative_paths = {}
        self._last_success = now
        self._last_failed = False
        self.last_error = None
        logger.debug(
            "git status refreshed",
            directory=str(directory),
            repo_root=str(snapshot.repo_root) if snapshot.repo_root else None,
            entries=len(snapshot.entries),
        )
        return None

    def relative_path(self, path: Path) -> str | None:
        """Return ``path`` relative to the repository root in POSIX form.

        The final component is not resolved so a symlink maps to its own
        location rather than its target. Results are cached per path until the
        next successful refresh.
        """
        repo_root = self.repo_root
        if repo_root is None:
            return None
        if path in self._relative_paths:
            return self._relative_paths[path]
        try:
            absolute = path.parent.resolve() / path.name
        except OSError:
            return None
        if absolute == repo_root:
            relative: str | None = ""
        elif absolute.is_relative_to(repo_root):
            relative = absolute.relative_to(repo_root).as_posix()
        else:
            relative = None
        self._relative_paths[path] = relative
        return relative

    def status_for(self, path: Path, is_dir: bool = False) -> GitStatusEntry | None:
        """Return the status of ``path``.

        An exact entry wins. A path below an untracked directory is untracked.
        A directory otherwise aggregates the facets of every entry under it.
        """
        rel = self.relative_path(path)
        if rel is None:
            return None
        entries = self.entries
        if rel in entries:
            return entries[rel]

        for parent in PurePosixPath(rel).parents:
            parent_entry = entries.get(str(parent))
            if parent_entry is not None and parent_entry.untracked:
                return GitStatusEntry(path=rel, untracked=True)

        if not is_dir:
            return None
        prefix = f"{rel}/" if rel else ""
        staged = modified = untracked = False
        for key, entry in entries.items():
            if not key.startswith(prefix):
                continue
            staged = staged or entry.staged
            modified = modified or entry.modified
            untracked = untracked or entry.untracked
        if not (staged or modified or untracked):
            return None
        return GitStatusEntry(path=rel, staged=staged, modified=modified, untracked=untracked)

    def badge_kind_for(self, path: Path, is_dir: bool = False) -> str | None:
        entry = self.status_for(path, is_dir)
        return entry.badge_kind() if entry is not None else None

    def annotate(self, rows: list["DisplayRow"], theme: "UITheme") -> list["DisplayRow"]:
        """Return ``rows`` with a tree badge on every row whose node has a status."""
        if not self.entries:
            return rows
        annotated: list[DisplayRow] = []
        for row in rows:
            kind = None
            if row.node is not None:
                kind = self.badge_kind_for(row.node.path, row.node.is_dir)
            if kind is None:
                annotated.append(row)
                continue
            badge = theme.paint(theme.tree_git_status, TREE_BADGES[kind])
            annotated.append(dataclasses.replace(row, badge=badge))
        return annotated
