"""Header composition: path line, file info, operation bar, error bar."""

from __future__ import annotations

import time
import unittest
from pathlib import Path

from ftree.ansi import ANSI_ESCAPE_RE, display_width
from ftree.git_status import GitStatusCache, GitStatusError, GitStatusSnapshot, parse_porcelain_status
from ftree.render.header import HELP_HINT, MTIME_FORMAT, compose_header
from ftree.state import OperationBuffer, ViewState
from ftree.tree import Node, TreeSnapshot
from ftree.ui_theme import PLAIN_THEME


def _state(selected: bool = True, **kwargs) -> ViewState:
    child = Node(
        name="a.txt",
        path=Path("/repo/a.txt"),
        size=100,
        mtime=0.0,
        mode="-rw-r--r--",
    )
    root = Node(name="repo", path=Path("/repo"), is_dir=True, children=[child])
    tree = TreeSnapshot(root=root, current_dir=root, selected=child if selected else None)
    return ViewState(tree=tree, **kwargs)


def _lines(state: ViewState, width: int = 80, git_cache: GitStatusCache | None = None) -> list[str]:
    text, count = compose_header(state, width, git_cache, PLAIN_THEME)
    lines = text.split("\n")
    assert len(lines) == count
    return [ANSI_ESCAPE_RE.sub("", line) for line in lines]


class HeaderLayoutTests(unittest.TestCase):
    def test_header_always_has_four_lines(self) -> None:
        for state in (_state(), _state(selected=False), _state(error_text="")):
            text, count = compose_header(state, 80, None, PLAIN_THEME)
            self.assertEqual(count, 4)
            self.assertEqual(len(text.split("\n")), 4)

    def test_multiline_error_stays_on_one_line(self) -> None:
        lines = _lines(_state(error_text="first\nsecond"))
        self.assertEqual(len(lines), 4)
        self.assertEqual(lines[3], "first second")

    def test_path_line_right_aligns_help_hint(self) -> None:
        line = _lines(_state(), width=60)[0]
        self.assertTrue(line.startswith("> /repo/a.txt"))
        self.assertTrue(line.endswith(HELP_HINT))
        self.assertEqual(display_width(line), 60)

    def test_hint_is_dropped_when_there_is_no_room(self) -> None:
        line = _lines(_state(), width=20)[0]
        self.assertNotIn("Press", line)
        self.assertEqual(line, "> /repo/a.txt")

    def test_no_selection_shows_current_directory_placeholder(self) -> None:
        lines = _lines(_state(selected=False))
        self.assertTrue(lines[0].startswith("> /repo/..."))
        self.assertEqual(lines[1], "-- │ -- │ 0 B")


class HeaderInfoTests(unittest.TestCase):
    def test_info_line_has_permissions_mtime_and_size(self) -> None:
        expected_time = time.strftime(MTIME_FORMAT, time.localtime(0.0))
        self.assertEqual(_lines(_state())[1], f"-rw-r--r-- │ {expected_time} │ 100 B")

    def test_operation_bar_shows_operation_and_marked_path(self) -> None:
        state = _state(operation=OperationBuffer(label="move"))
        state.tree.marked = state.tree.selected
        self.assertEqual(_lines(state)[2], ": move [/repo/a.txt]")

    def test_operation_bar_shows_input_buffer_in_input_mode(self) -> None:
        state = _state(operation=OperationBuffer(label="rename", takes_input=True), input_text="b.txt")
        self.assertEqual(_lines(state)[2], ": rename │ b.txt │")

    def test_error_line_is_verbatim_and_present_when_empty(self) -> None:
        self.assertEqual(_lines(_state(error_text="permission denied"))[3], "permission denied")
        self.assertEqual(_lines(_state())[3], "")

    def test_newlines_in_operation_bar_fields_are_escaped(self) -> None:
        state = _state(
            operation=OperationBuffer(label="re\nname", takes_input=True),
            input_text="x\ny",
        )
        state.tree.marked = Node(name="a\nb", path=Path("/repo/a\nb"))

        text, count = compose_header(state, 80, None, PLAIN_THEME)

        lines = text.split("\n")
        self.assertEqual(count, 4)
        self.assertEqual(len(lines), 4)
        self.assertEqual(lines[2], ": re\\x0aname [/repo/a\\x0ab] │ x\\x0ay │")

    def test_control_bytes_in_error_are_escaped(self) -> None:
        self.assertEqual(_lines(_state(error_text="bad\x1b[2J\tpath"))[3], "bad\\x1b[2J\\x09path")


class HeaderGitTests(unittest.TestCase):
    def _cache(self, porcelain: str) -> GitStatusCache:
        snapshot = GitStatusSnapshot(repo_root=Path("/repo"), entries=parse_porcelain_status(porcelain))
        cache = GitStatusCache(fetch=lambda _path: snapshot)
        cache.refresh(Path("/repo"))
        return cache

    def test_selected_path_gets_long_badge(self) -> None:
        line = _lines(_state(), git_cache=self._cache("MM a.txt\0"))[0]
        self.assertTrue(line.startswith("> /repo/a.txt [Staged]"))

    def test_untracked_badge(self) -> None:
        line = _lines(_state(), git_cache=self._cache("?? a.txt\0"))[0]
        self.assertTrue(line.startswith("> /repo/a.txt [Untracked]"))

    def test_git_error_shown_when_state_has_no_error(self) -> None:
        def failing(_path: Path) -> GitStatusSnapshot:
            raise GitStatusError("git executable not found")

        cache = GitStatusCache(fetch=failing)
        cache.refresh(Path("/repo"))

        self.assertEqual(_lines(_state(), git_cache=cache)[3], "Git status error: git executable not found")
        self.assertEqual(_lines(_state(error_text="other"), git_cache=cache)[3], "other")


if __name__ == "__main__":
    unittest.main()
