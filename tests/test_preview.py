"""Content preview: bounded reads, binary detection, and line limiting."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from ftree.render.preview import (
    BINARY_CONTENT_PLACEHOLDER,
    decode_text,
    preview_content,
    preview_lines,
)
from ftree.tree import Node, TreeSnapshot
from ftree.ui_theme import DEFAULT_THEME, PLAIN_THEME


def _tree_for(path: Path | None) -> TreeSnapshot:
    root = Node(name="root", path=Path("/"), is_dir=True)
    selected = None
    if path is not None:
        selected = Node(name=path.name, path=path, is_dir=path.is_dir())
        root.children = [selected]
    return TreeSnapshot(root=root, current_dir=root, selected=selected)


class PreviewLinesTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_text_is_limited_to_height(self) -> None:
        target = self.root / "notes.txt"
        target.write_text("\n".join(f"line {idx}" for idx in range(20)), encoding="utf-8")

        lines = preview_lines(_tree_for(target), height=5)

        self.assertEqual(lines, [f"line {idx}" for idx in range(5)])

    def test_short_text_keeps_all_lines(self) -> None:
        target = self.root / "short.txt"
        target.write_text("a\nb\n", encoding="utf-8")

        self.assertEqual(preview_lines(_tree_for(target), height=10), ["a", "b", ""])

    def test_zero_or_negative_height_yields_no_text_lines(self) -> None:
        target = self.root / "short.txt"
        target.write_text("a\nb\n", encoding="utf-8")

        self.assertEqual(preview_lines(_tree_for(target), height=0), [])
        self.assertEqual(preview_lines(_tree_for(target), height=-3), [])

    def test_binary_content_gets_placeholder(self) -> None:
        target = self.root / "blob.bin"
        target.write_bytes(b"\x89PNG\r\n\x1a\n\xff\xfe\x00")

        self.assertEqual(preview_lines(_tree_for(target), height=10), [BINARY_CONTENT_PLACEHOLDER])

    def test_read_is_capped(self) -> None:
        target = self.root / "big.txt"
        target.write_text("x" * 50, encoding="utf-8")

        self.assertEqual(preview_lines(_tree_for(target), height=10, max_bytes=8), ["x" * 8])

    def test_multibyte_sequence_cut_by_cap_is_not_binary(self) -> None:
        target = self.root / "utf8.txt"
        target.write_text("ab€", encoding="utf-8")  # euro sign is 3 bytes

        self.assertEqual(preview_lines(_tree_for(target), height=10, max_bytes=4), ["ab"])

    def test_missing_selection_renders_error_line(self) -> None:
        self.assertEqual(preview_lines(_tree_for(None), height=10), ["Error: no child selected"])

    def test_unreadable_file_renders_error_line(self) -> None:
        lines = preview_lines(_tree_for(self.root / "missing.txt"), height=10)

        self.assertEqual(len(lines), 1)
        self.assertTrue(lines[0].startswith("Error: "))
        self.assertIn("missing.txt", lines[0])

    def test_directory_selection_renders_error_line(self) -> None:
        lines = preview_lines(_tree_for(self.root), height=10)

        self.assertEqual(len(lines), 1)
        self.assertTrue(lines[0].startswith("Error: "))

    def test_control_characters_are_escaped_and_crlf_stripped(self) -> None:
        target = self.root / "ctrl.txt"
        target.write_bytes(b"one\r\ntwo\x1b[2J\r\n")

        self.assertEqual(preview_lines(_tree_for(target), height=10), ["one", "two\\x1b[2J", ""])


class DecodeTextTests(unittest.TestCase):
    def test_invalid_sequence_in_middle_is_binary_even_when_truncated(self) -> None:
        self.assertIsNone(decode_text(b"a\xffbc", truncated=True))

    def test_incomplete_tail_is_binary_when_not_truncated(self) -> None:
        self.assertIsNone(decode_text("€".encode("utf-8")[:2], truncated=False))

    def test_incomplete_tail_is_dropped_when_truncated(self) -> None:
        self.assertEqual(decode_text(b"ok" + "€".encode("utf-8")[:2], truncated=True), "ok")


class PreviewContentTests(unittest.TestCase):
    def test_plain_theme_leaves_text_unstyled(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "a.txt"
            target.write_text("hello\n", encoding="utf-8")
            lines = preview_content(_tree_for(target), 3, theme=PLAIN_THEME)
        self.assertEqual(lines, ["hello", ""])

    def test_placeholders_use_content_style(self) -> None:
        lines = preview_content(_tree_for(None), 3, theme=DEFAULT_THEME, syntax_style="monokai")
        self.assertEqual(lines, [DEFAULT_THEME.paint(DEFAULT_THEME.content_preview, "Error: no child selected")])

    def test_syntax_style_highlights_source_and_keeps_line_count(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "mod.py"
            target.write_text("def f():\n    return 1\n", encoding="utf-8")
            lines = preview_content(_tree_for(target), 10, syntax_style="monokai")
        self.assertEqual(len(lines), 3)
        self.assertIn("\x1b[", lines[0])
        self.assertIn("def", lines[0])


if __name__ == "__main__":
    unittest.main()
