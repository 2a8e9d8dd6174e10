"""Tests for the cursor state machine over dashboard documents."""

from __future__ import annotations

import unittest
from pathlib import Path

from projdash import actions
from projdash.actions import ActionKind
from projdash.document import DashboardDocument
from projdash.navigation import NavigationController, NavigationError

ROOT = Path("/srv/project")


def _document(recent_count: int = 2) -> DashboardDocument:
    document = DashboardDocument(root=ROOT)
    document.add_line("Title", centered=True)
    document.add_line()
    document.content_start = document.line_count()
    document.add_line("Recent Files", section="recent")
    document.mark_section("recent", "r")
    for index in range(recent_count):
        document.add_line(
            f"  [{index + 1}] file{index}.py",
            action=actions.open_file(ROOT / f"file{index}.py"),
            shortcut=str(index + 1) if index < 9 else None,
            section="recent",
        )
    document.add_line()
    document.add_line("Quick Actions", section="actions")
    document.mark_section("actions", "a")
    document.add_line("  [e] Shell", action=actions.launch_shell(ROOT), shortcut="e", section="actions")
    document.add_line("q quit", centered=True)
    return document


class NavigationControllerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.documents = [_document()]
        self.controller = NavigationController(lambda: self.documents[-1])

    def test_requires_open_document(self) -> None:
        with self.assertRaises(NavigationError):
            self.controller.next_item()

    def test_open_places_cursor_after_title_block(self) -> None:
        document = self.controller.open()
        self.assertIs(self.controller.document, document)
        self.assertEqual(self.controller.cursor, document.content_start)

    def test_next_and_prev_visit_activatable_lines_without_wrapping(self) -> None:
        self.controller.open()
        visited = []
        while self.controller.next_item():
            visited.append(self.controller.cursor)
        self.assertEqual(visited, [3, 4, 7])
        self.assertFalse(self.controller.next_item())
        self.assertEqual(self.controller.cursor, 7)

        while self.controller.prev_item():
            pass
        self.assertEqual(self.controller.cursor, 3)
        self.assertFalse(self.controller.prev_item())

    def test_activate_returns_bound_action(self) -> None:
        self.controller.open()
        self.controller.next_item()
        action = self.controller.activate_item()
        self.assertIs(action.kind, ActionKind.OPEN_FILE)
        self.assertEqual(action.path, ROOT / "file0.py")

    def test_activate_on_plain_line_raises(self) -> None:
        self.controller.open()
        with self.assertRaisesRegex(NavigationError, "No action on this line"):
            self.controller.activate_item()

    def test_press_jump_moves_cursor_without_action(self) -> None:
        self.controller.open()
        self.assertIsNone(self.controller.press("a"))
        self.assertEqual(self.controller.cursor, 7)
        self.assertIsNone(self.controller.press("r"))
        self.assertEqual(self.controller.cursor, 3)

    def test_press_activation_returns_action_and_keeps_cursor(self) -> None:
        self.controller.open()
        action = self.controller.press("2")
        self.assertEqual(action.path, ROOT / "file1.py")
        self.assertEqual(self.controller.cursor, 2)
        self.assertIsNone(self.controller.press("z"))

    def test_refresh_keeps_cursor_and_clamps_to_shorter_document(self) -> None:
        self.documents.append(_document(recent_count=12))
        self.controller.open()
        self.controller.move_to(14)
        self.assertEqual(self.controller.cursor, 14)

        self.documents.append(_document(recent_count=2))
        self.controller.refresh()
        self.assertEqual(self.controller.cursor, self.controller.document.line_count() - 1)

    def test_refresh_keeps_cursor_when_document_is_unchanged(self) -> None:
        self.controller.open()
        self.controller.next_item()
        self.controller.next_item()
        self.controller.refresh()
        self.assertEqual(self.controller.cursor, 4)

    def test_move_to_clamps(self) -> None:
        self.controller.open()
        self.controller.move_to(-5)
        self.assertEqual(self.controller.cursor, 0)
        self.controller.move_to(500)
        self.assertEqual(self.controller.cursor, self.controller.document.line_count() - 1)


if __name__ == "__main__":
    unittest.main()
