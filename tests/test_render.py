"""Tests for dashboard layout: sections, limits, shortcuts and degradation.

Most cases compose documents from hand-built sources with the plain theme so
assertions can compare visible text directly.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from projdash.actions import ActionKind
from projdash.capabilities import Capabilities
from projdash.config import DashboardSettings
from projdash.git_status import ChangeEntry, ChangeType, GitStatusSnapshot
from projdash.metadata import METADATA_FILENAME, ProjectMetadata
from projdash.render import (
    EMPTY_RECENT_TEXT,
    FOOTER_TEXT,
    MORE_TEXT,
    SECTION_ACTIONS,
    SECTION_GIT,
    SECTION_RECENT,
    DashboardRenderer,
    DashboardSources,
    abbreviate_path,
    render_dashboard,
)
from projdash.ui_theme import DEFAULT_THEME, PLAIN_THEME


def _snapshot(staged: int = 0, unstaged: int = 0, untracked: int = 0) -> GitStatusSnapshot:
    return GitStatusSnapshot(
        branch="main",
        staged=tuple(ChangeEntry(ChangeType.MODIFIED, f"staged{index}.py") for index in range(staged)),
        unstaged=tuple(ChangeEntry(ChangeType.DELETED, f"unstaged{index}.py") for index in range(unstaged)),
        untracked=tuple(f"new{index}.txt" for index in range(untracked)),
    )


class ComposeDocumentTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve() / "orbit"
        self.root.mkdir()
        self.settings = DashboardSettings(recent_files_path=self.root / "no-such-list")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _compose(self, *, git=None, recent=(), metadata=None, capabilities=None, settings=None):
        sources = DashboardSources(root=self.root, git=git, recent=tuple(recent), metadata=metadata)
        renderer = DashboardRenderer(capabilities or Capabilities(), settings or self.settings, PLAIN_THEME)
        return renderer.compose(sources)

    def _activatable(self, document, section: str):
        return [line for line in document.section_lines(section) if line.activatable]

    def test_title_block_uses_directory_name_without_metadata(self) -> None:
        document = self._compose()
        self.assertEqual(document.lines[0].plain, "orbit")
        self.assertTrue(document.lines[0].centered)
        self.assertEqual(document.lines[1].plain, abbreviate_path(self.root))
        self.assertEqual(document.lines[2].plain, "")
        self.assertEqual(document.content_start, 3)

    def test_title_block_prefers_metadata_name_and_shows_description(self) -> None:
        document = self._compose(metadata=ProjectMetadata(name="Orbit", description="Satellite tracker"))
        self.assertEqual(document.lines[0].plain, "Orbit")
        self.assertEqual(document.lines[2].plain, "Satellite tracker")
        self.assertEqual(document.content_start, 4)

    def test_without_git_snapshot_git_section_is_omitted(self) -> None:
        document = self._compose()
        self.assertNotIn(SECTION_GIT, document.sections)
        self.assertEqual(document.section_lines(SECTION_GIT), [])
        self.assertNotIn("g", document.shortcuts)
        self.assertIn(SECTION_RECENT, document.sections)
        self.assertIn(SECTION_ACTIONS, document.sections)

    def test_git_rows_fill_by_priority_and_respect_limit(self) -> None:
        document = self._compose(git=_snapshot(staged=3, unstaged=0, untracked=7))
        file_rows = [
            line for line in self._activatable(document, SECTION_GIT) if line.action.kind is ActionKind.OPEN_FILE
        ]
        self.assertEqual(len(file_rows), 5)
        self.assertEqual(
            [line.plain for line in file_rows],
            [
                "  staged    M staged0.py",
                "  staged    M staged1.py",
                "  staged    M staged2.py",
                "  untracked ? new0.txt",
                "  untracked ? new1.txt",
            ],
        )
        self.assertEqual(file_rows[0].action.path, self.root / "staged0.py")

        plain = [line.plain for line in document.section_lines(SECTION_GIT)]
        self.assertEqual(plain[0], "Git: main")
        self.assertIn("  3 staged, 0 unstaged, 7 untracked", plain)
        more = self._activatable(document, SECTION_GIT)[-1]
        self.assertEqual(more.plain, f"  {MORE_TEXT}")
        self.assertIs(more.action.kind, ActionKind.SHOW_VCS_FULL)

    def test_no_more_row_when_total_fits_limit(self) -> None:
        document = self._compose(git=_snapshot(staged=1, unstaged=2, untracked=2))
        kinds = [line.action.kind for line in self._activatable(document, SECTION_GIT)]
        self.assertEqual(kinds, [ActionKind.OPEN_FILE] * 5)
        self.assertIn("  1 staged, 2 unstaged, 2 untracked", [line.plain for line in document.lines])

    def test_unstaged_rows_come_between_staged_and_untracked(self) -> None:
        document = self._compose(git=_snapshot(staged=1, unstaged=1, untracked=1))
        labels = [line.plain.split()[0] for line in self._activatable(document, SECTION_GIT)]
        self.assertEqual(labels, ["staged", "unstaged", "untracked"])

    def test_clean_tree_shows_heading_and_summary_only(self) -> None:
        document = self._compose(git=_snapshot())
        self.assertEqual(self._activatable(document, SECTION_GIT), [])
        self.assertEqual(document.sections[SECTION_GIT], document.content_start + 1)
        self.assertEqual(document.lines[document.sections[SECTION_GIT]].plain, "  0 staged, 0 unstaged, 0 untracked")

    def test_empty_recent_list_shows_placeholder(self) -> None:
        document = self._compose()
        self.assertEqual(self._activatable(document, SECTION_RECENT), [])
        self.assertIn(f"  {EMPTY_RECENT_TEXT}", [line.plain for line in document.section_lines(SECTION_RECENT)])

    def test_recent_rows_show_relative_paths_with_numeric_shortcuts(self) -> None:
        recent = [self.root / "src" / "main.py", self.root / "README.md"]
        document = self._compose(recent=recent)
        rows = self._activatable(document, SECTION_RECENT)
        self.assertEqual([line.plain for line in rows], ["  [1] src/main.py", "  [2] README.md"])
        self.assertEqual(rows[0].action.path, recent[0])
        self.assertEqual(document.shortcuts["1"].line, document.lines.index(rows[0]))

    def test_numeric_shortcuts_stop_after_nine_rows(self) -> None:
        recent = [self.root / f"file{index:02d}.py" for index in range(12)]
        document = self._compose(recent=recent, settings=DashboardSettings(recent_files_limit=12))
        rows = self._activatable(document, SECTION_RECENT)
        self.assertEqual(len(rows), 12)
        self.assertEqual([line.shortcut for line in rows[:9]], [str(number) for number in range(1, 10)])
        self.assertEqual([line.shortcut for line in rows[9:]], [None, None, None])
        self.assertEqual(sorted(key for key in document.shortcuts if key.isdigit()), [str(n) for n in range(1, 10)])

    def test_quick_actions_without_optional_tools(self) -> None:
        document = self._compose()
        rows = self._activatable(document, SECTION_ACTIONS)
        self.assertEqual([line.shortcut for line in rows], ["f", "s", "d", "e"])
        self.assertEqual(rows[1].plain, "  [s] Search (regexp)")
        self.assertIn("(projdash -a find)", rows[0].plain)
        self.assertNotIn("m", document.shortcuts)

    def test_quick_actions_with_fast_search_and_vcs_ui(self) -> None:
        document = self._compose(capabilities=Capabilities(has_fast_search=True, has_vcs_ui=True))
        rows = self._activatable(document, SECTION_ACTIONS)
        self.assertEqual([line.shortcut for line in rows], ["f", "s", "m", "d", "e"])
        self.assertIn("Search (ripgrep)", rows[1].plain)
        self.assertIn("(projdash -a search)", rows[1].plain)
        self.assertIs(rows[2].action.kind, ActionKind.SHOW_VCS_STATUS)
        self.assertEqual(
            [line.action.kind for line in rows],
            [
                ActionKind.FIND_FILE,
                ActionKind.LAUNCH_SEARCH,
                ActionKind.SHOW_VCS_STATUS,
                ActionKind.OPEN_DIRECTORY,
                ActionKind.LAUNCH_SHELL,
            ],
        )

    def test_section_jump_shortcuts_point_at_section_content(self) -> None:
        document = self._compose(git=_snapshot(staged=1))
        for key, section in (("g", SECTION_GIT), ("r", SECTION_RECENT), ("a", SECTION_ACTIONS)):
            with self.subTest(section=section):
                self.assertEqual(document.shortcuts[key].line, document.sections[section])
                heading = document.lines[document.sections[section] - 1]
                self.assertFalse(heading.activatable)

    def test_footer_is_last_centered_line(self) -> None:
        document = self._compose()
        self.assertEqual(document.lines[-1].plain, FOOTER_TEXT)
        self.assertTrue(document.lines[-1].centered)

    def test_shortcuts_are_unique_across_sections(self) -> None:
        recent = [self.root / f"file{index}.py" for index in range(10)]
        document = self._compose(
            git=_snapshot(staged=2, untracked=9),
            recent=recent,
            capabilities=Capabilities(has_fast_search=True, has_vcs_ui=True),
        )
        self.assertEqual(
            set(document.shortcuts),
            set("123456789") | set("grafsmde"),
        )

    def test_compose_is_idempotent(self) -> None:
        kwargs = dict(git=_snapshot(staged=2, untracked=4), recent=[self.root / "a.py"])
        first = self._compose(**kwargs)
        second = self._compose(**kwargs)
        self.assertEqual(first, second)

    def test_file_tags_are_added_when_icon_provider_is_available(self) -> None:
        document = self._compose(
            recent=[self.root / "main.py"],
            capabilities=Capabilities(has_icon_provider=True),
        )
        row = self._activatable(document, SECTION_RECENT)[0]
        self.assertEqual(row.plain, "  [1] pyth main.py")

    def test_colored_theme_keeps_plain_text_identical(self) -> None:
        sources = DashboardSources(root=self.root, git=_snapshot(staged=1), recent=(), metadata=None)
        colored = DashboardRenderer(Capabilities(), self.settings, DEFAULT_THEME).compose(sources)
        plain = DashboardRenderer(Capabilities(), self.settings, PLAIN_THEME).compose(sources)
        self.assertEqual(colored.plain_text(), plain.plain_text())
        self.assertNotEqual(colored.lines[0].text, plain.lines[0].text)


class RenderDashboardTests(unittest.TestCase):
    def test_malformed_metadata_renders_like_missing_metadata(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve() / "rocket"
            root.mkdir()
            settings = DashboardSettings(recent_files_path=root / "none")
            without = render_dashboard(root, settings, Capabilities(), PLAIN_THEME)
            (root / METADATA_FILENAME).write_text("this is = = not toml\n", encoding="utf-8")
            malformed = render_dashboard(root, settings, Capabilities(), PLAIN_THEME)

        self.assertEqual(without.lines[0].plain, "rocket")
        self.assertEqual(malformed.lines[0].plain, "rocket")

    def test_reads_recent_list_and_scopes_it_to_root(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp).resolve()
            root = base / "rocket"
            root.mkdir()
            recent_list = base / "recent"
            recent_list.write_text(f"{base / 'elsewhere.py'}\n{root / 'engine.py'}\n", encoding="utf-8")
            settings = DashboardSettings(recent_files_path=recent_list)
            document = render_dashboard(root, settings, Capabilities(), PLAIN_THEME)

        rows = [line.plain for line in document.section_lines(SECTION_RECENT) if line.activatable]
        self.assertEqual(rows, ["  [1] engine.py"])

    def test_git_is_not_queried_without_vcs_capability(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            settings = DashboardSettings(recent_files_path=root / "none")
            with mock.patch("projdash.render.get_status") as get_status_mock:
                document = render_dashboard(root, settings, Capabilities(has_vcs=False), PLAIN_THEME)
            get_status_mock.assert_not_called()
            self.assertNotIn(SECTION_GIT, document.sections)

    def test_git_snapshot_feeds_git_section(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            settings = DashboardSettings(recent_files_path=root / "none")
            with mock.patch("projdash.render.get_status", return_value=_snapshot(unstaged=1)):
                document = render_dashboard(root, settings, Capabilities(has_vcs=True), PLAIN_THEME)
            self.assertIn(SECTION_GIT, document.sections)
            self.assertIn("  unstaged  D unstaged0.py", [line.plain for line in document.lines])


if __name__ == "__main__":
    unittest.main()
