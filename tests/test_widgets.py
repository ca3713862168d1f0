"""Unit tests for widget text builders."""

from __future__ import annotations

import unittest

from mahoraga.commands import COMMANDS, filter_commands
from mahoraga.providers.base import AnalysisResult
from mahoraga.theme import COLORS, score_color

try:
    from mahoraga.widgets.banner import Banner
    from mahoraga.widgets.command_bar import MAIN_HINTS, SETTINGS_HINTS, CommandBar
    from mahoraga.widgets.feedback import (
        ALL_CLEAR_MESSAGE,
        build_result_text,
        render_score_bar,
    )
    from mahoraga.widgets.notice import build_notice_text
    from mahoraga.widgets.prompt_input import build_palette_text
except ModuleNotFoundError:
    Banner = None  # type: ignore[assignment,misc]
    CommandBar = None  # type: ignore[assignment,misc]
    build_result_text = None  # type: ignore[assignment]
    render_score_bar = None  # type: ignore[assignment]
    build_notice_text = None  # type: ignore[assignment]
    build_palette_text = None  # type: ignore[assignment]


def _styles(text: object) -> list[str]:
    return [str(span.style) for span in text.spans]  # type: ignore[attr-defined]


class ScoreColorTests(unittest.TestCase):
    def test_bands(self) -> None:
        self.assertEqual(score_color(1.0), COLORS["success"])
        self.assertEqual(score_color(0.8), COLORS["success"])
        self.assertEqual(score_color(0.79), COLORS["primary"])
        self.assertEqual(score_color(0.5), COLORS["primary"])
        self.assertEqual(score_color(0.49), COLORS["error"])
        self.assertEqual(score_color(0.0), COLORS["error"])


@unittest.skipIf(render_score_bar is None, "textual is not installed")
class ScoreBarTests(unittest.TestCase):
    def test_bar_is_always_twenty_cells(self) -> None:
        for score in (0.0, 0.33, 0.5, 0.72, 1.0):
            with self.subTest(score=score):
                filled, empty = render_score_bar(score)
                self.assertEqual(len(filled) + len(empty), 20)

    def test_filled_cells_follow_score(self) -> None:
        self.assertEqual(render_score_bar(0.0), ("", "░" * 20))
        self.assertEqual(render_score_bar(1.0), ("█" * 20, ""))
        self.assertEqual(render_score_bar(0.72), ("█" * 14, "░" * 6))


@unittest.skipIf(build_result_text is None, "textual is not installed")
class ResultTextTests(unittest.TestCase):
    def test_score_line_with_two_decimals(self) -> None:
        text = build_result_text(AnalysisResult(score=0.72))
        first_line = text.plain.splitlines()[0]
        self.assertEqual(first_line, "Score: " + "█" * 14 + "░" * 6 + " 0.72")

    def test_sections_in_order(self) -> None:
        result = AnalysisResult(
            score=0.72,
            improvements=("Name the output format",),
            unclear_parts=("'this'",),
        )
        plain = build_result_text(result).plain
        self.assertLess(plain.index("Areas to Improve:"), plain.index("Unclear Parts:"))
        self.assertIn("  - Name the output format", plain)
        self.assertIn("  - 'this'", plain)
        self.assertNotIn(ALL_CLEAR_MESSAGE, plain)

    def test_only_unclear_parts(self) -> None:
        plain = build_result_text(
            AnalysisResult(score=0.3, unclear_parts=("it",))
        ).plain
        self.assertNotIn("Areas to Improve:", plain)
        self.assertIn("Unclear Parts:", plain)

    def test_all_clear_message_when_no_feedback(self) -> None:
        text = build_result_text(AnalysisResult(score=0.95))
        self.assertIn(ALL_CLEAR_MESSAGE, text.plain)
        self.assertIn(COLORS["success"], _styles(text))

    def test_low_score_uses_error_colour(self) -> None:
        text = build_result_text(AnalysisResult(score=0.2, improvements=("x",)))
        self.assertIn(COLORS["error"], _styles(text))
        self.assertNotIn(COLORS["success"], _styles(text))


@unittest.skipIf(build_palette_text is None, "textual is not installed")
class PaletteTextTests(unittest.TestCase):
    def test_lists_every_command_with_description(self) -> None:
        plain = build_palette_text(list(COMMANDS), 0).plain
        lines = plain.splitlines()
        self.assertEqual(len(lines), len(COMMANDS))
        for line, command in zip(lines, COMMANDS):
            self.assertTrue(line.startswith(command.name))
            self.assertTrue(line.endswith(command.description))

    def test_selected_row_is_highlighted(self) -> None:
        commands = filter_commands("/")
        text = build_palette_text(commands, 2)
        highlighted = [
            text.plain[span.start : span.end]
            for span in text.spans
            if str(span.style) == COLORS["primary"]
        ]
        self.assertEqual([row.strip() for row in highlighted], [commands[2].name])


@unittest.skipIf(Banner is None, "textual is not installed")
class StaticTextTests(unittest.TestCase):
    def test_banner_shows_name_and_version(self) -> None:
        lines = Banner.build_text("1.0.0").plain.splitlines()
        self.assertEqual(len(lines), 3)
        self.assertIn("MAHORAGA", lines[1])
        self.assertTrue(lines[2].endswith("v1.0.0"))
        self.assertTrue(lines[1].startswith("◯ ◎ ◯"))

    def test_notice_lists_all_fields(self) -> None:
        plain = build_notice_text().plain
        self.assertTrue(plain.startswith("Configuration Required"))
        self.assertIn("/settings", plain)
        for name in ("url", "apiKey", "deployment", "apiVersion"):
            self.assertIn(f"  - {name}: ", plain)

    def test_command_bar_hints(self) -> None:
        self.assertIn("/settings", MAIN_HINTS)
        self.assertIn("Ctrl+C", MAIN_HINTS)
        self.assertIn("Esc", SETTINGS_HINTS)


if __name__ == "__main__":
    unittest.main()
