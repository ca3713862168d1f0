"""Tests for top-level package lazy exports."""

from __future__ import annotations

import unittest

import mahoraga


class PackageExportTests(unittest.TestCase):
    """Ensure __getattr__ and exported symbols behave as expected."""

    def test_lazy_exports_resolve_known_symbols(self) -> None:
        self.assertTrue(callable(mahoraga.reduce))
        self.assertTrue(callable(mahoraga.create_provider))
        self.assertTrue(callable(mahoraga.filter_commands))
        self.assertTrue(callable(mahoraga.is_configured))
        self.assertIsNotNone(mahoraga.Config)
        self.assertIsNotNone(mahoraga.ConfigStore)
        self.assertIsNotNone(mahoraga.SessionState)
        self.assertIsNotNone(mahoraga.AnalysisResult)
        self.assertIsNotNone(mahoraga.MahoragaError)
        self.assertEqual(len(mahoraga.COMMANDS), 4)

    def test_unknown_symbol_raises_attribute_error(self) -> None:
        with self.assertRaises(AttributeError):
            getattr(mahoraga, "THIS_DOES_NOT_EXIST")

    def test_version_is_non_empty(self) -> None:
        self.assertTrue(mahoraga.get_version())


if __name__ == "__main__":
    unittest.main()
