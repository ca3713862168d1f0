"""Tests for the domain exception hierarchy."""

from __future__ import annotations

import unittest

from mahoraga.exceptions import (
    ConfigurationError,
    MahoragaError,
    ProviderError,
    ProviderProtocolError,
    ProviderTransportError,
)


class ExceptionHierarchyTests(unittest.TestCase):
    def test_all_domain_errors_share_base(self) -> None:
        for error_type in (
            ConfigurationError,
            ProviderError,
            ProviderProtocolError,
            ProviderTransportError,
        ):
            with self.subTest(error_type=error_type.__name__):
                self.assertTrue(issubclass(error_type, MahoragaError))
                self.assertTrue(issubclass(error_type, RuntimeError))

    def test_provider_failures_are_provider_errors(self) -> None:
        self.assertTrue(issubclass(ProviderTransportError, ProviderError))
        self.assertTrue(issubclass(ProviderProtocolError, ProviderError))
        self.assertFalse(issubclass(ConfigurationError, ProviderError))

    def test_message_is_preserved(self) -> None:
        self.assertEqual(str(ProviderError("No response from Azure API")), "No response from Azure API")


if __name__ == "__main__":
    unittest.main()
