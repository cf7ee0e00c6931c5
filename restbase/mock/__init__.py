"""Mock backend for local development and tests."""

from restbase.mock.backend import VALID_PASSWORD, create_mock_app

__all__ = ["VALID_PASSWORD", "create_mock_app"]
