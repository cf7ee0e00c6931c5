"""Typed API services built on the client layer."""

from restbase.services.auth_client import AuthClient
from restbase.services.auth_repository import AuthRepository

__all__ = ["AuthClient", "AuthRepository"]
