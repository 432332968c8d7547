"""Application services shared by the HTTP routes and scripts."""

from flask import current_app

from .credentials import CredentialManager


def get_credential_manager() -> CredentialManager:
    """Return the manager the application factory attached to the current app."""

    return current_app.extensions["credential_manager"]


__all__ = ["CredentialManager", "get_credential_manager"]
