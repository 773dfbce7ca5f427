"""ApiKeyVault — the single API key slot in the OS credential store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from chatflow.config import settings
from chatflow.errors import NotFoundError, VaultError

if TYPE_CHECKING:
    from keyring.backend import KeyringBackend

logger = logging.getLogger(__name__)


class ApiKeyVault:
    """One secret, keyed by a fixed service + account pair.

    Singleton accessed via ``ApiKeyVault.get()``.  Pass an explicit
    *service*/*account* (and optionally a keyring *backend*) for test
    isolation.

    Nothing is cached: every call resolves the keyring entry again, so a
    key changed outside the app (e.g. in Keychain Access) is picked up.
    """

    _instance: ApiKeyVault | None = None

    def __init__(
        self,
        service: str | None = None,
        account: str | None = None,
        backend: KeyringBackend | None = None,
    ) -> None:
        self._service = service or settings.keyring_service
        self._account = account or settings.keyring_account
        self._backend = backend

    @classmethod
    def get(cls) -> ApiKeyVault:
        """Return the shared ApiKeyVault instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def _reset(cls) -> None:
        """Clear the singleton (for tests)."""
        cls._instance = None

    @property
    def service(self) -> str:
        return self._service

    @property
    def account(self) -> str:
        return self._account

    def _keyring(self) -> KeyringBackend:
        try:
            return self._backend or keyring.get_keyring()
        except KeyringError as exc:
            msg = f"Failed to open credential store: {exc}"
            raise VaultError(msg) from exc

    # -- Operations ------------------------------------------------------------

    def save(self, api_key: str) -> None:
        """Store *api_key*, replacing any existing value."""
        backend = self._keyring()
        try:
            backend.set_password(self._service, self._account, api_key)
        except KeyringError as exc:
            logger.warning("Saving API key failed: %s", exc)
            msg = f"Failed to save API key: {exc}"
            raise VaultError(msg) from exc
        logger.info("API key saved (%s/%s)", self._service, self._account)

    def get_key(self) -> str:
        """Return the stored key.

        Raises ``NotFoundError`` if none is stored and ``VaultError`` for any
        other failure.
        """
        backend = self._keyring()
        try:
            value = backend.get_password(self._service, self._account)
        except KeyringError as exc:
            logger.warning("Reading API key failed: %s", exc)
            msg = f"Failed to retrieve API key: {exc}"
            raise VaultError(msg) from exc
        if value is None:
            msg = "No API key found"
            raise NotFoundError(msg)
        return value

    def has_key(self) -> bool:
        """True if a key is stored. Performs a full read."""
        try:
            self.get_key()
        except NotFoundError:
            return False
        return True

    def delete(self) -> None:
        """Remove the stored key. Succeeds if there is nothing to remove."""
        backend = self._keyring()
        try:
            backend.delete_password(self._service, self._account)
        except PasswordDeleteError:
            logger.debug("No API key to delete (%s/%s)", self._service, self._account)
            return
        except KeyringError as exc:
            logger.warning("Deleting API key failed: %s", exc)
            msg = f"Failed to delete API key: {exc}"
            raise VaultError(msg) from exc
        logger.info("API key deleted (%s/%s)", self._service, self._account)
