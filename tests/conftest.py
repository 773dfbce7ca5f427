"""Shared test fixtures."""

import pytest
from keyring.backend import KeyringBackend
from keyring.errors import KeyringError, PasswordDeleteError, PasswordSetError

from chatflow.credentials.vault import ApiKeyVault
from chatflow.flow.store import FlowStore


class MemoryKeyring(KeyringBackend):
    """Process-local keyring backend so tests never touch the OS vault."""

    priority = 1

    def __init__(self) -> None:
        super().__init__()
        self.entries: dict[tuple[str, str], str] = {}

    def get_password(self, service: str, username: str) -> str | None:
        return self.entries.get((service, username))

    def set_password(self, service: str, username: str, password: str) -> None:
        self.entries[(service, username)] = password

    def delete_password(self, service: str, username: str) -> None:
        try:
            del self.entries[(service, username)]
        except KeyError:
            raise PasswordDeleteError("Password not found") from None


@pytest.fixture
def memory_keyring() -> MemoryKeyring:
    return MemoryKeyring()


@pytest.fixture
def vault(memory_keyring):
    """An ApiKeyVault in an isolated namespace, installed as the singleton."""
    ApiKeyVault._reset()
    v = ApiKeyVault(service="ChatFlowTest", account="test_api_key", backend=memory_keyring)
    ApiKeyVault._instance = v
    yield v
    ApiKeyVault._reset()


@pytest.fixture
def store():
    """A FlowStore with fixed version/title, installed as the singleton."""
    FlowStore._reset()
    s = FlowStore(version="1.0.0", default_title="New Conversation")
    FlowStore._instance = s
    yield s
    FlowStore._reset()


class BrokenKeyring(MemoryKeyring):
    """Backend that behaves like a locked platform keystore."""

    def get_password(self, service: str, username: str) -> str | None:
        raise KeyringError("keystore is locked")

    def set_password(self, service: str, username: str, password: str) -> None:
        raise PasswordSetError("write rejected")

    def delete_password(self, service: str, username: str) -> None:
        raise KeyringError("keystore is locked")


@pytest.fixture
def broken_keyring() -> BrokenKeyring:
    return BrokenKeyring()
