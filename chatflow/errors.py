"""Error taxonomy shared by the flow store, the vault and the commands.

Every failure surfaces as a ``ChatFlowError`` subclass whose ``str()`` is a
human-readable message suitable for showing in the UI.
"""

from __future__ import annotations


class ChatFlowError(Exception):
    """Base class for all errors reported to the UI layer."""


# -- Flow files ----------------------------------------------------------------


class IoError(ChatFlowError):
    """A flow file or directory could not be read or written."""


class ParseError(ChatFlowError):
    """File content is not valid JSON or does not match the flow schema."""


class SerializeError(ChatFlowError):
    """A flow file could not be encoded to JSON."""


# -- Credential vault ----------------------------------------------------------


class VaultError(ChatFlowError):
    """The OS credential store could not be opened or rejected the operation."""


class NotFoundError(ChatFlowError):
    """No API key is stored. An expected outcome, distinct from VaultError."""


# -- Key validation ------------------------------------------------------------


class InvalidCredentialError(ChatFlowError):
    """The remote API rejected the key (HTTP 401)."""


class ApiError(ChatFlowError):
    """The remote API answered with an unexpected status code."""

    def __init__(self, status: int, message: str | None = None) -> None:
        self.status = status
        super().__init__(message or f"API validation failed with status: {status}")


class NetworkError(ChatFlowError):
    """The endpoint could not be reached (DNS, TLS, refused, timeout)."""
