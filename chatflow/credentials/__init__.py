"""API key lifecycle — OS vault storage and remote validation."""

from chatflow.credentials.validation import validate_api_key
from chatflow.credentials.vault import ApiKeyVault

__all__ = [
    "ApiKeyVault",
    "validate_api_key",
]
