"""Operations exposed to the UI layer.

One function per command. Arguments and return values are plain Python
values or flow models; failures raise ``ChatFlowError`` subclasses whose
message is meant to be shown to the user.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from chatflow.config import settings
from chatflow.credentials import ApiKeyVault, validate_api_key
from chatflow.errors import IoError, ParseError
from chatflow.flow import FlowConversation, FlowFile, FlowStore

logger = logging.getLogger(__name__)


# -- Flow files ----------------------------------------------------------------


def load_flow_file(path: str | Path) -> FlowFile:
    return FlowStore.get().read(path)


def save_flow_file(path: str | Path, flow_file: FlowFile | dict[str, Any]) -> None:
    """Write *flow_file*, accepting the JSON object form the UI sends."""
    if isinstance(flow_file, dict):
        try:
            flow_file = FlowFile.model_validate(flow_file)
        except ValidationError as exc:
            msg = f"Failed to parse flow file: {exc}"
            raise ParseError(msg) from exc
    FlowStore.get().write(path, flow_file)


def create_new_conversation() -> FlowConversation:
    return FlowStore.get().new_conversation()


def read_directory(path: str | Path) -> list[str]:
    """Names of the entries in *path*, sorted."""
    try:
        return sorted(entry.name for entry in Path(path).iterdir())
    except OSError as exc:
        msg = f"Failed to read directory: {exc}"
        raise IoError(msg) from exc


def remove_file(path: str | Path) -> None:
    """Delete a file. A file that is already gone counts as removed."""
    try:
        Path(path).unlink()
    except FileNotFoundError:
        logger.debug("remove_file: %s already absent", path)
    except OSError as exc:
        msg = f"Failed to remove file: {exc}"
        raise IoError(msg) from exc


# -- API key -------------------------------------------------------------------


def save_api_key(api_key: str) -> None:
    ApiKeyVault.get().save(api_key)


def get_api_key() -> str:
    return ApiKeyVault.get().get_key()


def has_api_key() -> bool:
    return ApiKeyVault.get().has_key()


def delete_api_key() -> None:
    ApiKeyVault.get().delete()


async def validate_api_connection(api_key: str, endpoint: str | None = None) -> bool:
    """Check *api_key* against *endpoint* (the configured API by default)."""
    return await validate_api_key(api_key, endpoint or settings.api_endpoint)
