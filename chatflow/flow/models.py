"""Data models for the .flow file format."""

from __future__ import annotations

import hashlib
import time
import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

I32_MIN, I32_MAX = -(2**31), 2**31 - 1
I64_MIN, I64_MAX = -(2**63), 2**63 - 1


class _FlowModel(BaseModel):
    # Unknown keys are tolerated on read and dropped on rewrite.
    model_config = ConfigDict(extra="ignore")


class FlowMessage(_FlowModel):
    """A single message in a conversation. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(strict=True)
    timestamp: int = Field(strict=True, ge=I64_MIN, le=I64_MAX)  # unix seconds
    sender: str = Field(strict=True)  # "human" or "assistant" in practice
    content: str = Field(strict=True)
    metadata: Any | None = None


class ConversationSettings(_FlowModel):
    """Per-conversation model parameters."""

    model: str = Field(strict=True)
    temperature: float = Field(strict=True, allow_inf_nan=False)
    max_tokens: int = Field(strict=True, ge=I32_MIN, le=I32_MAX)
    system_prompt: str | None = Field(default=None, strict=True)


class FlowConversation(_FlowModel):
    """A conversation: metadata plus an ordered message list.

    The UI mutates ``messages`` and ``settings`` in place. Nothing here
    refreshes ``updated``; callers own that.
    """

    id: str = Field(strict=True)
    title: str = Field(strict=True)
    created: int = Field(strict=True, ge=I64_MIN, le=I64_MAX)
    updated: int = Field(strict=True, ge=I64_MIN, le=I64_MAX)
    messages: list[FlowMessage]
    settings: ConversationSettings | None = None


class FlowFile(_FlowModel):
    """The on-disk unit: one conversation plus a format version tag.

    ``checksum`` is carried through untouched. Read and write never compute
    or verify it; see :func:`compute_checksum` for callers that want one.
    """

    version: str = Field(strict=True)
    conversation: FlowConversation
    checksum: str | None = Field(default=None, strict=True)


def make_conversation(title: str) -> FlowConversation:
    """Build an empty conversation with a fresh UUID and matching timestamps."""
    now = int(time.time())
    return FlowConversation(
        id=str(uuid.uuid4()),
        title=title,
        created=now,
        updated=now,
        messages=[],
        settings=None,
    )


def compute_checksum(conversation: FlowConversation) -> str:
    """SHA-256 hex digest of the conversation's compact JSON encoding."""
    payload = conversation.model_dump_json().encode("utf-8")
    return hashlib.sha256(payload).hexdigest()
