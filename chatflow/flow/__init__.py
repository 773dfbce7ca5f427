"""Flow files — conversation models and their JSON persistence."""

from chatflow.flow.models import (
    ConversationSettings,
    FlowConversation,
    FlowFile,
    FlowMessage,
    compute_checksum,
)
from chatflow.flow.store import FlowStore

__all__ = [
    "ConversationSettings",
    "FlowConversation",
    "FlowFile",
    "FlowMessage",
    "FlowStore",
    "compute_checksum",
]
