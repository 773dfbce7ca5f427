"""Tests for flow file models."""

import pytest
from pydantic import ValidationError

from chatflow.flow import ConversationSettings, FlowConversation, FlowMessage, compute_checksum
from chatflow.flow.models import make_conversation


def _conversation(**overrides) -> FlowConversation:
    fields = {
        "id": "c1",
        "title": "Chat",
        "created": 10,
        "updated": 20,
        "messages": [FlowMessage(id="m1", timestamp=11, sender="human", content="hello")],
    }
    fields.update(overrides)
    return FlowConversation(**fields)


def test_message_is_frozen() -> None:
    message = FlowMessage(id="m1", timestamp=1, sender="human", content="hi")
    with pytest.raises(ValidationError):
        message.content = "edited"


def test_conversation_accepts_mutation() -> None:
    conversation = _conversation()
    conversation.messages.append(FlowMessage(id="m2", timestamp=12, sender="assistant", content="hey"))
    conversation.title = "Renamed"
    assert len(conversation.messages) == 2
    assert conversation.title == "Renamed"
    # updated is caller-managed
    assert conversation.updated == 20


def test_metadata_holds_any_json_value() -> None:
    for value in ({"k": [1, 2]}, [1, "a"], "text", 3, None):
        message = FlowMessage(id="m", timestamp=1, sender="human", content="", metadata=value)
        assert message.metadata == value


def test_bool_timestamp_rejected() -> None:
    with pytest.raises(ValidationError):
        FlowMessage(id="m", timestamp=True, sender="human", content="")


@pytest.mark.parametrize("temperature", ["0.7", True, float("inf"), float("nan")])
def test_settings_temperature_must_be_finite_number(temperature) -> None:
    with pytest.raises(ValidationError):
        ConversationSettings(model="m", temperature=temperature, max_tokens=10)


def test_settings_max_tokens_fits_i32() -> None:
    assert ConversationSettings(model="m", temperature=0.5, max_tokens=2**31 - 1).max_tokens == 2**31 - 1
    with pytest.raises(ValidationError):
        ConversationSettings(model="m", temperature=0.5, max_tokens=2**31)


def test_make_conversation() -> None:
    conversation = make_conversation("Draft")
    assert conversation.title == "Draft"
    assert conversation.created == conversation.updated
    assert len(conversation.id) == 36
    assert conversation.messages == []


def test_checksum_is_deterministic() -> None:
    assert compute_checksum(_conversation()) == compute_checksum(_conversation())
    assert len(compute_checksum(_conversation())) == 64


def test_checksum_changes_with_content() -> None:
    assert compute_checksum(_conversation()) != compute_checksum(_conversation(title="Other"))
