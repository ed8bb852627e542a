import json

import pytest

from agentkit.channel import (
    Channel,
    Done,
    TextDeltaEvent,
    ToolCallResult,
    ToolCallStart,
    UsageReport,
    UserInput,
    WarningEvent,
    event_from_dict,
    event_to_dict,
)
from agentkit.message import Message, StopReason, TokenUsage, ToolResult, ToolUse


def test_text_delta_wire_form():
    assert event_to_dict(TextDeltaEvent("hi")) == {"kind": "text_delta", "delta": "hi"}


def test_done_wire_form_uses_snake_case_reason():
    data = event_to_dict(Done(StopReason.END_TURN, [Message.user("q")]))
    assert data["kind"] == "done"
    assert data["reason"] == "end_turn"
    assert data["transcript_delta"] == [Message.user("q").to_dict()]


def test_warning_wire_form():
    assert event_to_dict(WarningEvent("careful")) == {
        "kind": "warning",
        "message": "careful",
    }


@pytest.mark.parametrize(
    "event",
    [
        TextDeltaEvent("你好"),
        ToolCallStart(ToolUse("c1", "read_file", {"path": "a.txt"})),
        ToolCallResult(ToolResult("c1", "contents", False)),
        ToolCallResult(ToolResult("c2", "boom", True)),
        UsageReport(TokenUsage(10, 5, 2), "gpt-4o-mini"),
        Done(StopReason.MAX_STEPS, [Message.user("a"), Message.assistant("b")]),
        WarningEvent("llm error"),
    ],
)
def test_round_trip_through_json(event):
    encoded = json.dumps(event_to_dict(event))
    assert event_from_dict(json.loads(encoded)) == event


def test_tool_call_start_payload_fields():
    data = event_to_dict(ToolCallStart(ToolUse("c1", "grep", {"q": "x"})))
    assert data["call"] == {"id": "c1", "name": "grep", "input": {"q": "x"}}


def test_unknown_kind_raises():
    with pytest.raises(ValueError):
        event_from_dict({"kind": "nope"})


def test_missing_field_raises():
    with pytest.raises(ValueError):
        event_from_dict({"kind": "text_delta"})


def test_non_event_cannot_be_serialised():
    with pytest.raises(TypeError):
        event_to_dict("not an event")


class _ListChannel(Channel):
    def __init__(self, inputs):
        self._inputs = list(inputs)
        self.sent = []

    async def recv(self):
        return self._inputs.pop(0) if self._inputs else None

    async def send(self, event):
        self.sent.append(event)


@pytest.mark.asyncio
async def test_channel_implementation_carries_inputs_and_events():
    channel = _ListChannel([UserInput("one"), UserInput("two")])
    received = []
    while (item := await channel.recv()) is not None:
        received.append(item.text)
        await channel.send(TextDeltaEvent(item.text))
    assert received == ["one", "two"]
    assert channel.sent == [TextDeltaEvent("one"), TextDeltaEvent("two")]