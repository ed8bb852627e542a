from pathlib import Path

import pytest

from agentkit.llm import ToolSchema
from agentkit.tool import (
    ExecutionFailedError,
    InvalidArgumentsError,
    PermissionDeniedError,
    Permissions,
    Tool,
    ToolContext,
    ToolError,
    ToolOutcome,
    ToolRegistry,
    UnknownToolError,
)


class EchoTool(Tool):
    def __init__(self, tool_name="echo", text="echoes"):
        self._name = tool_name
        self._text = text

    def name(self):
        return self._name

    def description(self):
        return self._text

    def parameters(self):
        return {"type": "object", "properties": {"text": {"type": "string"}}}

    async def invoke(self, args, ctx):
        if "text" not in args:
            raise InvalidArgumentsError(self._name, "missing text")
        return ToolOutcome.ok(f"{ctx.session_id}:{args['text']}")


@pytest.fixture
def ctx(tmp_path):
    return ToolContext(tmp_path, session_id="s1")


def test_permissions_defaults():
    p = Permissions()
    assert p.allow_read and p.allow_write and p.allow_shell and p.allow_network
    assert p.max_runtime_secs == 120


def test_context_defaults(tmp_path):
    c = ToolContext(tmp_path)
    assert c.workspace == Path(tmp_path)
    assert c.session_id == ""
    assert c.permissions == Permissions()
    assert c.fact_store is None and c.candidate_queue is None


def test_outcome_constructors():
    assert ToolOutcome.ok("fine") == ToolOutcome("fine", False)
    assert ToolOutcome.error("bad") == ToolOutcome("bad", True)


def test_tool_schema_from_methods():
    tool = EchoTool()
    assert tool.schema() == ToolSchema("echo", "echoes", tool.parameters())


def test_registry_register_and_get():
    reg = ToolRegistry()
    assert len(reg) == 0
    tool = EchoTool()
    reg.register(tool)
    assert reg.get("echo") is tool
    assert "echo" in reg
    assert reg.get("nope") is None


def test_registry_replaces_same_name():
    reg = ToolRegistry()
    reg.register(EchoTool(text="one"))
    reg.register(EchoTool(text="two"))
    assert len(reg) == 1
    assert reg.get("echo").description() == "two"


def test_schemas_sorted_by_name():
    reg = ToolRegistry()
    for name in ["zeta", "alpha", "mid"]:
        reg.register(EchoTool(tool_name=name))
    names = [s.name for s in reg.schemas()]
    assert names == sorted(names)
    assert len(names) == 3


@pytest.mark.asyncio
async def test_invoke_dispatches_with_context(ctx):
    reg = ToolRegistry()
    reg.register(EchoTool())
    out = await reg.invoke("echo", {"text": "hi"}, ctx)
    assert out == ToolOutcome.ok("s1:hi")


@pytest.mark.asyncio
async def test_invoke_unknown_raises(ctx):
    with pytest.raises(UnknownToolError) as info:
        await ToolRegistry().invoke("ghost", {}, ctx)
    assert str(info.value) == "unknown tool: ghost"


@pytest.mark.asyncio
async def test_invoke_propagates_tool_error(ctx):
    reg = ToolRegistry()
    reg.register(EchoTool())
    with pytest.raises(InvalidArgumentsError) as info:
        await reg.invoke("echo", {}, ctx)
    assert str(info.value) == "invalid arguments for echo: missing text"


def test_error_hierarchy_and_messages():
    assert isinstance(PermissionDeniedError("x"), ToolError)
    assert str(PermissionDeniedError("write")).startswith("permission denied: ")
    assert str(ExecutionFailedError("boom")).startswith("execution failed: ")