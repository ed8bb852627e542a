"""The agent run loop: think, call tools, observe, repeat."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from pathlib import Path

from .channel import (
    AgentEvent,
    Done,
    TextDeltaEvent,
    ToolCallResult,
    ToolCallStart,
    UsageReport,
    UserInput,
    WarningEvent,
)
from .evolution import CandidateQueue
from .llm import (
    ChatRequest,
    End,
    LlmError,
    LlmProvider,
    TextDelta,
    ToolCallDelta,
    ToolCallReady,
    Usage,
)
from .memory import FactStore
from .message import (
    ContentBlock,
    Message,
    Role,
    StopReason,
    TextBlock,
    TokenUsage,
    ToolResult,
    ToolUse,
)
from .prompt import PromptProvider
from .tool import Permissions, ToolContext, ToolError, ToolRegistry

log = logging.getLogger(__name__)


@dataclass
class RunConfig:
    """Knobs for the run loop."""

    max_steps: int = 12
    temperature: float | None = None
    max_tokens: int | None = None
    permissions: Permissions = field(default_factory=Permissions)


@dataclass(kw_only=True)
class Agent:
    """A model client and a tool registry wired into an executable loop."""

    llm: LlmProvider
    model: str
    tools: ToolRegistry = field(default_factory=ToolRegistry)
    system_prompt: str | None = None
    prompt_provider: PromptProvider | None = None
    fact_store: FactStore | None = None
    candidate_queue: CandidateQueue | None = None
    workspace: Path = field(default_factory=Path.cwd)
    config: RunConfig = field(default_factory=RunConfig)

    async def run(
        self, session_id: str, history: list[Message], user_input: UserInput
    ) -> AsyncIterator[AgentEvent]:
        """Execute one user turn, yielding events and ending with ``Done``.

        ``history`` is the prior transcript without system messages; it is
        not modified.
        """
        config = self.config
        tool_schemas = self.tools.schemas()

        messages: list[Message] = []
        if self.system_prompt and self.system_prompt.strip():
            messages.append(Message.system(self.system_prompt))
        if self.prompt_provider is not None:
            dynamic = await self.prompt_provider.system_prompt_for(user_input.text)
            if dynamic.strip():
                messages.append(Message.system(dynamic))
        messages.extend(history)
        delta_start = len(messages)
        messages.append(Message.user(user_input.text))

        steps = 0
        while True:
            steps += 1
            if steps > config.max_steps:
                yield WarningEvent(f"max_steps ({config.max_steps}) reached; stopping.")
                stop_reason = StopReason.MAX_STEPS
                break

            log.debug("agent: sending chat request (step %d)", steps)
            request = ChatRequest(
                model=self.model,
                messages=list(messages),
                tools=list(tool_schemas),
                temperature=config.temperature,
                max_tokens=config.max_tokens,
                stream=True,
            )
            try:
                stream = await self.llm.chat_stream(request)
            except LlmError as exc:
                yield WarningEvent(f"llm error: {exc}")
                stop_reason = StopReason.ERROR
                break

            assistant_text: list[str] = []
            pending_calls: list[ToolUse] = []
            round_stop: StopReason | None = None
            round_usage: TokenUsage | None = None

            try:
                async for event in stream:
                    match event:
                        case TextDelta(delta=delta):
                            assistant_text.append(delta)
                            yield TextDeltaEvent(delta)
                        case ToolCallDelta():
                            pass
                        case ToolCallReady(id=call_id, name=name, arguments=arguments):
                            call = ToolUse(call_id, name, arguments)
                            yield ToolCallStart(call)
                            pending_calls.append(call)
                        case Usage(usage=usage):
                            round_usage = usage
                        case End(reason=reason):
                            round_stop = reason
                            break
            except LlmError as exc:
                yield WarningEvent(f"stream error: {exc}")
                round_stop = StopReason.ERROR

            if round_usage is not None:
                yield UsageReport(round_usage, self.model)

            blocks: list[ContentBlock] = []
            text = "".join(assistant_text)
            if text:
                blocks.append(TextBlock(text))
            blocks.extend(pending_calls)
            if blocks:
                messages.append(Message(Role.ASSISTANT, blocks))

            reason = round_stop if round_stop is not None else StopReason.END_TURN
            if not pending_calls:
                stop_reason = reason
                break

            ctx = ToolContext(
                workspace=self.workspace,
                permissions=config.permissions,
                session_id=str(session_id),
                fact_store=self.fact_store,
                candidate_queue=self.candidate_queue,
            )
            results: list[ContentBlock] = []
            for call in pending_calls:
                result = await self._invoke_one(call, ctx)
                yield ToolCallResult(result)
                results.append(result)
            messages.append(Message(Role.TOOL, results))

            if reason is not StopReason.TOOL_USE:
                log.debug("tools present despite stop reason %s; continuing", reason)

        yield Done(stop_reason, messages[delta_start:])

    async def _invoke_one(self, call: ToolUse, ctx: ToolContext) -> ToolResult:
        try:
            outcome = await self.tools.invoke(call.name, call.input, ctx)
        except (ToolError, OSError, ValueError) as exc:
            log.warning("tool %s invocation failed: %s", call.name, exc)
            return ToolResult(call.id, f"tool error: {exc}", True)
        return ToolResult(call.id, outcome.text, outcome.is_error)