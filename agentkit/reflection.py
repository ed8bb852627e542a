"""Post-run reflection: summarise a run into a reflection fact.

Reflections are text only. Any failure is logged and yields None so the
user's session is never interrupted.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

from .llm import ChatRequest, End, LlmError, LlmProvider, TextDelta
from .memory import FactId, FactKind, FactStore, MemoryStoreError, NewFact
from .message import Message, Role, ToolUse
from .text import truncate_chars, truncate_with_ellipsis

log = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "你是一个反思代理。读完下面这段对话记录，写一段简短的反思笔记，目的是把可重复的经验写下来，"
    "让未来的同类任务更顺利。\n\n输出格式（markdown）：\n- 第一行：标题（不超过 12 字，描述本次任务核心）\n"
    "- 后续：分要点写\n  - 任务目标\n  - 关键过程或工具调用\n  - 哪里顺利、哪里不顺利\n"
    "  - 下次同类任务应注意什么\n\n不要重复对话原文。不要超过 200 字。"
)

TRANSCRIPT_HEADER = "下面是一次对话记录，按时间顺序：\n\n"

_LABELS = {Role.USER: "用户", Role.ASSISTANT: "助手", Role.TOOL: "工具结果"}


class Reflector:
    """Writes a reflection note to long-term memory after a run."""

    def __init__(self, llm: LlmProvider, model: str, fact_store: FactStore) -> None:
        self.llm = llm
        self.model = model
        self.fact_store = fact_store

    async def reflect(self, transcript: Sequence[Message]) -> FactId | None:
        """Generate and save one reflection; return its id, or None on failure."""
        turns = sum(1 for m in transcript if m.role in (Role.USER, Role.ASSISTANT))
        if turns < 2:
            return None

        log.debug("generating reflection with model %s", self.model)
        request = ChatRequest(
            self.model,
            [Message.system(SYSTEM_PROMPT), Message.user(format_transcript(transcript))],
        )
        text = await _stream_text(self.llm, request)
        if text is None:
            return None
        text = text.strip()
        if not text:
            return None

        title, body = split_title(text)
        fact = (
            NewFact(title or _default_title(), body)
            .with_kind(FactKind.REFLECTION)
            .with_tags(["auto-reflection"])
        )
        try:
            fact_id = await self.fact_store.save(fact)
        except MemoryStoreError as exc:
            log.warning("failed to save reflection: %s", exc)
            return None
        log.debug("reflection saved as %s", fact_id)
        return fact_id


async def _stream_text(llm: LlmProvider, request: ChatRequest) -> str | None:
    try:
        stream = await llm.chat_stream(request)
        parts: list[str] = []
        async for event in stream:
            if isinstance(event, TextDelta):
                parts.append(event.delta)
            elif isinstance(event, End):
                break
    except LlmError as exc:
        log.warning("reflection llm call failed: %s", exc)
        return None
    return "".join(parts)


def format_transcript(messages: Sequence[Message]) -> str:
    """Render a transcript as labelled plain text for the reflection prompt."""
    out = [TRANSCRIPT_HEADER]
    for message in messages:
        label = _LABELS.get(message.role)
        if label is None:
            continue
        text = message.text()
        if not text:
            tools = [b.name for b in message.content if isinstance(b, ToolUse)]
            if tools:
                out.append(f"[{label} 调用工具: {', '.join(tools)}]\n\n")
            continue
        out.append(f"[{label}]\n{truncate_with_ellipsis(text, 600)}\n\n")
    return "".join(out)


def _lines(text: str) -> list[str]:
    if not text:
        return []
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [p.removesuffix("\r") for p in parts]


def split_title(text: str) -> tuple[str | None, str]:
    """Split generated text into a title (first line) and a body.

    Markdown heading and list markers are stripped from the title, which is
    capped at 40 characters. A blank remainder makes the whole text the body.
    """
    lines = _lines(text)
    first = lines[0].strip() if lines else ""
    title = None
    if first:
        cleaned = first.lstrip("#").lstrip("-").strip()
        if cleaned:
            title = truncate_chars(cleaned, 40)
    body = "\n".join(lines[1:])
    if not body.strip():
        body = text
    return title, body


def _default_title() -> str:
    return f"reflection-{int(time.time())}"