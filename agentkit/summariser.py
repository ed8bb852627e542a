"""Transcript summariser.

Compresses an early window of a conversation into a short narrative so
later turns keep context without resending the whole history. Any failure
yields None and the caller keeps the uncompressed transcript.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .llm import ChatRequest, End, LlmError, LlmProvider, TextDelta
from .message import Message, Role
from .text import truncate_with_ellipsis

log = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "你是会话摘要器。请把下面这段对话压缩成一段简短的中文笔记，保留：\n"
    "- 用户的核心目标\n"
    "- 关键决策、约束、人物或文件名等具体事实\n"
    "- 已经完成或排除的尝试\n\n"
    "输出要求：\n"
    "- 不超过 400 字，不分章节\n"
    "- 不要复述原文，不要写 Markdown 列表前缀\n"
    "- 用第三人称，便于下一轮对话作为系统提示注入"
)

_LABELS = {Role.USER: "用户", Role.ASSISTANT: "助手", Role.TOOL: "工具结果"}


class Summariser:
    """Asks a model to compress a transcript into one paragraph."""

    def __init__(self, llm: LlmProvider, model: str) -> None:
        self.llm = llm
        self.model = model

    async def summarise(self, transcript: Sequence[Message]) -> str | None:
        """Return the summary, or None if there is nothing to summarise or the call fails."""
        dialogue = format_transcript(transcript)
        if not dialogue.strip():
            return None
        log.debug("summarising transcript with model %s", self.model)
        request = ChatRequest(
            self.model, [Message.system(SYSTEM_PROMPT), Message.user(dialogue)]
        )
        try:
            stream = await self.llm.chat_stream(request)
            parts: list[str] = []
            async for event in stream:
                if isinstance(event, TextDelta):
                    parts.append(event.delta)
                elif isinstance(event, End):
                    break
        except LlmError as exc:
            log.warning("summariser llm call failed: %s", exc)
            return None
        text = "".join(parts).strip()
        return text or None


def format_transcript(messages: Sequence[Message]) -> str:
    """Render the text of non-system messages with role labels."""
    out = []
    for message in messages:
        label = _LABELS.get(message.role)
        if label is None:
            continue
        trimmed = truncate_with_ellipsis(message.text(), 400)
        if not trimmed:
            continue
        out.append(f"[{label}]\n{trimmed}\n\n")
    return "".join(out)