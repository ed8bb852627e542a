# agentkit

`agentkit` is an asyncio runtime kernel for language-model agents that use tools.
It provides the message model, the agent loop, and the abstract interfaces that
model clients, tools and storage back ends implement.

## Modules

- `agentkit.message`: `Message`, `Role`, `TextBlock`, `ToolUse`, `ToolResult`,
  `StopReason` and `TokenUsage`. Each has dict round trips (`to_dict` /
  `from_dict`, `block_to_dict` / `block_from_dict`) for JSON storage.
- `agentkit.llm`: the `LlmProvider` interface, `ChatRequest`, `ToolSchema`,
  `ProviderCapabilities`, and the streaming events `TextDelta`,
  `ToolCallDelta`, `ToolCallReady`, `Usage` and `End`. Provider failures are
  raised as `LlmError` subclasses: `NetworkError`, `AuthError`,
  `RateLimitedError`, `InvalidResponseError`, `ProviderError` and
  `UnsupportedError`.
- `agentkit.tool`: the `Tool` interface, `ToolRegistry`, `ToolContext`,
  `Permissions` and `ToolOutcome`. `ToolRegistry.schemas()` returns the tools
  sorted by name. Invoking a name that is not registered raises
  `UnknownToolError`.
- `agentkit.agent`: `Agent` and `RunConfig`. This is the loop that thinks,
  calls tools and observes the results.
- `agentkit.channel`: `UserInput`, the events that `Agent.run` yields
  (`TextDeltaEvent`, `ToolCallStart`, `ToolCallResult`, `UsageReport`,
  `WarningEvent`, `Done`), `event_to_dict` / `event_from_dict` for the
  `kind`-tagged wire form, and the abstract `Channel` transport.
- `agentkit.prompt`: `PromptProvider` and `ChainedPromptProvider`.
  `ChainedPromptProvider` joins the non-blank fragments of its providers with
  a blank line between them.
- `agentkit.memory`: `Fact`, `FactId`, `FactKind`, `NewFact`, `MemoryHit`, and
  the `FactStore`, `VectorStore` and `EmbeddingProvider` interfaces.
- `agentkit.store`: the `SessionStore` interface, with `SessionSummary`,
  `UsageSummary` and `TranscriptSummary`.
- `agentkit.session`: `SessionId`, a `str` subclass. `SessionId.new()` returns
  a random UUID.
- `agentkit.evolution`: `CandidateQueue`, a queue of proposed rules and
  skills (`Candidate`, `CandidateKind`) kept in one JSON file. Writes go to a
  temporary file first, which then replaces the queue file.
- `agentkit.reflection`: `Reflector` asks the model for a reflection note on a
  transcript and saves it to a `FactStore` as a `FactKind.REFLECTION` fact.
- `agentkit.summariser`: `Summariser` compresses a transcript into one
  paragraph.
- `agentkit.config`: `AgentConfig`, `LoopConfig` and `PermissionsConfig`. This
  is a layered loader that reads TOML files and environment variables.
- `agentkit.frontmatter`: `split()` separates simple YAML front matter from a
  markdown body. It handles scalar fields and `- item` lists.
- `agentkit.text`: `truncate_chars`, `truncate_with_ellipsis` and
  `first_line_truncated`. They count characters, not bytes.
- `agentkit.errors`: `AgentError`, `SkillError` and `ConfigurationError`.

## Installation

```
pip install .
```

## A minimal run

```python
import asyncio

from agentkit.agent import Agent
from agentkit.channel import Done, TextDeltaEvent, UserInput
from agentkit.llm import End, LlmProvider, ProviderCapabilities, TextDelta
from agentkit.message import StopReason
from agentkit.session import SessionId


class EchoProvider(LlmProvider):
    def name(self):
        return "echo"

    def capabilities(self):
        return ProviderCapabilities(streaming=True)

    async def chat_stream(self, request):
        async def events():
            yield TextDelta(request.messages[-1].text())
            yield End(StopReason.END_TURN)
        return events()


async def main():
    agent = Agent(llm=EchoProvider(), model="echo-1")
    async for event in agent.run(SessionId.new(), [], UserInput("hello")):
        if isinstance(event, TextDeltaEvent):
            print(event.delta, end="")
        elif isinstance(event, Done):
            print("\nstopped:", event.reason.value)


asyncio.run(main())
```

How a run proceeds:

- Every run ends with `Done`.
- `Done.transcript_delta` holds every message the run appended: the user
  turn, any assistant and tool messages, and the final reply. Add it to your
  history before the next turn.
- When the model requests tools, each one is invoked through the
  `ToolRegistry` and its result is fed back for another round.
- After `RunConfig.max_steps` rounds, the run yields a `WarningEvent` and
  stops with `StopReason.MAX_STEPS`.
- An `LlmError` also ends the run, with `StopReason.ERROR`.

## Configuration

`AgentConfig.load(cli_config_dir=None)` merges these sources. A later source
wins over an earlier one:

1. built-in defaults
2. `/etc/agent/config.toml`
3. `config.toml` in the user config directory: `cli_config_dir` if given,
   otherwise `$XDG_CONFIG_HOME/agent` or `~/.config/agent`
4. `./agent.toml`
5. `AGENT_*` environment variables. A double underscore separates sections,
   so `AGENT_AGENT__MAX_STEPS=20` sets `agent.max_steps`.

Unknown keys and values of the wrong type raise `ConfigError`.
`PermissionsConfig.to_runtime()` returns the `Permissions` used by tools.
API keys are never read from configuration files.

## What is not included

The package defines interfaces only. It does not include:

- a concrete model client
- built-in tools
- a fact, vector or session store implementation
- a command-line or chat front end

Supply your own implementations of `LlmProvider`, `Tool`, `FactStore`,
`VectorStore`, `EmbeddingProvider`, `SessionStore` and `Channel`.

## Tests

```
pip install ".[test]"
pytest
```