"""Runtime kernel for tool-using LLM agents: messages, agent loop, and memory, storage and evolution interfaces."""

__version__ = "0.1.0"