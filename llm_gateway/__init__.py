from __future__ import annotations  # Re-export llm_gateway public API

from .llm_gateway import HttpClient, LlmGatewayError, chat, runnable

__all__ = ["HttpClient", "LlmGatewayError", "chat", "runnable"]
