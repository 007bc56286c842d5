"""Outbound LLM calls through the completion proxy"""
from .completion_client import (
    AgentInvoker, ChatMessage, CompletionClient, CompletionError, CompletionRequest,
    PromptRenderError, build_completion_request,
)

__all__ = [
    "AgentInvoker", "ChatMessage", "CompletionClient", "CompletionError", "CompletionRequest",
    "PromptRenderError", "build_completion_request",
]
