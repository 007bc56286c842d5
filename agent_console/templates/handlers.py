"""
Procedural prompt handlers.

Templates that loop, join, or branch are written as plain Python functions and
registered under a stable id. Catalog entries reference them through
``procedural("<id>")``; the id, not the function object, is what gets stored.
"""

from typing import Any, Callable, Dict

from .models import Procedural

PromptHandler = Callable[[Any], str]

_HANDLERS: Dict[str, PromptHandler] = {}


def prompt_handler(handler_id: str) -> Callable[[PromptHandler], PromptHandler]:
    """Register a procedural prompt handler under ``handler_id``."""
    def decorator(fn: PromptHandler) -> PromptHandler:
        existing = _HANDLERS.get(handler_id)
        if existing is not None and existing is not fn:
            raise ValueError(f"Prompt handler '{handler_id}' is already registered")
        _HANDLERS[handler_id] = fn
        return fn
    return decorator


def get_handler(handler_id: str) -> PromptHandler:
    try:
        return _HANDLERS[handler_id]
    except KeyError:
        raise KeyError(f"No prompt handler registered as '{handler_id}'") from None


def procedural(handler_id: str) -> Procedural:
    """Catalog helper: reference a registered handler, failing fast on typos."""
    get_handler(handler_id)
    return Procedural(handler_id=handler_id)
