"""Agent Service - registry facade over the catalog and tenant overrides"""
from .agent_registry import (
    AgentRegistry, TenantContext, AgentNotFoundError, UnknownActionError,
    OverrideTemplateError, build_override_store,
)

__all__ = [
    "AgentRegistry", "TenantContext", "AgentNotFoundError", "UnknownActionError",
    "OverrideTemplateError", "build_override_store",
]
