"""Agent Catalog - code-declared source definitions for every agent"""
from .models import AgentDefinition, ActionDefinition, AgentStatus
from .catalog import AgentCatalog, CATALOG, DEFAULT_AGENTS

__all__ = [
    "AgentDefinition", "ActionDefinition", "AgentStatus",
    "AgentCatalog", "CATALOG", "DEFAULT_AGENTS",
]
