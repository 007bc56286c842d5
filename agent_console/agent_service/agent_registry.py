"""
Agent Registry - the single entry point for reading agents.
Composes the static catalog with the tenant's override store: every read
merges the stored override on top of the catalog entry, so the effective
definition is never persisted and always reflects the latest save.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel

from agent_console.catalog import CATALOG, AgentCatalog, AgentDefinition, ActionDefinition
from agent_console.config.settings import settings
from agent_console.overrides import (
    SCALAR_FIELDS, KeyValueOverrideStore, OverrideRecord, OverrideStore, merge_override,
)
from agent_console.templates import TemplateClassification, TemplateSyntaxError, classify, parse_template

logger = logging.getLogger(__name__)


class TenantContext(BaseModel):
    """Who the agent is being served for."""
    tenant_id: Optional[str] = None
    company_name: Optional[str] = None


class AgentNotFoundError(LookupError):
    pass


class UnknownActionError(ValueError):
    """Override names an action the catalog agent does not have."""

    def __init__(self, agent_key: str, action_key: str):
        super().__init__(f"Agent '{agent_key}' has no action '{action_key}'")
        self.agent_key = agent_key
        self.action_key = action_key


class OverrideTemplateError(TemplateSyntaxError):
    """A prompt text in an override does not parse; carries the action key."""

    def __init__(self, action_key: str, error: TemplateSyntaxError):
        super().__init__(error.message, error.position, error.text)
        self.action_key = action_key

    def __str__(self) -> str:
        return f"{self.action_key}: {self.message} (at position {self.position})"


def build_override_store(tenant_id: Optional[str] = None) -> OverrideStore:
    """Create the override store selected by ``OVERRIDE_STORE``."""
    tenant_id = tenant_id or settings.override_tenant_id
    if settings.override_store == "database":
        from agent_console.db.override_store import DatabaseOverrideStore
        return DatabaseOverrideStore(tenant_id=tenant_id)
    return KeyValueOverrideStore(tenant_id=tenant_id)


class AgentRegistry:
    """
    Registry facade over the catalog and one tenant scope of overrides.
    Reads return None for unknown agents; writes raise ``AgentNotFoundError``.
    """

    def __init__(self, store: Optional[OverrideStore] = None, catalog: Optional[AgentCatalog] = None):
        self.store = store if store is not None else build_override_store()
        self.catalog = catalog if catalog is not None else CATALOG

    # ── Effective agents ──────────────────────────────────────────

    def get_agent(self, agent_key: str, tenant_context: Optional[TenantContext] = None) -> Optional[AgentDefinition]:
        source = self.catalog.lookup(agent_key)
        if source is None:
            return None
        merged = merge_override(source, self.store.get(agent_key))
        if tenant_context and tenant_context.company_name:
            merged = merged.model_copy(update={
                "system_prompt": f"You are working for {tenant_context.company_name}. " + merged.system_prompt,
            })
        return merged

    def get_all_agents(self) -> List[Tuple[str, AgentDefinition]]:
        return [(key, merge_override(agent, self.store.get(key))) for key, agent in self.catalog.list_all()]

    def get_agent_action(
        self, agent_key: str, action_key: str, tenant_context: Optional[TenantContext] = None,
    ) -> Optional[ActionDefinition]:
        agent = self.get_agent(agent_key, tenant_context)
        if agent is None:
            return None
        return agent.get_action(action_key)

    # ── Source agents ─────────────────────────────────────────────

    def get_source_agent_config(self, agent_key: str) -> Optional[AgentDefinition]:
        return self.catalog.lookup(agent_key)

    def get_all_source_agents(self) -> List[Tuple[str, AgentDefinition]]:
        return self.catalog.list_all()

    # ── Overrides ─────────────────────────────────────────────────

    def get_override(self, agent_key: str) -> Optional[OverrideRecord]:
        return self.store.get(agent_key)

    def has_override(self, agent_key: str) -> bool:
        return self.store.has(agent_key)

    def get_override_version(self, agent_key: str) -> Optional[int]:
        return self.store.version(agent_key)

    def validate_override(self, agent_key: str, record: OverrideRecord) -> AgentDefinition:
        """Check an override against the catalog before it is stored."""
        source = self._require_source(agent_key)
        for action_key in (record.actions or {}):
            if action_key not in source.actions:
                raise UnknownActionError(agent_key, action_key)
        for action_key, text in record.action_texts().items():
            try:
                parse_template(text)
            except TemplateSyntaxError as e:
                raise OverrideTemplateError(action_key, e) from e
        return source

    def save_override(self, agent_key: str, record: OverrideRecord, updated_by: str = "system") -> AgentDefinition:
        """Validate and store ``record`` (replacing any previous one); returns the new effective agent."""
        source = self.validate_override(agent_key, record)
        self.store.save(agent_key, record, updated_by=updated_by)
        return merge_override(source, record)

    def clear_override(self, agent_key: str) -> None:
        self._require_source(agent_key)
        self.store.clear(agent_key)

    # ── Admin helpers ─────────────────────────────────────────────

    def classify_action(self, agent_key: str, action_key: str) -> Optional[TemplateClassification]:
        action = self.get_agent_action(agent_key, action_key)
        if action is None:
            return None
        return classify(action.prompt_template)

    def get_agent_diff(self, agent_key: str) -> Optional[List[Dict[str, Any]]]:
        source = self.catalog.lookup(agent_key)
        if source is None:
            return None
        effective = self.get_agent(agent_key)
        changes: List[Dict[str, Any]] = []
        for f in SCALAR_FIELDS:
            a, b = getattr(source, f), getattr(effective, f)
            if a != b:
                changes.append({"field": f, "source": _plain(a), "effective": _plain(b)})
        for action_key, action in source.actions.items():
            a = classify(action.prompt_template).text
            b = classify(effective.actions[action_key].prompt_template).text
            if a != b:
                changes.append({"field": f"actions.{action_key}", "source": a, "effective": b})
        return changes

    def get_stats(self) -> Dict[str, Any]:
        agents = self.get_all_agents()
        by_status: Dict[str, int] = {}
        for _, a in agents:
            by_status[a.status.value] = by_status.get(a.status.value, 0) + 1
        return {
            "total_agents": len(agents),
            "by_status": by_status,
            "with_overrides": sum(1 for key, _ in agents if self.store.has(key)),
            "total_actions": sum(len(a.actions) for _, a in agents),
        }

    def _require_source(self, agent_key: str) -> AgentDefinition:
        source = self.catalog.lookup(agent_key)
        if source is None:
            raise AgentNotFoundError(f"Agent '{agent_key}' not found")
        return source


def _plain(value: Any) -> Any:
    return value.value if hasattr(value, "value") else value
