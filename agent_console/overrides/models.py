"""
Override records - sparse, tenant-scoped replacements for catalog fields.
Only the fields an operator actually overrode are present; an absent field
means "inherit from the catalog". Serialised with the camelCase keys used by
the admin console:

    { name?, status?, model?, maxTokens?, systemPrompt?,
      actions?: { <actionKey>: { promptTemplateText: str } } }
"""

from typing import Any, Dict, Optional, Set

from pydantic import BaseModel, ConfigDict, Field

from agent_console.catalog.models import AgentStatus

SCALAR_FIELDS = ("name", "status", "model", "max_tokens", "system_prompt")


class ActionOverride(BaseModel):
    """Replacement prompt text for one catalog action."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    prompt_template_text: Optional[str] = Field(default=None, alias="promptTemplateText")


class OverrideRecord(BaseModel):
    """Per-tenant, per-agent override. Unset fields inherit from the catalog."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", protected_namespaces=())

    name: Optional[str] = None
    status: Optional[AgentStatus] = None
    model: Optional[str] = None
    max_tokens: Optional[int] = Field(default=None, alias="maxTokens", gt=0)
    system_prompt: Optional[str] = Field(default=None, alias="systemPrompt")
    actions: Optional[Dict[str, ActionOverride]] = None

    def overridden_fields(self) -> Set[str]:
        """Scalar fields explicitly set to a value (null counts as unset)."""
        return {
            f for f in SCALAR_FIELDS
            if f in self.model_fields_set and getattr(self, f) is not None
        }

    def action_texts(self) -> Dict[str, str]:
        return {
            key: ao.prompt_template_text
            for key, ao in (self.actions or {}).items()
            if ao.prompt_template_text is not None
        }

    def is_empty(self) -> bool:
        return not self.overridden_fields() and not self.action_texts()

    def to_storage(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True, exclude_none=True)

    @classmethod
    def from_storage(cls, raw: Dict[str, Any]) -> "OverrideRecord":
        return cls.model_validate(raw)
