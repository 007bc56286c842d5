"""
Catalog models - the code-declared source definition of every agent.
Catalog entries are immutable; tenant overrides are merged on read and never
written back here.
"""

from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from agent_console.templates.models import PromptTemplate


class AgentStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SETUP = "setup"


class ActionDefinition(BaseModel):
    """A single prompt-generating capability of an agent."""
    model_config = ConfigDict(frozen=True)

    label: str
    description: str = ""
    prompt_template: PromptTemplate

    def render(self, data: Any) -> str:
        return self.prompt_template(data)


class AgentDefinition(BaseModel):
    """
    Agent definition - system prompt, model choice, and a set of actions.
    Used both for catalog entries and for the effective (merged) definition.
    """
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    key: str
    name: str
    department: str = ""
    status: AgentStatus = AgentStatus.ACTIVE
    model: str = "claude-sonnet-4-20250514"
    max_tokens: Optional[int] = None
    system_prompt: str = ""
    knowledge_modules: Tuple[str, ...] = ()
    actions: Dict[str, ActionDefinition] = Field(default_factory=dict)

    def get_action(self, action_key: str) -> Optional[ActionDefinition]:
        return self.actions.get(action_key)
