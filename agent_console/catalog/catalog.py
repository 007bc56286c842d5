"""
Agent Catalog - read-only, declaration-ordered table of source agent definitions.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from .models import AgentDefinition
from .configs.hr import hr_agent
from .configs.finance import finance_agent
from .configs.purchasing import purchasing_agent
from .configs.sales import sales_agent
from .configs.ops import ops_agent
from .configs.admin import admin_agent
from .configs.qbu import qbu_agent
from .configs.sales_deck import sales_deck_agent
from .configs.action_plan import action_plan_agent
from .configs.transition_plan import transition_plan_agent
from .configs.budget import budget_agent
from .configs.incident_report import incident_report_agent
from .configs.training_plan import training_plan_agent
from .configs.analytics import analytics_agent
from .configs.alf_platform import alf_platform_agent


class AgentCatalog:
    """Immutable lookup table of agent definitions keyed by agent key."""

    def __init__(self, agents: Iterable[AgentDefinition]):
        table: Dict[str, AgentDefinition] = {}
        for agent in agents:
            if agent.key in table:
                raise ValueError(f"Duplicate agent key in catalog: '{agent.key}'")
            table[agent.key] = agent
        self._agents = table

    def lookup(self, key: str) -> Optional[AgentDefinition]:
        return self._agents.get(key)

    def list_all(self) -> List[Tuple[str, AgentDefinition]]:
        return list(self._agents.items())

    def keys(self) -> List[str]:
        return list(self._agents)

    def __contains__(self, key: object) -> bool:
        return key in self._agents

    def __len__(self) -> int:
        return len(self._agents)


DEFAULT_AGENTS: Tuple[AgentDefinition, ...] = (
    hr_agent,
    finance_agent,
    purchasing_agent,
    sales_agent,
    ops_agent,
    admin_agent,
    qbu_agent,
    sales_deck_agent,
    action_plan_agent,
    transition_plan_agent,
    budget_agent,
    incident_report_agent,
    training_plan_agent,
    analytics_agent,
    alf_platform_agent,
)

CATALOG = AgentCatalog(DEFAULT_AGENTS)
