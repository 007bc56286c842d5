"""Purchasing agent - reorder analysis and vendor evaluation."""

from agent_console.catalog.models import ActionDefinition, AgentDefinition, AgentStatus
from agent_console.catalog.prompts import SHARED_RULES
from agent_console.templates import template

purchasing_agent = AgentDefinition(
    key="purchasing",
    name="Purchasing Agent",
    department="purchasing",
    status=AgentStatus.SETUP,
    model="claude-sonnet-4-20250514",
    system_prompt=f"""You are a purchasing operations assistant for a facility services company. You help the purchasing team with reorder analysis, vendor evaluation, and procurement optimization.

{SHARED_RULES}""",
    actions={
        "reorderAnalysis": ActionDefinition(
            label="Reorder Analysis",
            description="Analyze inventory levels and recommend reorder quantities",
            prompt_template=template(
                "Analyze reorder needs for: ${data.item}. Current stock: ${data.currentStock}. "
                "Par level: ${data.parLevel}. Monthly usage: ${data.monthlyUsage}. "
                "Lead time: ${data.leadTime}. Recommend order quantity, timing, and any cost "
                "optimization suggestions."
            ),
        ),
    },
)
