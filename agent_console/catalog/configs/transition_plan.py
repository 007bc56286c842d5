"""Transition plan agent - phased onboarding and provider changeover plans."""

from agent_console.catalog.models import ActionDefinition, AgentDefinition, AgentStatus
from agent_console.catalog.prompts import SHARED_RULES
from agent_console.templates import procedural, prompt_handler


@prompt_handler("transition_plan.generate")
def transition_plan_prompt(data) -> str:
    services = ", ".join(data.get("servicesInScope") or []) or "[Not specified]"
    return f"""Generate a comprehensive transition plan based on:

Client: {data.get("clientName") or "[Client]"}
Site: {data.get("siteName") or "[Site]"}
Transition Type: {data.get("transitionType") or "[Type]"}
Target Start Date: {data.get("startDate") or "[Date]"}
Duration: {data.get("duration") or "90 days"}
Services in Scope: {services}
Current Provider: {data.get("currentProvider") or "None (new account)"}
Staffing Considerations: {data.get("staffingPlan") or "[Not specified]"}
Known Risks: {data.get("risks") or "[None noted]"}
Special Requirements: {data.get("specialRequirements") or "[None noted]"}

Include:
1. Executive Summary
2. Phased Timeline (pre-transition, Phase 1, Phase 2, Phase 3, steady-state)
3. RACI Matrix for key activities
4. Staffing Plan (roles, headcount framework, hiring timeline)
5. Equipment & Supply Setup
6. Client Communication Plan
7. Risk Register with mitigation strategies
8. Day 1 Readiness Checklist
9. 30/60/90 Day Success Metrics"""


transition_plan_agent = AgentDefinition(
    key="transitionPlan",
    name="Transition Plan Agent",
    department="tools",
    status=AgentStatus.ACTIVE,
    model="claude-sonnet-4-20250514",
    system_prompt=f"""You are a transition planning specialist for facility services companies. You create detailed, phased transition plans for new account onboarding, provider changeovers, and service expansions.

{SHARED_RULES}

Transition Plan Rules:
- Generate comprehensive phased plans with clear milestones and deliverables.
- Include a RACI matrix (Responsible, Accountable, Consulted, Informed) for key activities.
- Address staffing plans, equipment needs, and supply chain setup.
- Include risk mitigation strategies for each phase.
- Account for union environments when specified — include labor coordination steps.
- Plan for client communication touchpoints throughout the transition.
- Include Day 1 readiness checklist.
- Address knowledge transfer from outgoing provider if applicable.
- NEVER fabricate timelines or staffing numbers — generate frameworks and flag where human input is needed.
- Use [PLACEHOLDER: description] for any data that requires site-specific input.""",
    knowledge_modules=(
        "Transition Planning",
        "Onboarding Checklists",
    ),
    actions={
        "generateTransitionPlan": ActionDefinition(
            label="Generate Transition Plan",
            description="Create a phased transition plan from intake data",
            prompt_template=procedural("transition_plan.generate"),
        ),
    },
)
