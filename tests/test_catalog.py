"""
Tests for the built-in agent catalog: registration order, template shapes,
and the procedural prompt builders of the document agents.
Run: pytest tests/test_catalog.py -v
"""
import pytest

from agent_console.catalog import CATALOG, AgentCatalog
from agent_console.templates import TemplateType, classify


EXPECTED_KEYS = [
    "hr", "finance", "purchasing", "sales", "ops", "admin", "qbu", "salesDeck",
    "actionPlan", "transitionPlan", "budget", "incidentReport", "trainingPlan",
    "analytics", "alfPlatform",
]


def _action(agent_key, action_key):
    return CATALOG.lookup(agent_key).actions[action_key]


# ══════════════════════════════════════════════════════════════════
# REGISTRATION
# ══════════════════════════════════════════════════════════════════


class TestCatalogContents:

    def test_all_agents_in_declaration_order(self):
        assert CATALOG.keys() == EXPECTED_KEYS

    def test_duplicate_keys_rejected(self):
        hr = CATALOG.lookup("hr")
        with pytest.raises(ValueError):
            AgentCatalog([hr, hr])

    def test_document_builders_have_large_token_budgets(self):
        assert CATALOG.lookup("qbu").max_tokens == 16384
        assert CATALOG.lookup("salesDeck").max_tokens == 8192

    def test_every_agent_has_actions(self):
        for key, agent in CATALOG.list_all():
            assert agent.actions, key


# ══════════════════════════════════════════════════════════════════
# TEMPLATE SHAPES
# ══════════════════════════════════════════════════════════════════


class TestTemplateShapes:

    @pytest.mark.parametrize("agent_key,action_key", [
        ("sales", "askAgent"),
        ("alfPlatform", "askAlf"),
    ])
    def test_free_form_questions_are_passthrough(self, agent_key, action_key):
        assert classify(_action(agent_key, action_key).prompt_template).type == TemplateType.PASSTHROUGH

    @pytest.mark.parametrize("agent_key,action_key", [
        ("salesDeck", "generateDeck"),
        ("sales", "renewalBrief"),
        ("actionPlan", "generateActionPlan"),
    ])
    def test_field_templates_are_simple(self, agent_key, action_key):
        assert classify(_action(agent_key, action_key).prompt_template).type == TemplateType.SIMPLE

    @pytest.mark.parametrize("agent_key,action_key", [
        ("qbu", "generateQBU"),
        ("sales", "pipelineSummary"),
        ("transitionPlan", "generateTransitionPlan"),
        ("trainingPlan", "generateTrainingPlan"),
    ])
    def test_builders_are_complex(self, agent_key, action_key):
        assert classify(_action(agent_key, action_key).prompt_template).type == TemplateType.COMPLEX

    def test_sales_deck_placeholders(self):
        text = _action("salesDeck", "generateDeck").render({"prospect": "Acme Labs"})
        assert "Company: Acme Labs" in text
        assert "Industry/Vertical: [Not specified]" in text


# ══════════════════════════════════════════════════════════════════
# QBU BUILDER
# ══════════════════════════════════════════════════════════════════


class TestQbuBuilder:

    def _render(self, data):
        return _action("qbu", "generateQBU").render(data)

    def test_empty_record(self):
        text = self._render({})
        assert "Client: [Client]" in text
        assert "Quarter: [Quarter]" in text
        assert "=== INSTRUCTIONS ===" in text
        assert "=== A — SAFETY DATA ===" not in text

    def test_full_record(self):
        text = self._render({
            "cover": {
                "clientName": "Acme", "quarter": "Q3 2026", "date": "2026-10-01",
                "aaTeam": [{"name": "Dana", "title": "Account Manager"}, {"name": ""}],
            },
            "safety": {
                "theme": "Ladder safety",
                "incidents": [{"location": "HQ", "q1": 1, "q3": 2}],
            },
            "workTickets": {
                "locations": [
                    {"location": "HQ", "priorYear": 100, "currentYear": 120},
                    {"location": "Lab", "priorYear": 0, "currentYear": 40},
                ],
            },
            "audits": {
                "locationNames": ["HQ", "Lab"],
                "priorAudits": [3, "2"],
                "currentAudits": [4, 1.5],
            },
            "financial": {"totalOutstanding": "$12,000", "bucket60": "$2,000"},
        })
        assert "Client: Acme" in text
        assert "  - Dana, Account Manager" in text
        assert "Safety Moment Theme: Ladder safety" in text
        assert "HQ: Q1=1, Q2=0, Q3=2, Q4=0" in text
        assert "Change=20.0%" in text
        assert "Change=N/A%" in text
        assert "Prior Quarter Audits: 3, 2 (Total: 5)" in text
        assert "Current Quarter Audits: 4, 1.5 (Total: 5.5)" in text
        assert "31-60 days: $2,000" in text
        assert "1-30 days: $0" in text

    def test_numbered_lists(self):
        text = self._render({"executive": {"achievements": ["Zero lost-time incidents", ""]}})
        assert "Key Achievements:\n  1. Zero lost-time incidents" in text
        assert "  2." not in text
