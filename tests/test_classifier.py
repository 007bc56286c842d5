"""
Tests for the template classifier.
Run: pytest tests/test_classifier.py -v
"""
from types import SimpleNamespace

import pytest

from agent_console.catalog import CATALOG
from agent_console.templates import (
    Procedural, TemplateType, build_template, classify, extract_template_text, template,
)


# ── Plain callables, as a catalog author might write them ─────────

def greeting(data):
    return f"Hello {data.name}, you have {data.count} items"


def ask(data):
    return data.question


def roster(data):
    return "Crew:\n" + "\n".join(f"- {m}" for m in data.members)


def conditional(data):
    if data.urgent:
        return f"URGENT: {data.subject}"
    return data.subject


def ternary(data):
    return "late" if data.overdue else "on time"


def broken(data):
    raise RuntimeError("needs a real record")


def not_a_string(data):
    return 42


def with_backticks(data):
    return f"Run `sync` for {data.site}"


def shout(data):
    name = data.name.upper()
    return f"Hi {name}"


def upper_inline(data):
    return f"Hi {data.name.upper()}"


def with_default(data):
    return f"Dear {data.contact or 'team'}"


def documented(data):
    """Reminder text."""
    return f"Reminder for {data.employeeName}"


# ══════════════════════════════════════════════════════════════════
# AST TEMPLATES
# ══════════════════════════════════════════════════════════════════


class TestTemplateClassification:

    def test_passthrough(self):
        c = classify(template("${data.question}"))
        assert c.type == TemplateType.PASSTHROUGH
        assert c.text == "${data.question}"
        assert not c.editable

    def test_simple(self):
        c = classify(template("Hello ${data.name}, you have ${data.count} items"))
        assert c.type == TemplateType.SIMPLE
        assert c.text == "Hello ${data.name}, you have ${data.count} items"
        assert c.editable

    def test_fallback_is_simple(self):
        c = classify(template("${data.vp || '[VP Name]'}"))
        assert c.type == TemplateType.SIMPLE
        assert c.text == "${data.vp || '[VP Name]'}"

    def test_procedural_is_complex(self):
        c = classify(CATALOG.lookup("hr").actions["runEnrollmentAudit"].prompt_template)
        assert c.type == TemplateType.COMPLEX
        assert "def enrollment_audit_prompt" in c.text
        assert not c.editable

    def test_unregistered_procedural(self):
        c = classify(Procedural(handler_id="gone.handler"))
        assert c.type == TemplateType.COMPLEX
        assert c.text == "<procedural:gone.handler>"

    @pytest.mark.parametrize("value", [None, 42, "Hello ${data.name}", {"text": "x"}])
    def test_non_templates_are_unknown(self, value):
        c = classify(value)
        assert c.type == TemplateType.UNKNOWN
        assert c.text == ""

    def test_catalog_askagent_is_passthrough(self):
        for key in ("hr", "ops"):
            agent = CATALOG.lookup(key)
            assert classify(agent.actions["askAgent"].prompt_template).type == TemplateType.PASSTHROUGH


# ══════════════════════════════════════════════════════════════════
# PLAIN CALLABLES
# ══════════════════════════════════════════════════════════════════


class TestCallableClassification:

    def test_simple_round_trip(self):
        c = classify(greeting)
        assert c.type == TemplateType.SIMPLE
        for part in ("${data.name}", "${data.count}", "Hello", "you have", "items"):
            assert part in c.text
        record = SimpleNamespace(name="A", count=3)
        assert build_template(c.text)(record) == greeting(record)

    def test_passthrough(self):
        c = classify(ask)
        assert c.type == TemplateType.PASSTHROUGH
        assert c.text == "${data.question}"

    @pytest.mark.parametrize("fn", [roster, conditional, ternary])
    def test_procedural_source_is_complex(self, fn):
        c = classify(fn)
        assert c.type == TemplateType.COMPLEX
        assert c.text.startswith(f"def {fn.__name__}")

    @pytest.mark.parametrize("fn", [broken, not_a_string])
    def test_unrunnable_is_complex(self, fn):
        c = classify(fn)
        assert c.type == TemplateType.COMPLEX
        assert fn.__name__ in c.text

    def test_extracted_text_escapes_literal_backticks(self):
        text = extract_template_text(with_backticks)
        assert text == "Run \\`sync\\` for ${data.site}"
        assert build_template(text)({"site": "North"}) == "Run `sync` for North"

    def test_extract_falls_back_to_source(self):
        assert extract_template_text(broken).startswith("def broken")

    @pytest.mark.parametrize("fn", [shout, upper_inline, with_default])
    def test_value_transforms_are_complex(self, fn):
        c = classify(fn)
        assert c.type == TemplateType.COMPLEX
        assert c.text.startswith(f"def {fn.__name__}")

    def test_docstring_does_not_count_as_statement(self):
        c = classify(documented)
        assert c.type == TemplateType.SIMPLE
        record = SimpleNamespace(employeeName="Jane")
        assert build_template(c.text)(record) == documented(record)

    def test_lambda(self):
        fn = lambda data: f"Hello {data.name}"  # noqa: E731
        c = classify(fn)
        assert c.type == TemplateType.SIMPLE
        assert c.text == "Hello ${data.name}"
