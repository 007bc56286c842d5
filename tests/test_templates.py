"""
Tests for the prompt template AST, the template text parser, and procedural handlers.
Run: pytest tests/test_templates.py -v
"""
from types import SimpleNamespace

import pytest

from agent_console.catalog import CATALOG
from agent_console.templates import (
    Concat, FieldRef, Procedural, TemplateSyntaxError, Text,
    get_handler, parse_template, procedural, prompt_handler, template, validate_template,
)


# ══════════════════════════════════════════════════════════════════
# RENDERING
# ══════════════════════════════════════════════════════════════════


class TestRendering:

    def test_substitutes_fields(self):
        t = parse_template("Hello ${data.name}, you have ${data.count} items")
        assert t({"name": "A", "count": 3}) == "Hello A, you have 3 items"

    def test_attribute_records(self):
        t = parse_template("Hello ${data.name}")
        assert t(SimpleNamespace(name="Jane")) == "Hello Jane"

    def test_nested_path(self):
        t = parse_template("Site lead: ${data.site.lead.name}")
        assert t({"site": {"lead": {"name": "Ortiz"}}}) == "Site lead: Ortiz"

    def test_missing_field_renders_empty(self):
        t = parse_template("[${data.missing}] [${data.site.name}]")
        assert t({"site": None}) == "[] []"

    def test_fallback_when_missing_or_falsy(self):
        t = parse_template("VP: ${data.vp || '[VP Name]'}")
        assert t({}) == "VP: [VP Name]"
        assert t({"vp": ""}) == "VP: [VP Name]"
        assert t({"vp": "Kim"}) == "VP: Kim"

    def test_numeric_fallback(self):
        t = parse_template("Incidents: ${data.incidents || 0}")
        assert t({}) == "Incidents: 0"
        assert t({"incidents": 4}) == "Incidents: 4"

    def test_value_formatting(self):
        t = parse_template("${data.flag} ${data.rate} ${data.sites} ${data.none}")
        assert t({"flag": True, "rate": 15.0, "sites": ["A", "B"], "none": None}) == "true 15 A,B "

    def test_whitespace_inside_placeholder(self):
        t = parse_template("${ data.name }")
        assert t({"name": "x"}) == "x"

    def test_escapes(self):
        t = parse_template("cost \\${data.x}\\n\\`tick\\`")
        assert t({"x": "ignored"}) == "cost ${data.x}\n`tick`"

    def test_segments(self):
        t = parse_template("Hi ${data.name || 'there'}!")
        assert t.segments == (
            Text(text="Hi "),
            FieldRef(path=("name",), fallback="there"),
            Text(text="!"),
        )
        assert t.fields == ("name",)


# ══════════════════════════════════════════════════════════════════
# PARSER ERRORS
# ══════════════════════════════════════════════════════════════════


class TestParserErrors:

    @pytest.mark.parametrize("text,message", [
        ("Hello `world`", "Unescaped backtick"),
        ("Hi ${data.name", "Unterminated placeholder"),
        ("Hi ${ }", "Empty placeholder"),
        ("${data.name.toUpperCase()}", "Unsupported expression in placeholder"),
        ("${process.env.SECRET}", "Placeholders may only reference data.<field>"),
        ("${data}", "Placeholders may only reference data.<field>"),
        ("${data.}", "Expected field name after '.'"),
        ("trailing \\", "Trailing backslash"),
        ("${data.x || 'oops}", "Unterminated string literal"),
        ("${data.x || other}", "Fallback must be a quoted string or a number"),
    ])
    def test_rejects(self, text, message):
        with pytest.raises(TemplateSyntaxError) as exc:
            parse_template(text)
        assert exc.value.message == message
        assert exc.value.text == text

    def test_position_points_at_offender(self):
        with pytest.raises(TemplateSyntaxError) as exc:
            parse_template("Hello `world`")
        assert exc.value.position == 6
        assert "`world`" in exc.value.excerpt

    def test_is_value_error(self):
        assert issubclass(TemplateSyntaxError, ValueError)

    def test_validate_template(self):
        assert validate_template("Hello ${data.name}") is None
        err = validate_template("Hello ${data.name")
        assert isinstance(err, TemplateSyntaxError)

    def test_non_string_input(self):
        with pytest.raises(TypeError):
            parse_template(None)


# ══════════════════════════════════════════════════════════════════
# TEXT FORM
# ══════════════════════════════════════════════════════════════════


class TestTextForm:

    def test_catalog_templates_reparse_identically(self):
        for _, agent in CATALOG.list_all():
            for action in agent.actions.values():
                t = action.prompt_template
                if isinstance(t, Concat):
                    assert parse_template(t.to_text()) == t

    def test_special_characters_survive(self):
        t = Concat(segments=(
            Text(text="Use `code` and ${literal} with \\ slash\n"),
            FieldRef(path=("a", "b"), fallback="it's\nfine"),
        ))
        assert parse_template(t.to_text()) == t

    def test_passthrough_flag(self):
        assert template("${data.question}").is_passthrough
        assert not template("${data.question || 'none'}").is_passthrough
        assert not template("Q: ${data.question}").is_passthrough


# ══════════════════════════════════════════════════════════════════
# PROCEDURAL HANDLERS
# ══════════════════════════════════════════════════════════════════


class TestHandlers:

    def test_catalog_handlers_registered(self):
        for handler_id in ("hr.enrollment_audit", "budget.staffing_framework"):
            assert callable(get_handler(handler_id))

    def test_procedural_renders_handler(self):
        t = procedural("hr.enrollment_audit")
        out = t({"enrollments": [
            {"name": "Ana", "hireDate": "2026-01-05", "daysRemaining": 3, "status": "pending"},
        ]})
        assert "- Ana: hired 2026-01-05, 3 days remaining, status: pending" in out

    def test_procedural_tolerates_missing_fields(self):
        out = procedural("hr.enrollment_audit")({"enrollments": [{"name": "Ana"}]})
        assert "- Ana: hired [Date], ? days remaining, status: [Unknown]" in out
        assert "[No open enrollments provided]" in procedural("hr.enrollment_audit")({})

    def test_unknown_handler(self):
        with pytest.raises(KeyError):
            procedural("no.such.handler")
        with pytest.raises(KeyError):
            get_handler("no.such.handler")

    def test_duplicate_registration_rejected(self):
        @prompt_handler("tests.duplicate")
        def first(data):
            return "one"

        with pytest.raises(ValueError):
            @prompt_handler("tests.duplicate")
            def second(data):
                return "two"

        assert Procedural(handler_id="tests.duplicate")({}) == "one"
