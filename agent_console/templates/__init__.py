"""Prompt templates - AST, text parser, classifier, procedural handlers"""
from .models import Concat, FieldRef, Procedural, PromptTemplate, Text
from .parser import TemplateSyntaxError, build_template, parse_template, validate_template
from .handlers import get_handler, procedural, prompt_handler
from .classifier import TemplateClassification, TemplateType, classify, extract_template_text


def template(text: str) -> Concat:
    """Catalog helper: author a flat template as text."""
    return parse_template(text)


__all__ = [
    "Concat", "FieldRef", "Procedural", "PromptTemplate", "Text",
    "TemplateSyntaxError", "build_template", "parse_template", "validate_template",
    "get_handler", "procedural", "prompt_handler",
    "TemplateClassification", "TemplateType", "classify", "extract_template_text",
    "template",
]
