"""
Template classifier - decides how a prompt template may be edited.

    passthrough  the template is a single field reference (``${data.question}``)
    simple       flat text with field substitutions; safe for a text box
    complex      assembled procedurally; must be edited in code
    unknown      not a template at all
"""

import ast
import inspect
import logging
import re
import textwrap
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .handlers import get_handler
from .models import Concat, Procedural, escape_text

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\$\{data\.[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*\}")
_PROCEDURAL_NODES = (
    ast.For, ast.While, ast.If, ast.IfExp, ast.comprehension, ast.BoolOp,
    ast.Assign, ast.AnnAssign, ast.AugAssign, ast.NamedExpr, ast.Await,
)


class TemplateType(str, Enum):
    PASSTHROUGH = "passthrough"
    SIMPLE = "simple"
    COMPLEX = "complex"
    UNKNOWN = "unknown"


class TemplateClassification(BaseModel):
    type: TemplateType
    text: str = ""

    @property
    def editable(self) -> bool:
        return self.type == TemplateType.SIMPLE


def classify(template: Any) -> TemplateClassification:
    """Classify a prompt template. Never raises."""
    try:
        if isinstance(template, Concat):
            if template.is_passthrough:
                return TemplateClassification(type=TemplateType.PASSTHROUGH, text=template.to_text())
            return TemplateClassification(type=TemplateType.SIMPLE, text=template.to_text())
        if isinstance(template, Procedural):
            return TemplateClassification(type=TemplateType.COMPLEX, text=_procedural_source(template))
        if callable(template):
            return _classify_callable(template)
    except Exception as e:
        logger.warning(f"Template classification failed: {e}")
    return TemplateClassification(type=TemplateType.UNKNOWN, text="")


def extract_template_text(fn: Any) -> str:
    """
    Recover template text from a plain callable by running it once against a
    stand-in record whose every field renders as ``${data.<name>}``.
    Falls back to the callable's source when it cannot be run that way.
    """
    try:
        result = fn(PlaceholderRecord())
    except Exception as e:
        logger.debug(f"Placeholder extraction failed for {fn!r}: {e}")
        return _source_of(fn)
    if not isinstance(result, str):
        return _source_of(fn)
    return _escape_outside_placeholders(str(result))


# ── Stand-in record ───────────────────────────────────────────────────────────

class Placeholder(str):
    """A rendered ``${data.<path>}`` marker that supports further field access."""

    def __new__(cls, path: str):
        obj = super().__new__(cls, "${data.%s}" % path)
        obj._path = path
        return obj

    def __getattr__(self, name: str) -> "Placeholder":
        if name.startswith("__"):
            raise AttributeError(name)
        return Placeholder(f"{self._path}.{name}")

    def __getitem__(self, key):
        if isinstance(key, str):
            return Placeholder(f"{self._path}.{key}")
        return str.__getitem__(self, key)


class PlaceholderRecord:
    """Record whose every key or attribute yields a ``Placeholder``."""

    def __getattr__(self, name: str) -> Placeholder:
        if name.startswith("__"):
            raise AttributeError(name)
        return Placeholder(name)

    def __getitem__(self, key: str) -> Placeholder:
        return Placeholder(str(key))

    def get(self, key: str, default: Any = None) -> Placeholder:
        return Placeholder(str(key))

    def __contains__(self, key: object) -> bool:
        return True


# ── Internals ─────────────────────────────────────────────────────────────────

def _classify_callable(fn: Any) -> TemplateClassification:
    if _looks_procedural(fn):
        return TemplateClassification(type=TemplateType.COMPLEX, text=_source_of(fn))
    try:
        result = fn(PlaceholderRecord())
    except Exception:
        return TemplateClassification(type=TemplateType.COMPLEX, text=_source_of(fn))
    if not isinstance(result, str):
        return TemplateClassification(type=TemplateType.COMPLEX, text=_source_of(fn))
    if isinstance(result, Placeholder):
        return TemplateClassification(type=TemplateType.PASSTHROUGH, text=str(result))
    return TemplateClassification(type=TemplateType.SIMPLE, text=_escape_outside_placeholders(result))


def _escape_outside_placeholders(rendered: str) -> str:
    parts = []
    last = 0
    for m in _PLACEHOLDER.finditer(rendered):
        parts.append(escape_text(rendered[last:m.start()]))
        parts.append(m.group())
        last = m.end()
    parts.append(escape_text(rendered[last:]))
    return "".join(parts)


def _procedural_source(template: Procedural) -> str:
    try:
        return _source_of(get_handler(template.handler_id), strict=True)
    except (KeyError, OSError, TypeError):
        return f"<procedural:{template.handler_id}>"


def _source_of(fn: Any, strict: bool = False) -> str:
    try:
        return inspect.getsource(fn).strip()
    except (OSError, TypeError):
        if strict:
            raise
        return repr(fn)


def _looks_procedural(fn: Any) -> bool:
    """
    True unless the callable's body is a single returned expression built
    from field reads, f-strings and concatenation. Anything else (statements,
    assignments, branches, loops, boolean fallbacks, method calls) transforms
    values in ways a placeholder run cannot capture.
    """
    try:
        tree = ast.parse(textwrap.dedent(inspect.getsource(fn)))
    except (OSError, TypeError, SyntaxError):
        return False
    node = _function_node(tree, getattr(fn, "__name__", ""))
    if node is None:
        return True
    if isinstance(node, ast.Lambda):
        body = node.body
    else:
        stmts = node.body
        if stmts and isinstance(stmts[0], ast.Expr) and isinstance(stmts[0].value, ast.Constant):
            stmts = stmts[1:]
        if len(stmts) != 1 or not isinstance(stmts[0], ast.Return) or stmts[0].value is None:
            return True
        body = stmts[0].value
    for sub in ast.walk(body):
        if isinstance(sub, _PROCEDURAL_NODES):
            return True
        if isinstance(sub, ast.BinOp) and not isinstance(sub.op, ast.Add):
            return True
        if isinstance(sub, ast.Subscript) and isinstance(sub.slice, ast.Slice):
            return True
        if isinstance(sub, ast.Call) and not _is_field_call(sub.func):
            return True
    return False


def _function_node(tree: ast.AST, name: str):
    for node in ast.walk(tree):
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)) and node.name == name:
            return node
        if isinstance(node, ast.Lambda) and name == "<lambda>":
            return node
    return None


def _is_field_call(func: ast.AST) -> bool:
    if isinstance(func, ast.Attribute):
        return func.attr == "get"
    return isinstance(func, ast.Name) and func.id == "str"
