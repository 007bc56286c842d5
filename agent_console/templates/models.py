"""
Prompt template AST.

A prompt template is either a flat ``Concat`` of literal ``Text`` and
``FieldRef`` segments (editable by an operator as plain template text), or a
``Procedural`` reference to a registered Python handler that assembles the
prompt itself (editable only in code). Both are callable: ``template(data)``.
"""

import json
from collections.abc import Mapping
from typing import Annotated, Any, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

_MISSING = object()


class Text(BaseModel):
    """Literal text segment."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str


class FieldRef(BaseModel):
    """``${data.a.b}`` substitution, with an optional ``|| 'fallback'`` literal."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["field"] = "field"
    path: Tuple[str, ...]
    fallback: Optional[str] = None

    @property
    def dotted(self) -> str:
        return ".".join(self.path)

    def resolve(self, data: Any) -> str:
        value = lookup_path(data, self.path)
        if self.fallback is not None and (value is _MISSING or not value):
            return self.fallback
        if value is _MISSING:
            return ""
        return stringify(value)


Segment = Annotated[Union[Text, FieldRef], Field(discriminator="kind")]


class Concat(BaseModel):
    """A flat template: literal text interleaved with field substitutions."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["concat"] = "concat"
    segments: Tuple[Segment, ...] = ()

    def __call__(self, data: Any) -> str:
        return self.render(data)

    def render(self, data: Any) -> str:
        return "".join(
            seg.text if isinstance(seg, Text) else seg.resolve(data)
            for seg in self.segments
        )

    @property
    def fields(self) -> Tuple[str, ...]:
        """Dotted paths referenced by this template, in order of first use."""
        seen = []
        for seg in self.segments:
            if isinstance(seg, FieldRef) and seg.dotted not in seen:
                seen.append(seg.dotted)
        return tuple(seen)

    @property
    def is_passthrough(self) -> bool:
        return (
            len(self.segments) == 1
            and isinstance(self.segments[0], FieldRef)
            and self.segments[0].fallback is None
        )

    def to_text(self) -> str:
        """Canonical template text; ``parse_template(t.to_text()) == t``."""
        return "".join(format_segment(seg) for seg in self.segments)


class Procedural(BaseModel):
    """A template assembled by a registered handler (loops, joins, conditionals)."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["procedural"] = "procedural"
    handler_id: str

    def __call__(self, data: Any) -> str:
        return self.render(data)

    def render(self, data: Any) -> str:
        from .handlers import get_handler
        return get_handler(self.handler_id)(data)


PromptTemplate = Annotated[Union[Concat, Procedural], Field(discriminator="kind")]


# ── Rendering helpers ────────────────────────────────────────────────────────

def lookup_path(data: Any, path: Tuple[str, ...]) -> Any:
    """Walk a dotted path through mappings and attribute-bearing objects."""
    current = data
    for name in path:
        if current is None:
            return _MISSING
        if isinstance(current, Mapping):
            try:
                current = current[name]
                continue
            except (KeyError, TypeError):
                return _MISSING
        current = getattr(current, name, _MISSING)
        if current is _MISSING:
            return _MISSING
    return current


def stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


# ── Formatting (AST -> template text) ────────────────────────────────────────

def escape_text(text: str) -> str:
    return (
        text.replace("\\", "\\\\")
        .replace("`", "\\`")
        .replace("${", "\\${")
    )


def format_segment(seg: Union[Text, FieldRef]) -> str:
    if isinstance(seg, Text):
        return escape_text(seg.text)
    if seg.fallback is None:
        return "${data.%s}" % seg.dotted
    quoted = seg.fallback.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n")
    return "${data.%s || '%s'}" % (seg.dotted, quoted)
