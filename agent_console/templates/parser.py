r"""
Template text parser - turns operator-edited template text back into a
callable ``Concat``.

Grammar (everything outside ``${ }`` is literal text):

    placeholder := "${" ws "data" ("." ident)+ ws [ "||" ws literal ws ] "}"
    literal     := 'single quoted' | "double quoted" | number
    escapes     := \\  \`  \$  \n  \t  \r   (any other \x yields x)

Only field references are accepted inside placeholders, so editing a prompt
can never evaluate arbitrary code.
"""

import re
from typing import List, Optional, Tuple

from .models import Concat, FieldRef, Text

_IDENT = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r"}


class TemplateSyntaxError(ValueError):
    """Raised when template text cannot be rebuilt into a template."""

    def __init__(self, message: str, position: int, text: str):
        super().__init__(f"{message} (at position {position})")
        self.message = message
        self.position = position
        self.text = text

    @property
    def excerpt(self) -> str:
        start = max(0, self.position - 20)
        return self.text[start:self.position + 20]


def parse_template(text: str) -> Concat:
    """Parse template text into a ``Concat``. Raises ``TemplateSyntaxError``."""
    if not isinstance(text, str):
        raise TypeError(f"Template text must be a string, got {type(text).__name__}")

    segments: List = []
    buf: List[str] = []
    i, n = 0, len(text)
    while i < n:
        ch = text[i]
        if ch == "\\":
            if i + 1 >= n:
                raise TemplateSyntaxError("Trailing backslash", i, text)
            nxt = text[i + 1]
            buf.append(_ESCAPES.get(nxt, nxt))
            i += 2
            continue
        if ch == "`":
            raise TemplateSyntaxError("Unescaped backtick", i, text)
        if ch == "$" and text.startswith("${", i):
            if buf:
                segments.append(Text(text="".join(buf)))
                buf = []
            ref, i = _parse_placeholder(text, i)
            segments.append(ref)
            continue
        buf.append(ch)
        i += 1

    if buf:
        segments.append(Text(text="".join(buf)))
    return Concat(segments=tuple(segments))


def build_template(text: str) -> Concat:
    """Rebuild a callable prompt template from edited template text."""
    return parse_template(text)


def validate_template(text: str) -> Optional[TemplateSyntaxError]:
    """Return the syntax error for ``text``, or None when it parses."""
    try:
        parse_template(text)
    except TemplateSyntaxError as e:
        return e
    return None


# ── Internals ─────────────────────────────────────────────────────────────────

def _skip_ws(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in " \t\r\n":
        pos += 1
    return pos


def _parse_placeholder(text: str, start: int) -> Tuple[FieldRef, int]:
    if text.find("}", start) == -1:
        raise TemplateSyntaxError("Unterminated placeholder", start, text)

    pos = _skip_ws(text, start + 2)
    if text[pos] == "}":
        raise TemplateSyntaxError("Empty placeholder", start, text)

    m = _IDENT.match(text, pos)
    if not m or m.group() != "data":
        raise TemplateSyntaxError("Placeholders may only reference data.<field>", pos, text)
    pos = m.end()

    path: List[str] = []
    while pos < len(text) and text[pos] == ".":
        m = _IDENT.match(text, pos + 1)
        if not m:
            raise TemplateSyntaxError("Expected field name after '.'", pos + 1, text)
        path.append(m.group())
        pos = m.end()
    if not path:
        raise TemplateSyntaxError("Placeholders may only reference data.<field>", pos, text)

    pos = _skip_ws(text, pos)
    fallback = None
    if text.startswith("||", pos):
        fallback, pos = _parse_literal(text, _skip_ws(text, pos + 2))
        pos = _skip_ws(text, pos)

    if pos >= len(text):
        raise TemplateSyntaxError("Unterminated placeholder", start, text)
    if text[pos] != "}":
        raise TemplateSyntaxError("Unsupported expression in placeholder", pos, text)
    return FieldRef(path=tuple(path), fallback=fallback), pos + 1


def _parse_literal(text: str, pos: int) -> Tuple[str, int]:
    if pos < len(text) and text[pos] in ("'", '"'):
        quote = text[pos]
        out: List[str] = []
        i = pos + 1
        while i < len(text):
            ch = text[i]
            if ch == "\\" and i + 1 < len(text):
                out.append(_ESCAPES.get(text[i + 1], text[i + 1]))
                i += 2
                continue
            if ch == quote:
                return "".join(out), i + 1
            out.append(ch)
            i += 1
        raise TemplateSyntaxError("Unterminated string literal", pos, text)

    m = _NUMBER.match(text, pos)
    if m:
        return m.group(), m.end()
    raise TemplateSyntaxError("Fallback must be a quoted string or a number", pos, text)
