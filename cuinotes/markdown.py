"""Markdown-to-glyph transform for the content pane.

This is cosmetic: headings and bullets become indented glyphs and inline
markers are replaced with emoji or removed. It works line by line so it can
be applied to a viewport slice of a large file.
"""

import re

_HEADING_GLYPHS = (
    ("# ", "🔸 "),
    ("## ", "  • "),
    ("### ", "    ◦ "),
    ("#### ", "      - "),
)
_BULLETS = ("- ", "* ")
_NUMBERED = re.compile(r"^(\d+)\. (.*)")

# Order matters: triple asterisks before double before single.
_INLINE_RULES = (
    (re.compile(r"\*\*\*([^*]+)\*\*\*"), r"🔥\1🔥"),
    (re.compile(r"\*\*([^*]+)\*\*"), r"\1"),
    (re.compile(r"\*([^*]+)\*"), r"\1"),
    (re.compile(r"__([^_]+)__"), r"\1"),
    (re.compile(r"==([^=]+)=="), r"✨\1✨"),
    (re.compile(r"\^\^([^^]+)\^\^"), r"📢\1📢"),
    (re.compile(r"`([^`]+)`"), r"[\1]"),
    (re.compile(r"~~([^~]+)~~"), r"\1"),
)


def render_inline(text: str) -> str:
    for pattern, replacement in _INLINE_RULES:
        text = pattern.sub(replacement, text)
    return text


def render_line(line: str) -> str:
    for prefix, glyph in _HEADING_GLYPHS:
        if line.startswith(prefix):
            return glyph + line[len(prefix) :]

    for bullet in _BULLETS:
        if line.startswith(bullet):
            return "  • " + line[len(bullet) :]

    match = _NUMBERED.match(line)
    if match:
        return f"  {match.group(1)}. {match.group(2)}"

    return render_inline(line)


def render_markdown(content: str) -> str:
    """Render every line of `content` for display."""
    return "\n".join(render_line(line) for line in content.split("\n"))
