"""String escaping and comment formatting for generated sources."""

from __future__ import annotations

from typing import List, Optional

COMMENT_WIDTH = 70

_XML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}


def quote_for_java(value: Optional[str]) -> str:
    """Return ``value`` as a double-quoted Java (or C++) string literal."""
    if value is None:
        return "null"
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n\r", "\\n")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f'"{escaped}"'


def quote_for_properties(value: str) -> str:
    """Escape ``value`` for the right-hand side of a properties file entry."""
    return (
        value.replace("\\", "\\\\")
        .replace("\n\r", "\\n")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )


def escape_xml(value: str) -> str:
    return "".join(_XML_ESCAPES.get(char, char) for char in value)


def fill_text(text: str, width: int = -1) -> List[str]:
    """Split ``text`` into lines, keeping its line breaks.

    With a positive ``width`` long lines are broken at the last space before
    the limit (or the first one after it when there is none). Whitespace at
    line breaks is dropped.
    """
    lines: List[str] = []
    index = 0
    length = len(text)
    while index < length:
        end = length
        for breaker in ("\r", "\n"):
            found = text.find(breaker, index)
            if 0 <= found < end:
                end = found
        if width > 0 and index + width <= end:
            end = text.rfind(" ", 0, index + width + 1)
            if end < index:
                end = text.find(" ", index)
                if end < 0:
                    end = length
        lines.append(text[index:end])
        index = end
        while index < length and text[index] in " \r\n":
            index += 1
    return lines


def comment_block(name: str, text: str, comment: Optional[str], indent: str = "    ") -> str:
    """Doc comment preceding a generated member: the resource comment, then its text."""
    prefix = f"{indent} * "
    lines = [f"{indent}/**"]
    if comment:
        lines.extend(prefix + line for line in fill_text(comment, COMMENT_WIDTH))
        lines.append(f"{indent} *")
    summary = f"<code>{name}</code> is '<code>{escape_xml(text)}</code>'"
    lines.extend(prefix + line for line in fill_text(summary) or [""])
    lines.append(f"{indent} */")
    return "\n".join(lines)


__all__ = [
    "COMMENT_WIDTH",
    "comment_block",
    "escape_xml",
    "fill_text",
    "quote_for_java",
    "quote_for_properties",
]
