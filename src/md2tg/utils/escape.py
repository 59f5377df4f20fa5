#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/utils/escape.py
"""Markdown escaping for user-supplied text placed into composed pages.

Titles, field values, summaries and resource labels come from external
metadata and may contain characters Markdown would interpret. They are
backslash-escaped before they are embedded in a page so that the rendered
text shows them literally.

"""

from __future__ import annotations

import re

# \ must come first so the backslashes added for the others are not escaped again
_TEXT_SPECIAL_CHARS = "\\`*_~[]#<>"
_LINK_SPECIAL_CHARS = "\\[]"

# bullets, thematic breaks and setext underlines ("-", "+", "="), and
# ordered list markers ("1." / "1)" followed by a space or the line end)
_LINE_START_MARKER = re.compile(r"^([ \t]*)(?:([-+=])|(\d{1,9})(?=[.)](?:[ \t]|$)))", re.MULTILINE)


def _escape_line_start(match: re.Match) -> str:
    indent, symbol, number = match.groups()
    if symbol:
        return f"{indent}\\{symbol}"
    return f"{indent}{number}\\"


def escape_markdown(text: str, context: str = "text") -> str:
    r"""Escape Markdown with context awareness.

    Parameters
    ----------
    text : str
        Text to escape
    context : {'text', 'link'}, default = 'text'
        ``'link'`` escapes only what can end the visible text of a link;
        ``'text'`` also escapes emphasis, code, strikethrough, heading and
        quote markers, raw HTML brackets, and the list, thematic break and
        setext markers that can open a line.

    Returns
    -------
    str
        Escaped text

    Examples
    --------
        >>> escape_markdown("a *b* [c]")
        'a \\*b\\* \\[c\\]'
        >>> escape_markdown("3) Foo\n---")
        '3\\) Foo\n\\---'
        >>> escape_markdown("EP [01]", "link")
        'EP \\[01\\]'

    """
    if not text:
        return text

    if context == "link":
        return "".join("\\" + char if char in _LINK_SPECIAL_CHARS else char for char in text)

    escaped = "".join("\\" + char if char in _TEXT_SPECIAL_CHARS else char for char in text)
    return _LINE_START_MARKER.sub(_escape_line_start, escaped)


def escape_link_url(url: str) -> str:
    """Make a URL safe to place inside ``(...)`` of an inline link.

    Spaces and parentheses would end the destination early; they are
    percent-encoded.

    Examples
    --------
        >>> escape_link_url("https://example.com/a (1)")
        'https://example.com/a%20%281%29'

    """
    return url.strip().replace(" ", "%20").replace("(", "%28").replace(")", "%29")
