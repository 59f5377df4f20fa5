#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/compose/measure.py
"""Length of a page as the chat client will count it."""

from __future__ import annotations

from md2tg.options.entities import EntityRendererOptions
from md2tg.renderers.entities import to_formatted_text


def rendered_length(markdown: str, render_options: EntityRendererOptions | None = None) -> int:
    r"""Return the UTF-16 length of the text ``markdown`` renders to.

    Markdown markup (``**``, ``>``, link targets) is not sent, so pages are
    measured after conversion rather than on their source.

    Examples
    --------
        >>> rendered_length("**bold** [link](https://example.com)")
        9

    """
    return to_formatted_text(markdown, render_options).length
