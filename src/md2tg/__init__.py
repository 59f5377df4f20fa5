#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/__init__.py
"""md2tg - Markdown to Telegram formatted text, and pages that fit.

md2tg converts Markdown into the form the Telegram API expects: plain text
plus a flat list of formatting entities addressed by UTF-16 offsets
(TDLib ``formattedText``). On top of that it composes structured show
documents into a primary page that fits a media caption and, when needed,
overflow pages listing episode resources.

Examples
--------
Markdown to formatted text:

    >>> from md2tg import to_formatted_text
    >>> result = to_formatted_text("**Frieren** [info](https://example.com)")
    >>> result.text
    'Frieren info'
    >>> [entity.type.wire_name for entity in result.entities]
    ['textEntityTypeBold', 'textEntityTypeTextUrl']

Composing a document:

    >>> from md2tg import AnimeDocument, compose
    >>> pages = compose(AnimeDocument(title="Frieren", tags=["Fantasy"]))
    >>> print(pages[0])
    Frieren
    <BLANKLINE>
    Tags:
    >> \\#Fantasy

"""

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "md2tg requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from md2tg.api import compose, compose_release_caption, convert, fit_primary_page, to_formatted_text
from md2tg.ast import mdast_json_to_ast, mdast_to_ast
from md2tg.compose import AnimeDocument, Field, PrimaryPageFit, ReleaseUpdate, ResourceEntry, paginate_resources
from md2tg.entities import FormattedText, TextEntity
from md2tg.exceptions import (
    ConfigError,
    InvalidOptionsError,
    Md2TgError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from md2tg.options import ComposeOptions, EntityRendererOptions
from md2tg.parsers import markdown_to_ast

__all__ = [
    "__version__",
    "AnimeDocument",
    "ComposeOptions",
    "ConfigError",
    "EntityRendererOptions",
    "Field",
    "FormattedText",
    "InvalidOptionsError",
    "Md2TgError",
    "ParsingError",
    "PrimaryPageFit",
    "ReleaseUpdate",
    "RenderingError",
    "ResourceEntry",
    "TextEntity",
    "ValidationError",
    "compose",
    "compose_release_caption",
    "convert",
    "fit_primary_page",
    "markdown_to_ast",
    "mdast_json_to_ast",
    "mdast_to_ast",
    "paginate_resources",
    "to_formatted_text",
]
