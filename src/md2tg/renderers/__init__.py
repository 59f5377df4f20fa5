#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/renderers/__init__.py
"""AST renderers.

- EntityRenderer: render to Telegram formatted text (plain text plus entities)

Examples
--------
    >>> from md2tg.parsers import markdown_to_ast
    >>> from md2tg.renderers import convert
    >>> convert(markdown_to_ast("**bold**")).to_dict()["entities"][0]["type"]
    {'_': 'textEntityTypeBold'}

"""

from md2tg.renderers.base import BaseRenderer
from md2tg.renderers.entities import EntityRenderer, convert, to_formatted_text

__all__ = ["BaseRenderer", "EntityRenderer", "convert", "to_formatted_text"]
