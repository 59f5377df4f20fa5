#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/parsers/__init__.py
"""Parsers building the md2tg syntax tree from Markdown text."""

from md2tg.parsers.markdown import MarkdownToAstConverter, markdown_to_ast

__all__ = ["MarkdownToAstConverter", "markdown_to_ast"]
