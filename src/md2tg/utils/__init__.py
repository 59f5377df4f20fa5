#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/utils/__init__.py
"""Utility modules for md2tg package.

This package contains helpers for UTF-16 text measurement, Markdown escaping,
link target classification and hashtag normalization.
"""

from md2tg.utils.escape import escape_link_url, escape_markdown
from md2tg.utils.tags import format_tags, safe_tag
from md2tg.utils.text import truncate_utf16, utf16_len
from md2tg.utils.urls import LinkTarget, classify_link

__all__ = [
    "LinkTarget",
    "classify_link",
    "escape_link_url",
    "escape_markdown",
    "format_tags",
    "safe_tag",
    "truncate_utf16",
    "utf16_len",
]
