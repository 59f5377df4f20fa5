#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/compose/__init__.py
"""Composition of documents into pages that fit the chat platform's limits.

- AnimeDocument / ReleaseUpdate: input documents
- PageComposer / compose: primary page with degradation ladder, overflow pages
- paginate_resources: resource listing packed into overflow pages
- compose_release_caption: episode release caption

"""

from md2tg.compose.captions import compose_release_caption
from md2tg.compose.composer import PageComposer, PrimaryPageFit, compose, fit_primary_page
from md2tg.compose.document import AnimeDocument, Field, ReleaseUpdate, ResourceEntry
from md2tg.compose.measure import rendered_length
from md2tg.compose.ordering import episode_sort_key, sort_entries
from md2tg.compose.resources import format_resource_lines, paginate_resources

__all__ = [
    "AnimeDocument",
    "Field",
    "PageComposer",
    "PrimaryPageFit",
    "ReleaseUpdate",
    "ResourceEntry",
    "compose",
    "compose_release_caption",
    "episode_sort_key",
    "fit_primary_page",
    "format_resource_lines",
    "paginate_resources",
    "rendered_length",
    "sort_entries",
]
