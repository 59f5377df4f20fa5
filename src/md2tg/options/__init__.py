#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/options/__init__.py
"""Option dataclasses for md2tg renderers and composers."""

from md2tg.options.base import BaseRendererOptions, CloneFrozenMixin
from md2tg.options.compose import ComposeOptions
from md2tg.options.entities import EntityRendererOptions

__all__ = [
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "ComposeOptions",
    "EntityRendererOptions",
]
