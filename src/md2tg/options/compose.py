#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/options/compose.py
"""Configuration options for page composition.

This module defines the budgets, degradation ladder and labels used when
composing documents into budgeted pages.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from md2tg.constants import (
    DEFAULT_FOOTER_SEPARATOR,
    DEFAULT_NEXT_PAGE_LABEL,
    DEFAULT_NSFW_TAG,
    DEFAULT_OVERFLOW_BUDGET,
    DEFAULT_PAGE_NUMBER_FORMAT,
    DEFAULT_PREVIOUS_PAGE_LABEL,
    DEFAULT_PRIMARY_BUDGET,
    DEFAULT_READ_MORE_LABEL,
    DEFAULT_RESOURCES_LABEL,
    DEFAULT_SUMMARY_LABEL,
    DEFAULT_SUMMARY_LENGTHS,
    DEFAULT_TAGS_LABEL,
    DEFAULT_UNKNOWN_VALUE,
)
from md2tg.options.base import CloneFrozenMixin
from md2tg.options.entities import EntityRendererOptions


@dataclass(frozen=True)
class ComposeOptions(CloneFrozenMixin):
    """Configuration options for the budget-fitting composer.

    Budgets are measured on the rendered text (after Markdown conversion) in
    UTF-16 code units, the unit the chat platform counts in.

    Parameters
    ----------
    primary_budget : int, default 1024
        Limit for the primary page (a media caption).
    overflow_budget : int, default 4096
        Limit for each overflow page (a plain text message).
    summary_lengths : tuple of int, default (250, 200, 150, 120, 100)
        Summary truncation lengths tried in order; the last one is the floor.
    summary_label, resources_label, tags_label : str
        Section captions.
    read_more_label : str
        Link text appended to a truncated summary.
    nsfw_tag : str
        Tag placed on the title line of NSFW documents.
    unknown_value : str
        Shown for fields whose value is empty.
    previous_page_label, next_page_label : str
        Navigation hints in overflow page footers.
    page_number_format : str
        Format with ``{current}`` and ``{total}`` placeholders.
    footer_separator : str
        Joins the footer parts.
    resource_page_header : str or None, default None
        Fixed header of overflow pages; None means "<title>" followed by the
        resources caption.
    render_options : EntityRendererOptions
        Options of the renderer used to measure candidate pages.

    """

    primary_budget: int = field(
        default=DEFAULT_PRIMARY_BUDGET,
        metadata={"help": "Length limit of the primary page", "type": int, "importance": "core"},
    )
    overflow_budget: int = field(
        default=DEFAULT_OVERFLOW_BUDGET,
        metadata={"help": "Length limit of each overflow page", "type": int, "importance": "core"},
    )
    summary_lengths: tuple[int, ...] = field(
        default=DEFAULT_SUMMARY_LENGTHS,
        metadata={"help": "Summary truncation ladder, longest first", "importance": "advanced"},
    )
    summary_label: str = DEFAULT_SUMMARY_LABEL
    resources_label: str = DEFAULT_RESOURCES_LABEL
    tags_label: str = DEFAULT_TAGS_LABEL
    read_more_label: str = DEFAULT_READ_MORE_LABEL
    nsfw_tag: str = DEFAULT_NSFW_TAG
    unknown_value: str = DEFAULT_UNKNOWN_VALUE
    previous_page_label: str = DEFAULT_PREVIOUS_PAGE_LABEL
    next_page_label: str = DEFAULT_NEXT_PAGE_LABEL
    page_number_format: str = DEFAULT_PAGE_NUMBER_FORMAT
    footer_separator: str = DEFAULT_FOOTER_SEPARATOR
    resource_page_header: str | None = None
    render_options: EntityRendererOptions = field(default_factory=EntityRendererOptions)

    def __post_init__(self) -> None:
        """Validate budgets and the truncation ladder.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.primary_budget <= 0:
            raise ValueError(f"primary_budget must be positive, got {self.primary_budget}")
        if self.overflow_budget <= 0:
            raise ValueError(f"overflow_budget must be positive, got {self.overflow_budget}")
        if self.primary_budget > self.overflow_budget:
            raise ValueError(
                f"primary_budget ({self.primary_budget}) must not exceed overflow_budget ({self.overflow_budget})"
            )
        if not self.summary_lengths:
            raise ValueError("summary_lengths must contain at least one length")
        if any(length <= 0 for length in self.summary_lengths):
            raise ValueError(f"summary_lengths must be positive, got {self.summary_lengths}")
        if any(a <= b for a, b in zip(self.summary_lengths, self.summary_lengths[1:])):
            raise ValueError(f"summary_lengths must be strictly descending, got {self.summary_lengths}")

    @property
    def summary_floor(self) -> int:
        """Shortest summary length the ladder will try."""
        return self.summary_lengths[-1]
