#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/compose/resources.py
"""Resource listing lines and their pagination into overflow pages.

A resource listing is a quoted block: one header line per release group,
followed by one line per episode entry. When the listing does not fit on the
primary page it is packed greedily into overflow pages, each measured by its
rendered length against the overflow budget.

"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from md2tg.compose.document import ResourceEntry
from md2tg.compose.measure import rendered_length
from md2tg.compose.ordering import sort_entries
from md2tg.options.compose import ComposeOptions
from md2tg.options.entities import EntityRendererOptions
from md2tg.utils.escape import escape_link_url, escape_markdown
from md2tg.utils.tags import safe_tag

logger = logging.getLogger(__name__)

ResourceGroups = Mapping[str, Sequence[ResourceEntry]]


def _group_header(group: str) -> str:
    tag = safe_tag(group)
    if tag:
        return f"> **#{escape_markdown(tag)}**"
    return f"> **{escape_markdown(group)}**"


def _entry_line(entry: ResourceEntry) -> str:
    if entry.url:
        return f"> [{escape_markdown(entry.label, 'link')}]({escape_link_url(entry.url)})"
    return f"> {escape_markdown(entry.label)}"


def _resource_lines(groups: ResourceGroups) -> list[tuple[str, bool]]:
    """Listing lines paired with whether each one is a group header."""
    lines: list[tuple[str, bool]] = []
    for group, entries in groups.items():
        if not entries:
            continue
        lines.append((_group_header(group), True))
        lines.extend((_entry_line(entry), False) for entry in sort_entries(list(entries)))
    return lines


def format_resource_lines(groups: ResourceGroups) -> list[str]:
    """Format resource groups as quoted Markdown lines.

    Groups keep their mapping order; entries within a group are sorted in
    episode order. Groups without entries are skipped.

    Parameters
    ----------
    groups : mapping of str to sequence of ResourceEntry
        Entries per release group

    Returns
    -------
    list of str
        One header line per group, then one line per entry

    Examples
    --------
        >>> format_resource_lines({"Sub Group": [ResourceEntry("2"), ResourceEntry("1", "https://t.me/c/1/5")]})
        ['> **#SubGroup**', '> [1](https://t.me/c/1/5)', '> 2']

    """
    return [line for line, _ in _resource_lines(groups)]


def _assemble(header: Optional[str], lines: Sequence[str]) -> str:
    body = "\n".join(lines)
    if header:
        return f"{header}\n{body}"
    return body


def _footer(index: int, total: int, options: ComposeOptions) -> str:
    parts = []
    if index > 0:
        parts.append(options.previous_page_label)
    parts.append(options.page_number_format.format(current=index + 1, total=total))
    if index < total - 1:
        parts.append(options.next_page_label)
    return escape_markdown(options.footer_separator.join(parts))


def _pack(
    lines: Sequence[tuple[str, bool]],
    header: Optional[str],
    budget: int,
    render_options: EntityRendererOptions,
) -> list[list[str]]:
    """Greedily split ``lines`` into page bodies."""
    bodies: list[list[str]] = []
    current: list[str] = []
    ends_with_group_header = False
    for line, is_group_header in lines:
        if current and rendered_length(_assemble(header, current + [line]), render_options) > budget:
            # a group header never ends a page its entries do not start on
            carried = [current.pop()] if ends_with_group_header and len(current) > 1 else []
            bodies.append(current)
            current = carried
        current.append(line)
        ends_with_group_header = is_group_header
    bodies.append(current)
    return bodies


def paginate_resources(
    groups: ResourceGroups,
    overflow_budget: int,
    header: Optional[str] = None,
    options: ComposeOptions | None = None,
) -> list[str]:
    """Pack resource lines into pages that fit ``overflow_budget``.

    Lines are added to the current page while the rendered page (header and
    body) stays within the budget; the first line that does not fit starts a
    new page. A group header that would end a page moves to the next page
    with its first entry. A line too long for any page is placed alone on its
    own page.

    When more than one page results, each page gets a navigation footer
    (previous page, page number, next page) if the page with its footer
    still fits the budget; otherwise that page goes without one.

    Parameters
    ----------
    groups : mapping of str to sequence of ResourceEntry
        Entries per release group
    overflow_budget : int
        Rendered length limit of each page, in UTF-16 code units
    header : str or None, default None
        Markdown placed at the top of every page
    options : ComposeOptions or None, default None
        Labels and render options used for footers and measuring

    Returns
    -------
    list of str
        Markdown pages; empty when no group has entries

    """
    options = options or ComposeOptions()
    render_options = options.render_options
    lines = _resource_lines(groups)
    if not lines:
        return []

    pages = [_assemble(header, body) for body in _pack(lines, header, overflow_budget, render_options)]
    for index, page in enumerate(pages):
        if rendered_length(page, render_options) > overflow_budget:
            logger.warning("Resource page %d exceeds the overflow budget of %d", index + 1, overflow_budget)

    if len(pages) == 1:
        return pages

    total = len(pages)
    with_footers = []
    for index, page in enumerate(pages):
        candidate = f"{page}\n\n{_footer(index, total, options)}"
        if rendered_length(candidate, render_options) <= overflow_budget:
            with_footers.append(candidate)
        else:
            logger.debug("Omitting the navigation footer of page %d, it does not fit", index + 1)
            with_footers.append(page)
    return with_footers
