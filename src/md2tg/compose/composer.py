#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/compose/composer.py
"""Budget-fitting page composition.

The composer lays out an :class:`~md2tg.compose.document.AnimeDocument` as a
Markdown primary page (title, fields, summary, resources, tags) and shrinks
it until its rendered text fits the primary budget:

1. summary at the first length of the truncation ladder, resources inline
2. each following (shorter) summary length, resources inline
3. the shortest summary without the resource section
4. that page as is, with a warning, when even that is too long

Resources dropped from the primary page are moved to overflow pages built
by :func:`~md2tg.compose.resources.paginate_resources`.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from md2tg.compose.document import AnimeDocument
from md2tg.compose.measure import rendered_length
from md2tg.compose.resources import format_resource_lines, paginate_resources
from md2tg.exceptions import InvalidOptionsError, ValidationError
from md2tg.options.compose import ComposeOptions
from md2tg.utils.escape import escape_link_url, escape_markdown
from md2tg.utils.tags import format_tags, safe_tag
from md2tg.utils.text import truncate_utf16

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PrimaryPageFit:
    """Outcome of fitting the primary page.

    Parameters
    ----------
    page : str
        Markdown of the chosen page
    summary_length : int
        Truncation length used for the summary
    resources_inline : bool
        Whether the resource section is on the page
    rendered_length : int
        Rendered UTF-16 length of the page
    fits : bool
        Whether ``rendered_length`` is within the primary budget

    """

    page: str
    summary_length: int
    resources_inline: bool
    rendered_length: int
    fits: bool


class PageComposer:
    """Compose documents into budgeted Markdown pages.

    Parameters
    ----------
    options : ComposeOptions or None, default None
        Budgets, truncation ladder and labels

    Examples
    --------
        >>> doc = AnimeDocument(title="Frieren", fields=[{"label": "Episodes", "value": "28"}])
        >>> PageComposer().compose(doc)
        ['Frieren\\n> **Episodes**: 28']

    """

    def __init__(self, options: ComposeOptions | None = None):
        if options is not None and not isinstance(options, ComposeOptions):
            raise InvalidOptionsError(
                component_name="compose",
                expected_type=ComposeOptions,
                received_type=type(options),
            )
        self.options: ComposeOptions = options or ComposeOptions()

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _title_line(self, doc: AnimeDocument) -> str:
        parts = []
        if doc.title_tag:
            tag = safe_tag(doc.title_tag)
            if tag:
                parts.append(escape_markdown(f"#{tag}"))
        if doc.nsfw and self.options.nsfw_tag:
            parts.append(escape_markdown(self.options.nsfw_tag))
        parts.append(escape_markdown(doc.title.strip()))
        return " ".join(parts)

    def _field_lines(self, doc: AnimeDocument) -> list[str]:
        lines = []
        for item in doc.fields:
            value = item.value.strip()
            if not value:
                rendered_value = escape_markdown(self.options.unknown_value)
            elif item.url:
                rendered_value = f"[{escape_markdown(value, 'link')}]({escape_link_url(item.url)})"
            else:
                rendered_value = escape_markdown(value)
            lines.append(f"> **{escape_markdown(item.label)}**: {rendered_value}")
        return lines

    def _summary_section(self, doc: AnimeDocument, summary_length: int) -> Optional[str]:
        if not doc.summary:
            return None
        summary = doc.summary.replace("\\n", "\n").strip()
        if not summary:
            return None

        truncated = truncate_utf16(summary, summary_length)
        text = escape_markdown(truncated.rstrip() if truncated != summary else truncated)
        if truncated != summary:
            if doc.summary_detail_url:
                label = escape_markdown(self.options.read_more_label, "link")
                text += f"[{label}]({escape_link_url(doc.summary_detail_url)})"
            else:
                text += escape_markdown(self.options.read_more_label)

        quoted = [f">> {line.strip()}" if line.strip() else ">>" for line in text.split("\n")]
        return f"{escape_markdown(self.options.summary_label)}:\n" + "\n".join(quoted)

    def _resource_section(self, doc: AnimeDocument) -> Optional[str]:
        lines = format_resource_lines(doc.resource_groups)
        if not lines:
            return None
        return f"{escape_markdown(self.options.resources_label)}:\n" + "\n".join(lines)

    def _tags_section(self, doc: AnimeDocument) -> Optional[str]:
        tags = format_tags(doc.tags)
        if not tags:
            return None
        return f"{escape_markdown(self.options.tags_label)}:\n>> {escape_markdown(tags)}"

    def build_primary_page(self, doc: AnimeDocument, summary_length: int, include_resources: bool = True) -> str:
        """Lay out the primary page with a given summary length.

        Parameters
        ----------
        doc : AnimeDocument
            Document to lay out
        summary_length : int
            Maximum summary length in UTF-16 code units
        include_resources : bool, default True
            Whether to include the resource section

        Returns
        -------
        str
            Markdown source of the page

        """
        head = "\n".join([self._title_line(doc), *self._field_lines(doc)])
        sections = [
            head,
            self._summary_section(doc, summary_length),
            self._resource_section(doc) if include_resources else None,
            self._tags_section(doc),
        ]
        return "\n\n".join(section for section in sections if section)

    def resource_page_header(self, doc: AnimeDocument) -> str:
        """Header of overflow pages: the configured one, or title and resources caption."""
        if self.options.resource_page_header is not None:
            return self.options.resource_page_header
        return f"{escape_markdown(doc.title.strip())}\n{escape_markdown(self.options.resources_label)}:"

    # ------------------------------------------------------------------
    # Fitting
    # ------------------------------------------------------------------

    def _measure(self, page: str) -> int:
        return rendered_length(page, self.options.render_options)

    def fit_primary_page(self, doc: AnimeDocument) -> PrimaryPageFit:
        """Run the degradation ladder and return the first page that fits.

        When no rung fits, the last rung (shortest summary, no resources)
        is returned with ``fits=False`` and a warning is logged.

        """
        budget = self.options.primary_budget
        inline = doc.has_resources
        measured: dict[str, PrimaryPageFit] = {}

        for summary_length in self.options.summary_lengths:
            page = self.build_primary_page(doc, summary_length, include_resources=True)
            if page in measured:
                continue
            length = self._measure(page)
            fit = PrimaryPageFit(page, summary_length, inline, length, length <= budget)
            if fit.fits:
                return fit
            measured[page] = fit
            logger.debug("Primary page is %d long with summary length %d, over %d", length, summary_length, budget)

        floor = self.options.summary_floor
        page = self.build_primary_page(doc, floor, include_resources=False)
        floor_fit = measured.get(page)
        if floor_fit is None:
            length = self._measure(page)
            floor_fit = PrimaryPageFit(page, floor, False, length, length <= budget)
            if floor_fit.fits:
                return floor_fit

        logger.warning(
            "Primary page of %r is %d long, over the budget of %d; sending it as is",
            doc.title,
            floor_fit.rendered_length,
            budget,
        )
        return floor_fit

    def compose(self, doc: AnimeDocument) -> list[str]:
        """Compose the primary page and any overflow pages.

        Returns
        -------
        list of str
            Primary page first, then resource pages when the resources did
            not fit on the primary page

        """
        fit = self.fit_primary_page(doc)
        pages = [fit.page]
        if not fit.resources_inline and doc.has_resources:
            pages.extend(
                paginate_resources(
                    doc.resource_groups,
                    self.options.overflow_budget,
                    header=self.resource_page_header(doc),
                    options=self.options,
                )
            )
        return pages


def _resolve_options(
    options: ComposeOptions | None, primary_budget: Optional[int], overflow_budget: Optional[int]
) -> ComposeOptions:
    if options is not None and not isinstance(options, ComposeOptions):
        raise InvalidOptionsError(component_name="compose", expected_type=ComposeOptions, received_type=type(options))
    options = options or ComposeOptions()
    updates = {}
    if primary_budget is not None:
        updates["primary_budget"] = primary_budget
    if overflow_budget is not None:
        updates["overflow_budget"] = overflow_budget
    if not updates:
        return options
    try:
        return options.create_updated(**updates)
    except (TypeError, ValueError) as e:
        raise ValidationError(str(e), parameter_name="budget", parameter_value=updates, original_error=e) from e


def fit_primary_page(doc: AnimeDocument, options: ComposeOptions | None = None) -> PrimaryPageFit:
    """Fit the primary page of ``doc``; see :meth:`PageComposer.fit_primary_page`."""
    return PageComposer(options).fit_primary_page(doc)


def compose(
    doc: AnimeDocument,
    primary_budget: Optional[int] = None,
    overflow_budget: Optional[int] = None,
    options: ComposeOptions | None = None,
) -> list[str]:
    """Compose a document into budgeted Markdown pages.

    Parameters
    ----------
    doc : AnimeDocument
        Document to compose
    primary_budget : int or None, default None
        Overrides ``options.primary_budget``
    overflow_budget : int or None, default None
        Overrides ``options.overflow_budget``
    options : ComposeOptions or None, default None
        Composition options

    Returns
    -------
    list of str
        Non-empty list of Markdown pages; the first is the primary page

    Raises
    ------
    ValidationError
        If a budget is not positive or the primary budget exceeds the
        overflow budget
    InvalidOptionsError
        If ``options`` is not a ComposeOptions

    """
    return PageComposer(_resolve_options(options, primary_budget, overflow_budget)).compose(doc)
