#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/compose/captions.py
"""Caption announcing a released episode.

The caption carries the release title, the show's names, the publishing
groups and time, and hashtags users can follow to track the show
(``#<name>``) or one group's releases of it (``#<group>_<name>``).

"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from md2tg.compose.document import ReleaseUpdate
from md2tg.compose.measure import rendered_length
from md2tg.constants import (
    CAPTION_INFO_LINK_LABEL,
    CAPTION_LOCALIZED_NAME_LABEL,
    CAPTION_ORIGINAL_NAME_LABEL,
    CAPTION_PUBLISHED_AT_LABEL,
    CAPTION_PUBLISHERS_LABEL,
    CAPTION_TIME_FORMAT,
    CAPTION_TRACKING_LABEL,
    CAPTION_TRACKING_NAME_LABEL,
    CAPTION_TRACKING_PUBLISHERS_LABEL,
)
from md2tg.exceptions import InvalidOptionsError
from md2tg.options.compose import ComposeOptions
from md2tg.utils.escape import escape_link_url, escape_markdown
from md2tg.utils.tags import format_tags, safe_tag

logger = logging.getLogger(__name__)


def _format_published_at(value: object) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.strftime(CAPTION_TIME_FORMAT)
    text = str(value).strip()
    return text or None


def _publisher_tracking_tags(update: ReleaseUpdate) -> str:
    name_tag = safe_tag(update.display_name)
    if not name_tag:
        return ""
    tags = []
    for publisher in update.publishers:
        publisher_tag = safe_tag(publisher, keep_spaces_as="_")
        if publisher_tag:
            tags.append(f"#{publisher_tag}_{name_tag}")
    return " ".join(tags)


def _build_caption(update: ReleaseUpdate, options: ComposeOptions, include_publisher_tracking: bool) -> str:
    title_parts = []
    if update.season_tag:
        season = safe_tag(update.season_tag)
        if season:
            title_parts.append(f"#{season}")
    if update.nsfw and options.nsfw_tag:
        title_parts.append(options.nsfw_tag)
    title_parts.append(update.title.strip())

    publishers = format_tags(update.publishers) or options.unknown_value
    details = [
        (CAPTION_ORIGINAL_NAME_LABEL, update.original_name.strip()),
        (CAPTION_LOCALIZED_NAME_LABEL, update.localized_name.strip()),
        (CAPTION_PUBLISHERS_LABEL, publishers),
        (CAPTION_PUBLISHED_AT_LABEL, _format_published_at(update.published_at)),
    ]
    head = [escape_markdown(" ".join(title_parts))]
    head.extend(f"> **{label}**: {escape_markdown(value)}" for label, value in details if value)

    tracking = []
    name_tag = safe_tag(update.display_name)
    if name_tag:
        tracking.append(f"> **{CAPTION_TRACKING_NAME_LABEL}**: {escape_markdown('#' + name_tag)}")
    if include_publisher_tracking:
        publisher_tags = _publisher_tracking_tags(update)
        if publisher_tags:
            tracking.append(f"> **{CAPTION_TRACKING_PUBLISHERS_LABEL}**: {escape_markdown(publisher_tags)}")

    sections = ["\n".join(head)]
    if tracking:
        sections.append(f"{CAPTION_TRACKING_LABEL}:\n" + "\n".join(tracking))
    if update.info_link:
        sections.append(f"[{CAPTION_INFO_LINK_LABEL}]({escape_link_url(update.info_link)})")
    return "\n\n".join(sections)


def compose_release_caption(update: ReleaseUpdate, options: ComposeOptions | None = None) -> str:
    """Compose the caption announcing a released episode.

    When the caption is longer than the primary budget, the per-group
    tracking tags are dropped. The caption is returned even if it is still
    too long.

    Parameters
    ----------
    update : ReleaseUpdate
        Released episode
    options : ComposeOptions or None, default None
        Budget, NSFW tag and render options

    Returns
    -------
    str
        Markdown caption

    Examples
    --------
        >>> update = ReleaseUpdate(title="[Sub] Show - 01", original_name="Show", publishers=("Sub Group",))
        >>> print(compose_release_caption(update))
        \\[Sub\\] Show - 01
        > **Original name**: Show
        > **Publishers**: \\#SubGroup
        <BLANKLINE>
        Tracking tags:
        > **Name**: \\#Show
        > **Publisher**: \\#Sub\\_Group\\_Show

    """
    if options is not None and not isinstance(options, ComposeOptions):
        raise InvalidOptionsError(component_name="caption", expected_type=ComposeOptions, received_type=type(options))
    options = options or ComposeOptions()

    caption = _build_caption(update, options, include_publisher_tracking=True)
    if rendered_length(caption, options.render_options) <= options.primary_budget:
        return caption

    logger.debug("Release caption over %d, dropping publisher tracking tags", options.primary_budget)
    caption = _build_caption(update, options, include_publisher_tracking=False)
    length = rendered_length(caption, options.render_options)
    if length > options.primary_budget:
        logger.warning("Release caption is %d long, over the budget of %d", length, options.primary_budget)
    return caption
