#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/constants.py
"""Constants and default values for md2tg.

This module centralizes the hardcoded values used across md2tg:
1. Type Definitions
2. Chat Platform Limits
3. Link Handling
4. Composition Defaults
5. Configuration Discovery
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

EntityKindName = Literal[
    "bold",
    "italic",
    "strikethrough",
    "code",
    "pre_code",
    "text_url",
    "mention_name",
    "block_quote",
    "expandable_block_quote",
]
BulletChar = Literal["-", "*", "+"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# =============================================================================
# Chat Platform Limits (UTF-16 code units)
# =============================================================================

# Caption attached to a photo/video
DEFAULT_PRIMARY_BUDGET = 1024
# Plain text message
DEFAULT_OVERFLOW_BUDGET = 4096

# =============================================================================
# Link Handling
# =============================================================================

INTERNAL_LINK_SCHEME = "tg://"
ACCEPTED_LINK_PREFIXES = ("tg://", "http://", "https://")
DEFAULT_LINK_SCHEME = "http://"
# tg://openmessage?chat_id=-100123 addresses a supergroup; the platform wants the bare id
SUPERGROUP_CHAT_PREFIX = "-100"

# =============================================================================
# Composition Defaults
# =============================================================================

DEFAULT_SUMMARY_LENGTHS: tuple[int, ...] = (250, 200, 150, 120, 100)
DEFAULT_BULLET: BulletChar = "-"
DEFAULT_NSFW_TAG = "#NSFW"
DEFAULT_SUMMARY_LABEL = "Summary"
DEFAULT_RESOURCES_LABEL = "Resources"
DEFAULT_TAGS_LABEL = "Tags"
DEFAULT_READ_MORE_LABEL = "...more"
DEFAULT_PREVIOUS_PAGE_LABEL = "« previous page"
DEFAULT_NEXT_PAGE_LABEL = "next page »"
DEFAULT_PAGE_NUMBER_FORMAT = "page {current}/{total}"
DEFAULT_FOOTER_SEPARATOR = " | "
DEFAULT_UNKNOWN_VALUE = "unknown"

# Release caption
CAPTION_ORIGINAL_NAME_LABEL = "Original name"
CAPTION_LOCALIZED_NAME_LABEL = "Localized name"
CAPTION_PUBLISHERS_LABEL = "Publishers"
CAPTION_PUBLISHED_AT_LABEL = "Published"
CAPTION_TRACKING_LABEL = "Tracking tags"
CAPTION_TRACKING_NAME_LABEL = "Name"
CAPTION_TRACKING_PUBLISHERS_LABEL = "Publisher"
CAPTION_INFO_LINK_LABEL = "Show info"
CAPTION_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# Labels treated as specials when sorting episodes, e.g. "SP1", "OVA 2"
SPECIAL_EPISODE_MARKERS: tuple[str, ...] = ("special", "oad", "ova", "sp")

# =============================================================================
# Configuration Discovery
# =============================================================================

CONFIG_FILENAMES = [".md2tg.toml", ".md2tg.yaml", ".md2tg.yml", ".md2tg.json"]
PYPROJECT_TOOL_SECTION = "md2tg"
CONFIG_ENV_VAR = "MD2TG_CONFIG"
