#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/utils/tags.py
"""Hashtag normalization.

Telegram only links a hashtag while it consists of letters, digits and
underscores, so names of shows and release groups are squeezed into that
alphabet before being prefixed with ``#``.

"""

from __future__ import annotations

import re
from typing import Iterable

_WHITESPACE = re.compile(r"\s+")
_ASCII_DIGITS = frozenset("0123456789")


def safe_tag(text: object, keep_spaces_as: str = "") -> str:
    """Reduce ``text`` to a string usable as a hashtag body.

    Whitespace is removed (or replaced with ``keep_spaces_as``); letters of
    any script, ASCII digits and underscores are kept; everything else is
    dropped.

    Parameters
    ----------
    text : object
        Value to normalize; None becomes an empty tag
    keep_spaces_as : str, default ""
        Replacement for runs of whitespace, e.g. ``"_"``

    Returns
    -------
    str
        Normalized tag without the leading ``#``

    Examples
    --------
        >>> safe_tag("Frieren: Beyond Journey's End")
        'FrierenBeyondJourneysEnd'
        >>> safe_tag("Sub Group", keep_spaces_as="_")
        'Sub_Group'
        >>> safe_tag("葬送のフリーレン 第2期")
        '葬送のフリーレン第2期'

    """
    value = "" if text is None else str(text)
    value = _WHITESPACE.sub(keep_spaces_as, value.strip())
    return "".join(char for char in value if char.isalpha() or char in _ASCII_DIGITS or char == "_")


def format_tags(tags: Iterable[object]) -> str:
    """Format tags as space-separated hashtags.

    Empty and purely numeric tags are dropped, since the client does not
    treat ``#2024`` as a hashtag.

    Examples
    --------
        >>> format_tags(["Fantasy", "2024", "", "Slice of Life"])
        '#Fantasy #SliceofLife'

    """
    cleaned = (safe_tag(tag) for tag in tags)
    return " ".join(f"#{tag}" for tag in cleaned if tag and not tag.isdigit())
