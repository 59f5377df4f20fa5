#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/utils/urls.py
"""Classification of link targets found in Markdown.

A link only becomes a link entity when its target is something the chat
client can act on: an internal ``tg://`` link, an ``http(s)://`` URL, or a
bare domain such as ``example.com``. ``tg://user?id=N`` targets become user
mentions. Everything else is reported as invalid and rendered as literal
Markdown by the caller.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Literal, Optional
from urllib.parse import parse_qs, urlsplit

from md2tg.constants import (
    ACCEPTED_LINK_PREFIXES,
    DEFAULT_LINK_SCHEME,
    INTERNAL_LINK_SCHEME,
    SUPERGROUP_CHAT_PREFIX,
)

logger = logging.getLogger(__name__)

LinkKind = Literal["url", "mention", "invalid"]

# example.com, www.example.com, sub.example.co.uk:8080/path?q=1#frag
BARE_DOMAIN_PATTERN = re.compile(
    r"^(?:www\.)?"
    r"[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?)*"
    r"\.[A-Za-z]{2,}"
    r"(?::\d{1,5})?"
    r"(?:[/?#]\S*)?$"
)

_SUPERGROUP_CHAT_ID = re.compile(r"([?&]chat_id=)" + re.escape(SUPERGROUP_CHAT_PREFIX) + r"(\d+)")


@dataclass(frozen=True)
class LinkTarget:
    """Result of classifying a link target.

    Parameters
    ----------
    kind : {"url", "mention", "invalid"}
        How the link should be rendered
    url : str
        Normalized URL for ``"url"`` targets, the original text otherwise
    user_id : int or None
        User id for ``"mention"`` targets

    """

    kind: LinkKind
    url: str
    user_id: Optional[int] = None


def is_bare_domain(url: str) -> bool:
    """Return True for scheme-less targets that look like a domain name.

    Examples
    --------
        >>> is_bare_domain("example.com")
        True
        >>> is_bare_domain("not-a-url")
        False

    """
    return bool(BARE_DOMAIN_PATTERN.match(url))


def has_accepted_scheme(url: str) -> bool:
    """Return True when ``url`` starts with ``tg://``, ``http://`` or ``https://``."""
    return url.lower().startswith(ACCEPTED_LINK_PREFIXES)


def parse_mention_user_id(url: str) -> Optional[int]:
    """Extract the user id of a ``tg://user?id=N`` link.

    Returns
    -------
    int or None
        The id, or None if the query has no single positive integer ``id``

    """
    query = parse_qs(urlsplit(url).query)
    values = query.get("id", [])
    if len(values) != 1 or not values[0].isascii() or not values[0].isdigit():
        return None
    user_id = int(values[0])
    return user_id if user_id > 0 else None


def normalize_supergroup_link(url: str) -> str:
    """Strip the ``-100`` supergroup prefix from ``tg://openmessage`` chat ids.

    Examples
    --------
        >>> normalize_supergroup_link("tg://openmessage?chat_id=-1001234")
        'tg://openmessage?chat_id=1234'

    """
    return _SUPERGROUP_CHAT_ID.sub(r"\1\2", url)


def _is_internal_user_link(url: str) -> bool:
    parts = urlsplit(url)
    return parts.scheme.lower() == INTERNAL_LINK_SCHEME[:-3] and parts.netloc.lower() == "user"


def classify_link(
    url: str,
    default_scheme: str = DEFAULT_LINK_SCHEME,
    accept_bare_domains: bool = True,
    normalize_supergroup_links: bool = True,
) -> LinkTarget:
    """Decide how a Markdown link target is rendered.

    Parameters
    ----------
    url : str
        Link target as written in the Markdown source
    default_scheme : str, default "http://"
        Prepended to accepted bare domains
    accept_bare_domains : bool, default True
        Whether scheme-less domains are accepted at all
    normalize_supergroup_links : bool, default True
        Whether ``tg://openmessage?chat_id=-100N`` is rewritten to ``chat_id=N``

    Returns
    -------
    LinkTarget
        ``"mention"`` for valid user links, ``"url"`` with the normalized URL
        for other accepted targets, ``"invalid"`` otherwise

    Examples
    --------
        >>> classify_link("example.com")
        LinkTarget(kind='url', url='http://example.com', user_id=None)
        >>> classify_link("tg://user?id=42").user_id
        42
        >>> classify_link("not-a-url").kind
        'invalid'

    """
    target = url.strip()
    if not target:
        return LinkTarget(kind="invalid", url=url)

    if has_accepted_scheme(target):
        if _is_internal_user_link(target):
            user_id = parse_mention_user_id(target)
            if user_id is None:
                logger.debug("Malformed user mention link %r", url)
                return LinkTarget(kind="invalid", url=url)
            return LinkTarget(kind="mention", url=target, user_id=user_id)
        if normalize_supergroup_links and target.lower().startswith(INTERNAL_LINK_SCHEME):
            target = normalize_supergroup_link(target)
        return LinkTarget(kind="url", url=target)

    if accept_bare_domains and is_bare_domain(target):
        return LinkTarget(kind="url", url=default_scheme + target)

    return LinkTarget(kind="invalid", url=url)
