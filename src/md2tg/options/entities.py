#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/options/entities.py
"""Configuration options for entity rendering.

This module defines options for rendering the syntax tree to Telegram
formatted text (plain text plus entities).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from md2tg.constants import DEFAULT_BULLET, DEFAULT_LINK_SCHEME, BulletChar
from md2tg.options.base import BaseRendererOptions


@dataclass(frozen=True)
class EntityRendererOptions(BaseRendererOptions):
    r"""Configuration options for entity rendering.

    Parameters
    ----------
    default_bullet : {"-", "*", "+"}, default "-"
        Bullet used for unordered list items when the tree does not record one.
    default_link_scheme : str, default "http://"
        Scheme prepended to accepted links written without one
        (``example.com`` becomes ``http://example.com``).
    accept_bare_domains : bool, default True
        Accept scheme-less links that look like a domain (``example.com``,
        ``www.example.com/path``). When False only ``tg://``, ``http://`` and
        ``https://`` targets become link entities.
    normalize_supergroup_links : bool, default True
        Strip the ``-100`` prefix from ``tg://openmessage?chat_id=`` links.
    preserve_blank_lines : bool, default True
        Reproduce the source's blank-line spacing between block siblings when
        position information is available. When False, block siblings are
        always separated by a single newline.

    Examples
    --------
        >>> from md2tg.renderers.entities import EntityRenderer
        >>> options = EntityRendererOptions(accept_bare_domains=False)
        >>> renderer = EntityRenderer(options)

    """

    default_bullet: BulletChar = field(
        default=DEFAULT_BULLET,
        metadata={"help": "Bullet for unordered list items", "choices": ["-", "*", "+"], "importance": "advanced"},
    )
    default_link_scheme: str = field(
        default=DEFAULT_LINK_SCHEME,
        metadata={"help": "Scheme prepended to scheme-less links", "type": str, "importance": "advanced"},
    )
    accept_bare_domains: bool = field(
        default=True,
        metadata={"help": "Turn links like example.com into link entities", "importance": "core"},
    )
    normalize_supergroup_links: bool = field(
        default=True,
        metadata={"help": "Strip -100 from tg://openmessage chat ids", "importance": "advanced"},
    )
    preserve_blank_lines: bool = field(
        default=True,
        metadata={"help": "Keep blank lines between block elements", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If the bullet or link scheme is not usable.

        """
        super().__post_init__()
        if self.default_bullet not in ("-", "*", "+"):
            raise ValueError(f"default_bullet must be one of '-', '*', '+', got {self.default_bullet!r}")
        if not self.default_link_scheme.endswith("://"):
            raise ValueError(f"default_link_scheme must end with '://', got {self.default_link_scheme!r}")
