#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/api.py
"""High-level API for md2tg.

Every function accepts an options object and/or keyword arguments naming
option fields; keyword arguments override the fields of ``options``.
Unknown keyword arguments are skipped with a debug message.

"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Mapping, Optional, TypeVar, Union

from md2tg.ast.nodes import Node
from md2tg.compose.captions import compose_release_caption as _compose_release_caption
from md2tg.compose.composer import PrimaryPageFit
from md2tg.compose.composer import compose as _compose
from md2tg.compose.composer import fit_primary_page as _fit_primary_page
from md2tg.compose.document import AnimeDocument, ReleaseUpdate
from md2tg.entities import FormattedText
from md2tg.exceptions import ValidationError
from md2tg.options.base import CloneFrozenMixin
from md2tg.options.compose import ComposeOptions
from md2tg.options.entities import EntityRendererOptions
from md2tg.renderers.entities import convert as _convert
from md2tg.renderers.entities import to_formatted_text as _to_formatted_text

logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT", bound=CloneFrozenMixin)


def _apply_kwargs(options: OptionsT, options_type_name: str, **kwargs: Any) -> OptionsT:
    """Return ``options`` with the fields named in ``kwargs`` replaced.

    Raises
    ------
    ValidationError
        If a replaced value is out of range

    """
    if not kwargs or not dataclasses.is_dataclass(options):
        return options

    option_names = {f.name for f in dataclasses.fields(options)}  # type: ignore[arg-type]
    valid_kwargs = {k: v for k, v in kwargs.items() if k in option_names}
    missing = [k for k in kwargs if k not in valid_kwargs]
    if missing:
        logger.debug(f"Skipping unknown {options_type_name} options: {missing}")
    if not valid_kwargs:
        return options
    try:
        return options.create_updated(**valid_kwargs)
    except (TypeError, ValueError) as e:
        raise ValidationError(
            f"Invalid {options_type_name} options: {e}", parameter_value=valid_kwargs, original_error=e
        ) from e


def _render_options(options: Optional[EntityRendererOptions], **kwargs: Any) -> EntityRendererOptions:
    return _apply_kwargs(options or EntityRendererOptions(), "render", **kwargs)


def _compose_options(options: Optional[ComposeOptions], **kwargs: Any) -> ComposeOptions:
    return _apply_kwargs(options or ComposeOptions(), "compose", **kwargs)


def to_formatted_text(markdown: str, options: Optional[EntityRendererOptions] = None, **kwargs: Any) -> FormattedText:
    r"""Convert Markdown to Telegram formatted text.

    Parameters
    ----------
    markdown : str
        Markdown source
    options : EntityRendererOptions, optional
        Rendering options
    kwargs : Any
        EntityRendererOptions fields overriding ``options``

    Returns
    -------
    FormattedText
        Plain text and entities; the literal source if conversion fails

    Examples
    --------
        >>> to_formatted_text("[x](example.com)", accept_bare_domains=False).text
        '[x](example.com)'

    """
    return _to_formatted_text(markdown, _render_options(options, **kwargs))


def convert(
    tree: Node, source: Optional[str] = None, options: Optional[EntityRendererOptions] = None, **kwargs: Any
) -> FormattedText:
    """Convert a syntax tree to formatted text, never raising for bad trees.

    See :func:`md2tg.renderers.entities.convert`.
    """
    return _convert(tree, source=source, options=_render_options(options, **kwargs))


def _as_document(doc: Union[AnimeDocument, Mapping[str, Any]]) -> AnimeDocument:
    if isinstance(doc, AnimeDocument):
        return doc
    return AnimeDocument.from_dict(doc)


def compose(
    doc: Union[AnimeDocument, Mapping[str, Any]],
    primary_budget: Optional[int] = None,
    overflow_budget: Optional[int] = None,
    options: Optional[ComposeOptions] = None,
    **kwargs: Any,
) -> list[str]:
    """Compose a document into budgeted Markdown pages.

    Parameters
    ----------
    doc : AnimeDocument or mapping
        Document, or its JSON/YAML mapping form
    primary_budget, overflow_budget : int, optional
        Budget overrides
    options : ComposeOptions, optional
        Composition options
    kwargs : Any
        ComposeOptions fields overriding ``options``

    Returns
    -------
    list of str
        Primary page followed by any overflow pages

    """
    return _compose(
        _as_document(doc),
        primary_budget=primary_budget,
        overflow_budget=overflow_budget,
        options=_compose_options(options, **kwargs),
    )


def fit_primary_page(
    doc: Union[AnimeDocument, Mapping[str, Any]], options: Optional[ComposeOptions] = None, **kwargs: Any
) -> PrimaryPageFit:
    """Run the primary page degradation ladder for a document."""
    return _fit_primary_page(_as_document(doc), _compose_options(options, **kwargs))


def compose_release_caption(
    update: Union[ReleaseUpdate, Mapping[str, Any]], options: Optional[ComposeOptions] = None, **kwargs: Any
) -> str:
    """Compose the caption announcing a released episode."""
    if not isinstance(update, ReleaseUpdate):
        update = ReleaseUpdate.from_dict(update)
    return _compose_release_caption(update, _compose_options(options, **kwargs))
