#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/compose/document.py
"""Input documents of the page composer.

:class:`AnimeDocument` describes a show: title, metadata fields, summary,
per-group episode resources and tags. :class:`ReleaseUpdate` describes a
single released episode for the status-update caption.

Both are immutable and can be loaded from the plain mappings found in JSON
or YAML files with ``from_dict``.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional, Union

from md2tg.exceptions import ValidationError


@dataclass(frozen=True)
class Field:
    """One ``label: value`` line of the primary page.

    Parameters
    ----------
    label : str
        Field caption, e.g. ``"Episodes"``
    value : str, default ""
        Field value; empty values are shown as the configured unknown value
    url : str or None, default None
        When set, the value is rendered as a link to this URL

    """

    label: str
    value: str = ""
    url: Optional[str] = None


@dataclass(frozen=True)
class ResourceEntry:
    """One episode resource of a group.

    Parameters
    ----------
    label : str
        Episode label such as ``"03"``, ``"03v2"`` or ``"SP1"``
    url : str or None, default None
        Where the resource can be found; entries without a URL are listed
        as plain text

    """

    label: str
    url: Optional[str] = None


def _require_str(data: Mapping[str, Any], key: str, context: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            f"{context} requires a non-empty string '{key}'", parameter_name=key, parameter_value=value
        )
    return value


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _load_fields(raw: Any) -> tuple[Field, ...]:
    """Accept a list of ``{label, value, url}`` objects or a ``{label: value}`` mapping."""
    if raw is None:
        return ()
    if isinstance(raw, Mapping):
        return tuple(Field(label=str(label), value="" if value is None else str(value)) for label, value in raw.items())
    if isinstance(raw, (list, tuple)):
        fields = []
        for item in raw:
            if isinstance(item, Field):
                fields.append(item)
            elif isinstance(item, Mapping):
                fields.append(
                    Field(
                        label=_require_str(item, "label", "field"),
                        value="" if item.get("value") is None else str(item.get("value")),
                        url=_optional_str(item.get("url")),
                    )
                )
            else:
                raise ValidationError(
                    f"Invalid field entry: {item!r}", parameter_name="fields", parameter_value=item
                )
        return tuple(fields)
    raise ValidationError("'fields' must be a list or a mapping", parameter_name="fields", parameter_value=raw)


def _load_entry(item: Any) -> ResourceEntry:
    if isinstance(item, ResourceEntry):
        return item
    if isinstance(item, (str, int)):
        return ResourceEntry(label=str(item))
    if isinstance(item, Mapping):
        label = item.get("label")
        if label is None or str(label) == "":
            raise ValidationError("resource entry requires a 'label'", parameter_name="label", parameter_value=item)
        return ResourceEntry(label=str(label), url=_optional_str(item.get("url")))
    raise ValidationError(f"Invalid resource entry: {item!r}", parameter_name="resource_groups", parameter_value=item)


def _load_groups(raw: Any) -> dict[str, tuple[ResourceEntry, ...]]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ValidationError(
            "'resource_groups' must be a mapping of group name to entries",
            parameter_name="resource_groups",
            parameter_value=raw,
        )
    groups: dict[str, tuple[ResourceEntry, ...]] = {}
    for name, entries in raw.items():
        if entries is None:
            entries = []
        if not isinstance(entries, (list, tuple)):
            raise ValidationError(
                f"entries of group {name!r} must be a list", parameter_name="resource_groups", parameter_value=entries
            )
        groups[str(name)] = tuple(_load_entry(item) for item in entries)
    return groups


def _load_tags(raw: Any) -> tuple[str, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        return (raw,)
    return tuple(str(tag) for tag in raw)


@dataclass(frozen=True)
class AnimeDocument:
    """Everything shown about a show on its pages.

    Parameters
    ----------
    title : str
        Display title
    nsfw : bool, default False
        Adds the NSFW tag to the title line
    fields : tuple of Field
        Metadata lines in display order
    summary : str or None
        Synopsis; truncated on the primary page
    summary_detail_url : str or None
        Target of the "read more" link appended to a truncated summary
    resource_groups : dict of str to tuple of ResourceEntry
        Episode resources per release group, in display order
    tags : tuple of str
        Genre and topic tags
    title_tag : str or None
        Hashtag placed before the title (e.g. the season ``"2025年1月"``)

    Examples
    --------
        >>> doc = AnimeDocument.from_dict({
        ...     "title": "Frieren",
        ...     "fields": {"Episodes": "28"},
        ...     "resource_groups": {"SubsPlease": [{"label": "01", "url": "https://t.me/c/1/2"}]},
        ... })
        >>> doc.resource_groups["SubsPlease"][0].label
        '01'

    """

    title: str
    nsfw: bool = False
    fields: tuple[Field, ...] = ()
    summary: Optional[str] = None
    summary_detail_url: Optional[str] = None
    resource_groups: dict[str, tuple[ResourceEntry, ...]] = field(default_factory=dict)
    tags: tuple[str, ...] = ()
    title_tag: Optional[str] = None

    def __post_init__(self) -> None:
        """Normalize collections so the document cannot be changed through them."""
        object.__setattr__(self, "fields", _load_fields(self.fields))
        object.__setattr__(self, "resource_groups", _load_groups(self.resource_groups))
        object.__setattr__(self, "tags", _load_tags(self.tags))

    @property
    def has_resources(self) -> bool:
        """True when at least one group has an entry."""
        return any(self.resource_groups.values())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AnimeDocument:
        """Load a document from a JSON/YAML mapping.

        Keys may use underscores or hyphens (``summary_detail_url`` or
        ``summary-detail-url``).

        Raises
        ------
        ValidationError
            If the title is missing or a section has the wrong shape

        """
        if not isinstance(data, Mapping):
            raise ValidationError("document must be a mapping", parameter_name="document", parameter_value=data)
        values = {str(key).replace("-", "_"): value for key, value in data.items()}
        return cls(
            title=_require_str(values, "title", "document"),
            nsfw=bool(values.get("nsfw", False)),
            fields=_load_fields(values.get("fields")),
            summary=_optional_str(values.get("summary")),
            summary_detail_url=_optional_str(values.get("summary_detail_url")),
            resource_groups=_load_groups(values.get("resource_groups")),
            tags=_load_tags(values.get("tags")),
            title_tag=_optional_str(values.get("title_tag")),
        )


@dataclass(frozen=True)
class ReleaseUpdate:
    """A released episode, announced with a short caption.

    Parameters
    ----------
    title : str
        Release title as published (usually the file or torrent name)
    original_name : str
        Show name in its original language
    localized_name : str, default ""
        Translated show name
    publishers : tuple of str
        Release groups that published the episode
    published_at : str or datetime or None
        Publication time
    season_tag : str or None
        Hashtag body placed first on the caption
    nsfw : bool, default False
        Adds the NSFW tag
    info_link : str or None
        Link to the show's primary page

    """

    title: str
    original_name: str
    localized_name: str = ""
    publishers: tuple[str, ...] = ()
    published_at: Union[str, datetime, None] = None
    season_tag: Optional[str] = None
    nsfw: bool = False
    info_link: Optional[str] = None

    def __post_init__(self) -> None:
        """Store publishers as a tuple."""
        object.__setattr__(self, "publishers", _load_tags(self.publishers))

    @property
    def display_name(self) -> str:
        """Name used for tracking tags: the localized name when known."""
        return self.localized_name or self.original_name

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ReleaseUpdate:
        """Load a release update from a JSON/YAML mapping.

        Raises
        ------
        ValidationError
            If the title or original name is missing

        """
        if not isinstance(data, Mapping):
            raise ValidationError("release must be a mapping", parameter_name="release", parameter_value=data)
        values = {str(key).replace("-", "_"): value for key, value in data.items()}
        return cls(
            title=_require_str(values, "title", "release"),
            original_name=_require_str(values, "original_name", "release"),
            localized_name=str(values.get("localized_name") or ""),
            publishers=_load_tags(values.get("publishers")),
            published_at=values.get("published_at"),
            season_tag=_optional_str(values.get("season_tag")),
            nsfw=bool(values.get("nsfw", False)),
            info_link=_optional_str(values.get("info_link")),
        )
