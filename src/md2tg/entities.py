#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/entities.py
"""Formatted text model: plain text plus out-of-band entity annotations.

This module mirrors TDLib's ``formattedText`` object. A :class:`FormattedText`
holds the visible text and a flat list of :class:`TextEntity` spans, each
carrying one :class:`TextEntityType` variant. Offsets and lengths are in
UTF-16 code units.

The renderer builds results bottom-up: every node produces a fresh
``FormattedText`` and parents combine them with ``+`` (which shifts the
right-hand entities) and :meth:`FormattedText.wrap`.

Examples
--------
    >>> bold = FormattedText("Hi").wrap(BoldType())
    >>> (FormattedText("Say ") + bold).entities[0].offset
    4

"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, ClassVar, Iterable, Mapping

from md2tg.constants import EntityKindName
from md2tg.exceptions import ValidationError
from md2tg.utils.text import slice_utf16, utf16_len

# ============================================================================
# Entity types
# ============================================================================


@dataclass(frozen=True)
class TextEntityType:
    """Base class of the entity type variants.

    Each subclass carries exactly the parameters of its kind and knows its
    TDLib wire name.
    """

    kind: ClassVar[EntityKindName]
    wire_name: ClassVar[str]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to TDLib JSON, e.g. ``{"_": "textEntityTypeTextUrl", "url": ...}``."""
        return {"_": self.wire_name, **dataclasses.asdict(self)}

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> TextEntityType:
        """Build the variant named by ``data["_"]``.

        Raises
        ------
        ValidationError
            If the wire name is unknown or parameters are missing

        """
        wire_name = data.get("_")
        cls = ENTITY_TYPES_BY_WIRE_NAME.get(str(wire_name))
        if cls is None:
            raise ValidationError(f"Unknown entity type: {wire_name!r}", parameter_name="_", parameter_value=wire_name)
        params = {f.name: data[f.name] for f in dataclasses.fields(cls) if f.name in data}
        try:
            return cls(**params)
        except TypeError as e:
            raise ValidationError(
                f"Invalid parameters for {wire_name}: {e}", parameter_name="type", parameter_value=dict(data)
            ) from e


@dataclass(frozen=True)
class BoldType(TextEntityType):
    kind: ClassVar[EntityKindName] = "bold"
    wire_name: ClassVar[str] = "textEntityTypeBold"


@dataclass(frozen=True)
class ItalicType(TextEntityType):
    kind: ClassVar[EntityKindName] = "italic"
    wire_name: ClassVar[str] = "textEntityTypeItalic"


@dataclass(frozen=True)
class StrikethroughType(TextEntityType):
    kind: ClassVar[EntityKindName] = "strikethrough"
    wire_name: ClassVar[str] = "textEntityTypeStrikethrough"


@dataclass(frozen=True)
class CodeType(TextEntityType):
    kind: ClassVar[EntityKindName] = "code"
    wire_name: ClassVar[str] = "textEntityTypeCode"


@dataclass(frozen=True)
class PreCodeType(TextEntityType):
    """Code block; ``language`` is the fence info string or empty."""

    kind: ClassVar[EntityKindName] = "pre_code"
    wire_name: ClassVar[str] = "textEntityTypePreCode"

    language: str = ""


@dataclass(frozen=True)
class TextUrlType(TextEntityType):
    """Link with visible text different from its URL."""

    kind: ClassVar[EntityKindName] = "text_url"
    wire_name: ClassVar[str] = "textEntityTypeTextUrl"

    url: str


@dataclass(frozen=True)
class MentionNameType(TextEntityType):
    """Mention of a user by id (from ``tg://user?id=N`` links)."""

    kind: ClassVar[EntityKindName] = "mention_name"
    wire_name: ClassVar[str] = "textEntityTypeMentionName"

    user_id: int


@dataclass(frozen=True)
class BlockQuoteType(TextEntityType):
    kind: ClassVar[EntityKindName] = "block_quote"
    wire_name: ClassVar[str] = "textEntityTypeBlockQuote"


@dataclass(frozen=True)
class ExpandableBlockQuoteType(TextEntityType):
    """Block quote the client shows collapsed until tapped."""

    kind: ClassVar[EntityKindName] = "expandable_block_quote"
    wire_name: ClassVar[str] = "textEntityTypeExpandableBlockQuote"


ENTITY_TYPES_BY_WIRE_NAME: dict[str, type[TextEntityType]] = {
    cls.wire_name: cls
    for cls in (
        BoldType,
        ItalicType,
        StrikethroughType,
        CodeType,
        PreCodeType,
        TextUrlType,
        MentionNameType,
        BlockQuoteType,
        ExpandableBlockQuoteType,
    )
}


# ============================================================================
# Entities and formatted text
# ============================================================================


@dataclass(frozen=True)
class TextEntity:
    """Annotated span of a formatted text.

    Parameters
    ----------
    offset : int
        Start of the span in UTF-16 code units, >= 0
    length : int
        Length of the span in UTF-16 code units, > 0
    type : TextEntityType
        Formatting applied to the span

    """

    offset: int
    length: int
    type: TextEntityType

    def __post_init__(self) -> None:
        """Validate the span."""
        if self.offset < 0:
            raise ValueError(f"Entity offset must be non-negative, got {self.offset}")
        if self.length <= 0:
            raise ValueError(f"Entity length must be positive, got {self.length}")

    @property
    def end(self) -> int:
        """Offset just past the span."""
        return self.offset + self.length

    def shifted(self, delta: int) -> TextEntity:
        """Return a copy moved ``delta`` code units to the right."""
        if delta == 0:
            return self
        return TextEntity(offset=self.offset + delta, length=self.length, type=self.type)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a TDLib ``textEntity`` object."""
        return {"_": "textEntity", "offset": self.offset, "length": self.length, "type": self.type.to_dict()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TextEntity:
        """Build an entity from a TDLib ``textEntity`` object."""
        try:
            return cls(
                offset=int(data["offset"]),
                length=int(data["length"]),
                type=TextEntityType.from_dict(data["type"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"Invalid text entity: {e}", parameter_name="entity", original_error=e) from e


@dataclass(frozen=True)
class FormattedText:
    """Plain text with its entity list.

    Instances are immutable and compare by value, so callers can skip
    re-sending a message whose formatted text did not change.

    Parameters
    ----------
    text : str, default ""
        Visible text
    entities : tuple of TextEntity, default ()
        Entity spans in insertion order; nested formatting is expressed as
        separate entities with overlapping spans

    """

    text: str = ""
    entities: tuple[TextEntity, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Accept any iterable of entities."""
        if not isinstance(self.entities, tuple):
            object.__setattr__(self, "entities", tuple(self.entities))

    @property
    def length(self) -> int:
        """Length of the text in UTF-16 code units."""
        return utf16_len(self.text)

    def __add__(self, other: FormattedText) -> FormattedText:
        """Concatenate, shifting the entities of ``other`` past this text."""
        if not isinstance(other, FormattedText):
            return NotImplemented
        if not other.text and not other.entities:
            return self
        delta = self.length
        return FormattedText(
            text=self.text + other.text,
            entities=self.entities + tuple(entity.shifted(delta) for entity in other.entities),
        )

    def wrap(self, entity_type: TextEntityType) -> FormattedText:
        """Add one entity of ``entity_type`` spanning the whole text.

        The new entity is placed before the existing ones. Empty text gets no
        entity.
        """
        length = self.length
        if length == 0:
            return self
        return FormattedText(text=self.text, entities=(TextEntity(0, length, entity_type),) + self.entities)

    def entity_text(self, entity: TextEntity) -> str:
        """Return the part of the text covered by ``entity``."""
        return slice_utf16(self.text, entity.offset, entity.length)

    @classmethod
    def plain(cls, text: str) -> FormattedText:
        """Formatted text without entities."""
        return cls(text=text)

    @classmethod
    def join(cls, parts: Iterable[FormattedText]) -> FormattedText:
        """Concatenate ``parts`` left to right."""
        result = cls()
        for part in parts:
            result = result + part
        return result

    def to_dict(self) -> dict[str, Any]:
        """Serialize to TDLib ``formattedText`` JSON."""
        return {
            "_": "formattedText",
            "text": self.text,
            "entities": [entity.to_dict() for entity in self.entities],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FormattedText:
        """Build formatted text from TDLib ``formattedText`` JSON.

        Raises
        ------
        ValidationError
            If the object is not a ``formattedText`` or an entity is invalid

        """
        if data.get("_", "formattedText") != "formattedText":
            kind = data.get("_")
            raise ValidationError(
                f"Expected a formattedText object, got {kind!r}", parameter_name="_", parameter_value=kind
            )
        entities = data.get("entities") or []
        return cls(text=str(data.get("text", "")), entities=tuple(TextEntity.from_dict(e) for e in entities))
