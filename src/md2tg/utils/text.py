#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/utils/text.py
"""Text measurement in the chat platform's unit.

Telegram counts entity offsets, entity lengths and message limits in UTF-16
code units, while Python strings index by code point. Characters outside the
Basic Multilingual Plane (most emoji) take two UTF-16 units.

"""

from __future__ import annotations


def utf16_len(text: str) -> int:
    """Return the length of ``text`` in UTF-16 code units.

    Examples
    --------
        >>> utf16_len("abc")
        3
        >>> utf16_len("😀")
        2

    """
    return len(text) + sum(1 for char in text if ord(char) > 0xFFFF)


def utf16_offset_to_index(text: str, utf16_offset: int) -> int:
    """Convert a UTF-16 offset into a Python string index.

    Offsets that fall inside a surrogate pair resolve to the index after the
    character; offsets past the end resolve to ``len(text)``.

    Parameters
    ----------
    text : str
        Text the offset refers to
    utf16_offset : int
        Offset in UTF-16 code units

    Returns
    -------
    int
        Code point index into ``text``

    """
    if utf16_offset <= 0:
        return 0

    count = 0
    for index, char in enumerate(text):
        count += 2 if ord(char) > 0xFFFF else 1
        if count >= utf16_offset:
            return index + 1
    return len(text)


def truncate_utf16(text: str, limit: int) -> str:
    """Cut ``text`` to at most ``limit`` UTF-16 code units.

    A character that would be split in half is dropped entirely.

    Examples
    --------
        >>> truncate_utf16("ab😀", 3)
        'ab'

    """
    if limit <= 0:
        return ""
    if utf16_len(text) <= limit:
        return text

    count = 0
    for index, char in enumerate(text):
        width = 2 if ord(char) > 0xFFFF else 1
        if count + width > limit:
            return text[:index]
        count += width
    return text


def slice_utf16(text: str, offset: int, length: int) -> str:
    """Return the substring covered by a UTF-16 ``(offset, length)`` span."""
    start = utf16_offset_to_index(text, offset)
    end = utf16_offset_to_index(text, offset + length)
    return text[start:end]
