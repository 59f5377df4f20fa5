#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/compose/ordering.py
"""Episode label ordering for resource listings.

Labels are ordered as a viewer expects to read them:

- numeric labels (``"3"``, ``"03"``, ``"3v2"``) by number, then by the text
  following the number (``"3"`` before ``"3v2"``)
- specials (``"SP1"``, ``"OVA 2"``, ``"Special_3"``) right after the numeric
  labels with the same number
- specials whose number has no numeric label, after all numeric labels
- anything else last, in its original order

"""

from __future__ import annotations

import re
from typing import AbstractSet, Iterable, Sequence, TypeVar, Union

from md2tg.compose.document import ResourceEntry
from md2tg.constants import SPECIAL_EPISODE_MARKERS

_NUMERIC_LABEL = re.compile(r"^(\d+)(.*)$", re.DOTALL)
_SPECIAL_LABEL = re.compile(
    r"^(" + "|".join(re.escape(marker) for marker in SPECIAL_EPISODE_MARKERS) + r")[\s._-]*(\d+)(.*)$",
    re.IGNORECASE | re.DOTALL,
)

EpisodeKey = tuple[int, int, int, str, str]
EntryT = TypeVar("EntryT", bound=Union[ResourceEntry, str])


def _label_of(entry: Union[ResourceEntry, str]) -> str:
    return entry if isinstance(entry, str) else entry.label


def _numeric_numbers(labels: Iterable[str]) -> frozenset[int]:
    numbers = set()
    for label in labels:
        match = _NUMERIC_LABEL.match(label.strip())
        if match:
            numbers.add(int(match.group(1)))
    return frozenset(numbers)


def episode_sort_key(label: str, numeric_numbers: AbstractSet[int] = frozenset()) -> EpisodeKey:
    """Sort key of one episode label.

    Parameters
    ----------
    label : str
        Episode label
    numeric_numbers : set of int, optional
        Numbers of the numeric labels in the same listing; a special is
        placed after its numeric label only when that number is present

    Returns
    -------
    tuple
        Key comparable with the keys of other labels of the same listing

    Examples
    --------
        >>> episode_sort_key("03v2")
        (0, 3, 0, 'v2', '')
        >>> episode_sort_key("SP1", {1})
        (0, 1, 1, '', 'sp1')

    """
    text = label.strip()
    numeric = _NUMERIC_LABEL.match(text)
    if numeric:
        return (0, int(numeric.group(1)), 0, numeric.group(2), "")

    special = _SPECIAL_LABEL.match(text)
    if special:
        number = int(special.group(2))
        tiebreak = text.lower()
        if number in numeric_numbers:
            return (0, number, 1, "", tiebreak)
        return (1, number, 0, "", tiebreak)

    return (2, 0, 0, "", "")


def sort_entries(entries: Sequence[EntryT]) -> list[EntryT]:
    """Return the entries (or bare labels) in episode order.

    The sort is stable, so labels that are neither numeric nor specials keep
    their relative order at the end.

    Examples
    --------
        >>> sort_entries(["10", "3v2", "3", "SP1"])
        ['3', '3v2', '10', 'SP1']

    """
    numbers = _numeric_numbers(_label_of(entry) for entry in entries)
    return sorted(entries, key=lambda entry: episode_sort_key(_label_of(entry), numbers))
