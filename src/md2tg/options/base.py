#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/options/base.py
"""Base classes for renderer and composer options.

This module defines the foundation classes for the frozen option
dataclasses used throughout md2tg.
"""

from __future__ import annotations

import dataclasses
import sys
from dataclasses import dataclass, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, and to build instances from loosely-typed configuration
    mappings (config files, CLI overrides).
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> Self:
        """Build options from a mapping, ignoring keys that are not fields.

        Hyphenated keys (``primary-budget``) are accepted as aliases of the
        underscored field names. Lists are converted to tuples so that frozen
        options stay hashable.

        Parameters
        ----------
        values : Mapping[str, Any]
            Raw option values, typically one table of a config file

        Returns
        -------
        Self
            New options instance

        """
        field_names = {f.name for f in dataclasses.fields(cls)}  # type: ignore[arg-type]
        kwargs: dict[str, Any] = {}
        for key, value in values.items():
            name = str(key).replace("-", "_")
            if name not in field_names:
                continue
            kwargs[name] = tuple(value) if isinstance(value, list) else value
        return cls(**kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for all renderer options.

    Notes
    -----
    Subclasses should define format-specific rendering options as frozen
    dataclass fields and validate ranges in ``__post_init__``.

    """

    def __post_init__(self) -> None:
        """Validate option values; the base class has none."""
        pass
