"""Type-driven structure discovery.

This module walks the declared fields of ``SpaceObject`` models and derives
the ``DatatypeStructure`` the field selection layer validates against.

Design Decisions:
    - Declared schema: structures come from pydantic ``model_fields``, so a
      model class is the single source of truth for both parsing and
      field selection
    - Memoized per type: a node is cached before its fields are walked, which
      makes self-referential models (a location whose parent is a location)
      resolve to the node being built instead of recursing forever
    - Wire names: fields are keyed by their alias when one is declared
"""

from __future__ import annotations

import collections.abc
import logging
import types
import typing
from typing import Any

from ..core.exceptions import StructureDiscoveryError
from ..models.base import SpaceObject
from .structure import (
    PRIMITIVE,
    DatatypeStructure,
    LiteralObjectStructure,
    ObjectStructure,
    ReferenceStructure,
)

logger = logging.getLogger(__name__)

_SEQUENCE_ORIGINS: frozenset[Any] = frozenset(
    {
        list,
        tuple,
        set,
        frozenset,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Set,
        collections.abc.MutableSet,
        collections.abc.Collection,
        collections.abc.Iterable,
    }
)

_MAPPING_ORIGINS: frozenset[Any] = frozenset(
    {
        dict,
        collections.abc.Mapping,
        collections.abc.MutableMapping,
    }
)


class StructureDiscovery:
    """Builds and caches structures for response types."""

    def __init__(self) -> None:
        self._cache: dict[Any, DatatypeStructure] = {}

    def structure(self, tp: Any) -> DatatypeStructure:
        """Discover the structure of a response type.

        Args:
            tp: A ``SpaceObject`` subclass, a primitive type, or a typing
                construct around them (``list[X]``, ``X | None``, ...)

        Returns:
            The cached structure for ``tp``

        Raises:
            StructureDiscoveryError: If ``tp`` is a generic shape other than a
                collection, a mapping or an optional
        """
        if isinstance(tp, (str, typing.ForwardRef)):
            raise StructureDiscoveryError(
                f"unresolved forward reference {tp!r}; call model_rebuild() on the model"
            )

        origin = typing.get_origin(tp)
        if origin is not None:
            return self._generic_structure(tp, origin)

        cached = self._cache.get(tp)
        if cached is not None:
            return cached

        if not isinstance(tp, type) or not issubclass(tp, SpaceObject):
            self._cache[tp] = PRIMITIVE
            return PRIMITIVE

        return self._object_structure(tp)

    def _generic_structure(self, tp: Any, origin: Any) -> DatatypeStructure:
        args = typing.get_args(tp)

        if origin is typing.Annotated:
            return self.structure(args[0])

        if origin is typing.Union or origin is types.UnionType:
            members = [arg for arg in args if arg is not type(None)]
            if len(members) == 1:
                return self.structure(members[0])
            raise StructureDiscoveryError(f"can't investigate the structure of union {tp!r}")

        if origin is typing.Literal:
            return PRIMITIVE

        if origin in _SEQUENCE_ORIGINS:
            # a collection is never a schema node of its own: describe its element
            if not args:
                return PRIMITIVE
            if origin is tuple and not (len(args) == 2 and args[1] is Ellipsis):
                raise StructureDiscoveryError(
                    f"can't investigate the structure of fixed-size tuple {tp!r}"
                )
            return self.structure(args[0])

        if origin in _MAPPING_ORIGINS:
            # the wire format has no field selection inside arbitrary maps
            return PRIMITIVE

        raise StructureDiscoveryError(f"can't investigate the structure of {tp!r}")

    def _object_structure(self, model: type[SpaceObject]) -> DatatypeStructure:
        fields: dict[str, DatatypeStructure] = {}
        result: ObjectStructure
        if "id" in model.model_fields:
            result = ReferenceStructure(fields)
        else:
            result = LiteralObjectStructure(fields)
        self._cache[model] = result

        try:
            for name, info in model.model_fields.items():
                fields[info.alias or name] = self.structure(info.annotation)
        except StructureDiscoveryError:
            del self._cache[model]
            raise

        logger.debug(
            "structure_discovered",
            extra={
                "model": model.__name__,
                "kind": type(result).__name__,
                "fields": sorted(fields),
            },
        )
        return result

    def clear(self) -> None:
        """Forget every cached structure."""
        self._cache.clear()


_default_discovery = StructureDiscovery()


def get_structure_discovery() -> StructureDiscovery:
    """Get the process-wide discovery instance."""
    return _default_discovery


def discover(tp: Any) -> DatatypeStructure:
    """Discover the structure of ``tp`` with the process-wide cache."""
    return _default_discovery.structure(tp)
