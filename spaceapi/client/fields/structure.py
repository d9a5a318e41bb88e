"""Structure of Space HTTP API objects.

The API allows a fine control over which fields and embedded objects are
serialized. A structure describes every field an object can contain and
which of those fields a bare ``*`` would bring back.

Variants:
    - PRIMITIVE: an entity whose fields, if any, cannot be requested
      (a string, a number, a date returned as a JSON object, an opaque map)
    - LiteralObjectStructure: an embedded value object; ``*`` serializes all
      of its immediate fields
    - ReferenceStructure: a related entity; ``*`` serializes only its ``id``

Use ``discover`` from ``fields.discovery`` to build structures for model types.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from types import MappingProxyType


class DatatypeStructure(ABC):
    """Schema node for one API response type."""

    @abstractmethod
    def has_field(self, field_name: str, *field_names: str) -> bool:
        """Whether the (possibly nested) field exists."""

    @abstractmethod
    def wildcard_serializable(self, field_name: str, *field_names: str) -> bool:
        """Whether the field is serialized if the parent spec is ``*``."""

    @abstractmethod
    def get_field(self, field_name: str, *field_names: str) -> DatatypeStructure:
        """Structure of the (possibly nested) field.

        Raises:
            KeyError: If the field does not exist
        """


class PrimitiveStructure(DatatypeStructure):
    """Terminal structure with no selectable fields."""

    def has_field(self, field_name: str, *field_names: str) -> bool:
        return False

    def wildcard_serializable(self, field_name: str, *field_names: str) -> bool:
        return False

    def get_field(self, field_name: str, *field_names: str) -> DatatypeStructure:
        raise KeyError(field_name)

    def __repr__(self) -> str:
        return "PRIMITIVE"


PRIMITIVE: DatatypeStructure = PrimitiveStructure()


class ObjectStructure(DatatypeStructure):
    """Structure with named fields.

    The field map is owned by the structure. Discovery fills it right after
    construction (so self-referential types can point back at the node being
    built); after that only the read-only ``fields`` view is exposed.
    """

    def __init__(self, fields: dict[str, DatatypeStructure] | None = None) -> None:
        self._fields: dict[str, DatatypeStructure] = fields if fields is not None else {}

    @property
    def fields(self) -> Mapping[str, DatatypeStructure]:
        return MappingProxyType(self._fields)

    def has_field(self, field_name: str, *field_names: str) -> bool:
        structure = self._fields.get(field_name)
        if structure is None:
            return False
        if not field_names:
            return True
        return structure.has_field(*field_names)

    def get_field(self, field_name: str, *field_names: str) -> DatatypeStructure:
        structure = self._fields[field_name]
        if not field_names:
            return structure
        return structure.get_field(*field_names)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(self._fields)})"


class LiteralObjectStructure(ObjectStructure):
    """Embedded value object: all immediate fields come with ``*``."""

    def wildcard_serializable(self, field_name: str, *field_names: str) -> bool:
        if not self.has_field(field_name, *field_names):
            return False
        if not field_names:
            return True
        return self._fields[field_name].wildcard_serializable(*field_names)


class ReferenceStructure(ObjectStructure):
    """Related entity: serialized as its ``id`` unless explicitly expanded."""

    def __init__(self, fields: dict[str, DatatypeStructure] | None = None) -> None:
        super().__init__(fields)
        self._fields["id"] = PRIMITIVE

    def wildcard_serializable(self, field_name: str, *field_names: str) -> bool:
        return not field_names and field_name == "id"


def batch_structure(element: DatatypeStructure) -> DatatypeStructure:
    """Structure of a batch envelope ``{next, totalCount, data: [element]}``."""
    return LiteralObjectStructure(
        {
            "next": PRIMITIVE,
            "totalCount": PRIMITIVE,
            "data": element,
        }
    )
