"""Field specifications passed to the Space HTTP API via ``$fields``.

Grammar (comma separated entries):
    - ``*``            all immediate fields; references come back as ``id`` only
    - ``name``         the field with its default (wildcard) content
    - ``name(...)``    the field with a nested specification
    - ``name!``        the field, recursively down the chain of same-typed
                       descendants (e.g. ``parent!`` for a location hierarchy)

Example:
    >>> specs = FieldSpecs.for_structure(discover(AbsenceRecord))
    >>> specs.add_field("member", "location")
    >>> str(specs)
    '*,member(*,location)'
"""

from __future__ import annotations

from ..core.exceptions import InvalidSelectionError
from .structure import DatatypeStructure


class FieldSpec:
    """Specification of a single named field."""

    __slots__ = ("nested", "recursive")

    def __init__(self, nested: FieldSpecs, recursive: bool = False) -> None:
        self.nested = nested
        self.recursive = recursive

    def __str__(self) -> str:
        if self.recursive:
            return "!"
        if self.nested.is_wildcard:
            return ""
        return f"({self.nested})"


class FieldSpecs:
    """Mutable field selection bound to a structure.

    Attributes:
        wildcard: Whether ``*`` is part of the selection
        specs: Named field specifications, in the order they were added
        structure: Full structure of the corresponding API object, used to
            validate ``add_field`` calls
    """

    def __init__(
        self,
        wildcard: bool,
        specs: dict[str, FieldSpec],
        structure: DatatypeStructure,
    ) -> None:
        self.wildcard = wildcard
        self.specs = specs
        self.structure = structure

    @classmethod
    def for_structure(cls, structure: DatatypeStructure) -> FieldSpecs:
        """Fresh ``*`` selection for a request root."""
        return cls(True, {}, structure)

    @property
    def is_wildcard(self) -> bool:
        """Whether the selection is equivalent to ``*``."""
        return self.wildcard and not self.specs

    def serialize(self) -> str:
        parts = ["*"] if self.wildcard else []
        parts.extend(f"{name}{spec}" for name, spec in self.specs.items())
        return ",".join(parts)

    __str__ = serialize

    def __repr__(self) -> str:
        return f"FieldSpecs({self.serialize()!r})"

    def field_will_be_serialized(self, field_name: str, *field_names: str) -> bool:
        """Whether the field is part of the response under this selection."""
        if not self.structure.has_field(field_name, *field_names):
            return False
        spec = self.specs.get(field_name)
        if spec is not None:
            if not field_names:
                return True
            return spec.nested.field_will_be_serialized(*field_names)
        if self.wildcard:
            if not field_names:
                return True
            return self.structure.get_field(field_name).wildcard_serializable(*field_names)
        return False

    def add_field(self, *path: str) -> None:
        """Add a field, e.g. ``add_field("member", "location")``.

        Raises:
            InvalidSelectionError: If the path does not exist in the structure
        """
        self._add(False, path)

    def add_recursive_field(self, *path: str) -> None:
        """Add a field serialized recursively, e.g. ``add_recursive_field("parent")``.

        Only the last field of the path is recursive.

        Raises:
            InvalidSelectionError: If the path does not exist in the structure
        """
        self._add(True, path)

    def _add(self, recursive: bool, path: tuple[str, ...]) -> None:
        if not path or not self.structure.has_field(*path):
            raise InvalidSelectionError(path)
        self._insert(recursive, path)

    def _insert(self, recursive: bool, path: tuple[str, ...]) -> None:
        field_name, rest = path[0], path[1:]
        spec = self.specs.get(field_name)
        if spec is None:
            nested = FieldSpecs.for_structure(self.structure.get_field(field_name))
            spec = FieldSpec(nested, recursive and not rest)
            self.specs[field_name] = spec
        if rest:
            spec.nested._insert(recursive, rest)
