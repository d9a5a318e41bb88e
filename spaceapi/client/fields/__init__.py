"""Response structures and field selection.

Architecture:
    - structure.py: schema nodes (PRIMITIVE, literal objects, references)
    - discovery.py: derives schema nodes from model types, cached per type
    - selection.py: the per-request ``$fields`` selection tree
"""

from .discovery import StructureDiscovery, discover, get_structure_discovery
from .selection import FieldSpec, FieldSpecs
from .structure import (
    PRIMITIVE,
    DatatypeStructure,
    LiteralObjectStructure,
    ObjectStructure,
    PrimitiveStructure,
    ReferenceStructure,
    batch_structure,
)

__all__ = [
    "PRIMITIVE",
    "DatatypeStructure",
    "PrimitiveStructure",
    "ObjectStructure",
    "LiteralObjectStructure",
    "ReferenceStructure",
    "batch_structure",
    "StructureDiscovery",
    "discover",
    "get_structure_discovery",
    "FieldSpec",
    "FieldSpecs",
]
