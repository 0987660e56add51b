"""
Core domain models for the module generator.

These models describe module generation requests and schema fields
independently of the filesystem code that acts on them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from ..constants import Locations


class Location(Enum):
    """Placement of a generated module."""

    CLIENT = Locations.CLIENT
    SERVER = Locations.SERVER
    BOTH = Locations.BOTH

    def expand(self) -> List["Location"]:
        """Return the concrete locations this tag stands for."""
        if self is Location.BOTH:
            return [Location.CLIENT, Location.SERVER]
        return [self]


def segment_of(location: str) -> str:
    """Return the part of a location tag before the first hyphen."""
    return location.split("-")[0]


class FieldKind(Enum):
    """Closed set of field kinds the type mapper recognizes."""

    BOOLEAN = "Boolean"
    ID = "ID"
    INT = "Int"
    FLOAT = "Float"
    STRING = "String"
    DATE = "Date"
    DATETIME = "DateTime"
    TIME = "Time"
    UNKNOWN = ""


@dataclass(frozen=True)
class SchemaField:
    """
    A field of a schema description.

    ``type`` is a class, either a Python builtin or one of the marker
    types from :mod:`module_generator.domain.schema`.
    """

    type: Any
    optional: bool = False
    name: Optional[str] = None


@dataclass
class LayoutOptions:
    """Options that select between the legacy and per-module layout."""

    old: bool = False


@dataclass
class GenerationResult:
    """Files and links touched while generating or deleting a module."""

    module_name: str
    locations: List[str] = field(default_factory=list)
    created_paths: List[str] = field(default_factory=list)
    removed_paths: List[str] = field(default_factory=list)
    patched_files: List[str] = field(default_factory=list)
    symlinks: List[str] = field(default_factory=list)

    @property
    def touched(self) -> int:
        return (
            len(self.created_paths)
            + len(self.removed_paths)
            + len(self.patched_files)
            + len(self.symlinks)
        )
