"""
Field type mapping for schema descriptions.

Maps the declared type of a schema field to the textual type annotation
used in generated GraphQL schema files.
"""

import datetime
import inspect
import logging
from typing import Any, Callable, List, Tuple

from ..constants import TypeAnnotations
from ..exceptions import FieldMappingError
from . import schema
from .models import FieldKind, SchemaField


logger = logging.getLogger(__name__)


def _is_like(*bases: type) -> Callable[[type], bool]:
    """Match a type that is one of ``bases`` or derives from one of them."""
    def matcher(field_type: type) -> bool:
        return issubclass(field_type, bases)
    return matcher


def _is_date_like(field_type: type) -> bool:
    # datetime.datetime derives from datetime.date but maps to DateTime
    if issubclass(field_type, datetime.datetime):
        return False
    return issubclass(field_type, (schema.Date, datetime.date))


# First match wins
_KIND_MATCHERS: List[Tuple[FieldKind, Callable[[type], bool]]] = [
    (FieldKind.BOOLEAN, _is_like(bool)),
    (FieldKind.ID, _is_like(schema.ID)),
    (FieldKind.INT, _is_like(schema.Int, int)),
    (FieldKind.FLOAT, _is_like(schema.Float, float)),
    (FieldKind.STRING, _is_like(str)),
    (FieldKind.DATE, _is_date_like),
    (FieldKind.DATETIME, _is_like(schema.DateTime, datetime.datetime)),
    (FieldKind.TIME, _is_like(schema.Time, datetime.time)),
]


def classify(field_type: Any) -> FieldKind:
    """
    Classify a declared field type.

    Args:
        field_type: The class declared for a schema field

    Returns:
        The matching FieldKind, or FieldKind.UNKNOWN when nothing matches
    """
    if not inspect.isclass(field_type):
        return FieldKind.UNKNOWN

    for kind, matches in _KIND_MATCHERS:
        if matches(field_type):
            return kind
    return FieldKind.UNKNOWN


def map_field_type(field: SchemaField, is_update: bool = False, strict: bool = False) -> str:
    """
    Map a schema field to its type annotation.

    Required fields of a create input get a trailing ``!``; update inputs
    never do, since every field of an update is optional. Unrecognized
    types map to an empty annotation unless ``strict`` is set.

    Raises:
        FieldMappingError: If ``strict`` and the type is not recognized

    Example:
        >>> map_field_type(SchemaField(type=bool))
        'Boolean!'
        >>> map_field_type(SchemaField(type=bool, optional=True))
        'Boolean'
    """
    kind = classify(field.type)
    if kind is FieldKind.UNKNOWN:
        if strict:
            raise FieldMappingError(
                f"Cannot map field {field.name or '<unnamed>'} to a type annotation",
                field_type=field.type,
            )
        logger.warning(
            f"No type annotation for field {field.name or '<unnamed>'} "
            f"of type {getattr(field.type, '__name__', field.type)!r}"
        )

    result = kind.value
    if not is_update and not field.optional:
        result += TypeAnnotations.NON_NULL_MARKER
    return result


class FieldTypeMapper:
    """
    Maps every field of a schema description.

    A thin stateful wrapper used when a whole schema is rendered at once.
    """

    def __init__(self, is_update: bool = False, strict: bool = False):
        self.is_update = is_update
        self.strict = strict

    def map_field(self, field: SchemaField) -> str:
        return map_field_type(field, self.is_update, self.strict)

    def map_fields(self, fields: dict) -> dict:
        """Map ``{name: SchemaField}`` to ``{name: annotation}`` keeping order."""
        return {name: self.map_field(field) for name, field in fields.items()}
