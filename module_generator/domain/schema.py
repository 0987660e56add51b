"""
Schema description types.

Marker classes for the field types a schema can declare beyond the Python
builtins. Schemas may subclass them; the field mapper accepts subclasses.
"""


class SchemaType:
    """Base class of every schema marker type."""


class ID(SchemaType):
    """Opaque identifier."""


class Int(SchemaType):
    """32-bit integer."""


class Float(SchemaType):
    """Double precision number."""


class Date(SchemaType):
    """Calendar date without a time component."""


class DateTime(SchemaType):
    """Date and time of day."""


class Time(SchemaType):
    """Time of day."""
