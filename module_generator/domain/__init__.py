"""
Domain module for the module generator.

Naming conventions, schema field types and the models shared by the
filesystem layers. Nothing in here touches the disk.
"""

from .models import (
    Location,
    FieldKind,
    SchemaField,
    LayoutOptions,
    GenerationResult,
    segment_of
)

from .field_mapping import (
    FieldTypeMapper,
    classify,
    map_field_type
)

from .naming import (
    ModuleNameVariants,
    decamelize,
    to_snake_case,
    to_kebab_case,
    to_camel_case,
    to_pascal_case,
    to_title_case,
    render_module_name,
    validate_module_name
)

__all__ = [
    # Core models
    'Location',
    'FieldKind',
    'SchemaField',
    'LayoutOptions',
    'GenerationResult',
    'segment_of',

    # Field mapping
    'FieldTypeMapper',
    'classify',
    'map_field_type',

    # Naming
    'ModuleNameVariants',
    'decamelize',
    'to_snake_case',
    'to_kebab_case',
    'to_camel_case',
    'to_pascal_case',
    'to_title_case',
    'render_module_name',
    'validate_module_name'
]
