"""
Module generator.

Scaffolds client and server modules of a monorepo from template trees and
keeps the aggregator files that re-export them up to date.
"""

from .config import GeneratorSettings, load_config
from .export_file import (
    ExportFile,
    add_entry,
    parse_export_file,
    remove_entry,
    serialize_export_file,
)
from .generator import ModuleGenerator
from .paths import PathResolver
from .templates import TemplateMaterializer, copy_template, rename_template

__version__ = "0.1.0"

__all__ = [
    'GeneratorSettings',
    'load_config',
    'ExportFile',
    'add_entry',
    'parse_export_file',
    'remove_entry',
    'serialize_export_file',
    'ModuleGenerator',
    'PathResolver',
    'TemplateMaterializer',
    'copy_template',
    'rename_template',
]
