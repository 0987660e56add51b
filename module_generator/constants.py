"""
Centralized constants for the module generator.

Placeholder tokens, layout segments and default configuration values live
here so the rest of the code base never hard-codes them.
"""

from typing import List


# =============================================================================
# CORE CONFIGURATION
# =============================================================================

class DefaultConfig:
    """Default configuration values."""

    BASE_PATH = "."
    TEMPLATES_DIR = "tools/templates/module"
    DEPENDENCY_VERSION = "^1.0.0"


# =============================================================================
# LOCATIONS AND LAYOUT
# =============================================================================

class Locations:
    """Location tags a module can be generated for."""

    CLIENT = "client"
    SERVER = "server"
    BOTH = "both"

    # Locations that own a package under packages/<segment>
    PACKAGE_SEGMENTS = [CLIENT, SERVER]


class Layout:
    """Directory names of the monorepo layout."""

    PACKAGES_DIR = "packages"
    MODULES_DIR = "modules"
    SRC_DIR = "src"
    NODE_MODULES_DIR = "node_modules"
    PACKAGE_JSON = "package.json"
    PACKAGE_SCOPE = "@module"


# =============================================================================
# TEMPLATE PLACEHOLDERS
# =============================================================================

class Placeholders:
    """Tokens replaced while materializing a template tree."""

    # Filename substring replaced with the PascalCase module name
    FILENAME = "Module"

    LITERAL = "$module$"
    SNAKE = "$_module$"
    KEBAB = "$-module$"
    PASCAL = "$Module$"
    TITLE = "$MoDuLe$"
    UPPER = "$MODULE$"

    ALL: List[str] = [LITERAL, SNAKE, KEBAB, PASCAL, TITLE, UPPER]


# =============================================================================
# EXPORT FILES
# =============================================================================

class ExportFileFormat:
    """Textual markers of a generated aggregator file."""

    EXPORT_MARKER = "export default"
    INDENT = "  "
    INDEX_FILE_NAME = "index.js"
    MODULES_FILE_NAME = "modules.js"


# =============================================================================
# TYPE ANNOTATIONS
# =============================================================================

class TypeAnnotations:
    """Markers used in generated type annotations."""

    NON_NULL_MARKER = "!"


# Characters that are never allowed in a module name
UNSAFE_NAME_CHARACTERS = ["/", "\\", "\0"]
RESERVED_NAMES = [".", ".."]
