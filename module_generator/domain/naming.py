"""
Naming convention utilities for the module generator.

This module renders a module name into every casing variant used by the
template placeholders, and validates that a name is safe to use as a path
segment.
"""

import re
from dataclasses import dataclass
from typing import Dict, List

from ..constants import Placeholders, UNSAFE_NAME_CHARACTERS, RESERVED_NAMES
from ..exceptions import InvalidModuleNameError


_UPPERCASE_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")
_SEPARATOR_RUN = re.compile(r"[-_\s]+(.)?")
# [^\W\dA-Z_] is any letter other than an ASCII capital
_WORD = re.compile(r"[A-Z]+(?=[A-Z][^\W\dA-Z_])|[A-Z]?[^\W\dA-Z_]+|[A-Z]+|\d+")
_PLACEHOLDER = re.compile("|".join(re.escape(token) for token in Placeholders.ALL))


def decamelize(name: str, separator: str = "_") -> str:
    """
    Split a camelCase name before every uppercase letter and lowercase it.

    Example:
        >>> decamelize("userProfile")
        'user_profile'
        >>> decamelize("userProfile", separator="-")
        'user-profile'
    """
    if not isinstance(name, str):
        raise TypeError(f"Expected string, got {type(name).__name__}")

    return _UPPERCASE_BOUNDARY.sub(separator, name).lower()


def to_snake_case(name: str) -> str:
    """Convert a camelCase name to snake_case."""
    return decamelize(name, separator="_")


def to_kebab_case(name: str) -> str:
    """Convert a camelCase name to kebab-case."""
    return decamelize(name, separator="-")


def to_camel_case(name: str) -> str:
    """
    Convert a name to camelCase.

    Runs of ``-``, ``_`` and whitespace are removed and the character that
    follows them is uppercased; the first character is lowercased.

    Example:
        >>> to_camel_case("user-profile")
        'userProfile'
    """
    if not isinstance(name, str):
        raise TypeError(f"Expected string, got {type(name).__name__}")

    camelized = _SEPARATOR_RUN.sub(
        lambda match: match.group(1).upper() if match.group(1) else "", name
    )
    return camelized[:1].lower() + camelized[1:]


def to_pascal_case(name: str) -> str:
    """
    Convert a name to PascalCase.

    Example:
        >>> to_pascal_case("billing")
        'Billing'
        >>> to_pascal_case("user_profile")
        'UserProfile'
    """
    camelized = to_camel_case(name)
    return camelized[:1].upper() + camelized[1:]


def split_words(name: str) -> List[str]:
    """Split a name into words on separators and camelCase boundaries."""
    return _WORD.findall(name)


def to_title_case(name: str) -> str:
    """
    Convert a name to space separated Title Case.

    Example:
        >>> to_title_case("userProfile")
        'User Profile'
    """
    return " ".join(word[:1].upper() + word[1:] for word in split_words(name))


def validate_module_name(name: str) -> str:
    """
    Ensure a module name can be used as a directory name.

    Raises:
        InvalidModuleNameError: If the name is empty, reserved, or contains
            a path separator.
    """
    if not isinstance(name, str) or not name.strip():
        raise InvalidModuleNameError("Module name must be a non-empty string", module_name=name)

    if name in RESERVED_NAMES:
        raise InvalidModuleNameError(f"'{name}' is a reserved path name", module_name=name)

    unsafe = [char for char in UNSAFE_NAME_CHARACTERS if char in name]
    if unsafe:
        raise InvalidModuleNameError(
            "Module name contains characters that are not allowed in a path",
            module_name=name,
            context={'unsafe_characters': unsafe},
        )

    return name


@dataclass(frozen=True)
class ModuleNameVariants:
    """All casing variants of one module name."""

    literal: str
    snake: str
    kebab: str
    pascal: str
    title: str
    upper: str

    def tokens(self) -> Dict[str, str]:
        """Map every content placeholder to its rendered value."""
        return {
            Placeholders.LITERAL: self.literal,
            Placeholders.SNAKE: self.snake,
            Placeholders.KEBAB: self.kebab,
            Placeholders.PASCAL: self.pascal,
            Placeholders.TITLE: self.title,
            Placeholders.UPPER: self.upper,
        }

    def render_filename(self, filename: str) -> str:
        """
        Replace every filename placeholder with the PascalCase name.

        Occurrences of the PascalCase name itself are left alone, so a name
        like ``myModule`` is not rendered a second time on a repeated run.
        """
        if not self.pascal:
            return filename.replace(Placeholders.FILENAME, self.pascal)
        return self.pascal.join(
            part.replace(Placeholders.FILENAME, self.pascal)
            for part in filename.split(self.pascal)
        )

    def render_text(self, text: str) -> str:
        """Replace every content placeholder in ``text`` in a single pass."""
        tokens = self.tokens()
        return _PLACEHOLDER.sub(lambda match: tokens[match.group(0)], text)


def render_module_name(name: str) -> ModuleNameVariants:
    """Compute the six casing variants of ``name``."""
    return ModuleNameVariants(
        literal=name,
        snake=to_snake_case(name),
        kebab=to_kebab_case(name),
        pascal=to_pascal_case(name),
        title=to_title_case(name),
        upper=name.upper(),
    )
