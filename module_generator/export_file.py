"""
Aggregator (export) file patching.

A generated aggregator file is a run of ``;``-terminated import statements
followed by a single ``export default { ... };`` object that re-exports the
imported names::

    import billing from '@module/billing-server';
    import user from '@module/user-server';

    export default {
      billing,
      user
    };

The file is parsed into an :class:`ExportFile`, changed structurally and
written back in one canonical form.
"""

import logging
import re
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from jinja2 import Environment

from .constants import ExportFileFormat
from .exceptions import ExportFileFormatError


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_EXPORT_BLOCK = re.compile(r"export\s+default\s*\{(?P<body>[^{}]*)\}\s*;?")
# A statement runs up to the first ';' that is not inside a comment or a string literal
_STATEMENT = re.compile(
    r"""\s*((?://[^\n]*|/\*.*?\*/|[^;'"/]|/(?![/*])|'[^'\n]*'|"[^"\n]*")+?;)""",
    re.DOTALL,
)
_COMMENTS = re.compile(r"""('[^'\n]*'|"[^"\n]*")|//[^\n]*|/\*.*?\*/""", re.DOTALL)
_IMPORT = re.compile(
    r"""^import\s+(?:(?P<clause>[^'"]+?)\s+from\s+)?(?P<quote>['"])(?P<source>[^'"]+)(?P=quote)\s*;$""",
    re.DOTALL,
)
_NAMED_SPECIFIERS = re.compile(r"\{(?P<specifiers>[^}]*)\}")

EXPORT_FILE_TEMPLATE = (
    "{% if statements %}"
    "{% for statement in statements %}{{ statement }}\n{% endfor %}"
    "\n"
    "{% endif %}"
    "export default {{ '{' }}"
    "{% if exported_names %}\n"
    "{% for name in exported_names %}"
    "{{ indent }}{{ name }}{% if not loop.last %},{% endif %}\n"
    "{% endfor %}"
    "{% endif %}"
    "};\n"
    "{% if trailer %}\n{{ trailer }}\n{% endif %}"
)

_JINJA_ENV = Environment(autoescape=False, keep_trailing_newline=True)
_TEMPLATE = _JINJA_ENV.from_string(EXPORT_FILE_TEMPLATE)


def _strip_comments(text: str) -> str:
    """Remove ``//`` and ``/* */`` comments, leaving string literals alone."""
    return _COMMENTS.sub(lambda match: match.group(1) or "", text)


def _specifier_name(specifier: str) -> str:
    """Return the local name bound by an import specifier (``a as b`` binds ``b``)."""
    parts = specifier.split()
    if len(parts) >= 3 and parts[-2] == "as":
        return parts[-1]
    return parts[-1] if parts else ""


def _parse_clause(clause: Optional[str]) -> Tuple[str, ...]:
    """List the names an import clause binds, in declaration order."""
    if not clause:
        return ()

    names: List[str] = []
    named = _NAMED_SPECIFIERS.search(clause)
    default_part = clause[:named.start()] if named else clause
    for part in default_part.split(","):
        part = part.strip()
        if part:
            names.append(_specifier_name(part))
    if named:
        for specifier in named.group("specifiers").split(","):
            specifier = specifier.strip()
            if specifier:
                names.append(_specifier_name(specifier))
    return tuple(names)


@dataclass(frozen=True)
class Statement:
    """One statement of the import section, usually ``;``-terminated."""

    text: str
    names: Tuple[str, ...] = ()
    source: Optional[str] = None

    @property
    def is_import(self) -> bool:
        return self.source is not None

    @classmethod
    def parse(cls, text: str) -> "Statement":
        text = text.strip()
        code = _strip_comments(text).strip()
        match = _IMPORT.match(code)
        if not match:
            return cls(text=text)
        return cls(
            text=text,
            names=_parse_clause(match.group("clause")),
            source=match.group("source"),
        )

    def without(self, name: str) -> Optional["Statement"]:
        """
        Drop ``name`` from this import.

        Returns None when the statement imports nothing else afterwards.
        """
        if name not in self.names:
            return self
        if len(self.names) == 1:
            return None

        code = _strip_comments(self.text).strip()
        match = _IMPORT.match(code)
        clause = match.group("clause")
        named = _NAMED_SPECIFIERS.search(clause)

        default_names = []
        default_part = clause[:named.start()] if named else clause
        for part in default_part.split(","):
            part = part.strip()
            if part and _specifier_name(part) != name:
                default_names.append(part)

        specifiers = []
        if named:
            specifiers = [
                specifier.strip()
                for specifier in named.group("specifiers").split(",")
                if specifier.strip() and _specifier_name(specifier.strip()) != name
            ]

        parts = list(default_names)
        if specifiers:
            parts.append("{ " + ", ".join(specifiers) + " }")
        quote = match.group("quote")
        return Statement.parse(f"import {', '.join(parts)} from {quote}{self.source}{quote};")


def parse_statements(text: str) -> List[Statement]:
    """
    Split the import section of an aggregator file into statements.

    Text left over after the last ``;`` is kept as one unterminated
    statement so it survives a rewrite.
    """
    statements: List[Statement] = []
    position = 0
    for match in _STATEMENT.finditer(text):
        if match.start() != position:
            break
        statements.append(Statement.parse(match.group(1)))
        position = match.end()

    if text[position:].strip():
        statements.append(Statement.parse(text[position:]))
    return statements


def _export_key(entry: str) -> str:
    """Return the key an entry of the export object defines."""
    return entry.split(":", 1)[0].strip()


@dataclass
class ExportFile:
    """Structured form of an aggregator file."""

    statements: List[Statement] = field(default_factory=list)
    exported_names: List[str] = field(default_factory=list)
    trailer: str = ""

    @property
    def imported_names(self) -> List[str]:
        return [name for statement in self.statements for name in statement.names]

    @property
    def export_keys(self) -> List[str]:
        return [_export_key(entry) for entry in self.exported_names]

    def exports(self, export_name: str) -> bool:
        return export_name in self.export_keys

    def add(self, export_name: str, import_string: str) -> bool:
        """
        Import and re-export ``export_name``.

        The import goes after the last existing import and the name becomes
        the trailing key of the export object. Returns False if the name is
        already exported.
        """
        if self.exports(export_name):
            return False

        parsed = parse_statements(import_string)
        if not any(statement.is_import for statement in parsed):
            raise ExportFileFormatError(
                "Import string has no ';'-terminated import statement",
                context={'import_string': import_string.strip()[:80]},
            )

        existing = {statement.text for statement in self.statements}
        new_statements = [statement for statement in parsed if statement.text not in existing]

        last_import = max(
            (index for index, statement in enumerate(self.statements) if statement.is_import),
            default=len(self.statements) - 1,
        )
        self.statements[last_import + 1:last_import + 1] = new_statements
        self.exported_names.append(export_name)
        return True

    def remove(self, export_name: str) -> bool:
        """Drop ``export_name`` from the imports and the export object."""
        changed = False

        statements = []
        for statement in self.statements:
            remaining = statement.without(export_name)
            if remaining is not statement:
                changed = True
            if remaining is not None:
                statements.append(remaining)
        self.statements = statements

        kept = [entry for entry in self.exported_names if _export_key(entry) != export_name]
        if len(kept) != len(self.exported_names):
            changed = True
        self.exported_names = kept
        return changed


def parse_export_file(text: str) -> ExportFile:
    """
    Parse an aggregator file.

    Raises:
        ExportFileFormatError: If there is no export block, or code precedes
            it without a single ``;``-terminated import
    """
    match = _EXPORT_BLOCK.search(text)
    if not match:
        raise ExportFileFormatError(
            f"No '{ExportFileFormat.EXPORT_MARKER} {{ ... }}' block found"
        )

    prefix = text[:match.start()]
    statements = parse_statements(prefix)
    if _strip_comments(prefix).strip() and not any(statement.is_import for statement in statements):
        raise ExportFileFormatError(
            "No ';'-terminated import statement before the export block",
            context={'unparsed': prefix.strip()[:80]},
        )

    entries = [entry.strip() for entry in match.group("body").split(",")]
    return ExportFile(
        statements=statements,
        exported_names=[entry for entry in entries if entry],
        trailer=text[match.end():].strip(),
    )


def serialize_export_file(export_file: ExportFile) -> str:
    """Render an ExportFile in canonical form."""
    return _TEMPLATE.render(
        statements=[statement.text for statement in export_file.statements],
        exported_names=export_file.exported_names,
        trailer=export_file.trailer,
        indent=ExportFileFormat.INDENT,
    )


def _fresh_export_file(export_name: str, import_string: str) -> ExportFile:
    export_file = ExportFile()
    export_file.add(export_name, import_string)
    return export_file


def add_entry(path: PathLike, export_name: str, import_string: str) -> bool:
    """
    Add an import and re-export of ``export_name`` to the file at ``path``.

    A missing or blank file is created. A file that cannot be parsed is
    replaced with a fresh one holding only the new entry.

    Returns:
        True if the file was written
    """
    path = Path(path)
    export_file = None

    if path.is_file():
        content = path.read_text(encoding="utf-8")
        if content.strip():
            try:
                export_file = parse_export_file(content)
            except ExportFileFormatError as e:
                logger.warning(f"Overwriting malformed export file {path}: {e.message}")

    if export_file is None:
        export_file = _fresh_export_file(export_name, import_string)
    elif not export_file.add(export_name, import_string):
        logger.info(f"'{export_name}' is already exported from {path}, skipping")
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize_export_file(export_file), encoding="utf-8")
    logger.debug(f"Added '{export_name}' to {path}")
    return True


def remove_entry(
    path: PathLike, export_name: str, formatter: Optional[Sequence[str]] = None
) -> bool:
    """
    Remove the import and re-export of ``export_name`` from the file at ``path``.

    Missing files and files that do not mention the name are left alone.
    A malformed file is logged and left alone.

    Returns:
        True if the file was written
    """
    path = Path(path)
    if not path.is_file():
        logger.debug(f"No export file at {path}, skipping")
        return False

    try:
        export_file = parse_export_file(path.read_text(encoding="utf-8"))
    except ExportFileFormatError as e:
        logger.warning(f"Cannot remove '{export_name}' from {path}: {e.message}")
        return False

    if not export_file.remove(export_name):
        logger.debug(f"'{export_name}' not found in {path}, skipping")
        return False

    path.write_text(serialize_export_file(export_file), encoding="utf-8")
    logger.debug(f"Removed '{export_name}' from {path}")

    if formatter:
        run_formatter(path, formatter)
    return True


def run_formatter(path: PathLike, command: Sequence[str]) -> bool:
    """
    Run an external formatter on ``path``.

    The path is appended to ``command``. Failures are logged and the
    unformatted file is kept.
    """
    path = Path(path)
    if not path.exists():
        return False

    try:
        subprocess.run(
            [*command, str(path)], check=True, capture_output=True, text=True
        )
        logger.debug(f"Formatted {path} with {command[0]}")
        return True
    except FileNotFoundError:
        logger.warning(f"Formatter '{command[0]}' not found. Leaving {path} unformatted.")
    except subprocess.CalledProcessError as e:
        logger.error(f"Formatter failed on {path}: {e.stderr.strip() if e.stderr else e}")
        logger.warning(f"Leaving {path} unformatted.")
    return False
