"""
Template materialization.

Copies a template tree for one location into a module directory, then
rewrites it for a concrete module name in two phases: files are renamed
first, and placeholder tokens are substituted in a second walk over the
renamed tree.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import List, Union

from .domain.naming import ModuleNameVariants, render_module_name, validate_module_name
from .exceptions import TemplateError


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _collect_files(root: Path) -> List[Path]:
    """List every regular file under ``root``."""
    return sorted(path for path in root.rglob("*") if path.is_file() and not path.is_symlink())


def copy_template(destination: PathLike, templates_root: PathLike, location: str) -> Path:
    """
    Copy ``templates_root/location`` into ``destination``.

    Existing files at the destination are overwritten.

    Raises:
        TemplateError: If the template directory is missing or the
            destination cannot be written
    """
    source = Path(templates_root) / location
    destination = Path(destination)

    if not source.is_dir():
        raise TemplateError(
            f"No template found for location '{location}'",
            path=str(source),
            location=location,
        )

    logger.debug(f"Copying template {source} -> {destination}")
    try:
        shutil.copytree(source, destination, dirs_exist_ok=True)
    except (OSError, shutil.Error) as e:
        raise TemplateError(
            f"Could not copy template into {destination}: {e}",
            path=str(destination),
            location=location,
        ) from e

    return destination


def rename_template(destination: PathLike, module_name: str) -> List[Path]:
    """
    Rename files and substitute placeholders for ``module_name``.

    Returns:
        The final paths of every file in the tree
    """
    validate_module_name(module_name)
    variants = render_module_name(module_name)
    root = Path(destination)

    if not root.is_dir():
        raise TemplateError(f"Destination {root} is not a directory", path=str(root))

    # Phase 1: rename
    for path in _collect_files(root):
        new_name = variants.render_filename(path.name)
        if new_name != path.name:
            target = path.with_name(new_name)
            logger.debug(f"Renaming {path} -> {target}")
            try:
                path.rename(target)
            except OSError as e:
                raise TemplateError(f"Could not rename {path}: {e}", path=str(path)) from e

    # Phase 2: substitute placeholders in the renamed tree
    files = _collect_files(root)
    for path in files:
        _substitute_placeholders(path, variants)

    return files


def _substitute_placeholders(path: Path, variants: ModuleNameVariants) -> bool:
    """Rewrite placeholders in one file. Binary files are left untouched."""
    raw = path.read_bytes()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug(f"Skipping binary file {path}")
        return False

    rendered = variants.render_text(text)
    if rendered == text:
        return False

    # newline="" keeps the template's line endings
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(rendered)
    return True


def materialize_template(
    destination: PathLike, templates_root: PathLike, location: str, module_name: str
) -> List[Path]:
    """Copy the template of ``location`` and rewrite it for ``module_name``."""
    validate_module_name(module_name)
    copy_template(destination, templates_root, location)
    return rename_template(destination, module_name)


def add_symlink(target: PathLike, link: PathLike) -> Path:
    """
    Point ``link`` at ``target``, replacing an existing link.

    Parent directories of the link are created as needed.
    """
    link = Path(link)
    link.parent.mkdir(parents=True, exist_ok=True)
    if link.is_symlink():
        link.unlink()
    elif link.exists():
        raise TemplateError(f"{link} exists and is not a symlink", path=str(link))

    os.symlink(target, link, target_is_directory=True)
    logger.debug(f"Linked {link} -> {target}")
    return link


def remove_symlink(link: PathLike) -> bool:
    """Remove ``link`` if it is a symlink. Returns whether anything was removed."""
    link = Path(link)
    if not link.is_symlink():
        logger.debug(f"No symlink at {link}, skipping")
        return False
    link.unlink()
    logger.debug(f"Removed symlink {link}")
    return True


class TemplateMaterializer:
    """Materializes module templates from a fixed templates root."""

    def __init__(self, templates_root: PathLike):
        self.templates_root = Path(templates_root)

    def has_template(self, location: str) -> bool:
        return (self.templates_root / location).is_dir()

    def materialize(self, destination: PathLike, location: str, module_name: str) -> List[Path]:
        logger.info(f"Copying {location} template for '{module_name}' into {destination}")
        return materialize_template(destination, self.templates_root, location, module_name)
