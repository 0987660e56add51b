"""
Module generation orchestrator.

Wires the path resolver, template materializer and export-file patcher
together: adding a module materializes its template for every location,
links it into node_modules, registers it as a package dependency and
re-exports it from the location's aggregator file. Deleting a module
undoes each of those steps.
"""

import json
import logging
import shutil
from pathlib import Path
from typing import List, Optional

from .colored_logging import log_progress, log_section, log_success
from .config import GeneratorSettings
from .domain.models import GenerationResult, LayoutOptions, Location
from .domain.naming import to_camel_case, validate_module_name
from .exceptions import ModuleExistsError, UnknownModuleError
from .export_file import add_entry, remove_entry
from .paths import PathResolver
from .templates import TemplateMaterializer, add_symlink, remove_symlink


logger = logging.getLogger(__name__)


def _read_package_json(package_path: Path) -> Optional[dict]:
    if not package_path.is_file():
        logger.debug(f"No package.json at {package_path}, skipping")
        return None
    with open(package_path, "r", encoding="utf-8") as f:
        return json.load(f)


def _write_package_json(package_path: Path, package: dict) -> None:
    with open(package_path, "w", encoding="utf-8") as f:
        json.dump(package, f, indent=2)
        f.write("\n")


def add_package_dependency(package_path: Path, package_name: str, version: str) -> bool:
    """Add ``package_name`` to the dependencies of an existing package.json."""
    package = _read_package_json(package_path)
    if package is None:
        return False

    dependencies = package.setdefault("dependencies", {})
    if dependencies.get(package_name) == version:
        return False
    dependencies[package_name] = version
    _write_package_json(package_path, package)
    return True


def remove_package_dependency(package_path: Path, package_name: str) -> bool:
    """Remove ``package_name`` from the dependencies of a package.json."""
    package = _read_package_json(package_path)
    if package is None or package_name not in package.get("dependencies", {}):
        return False

    del package["dependencies"][package_name]
    _write_package_json(package_path, package)
    return True


class ModuleGenerator:
    """Adds and deletes modules of a monorepo."""

    def __init__(self, settings: GeneratorSettings):
        self.settings = settings
        self.paths = PathResolver(settings.base_path)
        self.materializer = TemplateMaterializer(settings.templates_path)

    def _options(self, old: Optional[bool]) -> LayoutOptions:
        return LayoutOptions(old=self.settings.old if old is None else old)

    @staticmethod
    def _locations(location: str) -> List[str]:
        """Expand ``both``; any other tag is kept whole, suffix included."""
        if location == Location.BOTH.value:
            return [item.value for item in Location.BOTH.expand()]
        PathResolver.package_segment(location)
        return [location]

    def _export_file(self, location: str, options: LayoutOptions) -> Path:
        return Path(
            self.paths.compute_export_file_path(
                location, options, self.settings.export_file_name
            )
        )

    def _import_string(self, location: str, options: LayoutOptions, module_name: str) -> str:
        package_name = self.paths.compute_module_package_name(location, options, module_name)
        return f"import {to_camel_case(module_name)} from '{package_name}';\n"

    def add_module(
        self, module_name: str, location: str = "both", old: Optional[bool] = None
    ) -> GenerationResult:
        """
        Generate ``module_name`` for ``location``.

        Raises:
            InvalidModuleNameError: If the name cannot be used as a directory
            PathResolutionError: If the location does not map to a package
            ModuleExistsError: If the module directory already exists
            TemplateError: If the template for a location is missing
        """
        validate_module_name(module_name)
        options = self._options(old)
        locations = self._locations(location)
        result = GenerationResult(module_name=module_name, locations=locations)

        log_section(logger, f"Adding module {module_name}")

        # Refuse before touching anything so a clash leaves the tree unchanged
        for item in locations:
            destination = Path(self.paths.compute_modules_path(item, options, module_name))
            if destination.exists():
                raise ModuleExistsError(
                    f"Module '{module_name}' already exists for {item}",
                    module_name=module_name,
                    path=str(destination),
                )

        for item in locations:
            self._add_location(module_name, item, options, result)

        log_success(logger, f"Module '{module_name}' created for {', '.join(locations)}")
        return result

    def _add_location(
        self, module_name: str, location: str, options: LayoutOptions, result: GenerationResult
    ) -> None:
        destination = Path(self.paths.compute_modules_path(location, options, module_name))

        log_progress(logger, f"Generating {location} files in {destination}")
        self.materializer.materialize(destination, location, module_name)
        result.created_paths.append(str(destination))

        if not options.old:
            link = self.paths.compute_symlink_path(location, module_name)
            log_progress(logger, f"Linking {link}")
            add_symlink(destination.resolve(), link)
            result.symlinks.append(link)

            package_path = Path(self.paths.compute_package_path(location))
            package_name = self.paths.compute_module_package_name(location, options, module_name)
            if add_package_dependency(package_path, package_name, self.settings.dependency_version):
                result.patched_files.append(str(package_path))

        export_file = self._export_file(location, options)
        log_progress(logger, f"Patching {export_file}")
        if add_entry(
            export_file,
            to_camel_case(module_name),
            self._import_string(location, options, module_name),
        ):
            result.patched_files.append(str(export_file))

    def delete_module(
        self, module_name: str, location: str = "both", old: Optional[bool] = None
    ) -> GenerationResult:
        """
        Delete ``module_name`` from ``location``.

        Locations where the module does not exist are skipped.

        Raises:
            UnknownModuleError: If the module exists for none of the locations
        """
        validate_module_name(module_name)
        options = self._options(old)
        locations = self._locations(location)
        result = GenerationResult(module_name=module_name, locations=locations)

        log_section(logger, f"Deleting module {module_name}")

        for item in locations:
            self._delete_location(module_name, item, options, result)

        if not result.removed_paths:
            raise UnknownModuleError(
                f"Module '{module_name}' does not exist",
                module_name=module_name,
                path=self.paths.compute_modules_path(locations[0], options, module_name),
            )

        if not options.old:
            root = Path(self.paths.compute_root_modules_path(module_name))
            if root.is_dir() and not any(root.iterdir()):
                root.rmdir()
                result.removed_paths.append(str(root))

        log_success(logger, f"Module '{module_name}' deleted")
        return result

    def _delete_location(
        self, module_name: str, location: str, options: LayoutOptions, result: GenerationResult
    ) -> None:
        destination = Path(self.paths.compute_modules_path(location, options, module_name))
        if not destination.is_dir():
            logger.info(f"No {location} module at {destination}, skipping")
            return

        log_progress(logger, f"Removing {destination}")
        shutil.rmtree(destination)
        result.removed_paths.append(str(destination))

        if not options.old:
            link = self.paths.compute_symlink_path(location, module_name)
            if remove_symlink(link):
                result.symlinks.append(link)

            package_path = Path(self.paths.compute_package_path(location))
            package_name = self.paths.compute_module_package_name(location, options, module_name)
            if remove_package_dependency(package_path, package_name):
                result.patched_files.append(str(package_path))

        export_file = self._export_file(location, options)
        if remove_entry(export_file, to_camel_case(module_name), self.settings.formatter):
            result.patched_files.append(str(export_file))
