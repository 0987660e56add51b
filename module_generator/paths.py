"""
Path resolution for generated modules.

All functions are pure: they compute where a module, its package and its
symlink live for a given location and layout, but never touch the disk.
"""

from typing import Optional

from .constants import ExportFileFormat, Layout, Locations
from .domain.models import LayoutOptions, segment_of
from .domain.naming import to_kebab_case
from .exceptions import PathResolutionError


class PathResolver:
    """
    Computes module paths relative to an injected base path.

    Two layouts are supported: the legacy one keeps modules inside
    ``packages/<segment>/src/modules``, the newer one gives every module
    its own ``modules/<name>/<location>`` package.
    """

    def __init__(self, base_path: str):
        base_path = str(base_path)
        self.base_path = base_path.rstrip("/") or "/"

    def _join(self, *parts: str) -> str:
        prefix = "" if self.base_path == "/" else self.base_path
        return prefix + "/" + "/".join(parts)

    @staticmethod
    def package_segment(location: str) -> str:
        """
        Return the package a location tag belongs to.

        Raises:
            PathResolutionError: If the leading segment is not a package
        """
        segment = segment_of(location)
        if segment not in Locations.PACKAGE_SEGMENTS:
            raise PathResolutionError(
                f"Location '{location}' does not map to a package",
                location=location,
                context={'valid_segments': Locations.PACKAGE_SEGMENTS},
            )
        return segment

    def compute_modules_path(
        self, location: str, options: Optional[LayoutOptions] = None, module_name: str = ""
    ) -> str:
        """
        Get the directory of a module, or of the modules of a package.

        Args:
            location: The location tag [client|server], optionally suffixed
            options: Layout options; ``old`` selects the legacy layout
            module_name: The module name, empty for the package directory

        Returns:
            The computed path
        """
        options = options or LayoutOptions()
        segment = self.package_segment(location)

        if options.old or (module_name == "" and segment == Locations.SERVER):
            return self._join(
                Layout.PACKAGES_DIR, segment, Layout.SRC_DIR, Layout.MODULES_DIR, module_name
            )
        if module_name == "":
            return self._join(Layout.PACKAGES_DIR, segment, Layout.SRC_DIR, "")
        return self._join(Layout.MODULES_DIR, module_name, location)

    def compute_root_modules_path(self, module_name: str) -> str:
        """Get the root directory holding every location of a module."""
        return self._join(Layout.MODULES_DIR, module_name)

    def compute_module_package_name(
        self, location: str, options: Optional[LayoutOptions], module_name: str
    ) -> str:
        """
        Get the name the aggregator file imports a module by.

        The legacy layout imports the module directory relatively, the new
        layout imports the scoped package ``@module/<kebab-name>-<location>``.
        """
        options = options or LayoutOptions()
        if options.old:
            return f"./{module_name}"
        return f"{Layout.PACKAGE_SCOPE}/{to_kebab_case(module_name)}-{location}"

    def compute_package_path(self, location: str) -> str:
        """Get the package.json of the package a location belongs to."""
        return self._join(Layout.PACKAGES_DIR, self.package_segment(location), Layout.PACKAGE_JSON)

    def compute_symlink_path(self, location: str, module_name: str) -> str:
        """Get the node_modules link of a new-layout module."""
        return self._join(
            Layout.NODE_MODULES_DIR,
            Layout.PACKAGE_SCOPE,
            f"{to_kebab_case(module_name)}-{location}",
        )

    def compute_export_file_path(
        self, location: str, options: Optional[LayoutOptions] = None, file_name: Optional[str] = None
    ) -> str:
        """
        Get the aggregator file that re-exports the modules of a package.

        Without an explicit ``file_name`` the aggregator is ``index.js`` inside
        a modules directory and ``modules.js`` next to the package sources.
        """
        directory = self.compute_modules_path(location, options)
        if file_name is None:
            file_name = (
                ExportFileFormat.INDEX_FILE_NAME
                if directory.rstrip("/").endswith(f"/{Layout.MODULES_DIR}")
                else ExportFileFormat.MODULES_FILE_NAME
            )
        return directory.rstrip("/") + "/" + file_name
