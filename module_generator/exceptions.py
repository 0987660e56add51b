"""
Custom exception hierarchy for the module generator.

Every error carries optional context and recovery suggestions so the CLI
can print something actionable instead of a bare traceback.
"""

from typing import Dict, Any, Optional, List


class ModuleGeneratorError(Exception):
    """
    Base exception for all module generator errors.

    Provides rich context and error recovery guidance.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        error_code: Optional[str] = None
    ):
        """
        Initialize the exception with context and recovery suggestions.

        Args:
            message: Human-readable error message
            context: Additional context about where/why the error occurred
            suggestions: List of potential solutions or next steps
            error_code: Unique error code for programmatic handling
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        self.error_code = error_code

    def __str__(self) -> str:
        """Return formatted error message with context."""
        lines = [self.message]

        if self.error_code:
            lines.append(f"Error Code: {self.error_code}")

        if self.context:
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestions:
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  • {suggestion}")

        return "\n".join(lines)


class ConfigurationError(ModuleGeneratorError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_file: str = None, **kwargs):
        context = kwargs.get('context', {})
        if config_file:
            context['config_file'] = config_file

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the configuration file syntax",
                "Verify the base and templates paths exist",
                "Check the documentation for configuration examples"
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="CONFIG_ERROR"
        )


class InvalidModuleNameError(ModuleGeneratorError):
    """Raised when a module name is empty or unsafe to use in a path."""

    def __init__(self, message: str, module_name: str = None, **kwargs):
        context = kwargs.get('context', {})
        if module_name is not None:
            context['module_name'] = repr(module_name)

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Use a camelCase or PascalCase name such as 'billing' or 'userProfile'",
                "Do not include path separators in the module name"
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="INVALID_MODULE_NAME"
        )


class TemplateError(ModuleGeneratorError, OSError):
    """Raised when a template tree cannot be copied or rewritten."""

    def __init__(self, message: str, path: str = None, location: str = None, **kwargs):
        context = kwargs.get('context', {})
        if path:
            context['path'] = path
        if location:
            context['location'] = location

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check that the templates directory has a sub-directory per location",
                "Verify the destination directory is writable"
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="TEMPLATE_ERROR"
        )


class PathResolutionError(ModuleGeneratorError):
    """Raised when a location tag cannot be mapped to a package."""

    def __init__(self, message: str, location: str = None, **kwargs):
        context = kwargs.get('context', {})
        if location is not None:
            context['location'] = location

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Use 'client' or 'server' (optionally with a suffix such as 'server-old')"
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="PATH_RESOLUTION_ERROR"
        )


class ExportFileFormatError(ModuleGeneratorError):
    """Raised when an aggregator file has no recognizable import/export structure."""

    def __init__(self, message: str, path: str = None, **kwargs):
        context = kwargs.get('context', {})
        if path:
            context['path'] = path

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "The file must contain ';'-terminated imports followed by 'export default { ... };'",
                "Delete the file to let the generator recreate it"
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="EXPORT_FILE_FORMAT_ERROR"
        )


class FieldMappingError(ModuleGeneratorError):
    """Raised when a schema field cannot be mapped to a type annotation."""

    def __init__(self, message: str, field_type: Any = None, **kwargs):
        context = kwargs.get('context', {})
        if field_type is not None:
            context['field_type'] = getattr(field_type, '__name__', repr(field_type))

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Use one of the schema types: Boolean, ID, Int, Float, String, Date, DateTime, Time"
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="FIELD_MAPPING_ERROR"
        )


class ModuleExistsError(ModuleGeneratorError):
    """Raised when the destination of a new module is already taken."""

    def __init__(self, message: str, module_name: str = None, path: str = None, **kwargs):
        context = kwargs.get('context', {})
        if module_name:
            context['module_name'] = module_name
        if path:
            context['path'] = path

        super().__init__(
            message,
            context=context,
            suggestions=kwargs.get('suggestions') or [
                "Pick another module name or delete the existing module first"
            ],
            error_code="MODULE_EXISTS"
        )


class UnknownModuleError(ModuleGeneratorError):
    """Raised when a module to delete does not exist."""

    def __init__(self, message: str, module_name: str = None, path: str = None, **kwargs):
        context = kwargs.get('context', {})
        if module_name:
            context['module_name'] = module_name
        if path:
            context['path'] = path

        super().__init__(
            message,
            context=context,
            suggestions=kwargs.get('suggestions') or [
                "Check the module name and location",
                "Pass --old if the module uses the legacy package layout"
            ],
            error_code="MODULE_NOT_FOUND"
        )

