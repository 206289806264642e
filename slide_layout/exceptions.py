"""
Exception hierarchy for the layout engine.

Two failure classes exist: invalid input, which aborts the call, and
malformed auxiliary data, which is recovered locally and reported as a
warning. Only the first class is represented here.
"""

from typing import Optional, Dict, Any


class LayoutEngineError(Exception):
    """Base exception for all layout engine errors"""

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.cause = cause
        self.context = context or {}

    def __str__(self):
        parts = [super().__str__()]
        if self.cause:
            parts.append(f" (caused by: {type(self.cause).__name__}: {str(self.cause)})")
        if self.context:
            parts.append(f" Context: {self.context}")
        return "".join(parts)


# === Input exceptions ===

class InvalidArgumentError(LayoutEngineError, ValueError):
    """A required parameter is missing or out of range"""

    def __init__(self, field: str, message: str, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.context.setdefault('field', field)


class UnsupportedRoleError(InvalidArgumentError):
    """Content role has no font band"""

    def __init__(self, role: str, **kwargs):
        super().__init__('role', f"Unsupported content role: {role}", **kwargs)
        self.role = role


class UnsupportedLayoutError(InvalidArgumentError):
    """Layout type name is not recognised"""

    def __init__(self, layout_type: str, **kwargs):
        super().__init__('layout_type', f"Unsupported layout type: {layout_type}", **kwargs)
        self.layout_type = layout_type


class TemplateNotFoundError(InvalidArgumentError):
    """Named template does not exist in the library"""

    def __init__(self, template_name: str, **kwargs):
        super().__init__('template', f"Template not found: {template_name}", **kwargs)
        self.template_name = template_name


# === Configuration exceptions ===

class ConfigurationError(LayoutEngineError):
    """Configuration error"""
    pass


class InvalidConfigError(ConfigurationError, ValueError):
    """Invalid configuration value"""
    pass
