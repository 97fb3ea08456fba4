# core/errors.py
"""Exception hierarchy for workspace conversion."""

from enum import Enum
from typing import List, Optional


class ErrorKind(str, Enum):
    """Classification of per-file conversion failures."""
    DECODE = "decode"
    UNKNOWN_PARAMETER = "unknown_parameter"
    UNKNOWN_EXPR_TYPE = "unknown_expr_type"
    COMPONENT_NOT_FOUND = "component_not_found"
    OTHER = "other"


class LonaError(Exception):
    """Base class for all converter errors."""
    kind: ErrorKind = ErrorKind.OTHER


# Boundary configuration errors (fatal)

class UnknownTargetError(LonaError):
    def __init__(self, name: str, available: List[str]):
        self.name = name
        self.available = available
        super().__init__(
            f"Unrecognized target '{name}'. Available: {', '.join(available)}"
        )


class UnknownFrameworkError(LonaError):
    def __init__(self, target: str, framework: str, available: List[str]):
        self.target = target
        self.framework = framework
        self.available = available
        choices = ', '.join(available) if available else 'none'
        super().__init__(
            f"Target '{target}' has no framework '{framework}'. Available: {choices}"
        )


class WorkspaceNotFoundError(LonaError):
    def __init__(self, start_path, marker: str):
        self.start_path = start_path
        self.marker = marker
        super().__init__(
            f"Couldn't find a workspace directory ({marker}) above {start_path}. "
            f"Try specifying it with --workspace."
        )


class WorkspaceConfigError(LonaError):
    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid workspace config {path}: {reason}")


# Per-file errors (non-fatal inside a batch)

class DecodeError(LonaError):
    kind = ErrorKind.DECODE


class TokenDecodeError(DecodeError):
    """Malformed color or text style file."""


class ComponentDecodeError(DecodeError):
    """Malformed component description file."""


class UnknownParameterError(LonaError):
    kind = ErrorKind.UNKNOWN_PARAMETER

    def __init__(self, name: str, component: Optional[str] = None):
        self.name = name
        self.component = component
        where = f" in component '{component}'" if component else ""
        super().__init__(f"Unknown parameter: {name}{where}")


class UnknownExprTypeError(LonaError):
    kind = ErrorKind.UNKNOWN_EXPR_TYPE

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown expression type: {name}")


class ComponentNotFoundError(LonaError):
    kind = ErrorKind.COMPONENT_NOT_FOUND

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Component not found: {name}")


class RenderError(LonaError):
    """A document decoded fine but cannot be expressed in the target syntax."""


# Target capability gaps

class UnsupportedTargetOperation(LonaError):
    def __init__(self, target: str, operation: str):
        self.target = target
        self.operation = operation
        super().__init__(f"Unrecognized target '{target}' for {operation}")
