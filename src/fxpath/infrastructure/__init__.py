"""Infrastructure components for error handling and performance monitoring."""

from .error_handling import (
    FXPathError,
    UnknownNodeError,
    PathReconstructionError,
    ParseCommandError,
    ParseErrorKind,
    ErrorHandler,
)
from .performance import PerformanceMonitor, PerformanceMetrics, OperationTimer

__all__ = [
    "FXPathError",
    "UnknownNodeError",
    "PathReconstructionError",
    "ParseCommandError",
    "ParseErrorKind",
    "ErrorHandler",
    "PerformanceMonitor",
    "PerformanceMetrics",
    "OperationTimer",
]
