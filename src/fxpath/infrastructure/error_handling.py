"""Error types and error accounting for fxpath."""
from enum import Enum
from typing import Optional
from loguru import logger


class FXPathError(Exception):
    """Base class for all fxpath errors."""
    pass


class UnknownNodeError(FXPathError):
    """Raised when a query references a node the registry has never seen.

    This is caller misuse and is kept apart from "no path", which is a
    legitimate answer for two known but disconnected nodes.
    """

    def __init__(self, node, message: Optional[str] = None):
        self.node = node
        super().__init__(message or f"Unknown node: {node!r}")


class PathReconstructionError(FXPathError):
    """Raised when a next-hop walk does not reach its destination."""

    def __init__(self, source: int, destination: int, steps: int):
        self.source = source
        self.destination = destination
        self.steps = steps
        super().__init__(
            f"Path from {source} to {destination} did not terminate "
            f"after {steps} hops"
        )


class ParseErrorKind(Enum):
    """Reasons a line can be rejected by the parser."""
    NO_INPUT = "No input for the command"
    REQUIRED_ARGUMENTS_COUNT = "Invalid number of arguments provided"
    TIMESTAMP_PARSING = "Timestamp format"
    FLOAT_PARSING = "Invalid float"
    NON_POSITIVE_FACTOR = "Conversion factors must be positive"
    SAME_CURRENCY = "Source and destination currency must differ"


class ParseCommandError(FXPathError):
    """Raised when an input line cannot be turned into a command."""

    def __init__(self, kind: ParseErrorKind):
        self.kind = kind
        super().__init__(kind.value)


class ErrorHandler:
    """Centralized error accounting for the command loop."""

    def __init__(self):
        """Initialize error handler."""
        self.error_counts: dict[str, int] = {}

    def record_error(self, error: Exception | str):
        """Record an error occurrence, keyed by parse kind or exception type."""
        if isinstance(error, ParseCommandError):
            error_type = error.kind.name
        elif isinstance(error, Exception):
            error_type = type(error).__name__
        else:
            error_type = error

        self.error_counts[error_type] = self.error_counts.get(error_type, 0) + 1
        logger.debug(f"Recorded error '{error_type}' ({self.error_counts[error_type]} total)")

    def get_error_stats(self) -> dict:
        """Get error statistics."""
        return {
            'total_errors': sum(self.error_counts.values()),
            'error_types': self.error_counts.copy(),
        }

    def reset(self):
        """Forget all recorded errors."""
        self.error_counts.clear()
