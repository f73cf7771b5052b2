"""
Exception hierarchy for topology assembly.

Dependencies: None (pure domain layer)
System role: Errors raised while assembling the descriptor graph
"""

from typing import Any


class TopologyError(Exception):
    """Base exception for all topology assembly errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class MissingDependencyError(TopologyError):
    """Raised when a build step reads a part that has not been built yet."""

    def __init__(self, step: str, dependency: str) -> None:
        super().__init__(
            f"Step '{step}' requires '{dependency}', which is not built yet",
            {"step": step, "dependency": dependency},
        )
        self.step = step
        self.dependency = dependency


class UnknownReferenceError(TopologyError):
    """Raised when a descriptor lookup names something not in the graph."""

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(
            f"No {kind} named '{name}' in the descriptor graph",
            {"kind": kind, "name": name},
        )
        self.kind = kind
        self.name = name
