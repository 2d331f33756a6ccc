"""Exception hierarchy for C4Viz."""

from __future__ import annotations


class C4VizError(Exception):
    """Base class for all C4Viz errors."""


class InvalidArgumentError(C4VizError, ValueError):
    """Raised when a caller passes an argument outside the accepted domain."""


class ConstraintViolationError(C4VizError):
    """Raised when the model breaks one of its structural invariants."""

    def __init__(self, message: str, element_id: str | None = None):
        super().__init__(message)
        self.element_id = element_id


class ModelLoadError(C4VizError):
    """Raised when a model document cannot be read or validated."""


class RenderError(C4VizError, RuntimeError):
    """Raised when Graphviz is unavailable or fails to render."""
