"""Core C4Viz module."""

from .c4viz import C4Viz
from .exceptions import (
    C4VizError,
    ConstraintViolationError,
    InvalidArgumentError,
    ModelLoadError,
    RenderError,
)
from .loader import load_model, parse_model
from .models import (
    Container,
    ContainerGraph,
    Direction,
    DisplayMode,
    ElementKind,
    ExternalSystem,
    ExternalUser,
    GraphCluster,
    GraphEdge,
    GraphNode,
    InternalSystem,
    InternalUser,
    Model,
    OutputFormat,
    Splines,
    Theme,
    ThemeConfig,
    Usage,
    VisualizationConfig,
)

__all__ = [
    "C4Viz",
    "C4VizError",
    "ConstraintViolationError",
    "Container",
    "ContainerGraph",
    "Direction",
    "DisplayMode",
    "ElementKind",
    "ExternalSystem",
    "ExternalUser",
    "GraphCluster",
    "GraphEdge",
    "GraphNode",
    "InternalSystem",
    "InternalUser",
    "InvalidArgumentError",
    "Model",
    "ModelLoadError",
    "OutputFormat",
    "RenderError",
    "Splines",
    "Theme",
    "ThemeConfig",
    "Usage",
    "VisualizationConfig",
    "load_model",
    "parse_model",
]
