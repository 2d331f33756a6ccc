"""Data models and enums for C4Viz."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol, Union

import networkx as nx
from pydantic import BaseModel, Field


class DisplayMode(str, Enum):
    """Which internal systems are expanded into container clusters."""

    ALL = "all"
    SELECTIVE = "selective"


class Theme(str, Enum):
    """Visual themes for diagram generation."""

    LIGHT = "light"
    DARK = "dark"
    MONO = "mono"


class OutputFormat(str, Enum):
    """Supported output formats."""

    PNG = "png"
    SVG = "svg"
    PDF = "pdf"


class Direction(str, Enum):
    """Graph layout direction."""

    LEFT_TO_RIGHT = "left-to-right"
    TOP_TO_BOTTOM = "top-to-bottom"


class Splines(str, Enum):
    """Edge appearance options."""

    POLYLINE = "polyline"
    CURVED = "curved"
    ORTHO = "ortho"
    LINE = "line"
    SPLINE = "spline"


class ElementKind(str, Enum):
    """Kinds of model elements that can appear as graph nodes."""

    CONTAINER = "container"
    INTERNAL_SYSTEM = "internal_system"
    EXTERNAL_SYSTEM = "external_system"
    INTERNAL_USER = "internal_user"
    EXTERNAL_USER = "external_user"


# Model entities


@dataclass(frozen=True)
class Usage:
    """A directed "uses" relationship; the source is the owning element."""

    target_id: str
    purpose: str
    type: str | None = None


class UsageSource(Protocol):
    """Anything identified that originates usages."""

    @property
    def id(self) -> str: ...

    @property
    def usages(self) -> tuple[Usage, ...]: ...


@dataclass(frozen=True)
class Container:
    """A deployable unit inside an internal system."""

    id: str
    name: str
    description: str = ""
    type: str | None = None
    usages: tuple[Usage, ...] = ()


@dataclass(frozen=True)
class InternalSystem:
    """A system operated by the modeled organization."""

    id: str
    name: str
    description: str = ""
    containers: tuple[Container, ...] = ()


@dataclass(frozen=True)
class ExternalSystem:
    """A system outside the organization's control."""

    id: str
    name: str
    description: str = ""
    usages: tuple[Usage, ...] = ()


@dataclass(frozen=True)
class InternalUser:
    """A person or role inside the organization."""

    id: str
    name: str
    description: str = ""
    usages: tuple[Usage, ...] = ()


@dataclass(frozen=True)
class ExternalUser:
    """A person or role outside the organization."""

    id: str
    name: str
    description: str = ""
    usages: tuple[Usage, ...] = ()


Element = Union[InternalSystem, Container, ExternalSystem, InternalUser, ExternalUser]


@dataclass(frozen=True)
class Model:
    """Root aggregate of an architecture model."""

    internal_systems: tuple[InternalSystem, ...] = ()
    external_systems: tuple[ExternalSystem, ...] = ()
    internal_users: tuple[InternalUser, ...] = ()
    external_users: tuple[ExternalUser, ...] = ()

    def elements(self) -> Iterator[Element]:
        """Yield every identified element in model order."""
        for system in self.internal_systems:
            yield system
            yield from system.containers
        yield from self.external_systems
        yield from self.internal_users
        yield from self.external_users


# Graph value types


@dataclass
class GraphNode:
    """Graph node representation."""

    id: str
    name: str
    label: str
    kind: ElementKind
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass
class GraphEdge:
    """Graph edge carrying every usage between one source/target pair."""

    source: str
    target: str
    label: str = ""
    usages: list[Usage] = field(default_factory=list)
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass
class GraphCluster:
    """Sub-graph grouping the displayed containers of one internal system."""

    id: str
    system_id: str
    label: str
    node_ids: list[str] = field(default_factory=list)
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass
class ContainerGraph:
    """Abstract container diagram handed to the rendering side.

    ``nodes`` is keyed by node id. ``registry`` maps each materialized model
    element id to the id of the node that represents it; containers of a
    collapsed internal system all map to the system's node.
    """

    clusters: list[GraphCluster] = field(default_factory=list)
    nodes: dict[str, GraphNode] = field(default_factory=dict)
    edges: list[GraphEdge] = field(default_factory=list)
    registry: dict[str, str] = field(default_factory=dict)

    def node_for(self, element_id: str) -> GraphNode | None:
        """Resolve a model element id to its node, following aliases."""
        node_id = self.registry.get(element_id)
        if node_id is None:
            return None
        return self.nodes[node_id]

    def clustered_node_ids(self) -> set[str]:
        """Ids of nodes that live inside a cluster."""
        ids: set[str] = set()
        for cluster in self.clusters:
            ids.update(cluster.node_ids)
        return ids

    def to_networkx(self) -> nx.MultiDiGraph:
        """Export as a NetworkX multigraph; parallel edges are preserved."""
        graph = nx.MultiDiGraph()
        for node in self.nodes.values():
            graph.add_node(
                node.id,
                **{
                    "label": node.label,
                    "name": node.name,
                    "kind": node.kind.value,
                    **node.attributes,
                },
            )
        for edge in self.edges:
            graph.add_edge(
                edge.source,
                edge.target,
                **{
                    "label": edge.label,
                    "usage_count": len(edge.usages),
                    **edge.attributes,
                },
            )
        return graph


# Configuration


@dataclass
class ThemeConfig:
    """Theme configuration settings."""

    background_color: str
    font_color: str
    line_color: str
    container_fill: str
    font_name: str = "helvetica"
    font_size: str = "10"
    title_font_size: str = "12"
    type_font_size: str = "8"
    gradient_angle: int = 270


class VisualizationConfig(BaseModel):
    """Configuration for visualization generation."""

    mode: DisplayMode = DisplayMode.ALL
    internal_systems: list[str] = Field(default_factory=list)
    theme: Theme = Theme.LIGHT
    output_format: OutputFormat = OutputFormat.PNG
    direction: Direction = Direction.LEFT_TO_RIGHT
    splines: Splines = Splines.SPLINE
    wrap_width: int = Field(default=20, ge=1)
    output_file: str | None = None
