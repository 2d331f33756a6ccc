"""Container diagram construction from architecture models."""

import logging
from typing import Dict, Iterable, List, Optional, Set, Union

from ..core.exceptions import ConstraintViolationError, InvalidArgumentError
from ..core.models import (
    Container,
    ContainerGraph,
    DisplayMode,
    Element,
    ElementKind,
    GraphCluster,
    GraphEdge,
    GraphNode,
    InternalSystem,
    Model,
    Theme,
    Usage,
    UsageSource,
    VisualizationConfig,
)
from .styles import LabelFormatter, get_theme

logger = logging.getLogger(__name__)

# source id -> target id -> usages, in insertion order
Connections = Dict[str, Dict[str, List[Usage]]]


def resolve_mode(mode: Union[DisplayMode, str]) -> DisplayMode:
    """Convert a mode value to :class:`DisplayMode`.

    Raises:
        InvalidArgumentError: If the value is not a display mode.
    """
    try:
        return DisplayMode(mode)
    except ValueError as e:
        valid = ", ".join(m.value for m in DisplayMode)
        raise InvalidArgumentError(
            f"Invalid display mode {mode!r}; expected one of: {valid}",
        ) from e


def resolve_selection(internal_system_ids: Optional[Iterable[str]]) -> List[str]:
    """Convert a selection of internal system ids to a list.

    Raises:
        InvalidArgumentError: If a single string is passed instead of a
            collection of ids.
    """
    if isinstance(internal_system_ids, str):
        raise InvalidArgumentError(
            f"Internal system ids must be a collection, got the string {internal_system_ids!r}; "
            f"use [{internal_system_ids!r}] to select one system",
        )
    return list(internal_system_ids or ())


class GraphBuilder:
    """Builds C4 container graphs from architecture models.

    The builder keeps no state between calls, so one instance can serve
    concurrent builds against the same model.
    """

    def __init__(self, config: Optional[VisualizationConfig] = None):
        """Initialize graph builder with configuration.

        Args:
            config: Visualization configuration. Only the theme and wrap
                width are used here; mode and selection are passed to
                :meth:`build_graph`.
        """
        self.config = config or VisualizationConfig()
        self.labels = LabelFormatter(get_theme(self.config.theme), self.config.wrap_width)

    def build_graph(
        self,
        model: Model,
        mode: Union[DisplayMode, str] = DisplayMode.ALL,
        internal_system_ids: Optional[Iterable[str]] = None,
    ) -> ContainerGraph:
        """Build the container graph of a model.

        Args:
            model: Architecture model.
            mode: ``all`` expands every internal system into a cluster,
                ``selective`` only those listed in ``internal_system_ids``.
            internal_system_ids: Systems to expand in selective mode.
                Ignored in ``all`` mode.

        Returns:
            The container graph.

        Raises:
            InvalidArgumentError: If ``mode`` is not a display mode or the
                selection is a bare string.
            ConstraintViolationError: If two elements share an identifier
                or one element is listed twice.
        """
        display_mode = resolve_mode(mode)
        if display_mode == DisplayMode.ALL:
            selected: Optional[Set[str]] = None
        else:
            selected = set(resolve_selection(internal_system_ids))

        logger.info(f"Building container graph in {display_mode.value} mode")
        self._check_unique_ids(model)

        graph = ContainerGraph()
        connections: Connections = {}

        self._create_container_clusters(model, selected, graph, connections)
        self._collect_actor_connections(model, graph, connections)
        self._collect_excluded_container_connections(model, graph, connections)

        required = self._required_element_ids(connections)

        self._create_actor_nodes(model, required, graph)
        self._create_collapsed_system_nodes(model, required, graph)
        self._create_usage_edges(connections, graph)

        logger.info(
            f"Built graph with {len(graph.clusters)} clusters, "
            f"{len(graph.nodes)} nodes and {len(graph.edges)} edges",
        )
        return graph

    @staticmethod
    def _check_unique_ids(model: Model) -> None:
        """Ensure identifiers form a single flat namespace.

        Args:
            model: Architecture model.

        Raises:
            ConstraintViolationError: On the first shared identifier.
        """
        seen: Dict[str, Element] = {}
        for element in model.elements():
            existing = seen.get(element.id)
            if existing is element:
                raise ConstraintViolationError(
                    f"{type(element).__name__} '{element.id}' appears more than once in the model",
                    element_id=element.id,
                )
            if existing is not None:
                raise ConstraintViolationError(
                    f"Identifier '{element.id}' is used by both "
                    f"{type(existing).__name__} '{existing.name}' and "
                    f"{type(element).__name__} '{element.name}'",
                    element_id=element.id,
                )
            seen[element.id] = element

    def _create_container_clusters(
        self,
        model: Model,
        selected: Optional[Set[str]],
        graph: ContainerGraph,
        connections: Connections,
    ) -> None:
        """Expand displayed internal systems into clusters of container nodes.

        Every usage of a displayed container is recorded, whatever its target.

        Args:
            model: Architecture model.
            selected: Ids of systems to expand, or None for all of them.
            graph: Graph under construction.
            connections: Pending connections.
        """
        for system in model.internal_systems:
            if selected is not None and system.id not in selected:
                logger.debug(f"Internal system '{system.id}' not selected, skipping cluster")
                continue

            cluster = self._create_cluster(system)
            graph.clusters.append(cluster)

            for container in system.containers:
                node = self._create_container_node(container)
                self._register(graph, container.id, node)
                cluster.node_ids.append(node.id)

                for usage in container.usages:
                    self._record(connections, container.id, usage)

    def _collect_actor_connections(
        self,
        model: Model,
        graph: ContainerGraph,
        connections: Connections,
    ) -> None:
        """Record usages of external systems and users into displayed nodes."""
        sources: List[UsageSource] = [
            *model.external_systems,
            *model.internal_users,
            *model.external_users,
        ]
        for source in sources:
            self._record_into_materialized(source, graph, connections)

    def _collect_excluded_container_connections(
        self,
        model: Model,
        graph: ContainerGraph,
        connections: Connections,
    ) -> None:
        """Record usages from containers of systems that were not expanded.

        The container id is kept as the source; it is collapsed onto its
        system node later.
        """
        for system in model.internal_systems:
            for container in system.containers:
                if container.id in graph.registry:
                    continue
                self._record_into_materialized(container, graph, connections)

    def _record_into_materialized(
        self,
        source: UsageSource,
        graph: ContainerGraph,
        connections: Connections,
    ) -> None:
        for usage in source.usages:
            if usage.target_id in graph.registry:
                self._record(connections, source.id, usage)
            else:
                logger.debug(
                    f"Dropping usage {source.id} -> {usage.target_id}: target not displayed",
                )

    @staticmethod
    def _record(connections: Connections, source_id: str, usage: Usage) -> None:
        connections.setdefault(source_id, {}).setdefault(usage.target_id, []).append(usage)

    @staticmethod
    def _required_element_ids(connections: Connections) -> Set[str]:
        """Collect every source and target id of the pending connections."""
        required: Set[str] = set()
        for source_id, targets in connections.items():
            required.add(source_id)
            required.update(targets)
        return required

    def _create_actor_nodes(
        self,
        model: Model,
        required: Set[str],
        graph: ContainerGraph,
    ) -> None:
        """Create nodes for users and external systems taking part in a connection."""
        groups = [
            (model.internal_users, ElementKind.INTERNAL_USER),
            (model.external_users, ElementKind.EXTERNAL_USER),
            (model.external_systems, ElementKind.EXTERNAL_SYSTEM),
        ]
        for elements, kind in groups:
            for element in elements:
                if element.id not in required:
                    continue
                node = self._create_node(element.id, element.name, kind, element.description)
                self._register(graph, element.id, node)

    def _create_collapsed_system_nodes(
        self,
        model: Model,
        required: Set[str],
        graph: ContainerGraph,
    ) -> None:
        """Collapse required containers of non-displayed systems onto one system node.

        The system node is created on the first qualifying container and
        registered under each qualifying container id.
        """
        for system in model.internal_systems:
            system_node: Optional[GraphNode] = None

            for container in system.containers:
                if container.id in graph.registry or container.id not in required:
                    continue

                if system_node is None:
                    system_node = self._create_node(
                        system.id,
                        system.name,
                        ElementKind.INTERNAL_SYSTEM,
                        system.description,
                    )
                    logger.debug(f"Collapsed internal system '{system.id}' into a single node")

                self._register(graph, container.id, system_node)

    def _create_usage_edges(self, connections: Connections, graph: ContainerGraph) -> None:
        """Create one edge per recorded (source, target) pair.

        Both ends are resolved through the registry, so pairs that collapse
        onto the same nodes produce parallel edges.
        """
        for source_id, targets in connections.items():
            for target_id, usages in targets.items():
                source_node = graph.node_for(source_id)
                target_node = graph.node_for(target_id)
                if source_node is None or target_node is None:
                    logger.debug(
                        f"Skipping connection {source_id} -> {target_id}: unresolved element",
                    )
                    continue

                graph.edges.append(
                    GraphEdge(
                        source=source_node.id,
                        target=target_node.id,
                        label=self.labels.usage_label(usages),
                        usages=list(usages),
                        attributes=self.labels.edge_attributes(),
                    ),
                )

    def _create_cluster(self, system: InternalSystem) -> GraphCluster:
        return GraphCluster(
            id=f"cluster__{system.id}",
            system_id=system.id,
            label=self.labels.element_label(
                system.name,
                ElementKind.INTERNAL_SYSTEM,
                system.description,
            ),
            attributes=self.labels.cluster_attributes(),
        )

    def _create_container_node(self, container: Container) -> GraphNode:
        return self._create_node(
            container.id,
            container.name,
            ElementKind.CONTAINER,
            container.description,
            type_tag=container.type,
        )

    def _create_node(
        self,
        node_id: str,
        name: str,
        kind: ElementKind,
        description: str,
        type_tag: Optional[str] = None,
    ) -> GraphNode:
        return GraphNode(
            id=node_id,
            name=name,
            label=self.labels.element_label(name, kind, description, type_tag),
            kind=kind,
            attributes=self.labels.node_attributes(kind),
        )

    @staticmethod
    def _register(graph: ContainerGraph, element_id: str, node: GraphNode) -> None:
        graph.nodes.setdefault(node.id, node)
        graph.registry[element_id] = node.id


def build(
    model: Model,
    mode: Union[DisplayMode, str] = DisplayMode.ALL,
    internal_system_ids: Optional[Iterable[str]] = None,
    theme: Theme = Theme.LIGHT,
) -> ContainerGraph:
    """Build a container graph with a throwaway builder.

    Args:
        model: Architecture model.
        mode: Display mode.
        internal_system_ids: Systems to expand in selective mode.
        theme: Visual theme for labels and styles.

    Returns:
        The container graph.
    """
    return GraphBuilder(VisualizationConfig(theme=theme)).build_graph(
        model,
        mode,
        internal_system_ids,
    )
