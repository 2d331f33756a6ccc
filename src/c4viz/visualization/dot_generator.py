"""DOT language generation for Graphviz rendering."""

import logging
from typing import Any, Dict, List, Optional

from ..core.models import (
    ContainerGraph,
    Direction,
    GraphCluster,
    GraphEdge,
    GraphNode,
    VisualizationConfig,
)
from .styles import get_theme

logger = logging.getLogger(__name__)


def quote(value: str) -> str:
    """Quote a DOT identifier or string attribute."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def format_attribute(name: str, value: Any) -> str:
    """Format one ``name=value`` pair; HTML-like labels are emitted verbatim."""
    if isinstance(value, bool):
        return f"{name}={'true' if value else 'false'}"
    if isinstance(value, (int, float)):
        return f"{name}={value}"

    text = str(value)
    if name == "label" and text.startswith("<") and text.endswith(">"):
        return f"{name}={text}"
    return f"{name}={quote(text)}"


class DOTGenerator:
    """Generates DOT language text from container graphs."""

    def __init__(self, config: Optional[VisualizationConfig] = None):
        """Initialize DOT generator with configuration.

        Args:
            config: Visualization configuration.
        """
        self.config = config or VisualizationConfig()
        self.theme = get_theme(self.config.theme)

    def generate_dot(self, graph: ContainerGraph, name: str = "model") -> str:
        """Generate DOT language string from a container graph.

        Args:
            graph: Container graph.
            name: Name of the DOT digraph.

        Returns:
            DOT language string.
        """
        logger.info("Generating DOT language from graph")

        sections = [
            f"digraph {quote(name)} {{",
            self._generate_graph_attributes(),
        ]

        clusters = self._generate_clusters(graph)
        if clusters:
            sections.append(clusters)

        standalone = self._generate_standalone_nodes(graph)
        if standalone:
            sections.append(standalone)

        edges = self._generate_edges(graph.edges)
        if edges:
            sections.append(edges)

        sections.append("}")

        logger.info("DOT language generation completed")
        return "\n\n".join(sections) + "\n"

    def _generate_graph_attributes(self) -> str:
        """Generate graph-level attributes."""
        rankdir = "LR" if self.config.direction == Direction.LEFT_TO_RIGHT else "TB"

        return f"""    // Graph attributes
    rankdir="{rankdir}";
    splines="{self.config.splines.value}";
    bgcolor="{self.theme.background_color}";
    fontname="{self.theme.font_name}";
    fontsize="{self.theme.font_size}";
    fontcolor="{self.theme.font_color}";
    compound=true;
    newrank=true;"""

    def _generate_clusters(self, graph: ContainerGraph) -> str:
        """Generate one subgraph per internal system cluster."""
        blocks = [self._format_cluster(cluster, graph.nodes) for cluster in graph.clusters]
        return "\n\n".join(blocks)

    def _format_cluster(self, cluster: GraphCluster, nodes: Dict[str, GraphNode]) -> str:
        lines = [f"    subgraph {quote(cluster.id)} {{"]
        lines.append(f"        {format_attribute('label', cluster.label)};")
        for attr, value in cluster.attributes.items():
            lines.append(f"        {format_attribute(attr, value)};")
        lines.append("")
        for node_id in cluster.node_ids:
            lines.append(f"        {self._format_node(nodes[node_id])}")
        lines.append("    }")
        return "\n".join(lines)

    def _generate_standalone_nodes(self, graph: ContainerGraph) -> str:
        """Generate nodes that are not part of any cluster."""
        clustered = graph.clustered_node_ids()
        lines = [
            f"    {self._format_node(node)}"
            for node_id, node in graph.nodes.items()
            if node_id not in clustered
        ]
        return "\n".join(lines)

    def _format_node(self, node: GraphNode) -> str:
        """Format a single node definition.

        Args:
            node: Graph node.

        Returns:
            DOT node definition.
        """
        attributes = [format_attribute("label", node.label)]
        attributes.extend(format_attribute(attr, value) for attr, value in node.attributes.items())
        return f"{quote(node.id)} [{', '.join(attributes)}];"

    def _generate_edges(self, edges: List[GraphEdge]) -> str:
        """Generate edge definitions."""
        return "\n".join(f"    {self._format_edge(edge)}" for edge in edges)

    def _format_edge(self, edge: GraphEdge) -> str:
        attributes = []
        if edge.label:
            attributes.append(format_attribute("label", edge.label))
        attributes.extend(format_attribute(attr, value) for attr, value in edge.attributes.items())

        attr_string = f" [{', '.join(attributes)}]" if attributes else ""
        return f"{quote(edge.source)} -> {quote(edge.target)}{attr_string};"
