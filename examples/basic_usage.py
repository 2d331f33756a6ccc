#!/usr/bin/env python3
"""Basic usage examples for C4Viz."""

from pathlib import Path

from c4viz import C4Viz, DisplayMode, OutputFormat, Theme

MODEL = Path(__file__).parent / "model.json"


def main():
    """Demonstrate basic C4Viz usage."""

    viz = C4Viz()

    # Example 1: Every internal system as a container cluster
    print("Generating diagram for all internal systems...")
    viz.export_diagram(MODEL, output_file="all-systems.png")

    # Example 2: Only the shop; billing collapses to a single node
    print("Generating diagram focused on the shop...")
    viz.export_diagram(
        MODEL,
        output_file="shop.svg",
        internal_systems=["shop"],
        output_format=OutputFormat.SVG,
        theme=Theme.DARK,
        save_dot=True,  # Also save the DOT source file
    )

    # Example 3: DOT source only, no Graphviz executable needed
    dot = viz.generate_dot(MODEL, internal_systems=["billing"], mode=DisplayMode.SELECTIVE)
    print(dot)

    # Example 4: Inspect the graph before rendering
    graph = viz.build_graph(MODEL, internal_systems=["shop"])
    for edge in graph.edges:
        print(f"  {edge.source} -> {edge.target} ({len(edge.usages)} usages)")

    print("All examples completed!")


if __name__ == "__main__":
    main()
