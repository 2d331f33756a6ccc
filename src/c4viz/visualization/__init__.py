"""Visualization module for graph construction and rendering."""

from .dot_generator import DOTGenerator
from .graph_builder import GraphBuilder, build
from .renderer import GraphRenderer

__all__ = ["DOTGenerator", "GraphBuilder", "GraphRenderer", "build"]
