"""C4Viz - C4 container diagram generation.

Turns an architecture model of systems, containers and users into a
Graphviz container diagram.
"""

from .core.c4viz import C4Viz
from .core.models import DisplayMode, OutputFormat, Theme

__version__ = "0.3.0"
__all__ = ["C4Viz", "DisplayMode", "OutputFormat", "Theme"]
