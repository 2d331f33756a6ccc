"""Graph rendering using Graphviz."""

import logging
import os
import shutil
import sys
from contextlib import contextmanager, nullcontext
from pathlib import Path

import graphviz

from ..core.exceptions import RenderError
from ..core.models import OutputFormat

logger = logging.getLogger(__name__)


@contextmanager
def suppress_stderr():
    """Context manager to temporarily suppress stderr output."""
    with open(os.devnull, 'w') as devnull:
        old_stderr = sys.stderr
        sys.stderr = devnull
        try:
            yield
        finally:
            sys.stderr = old_stderr


class GraphRenderer:
    """Renders DOT language to image and document formats using Graphviz."""

    def __init__(self, verbose: bool = False):
        """Initialize renderer and check Graphviz availability.

        Args:
            verbose: Whether to show Graphviz warnings on stderr.
        """
        self.verbose = verbose
        self._check_graphviz_installation()

    def _check_graphviz_installation(self) -> None:
        """Check if Graphviz is installed and accessible."""
        if not shutil.which('dot'):
            raise RenderError(
                "Graphviz 'dot' executable not found. Please install Graphviz:\n"
                "  Ubuntu/Debian: sudo apt-get install graphviz\n"
                "  macOS: brew install graphviz\n"
                "  Windows: Download from https://graphviz.org/download/"
            )

        logger.info("Graphviz installation verified")

    def render(
        self,
        dot_content: str,
        output_file: str,
        output_format: OutputFormat,
        engine: str = 'dot'
    ) -> Path:
        """Render DOT content to a file.

        Args:
            dot_content: DOT language content.
            output_file: Output file path.
            output_format: Output format (PNG, SVG or PDF).
            engine: Graphviz engine to use (dot, neato, fdp, sfdp, circo, twopi).

        Returns:
            Path to the generated file.
        """
        logger.info(f"Rendering graph to {output_format.value} format")

        output_path = Path(output_file)
        data = self.render_to_string(dot_content, output_format, engine)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(data)

        logger.info(f"Graph rendered successfully to: {output_path}")
        return output_path

    def render_to_string(
        self,
        dot_content: str,
        output_format: OutputFormat,
        engine: str = 'dot'
    ) -> bytes:
        """Render DOT content to bytes for in-memory usage.

        Args:
            dot_content: DOT language content.
            output_format: Output format.
            engine: Graphviz engine to use.

        Returns:
            Rendered graph as bytes.
        """
        try:
            graph = graphviz.Source(dot_content, engine=engine)

            context_manager = suppress_stderr() if not self.verbose else nullcontext()
            with context_manager:
                return graph.pipe(format=OutputFormat(output_format).value)

        except graphviz.ExecutableNotFound as e:
            raise RenderError(f"Graphviz executable not found: {e}") from e
        except graphviz.CalledProcessError as e:
            raise RenderError(f"Failed to render graph: {e}") from e

    def validate_dot(self, dot_content: str) -> bool:
        """Validate DOT content syntax.

        Args:
            dot_content: DOT language content to validate.

        Returns:
            True if valid, False otherwise.
        """
        try:
            self.render_to_string(dot_content, OutputFormat.SVG)
            return True
        except RenderError as e:
            logger.error(f"DOT validation failed: {e}")
            return False

    def get_available_engines(self) -> list[str]:
        """Get list of available Graphviz layout engines."""
        common_engines = ['dot', 'neato', 'fdp', 'sfdp', 'circo', 'twopi']
        return [engine for engine in common_engines if shutil.which(engine)]

    def save_dot_file(self, dot_content: str, output_file: str) -> Path:
        """Save DOT content to a .dot file.

        Args:
            dot_content: DOT language content.
            output_file: Output file path.

        Returns:
            Path to the saved DOT file.
        """
        dot_path = Path(output_file)

        # Ensure .dot extension
        if dot_path.suffix.lower() != '.dot':
            dot_path = dot_path.with_suffix('.dot')

        dot_path.write_text(dot_content, encoding='utf-8')
        logger.info(f"DOT file saved to: {dot_path}")

        return dot_path
