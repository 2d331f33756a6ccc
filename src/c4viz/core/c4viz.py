"""Main C4Viz class for generating C4 container diagrams."""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from ..visualization import DOTGenerator, GraphBuilder, GraphRenderer
from ..visualization.graph_builder import resolve_mode, resolve_selection
from .exceptions import C4VizError, InvalidArgumentError, RenderError
from .loader import load_model
from .models import (
    ContainerGraph,
    Direction,
    DisplayMode,
    Model,
    OutputFormat,
    Splines,
    Theme,
    VisualizationConfig,
)

logger = logging.getLogger(__name__)

FORMAT_EXTENSIONS = {
    OutputFormat.PNG: '.png',
    OutputFormat.SVG: '.svg',
    OutputFormat.PDF: '.pdf',
}

ModelSource = Union[Model, str, Path]


class C4Viz:
    """Main class for C4 container diagram generation."""

    def __init__(self, verbose: bool = False):
        """Initialize C4Viz instance.

        Args:
            verbose: Whether Graphviz warnings are shown while rendering.
        """
        self.verbose = verbose

    def build_graph(
        self,
        model: ModelSource,
        internal_systems: Optional[Iterable[str]] = None,
        mode: Optional[DisplayMode] = None,
        theme: Theme = Theme.LIGHT,
    ) -> ContainerGraph:
        """Build the container graph of a model.

        Args:
            model: Model instance or path to a JSON model document.
            internal_systems: Internal systems to expand into clusters.
            mode: Display mode. Defaults to selective when systems are
                given and to all otherwise.
            theme: Visual theme.

        Returns:
            Container graph.
        """
        config = self._make_config(internal_systems, mode, theme=theme)
        return GraphBuilder(config).build_graph(
            self._resolve_model(model),
            config.mode,
            config.internal_systems,
        )

    def generate_dot(
        self,
        model: ModelSource,
        internal_systems: Optional[Iterable[str]] = None,
        mode: Optional[DisplayMode] = None,
        theme: Theme = Theme.LIGHT,
        direction: Direction = Direction.LEFT_TO_RIGHT,
        splines: Splines = Splines.SPLINE,
    ) -> str:
        """Generate the DOT source of a container diagram.

        Returns:
            DOT language string.
        """
        config = self._make_config(
            internal_systems,
            mode,
            theme=theme,
            direction=direction,
            splines=splines,
        )
        return self._generate_dot(self._resolve_model(model), config)

    def export_diagram(
        self,
        model: ModelSource,
        output_file: str,
        internal_systems: Optional[Iterable[str]] = None,
        mode: Optional[DisplayMode] = None,
        theme: Theme = Theme.LIGHT,
        output_format: OutputFormat = OutputFormat.PNG,
        direction: Direction = Direction.LEFT_TO_RIGHT,
        splines: Splines = Splines.SPLINE,
        save_dot: bool = False
    ) -> Path:
        """Export a C4 container diagram.

        Args:
            model: Model instance or path to a JSON model document.
            output_file: Output file path.
            internal_systems: Internal systems to expand into clusters. If
                empty, every internal system is expanded.
            mode: Display mode override.
            theme: Visual theme.
            output_format: Output format (PNG, SVG, PDF).
            direction: Graph layout direction.
            splines: Edge appearance.
            save_dot: Whether to save DOT source file.

        Returns:
            Path to generated diagram file.

        Raises:
            InvalidArgumentError: If an option is invalid or the output
                extension does not match the format.
        """
        config = self._make_config(
            internal_systems,
            mode,
            theme=theme,
            output_format=output_format,
            direction=direction,
            splines=splines,
        )
        final_output_file = self._resolve_output_file(output_file, config.output_format)
        config.output_file = final_output_file

        dot_content = self._generate_dot(self._resolve_model(model), config)

        renderer = GraphRenderer(verbose=self.verbose)
        if save_dot:
            dot_file = renderer.save_dot_file(dot_content, final_output_file)
            logger.info(f"DOT file saved: {dot_file}")

        output_path = renderer.render(dot_content, final_output_file, config.output_format)

        logger.info(f"Diagram exported successfully: {output_path}")
        return output_path

    def list_internal_systems(self, model: ModelSource) -> List[Dict[str, object]]:
        """Summarise the internal systems of a model.

        Returns:
            One dictionary per system with its id, name and container ids.
        """
        return [
            {
                'id': system.id,
                'name': system.name,
                'containers': [container.id for container in system.containers],
            }
            for system in self._resolve_model(model).internal_systems
        ]

    def validate_prerequisites(self, model: Optional[ModelSource] = None) -> Dict[str, bool]:
        """Validate prerequisites for diagram generation.

        Args:
            model: Optional model to load, build and check as DOT source.

        Returns:
            Dictionary with validation results. ``model`` and ``dot_syntax``
            are only present when a model is given.
        """
        results = {}

        renderer: Optional[GraphRenderer]
        try:
            renderer = GraphRenderer(verbose=self.verbose)
            results['graphviz'] = True
        except RenderError:
            renderer = None
            results['graphviz'] = False

        if model is None:
            return results

        try:
            dot_content = self.generate_dot(model)
            results['model'] = True
        except C4VizError as e:
            logger.error(f"Model validation failed: {e}")
            results['model'] = False
            results['dot_syntax'] = False
            return results

        results['dot_syntax'] = renderer is not None and renderer.validate_dot(dot_content)
        return results

    def get_available_engines(self) -> List[str]:
        """Get Graphviz layout engines found on PATH.

        Raises:
            RenderError: If Graphviz is not installed.
        """
        return GraphRenderer(verbose=self.verbose).get_available_engines()

    def get_supported_themes(self) -> List[str]:
        """Get list of supported visual themes."""
        return [theme.value for theme in Theme]

    def get_supported_formats(self) -> List[str]:
        """Get list of supported output formats."""
        return [fmt.value for fmt in OutputFormat]

    @staticmethod
    def _resolve_model(model: ModelSource) -> Model:
        if isinstance(model, Model):
            return model
        return load_model(model)

    @staticmethod
    def _make_config(
        internal_systems: Optional[Iterable[str]],
        mode: Optional[DisplayMode],
        **options,
    ) -> VisualizationConfig:
        systems = resolve_selection(internal_systems)
        if mode is None:
            mode = DisplayMode.SELECTIVE if systems else DisplayMode.ALL
        else:
            mode = resolve_mode(mode)
        try:
            return VisualizationConfig(mode=mode, internal_systems=systems, **options)
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid visualization options:\n{e}") from e

    @staticmethod
    def _generate_dot(model: Model, config: VisualizationConfig) -> str:
        graph = GraphBuilder(config).build_graph(model, config.mode, config.internal_systems)
        return DOTGenerator(config).generate_dot(graph)

    @staticmethod
    def _resolve_output_file(output_file: str, output_format: OutputFormat) -> str:
        """Add the format's extension if missing; reject a mismatching one."""
        output_path = Path(output_file)
        expected_extension = FORMAT_EXTENSIONS[output_format]
        actual_extension = output_path.suffix.lower()

        if not actual_extension:
            final_output_file = str(output_path.with_suffix(expected_extension))
            logger.info(f"Added extension for format: {output_file} -> {final_output_file}")
            return final_output_file

        if actual_extension != expected_extension:
            raise InvalidArgumentError(
                f"Output file extension '{actual_extension}' does not match format '{output_format.value}'. "
                f"Expected extension: '{expected_extension}'. "
                f"Please use '{output_path.stem}{expected_extension}' or change the format."
            )
        return output_file
