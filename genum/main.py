import copy
import logging
import os
from typing import Any, Dict, List, Optional

from .core.aggregator import FileAggregator
from .core.config import config
from .core.directive import DirectiveScanner
from .core.extractor import ConstantExtractor
from .core.generator import Generator, TemplateRenderer
from .core.loader import Environment, Loader
from .models.generation import GenerationUnit

logger = logging.getLogger(__name__)


class Genum:
    """
    Main entry point for genum.
    Runs the load, parse and generate steps for one Go package.
    """

    def __init__(self, directory: str = '.', settings: Optional[Dict[str, Dict[str, Any]]] = None,
                 renderer: Optional[TemplateRenderer] = None):
        """
        Initialize genum for a package directory.

        Settings apply only while this instance loads, parses or generates;
        the shared configuration is left as it was.

        Args:
            directory: Directory of the Go package
            settings: Configuration overrides as ``{section: {key: value}}``
            renderer: Template renderer used for generation

        Raises:
            ConfigurationError: If a setting is unknown
        """
        config.validate(settings)
        self.directory = os.path.abspath(directory)
        self.settings = copy.deepcopy(settings or {})
        self.aggregator = FileAggregator()
        self.generator = Generator(self.directory, renderer)

    def load(self, source_file_name: str) -> Environment:
        """Load the package and the file named ``source_file_name``."""
        with config.override(self.settings):
            return Loader(self.directory).load(source_file_name)

    def parse(self, environment: Environment) -> List[GenerationUnit]:
        """
        Find the directives of the processed file and resolve their enums.

        Returns:
            One generation unit per output file
        """
        with config.override(self.settings):
            directives = DirectiveScanner(environment.source_file).scan()
            extractor = ConstantExtractor(environment.package)
            return self.aggregator.aggregate(environment, directives, extractor.extract_enum)

    def render(self, units: List[GenerationUnit]) -> Dict[str, str]:
        """Generated code of each unit keyed by output file, nothing written."""
        with config.override(self.settings):
            return {unit.output: self.generator.generate_file(unit) for unit in units}

    def generate(self, units: List[GenerationUnit]) -> List[str]:
        """Render and write every unit; returns the written paths."""
        with config.override(self.settings):
            return [self.generator.generate(unit) for unit in units]

    def run(self, source_file_name: str) -> List[str]:
        """Load, parse and generate in one go."""
        environment = self.load(source_file_name)
        units = self.parse(environment)
        return self.generate(units)
