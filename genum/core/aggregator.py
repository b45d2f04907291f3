"""
Grouping of extracted enums into one generation unit per output file.
"""
import logging
from typing import Callable, Dict, List

from genum.core.error_handling import NoDirectivesFoundError
from genum.core.loader import Environment
from genum.models.generation import Directive, Enum, GenerationUnit

logger = logging.getLogger(__name__)


class FileAggregator:
    """Merges the enums of all directives sharing an output file."""

    def aggregate(self, environment: Environment, directives: List[Directive],
                  extract: Callable[[Directive], Enum]) -> List[GenerationUnit]:
        """
        Build generation units in order of first appearance of each output.

        Args:
            environment: Loaded package and processed file
            directives: Directives of the processed file, in source order
            extract: Resolves the enum of one directive; its errors propagate

        Returns:
            One unit per distinct output file

        Raises:
            NoDirectivesFoundError: If ``directives`` is empty
        """
        if not directives:
            raise NoDirectivesFoundError(source=environment.source_file_name)

        units: Dict[str, GenerationUnit] = {}
        for directive in directives:
            enum = extract(directive)
            unit = units.get(directive.output_file)
            if unit is None:
                unit = GenerationUnit(
                    package=environment.package_name,
                    source=environment.source_file_name,
                    output=directive.output_file,
                )
                units[directive.output_file] = unit
            unit.add_enum(enum)
            logger.debug(f"Added enum {enum.type_name} to {unit.output}")

        logger.info(f"Aggregated {len(directives)} directives into {len(units)} output files")
        return list(units.values())
