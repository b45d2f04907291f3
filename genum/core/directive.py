"""
Parsing of ``//go:generate genum`` directives.

A directive is a comment of the form::

    //go:generate genum -type=Color -output=color_string.go -trimprefix=Color -case=lower

Only comments that start with the exact marker (after trimming surrounding
whitespace) are directives. The rest of the comment is a list of
whitespace-separated ``key=value`` tokens.
"""
import logging
from typing import Dict, List, Optional

from genum.core.config import config
from genum.core.error_handling import (
    InvalidArgumentError,
    InvalidParameterError,
    MissingParameterError,
)
from genum.core.visitor import DeclarationVisitor
from genum.models.enums import CaseHandling
from genum.models.generation import Directive
from genum.models.syntax import Declaration, SourceFile

logger = logging.getLogger(__name__)

GENUM_PREFIX = '//go:generate genum '

FLAG_TYPE = '-type'
FLAG_OUTPUT = '-output'
FLAG_TRIM_PREFIX = '-trimprefix'
FLAG_CASE = '-case'


def is_genum_directive(comment: str) -> bool:
    """Return True if ``comment`` starts with the genum marker."""
    return comment.strip().startswith(GENUM_PREFIX)


def parse_flags(comment: str) -> Dict[str, str]:
    """
    Split the arguments of a directive into a flag map.

    Only the first ``=`` of a token separates key and value, and a value
    wrapped in a matching pair of single or double quotes is unquoted once.

    Raises:
        InvalidArgumentError: If a token has no ``=``
    """
    comment = comment.strip()
    if comment.startswith(GENUM_PREFIX):
        comment = comment[len(GENUM_PREFIX):]
    flags: Dict[str, str] = {}
    for part in comment.split():
        key, sep, value = part.partition('=')
        if not sep:
            raise InvalidArgumentError(part)
        flags[key] = _unquote(value)
    return flags


def parse_from_comment(comment: str, source_file: str) -> Optional[Directive]:
    """
    Parse a comment into a directive.

    Args:
        comment: Raw comment text, including the ``//``
        source_file: Base name of the file holding the comment, used to
            derive the default output file

    Returns:
        The directive, or None if the comment is not a genum directive

    Raises:
        DirectiveError: If the comment is a malformed genum directive
    """
    comment = comment.strip()
    if not is_genum_directive(comment):
        return None

    flags = parse_flags(comment)
    type_name = flags.get(FLAG_TYPE, '')
    output_file = flags.get(FLAG_OUTPUT, '')
    trim_prefix = flags.get(FLAG_TRIM_PREFIX, '')
    case = flags.get(FLAG_CASE, '')
    unknown = set(flags) - {FLAG_TYPE, FLAG_OUTPUT, FLAG_TRIM_PREFIX, FLAG_CASE}
    if unknown:
        logger.debug(f"Ignoring unknown directive flags: {', '.join(sorted(unknown))}")

    if not type_name:
        raise MissingParameterError(FLAG_TYPE, 'type')
    if not output_file:
        output_file = derive_output_file(source_file)
    if not trim_prefix:
        trim_prefix = type_name
    if not case:
        case = CaseHandling.SENSITIVE.value
    if not CaseHandling.is_valid(case):
        raise InvalidParameterError(FLAG_CASE, case)

    return Directive(
        type_name=type_name,
        output_file=output_file,
        trim_prefix=trim_prefix,
        case=CaseHandling(case),
    )


def derive_output_file(source_file: str) -> str:
    """Default output file: ``color.go`` becomes ``color_genum.go``."""
    extension = config.get('loader', 'source_extension', '.go')
    suffix = config.get('generation', 'output_suffix', '_genum.go')
    if extension and source_file.endswith(extension):
        source_file = source_file[:-len(extension)]
    return source_file + suffix


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


class DirectiveScanner(DeclarationVisitor):
    """
    Collects the directives of one source file.

    Directives are read from the doc comments of ``import``, ``const``,
    ``var`` and ``type`` declarations, in source order.
    """

    def __init__(self, source_file: SourceFile):
        super().__init__()
        self.source_file = source_file
        self.directives: List[Directive] = []

    def scan(self) -> List[Directive]:
        self.directives = []
        self.visit_file(self.source_file)
        logger.debug(f"Found {len(self.directives)} genum directives in {self.source_file.name}")
        return self.directives

    def generic_visit(self, declaration: Declaration) -> None:
        if not declaration.kind.is_general:
            return
        for comment in declaration.doc:
            directive = parse_from_comment(comment, self.source_file.name)
            if directive is not None:
                logger.debug(f"{self.source_file.name}:{declaration.line}: directive for {directive.type_name}")
                self.directives.append(directive)
