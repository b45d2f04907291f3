"""
Tree-sitter grammars available to genum.
"""
import logging
from typing import Dict

import tree_sitter_go
from tree_sitter import Language, Parser

logger = logging.getLogger(__name__)

LANGUAGES: Dict[str, Language] = {
    'go': Language(tree_sitter_go.language()),
}


def get_parser(language_code: str) -> Parser:
    """
    Create a tree-sitter parser for ``language_code``.

    Raises:
        ValueError: If no grammar is registered for the language
    """
    language = LANGUAGES.get(language_code.lower())
    if language is None:
        raise ValueError(f"Unsupported language: {language_code}")
    logger.debug(f"Creating tree-sitter parser for {language_code}")
    return Parser(language)
