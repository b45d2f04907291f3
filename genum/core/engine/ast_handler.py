"""
AST Handler for genum providing a unified interface for tree-sitter operations.
"""
import hashlib
import logging
from functools import lru_cache
from typing import List, Optional, Tuple

from tree_sitter import Node

from genum.core.engine.languages import LANGUAGES, get_parser

logger = logging.getLogger(__name__)


class ASTHandler:
    """
    Handles syntax tree operations using tree-sitter.
    Provides helpers for navigating the concrete syntax tree of Go sources.
    """

    def __init__(self, language_code: str = 'go'):
        """
        Initialize the AST handler.

        Args:
            language_code: Language code of the grammar to parse with
        """
        self.language_code = language_code
        self.parser = get_parser(language_code)
        self.language = LANGUAGES[language_code]

    @lru_cache(maxsize=128)
    def _parse_cached(self, code_hash: str, code: str) -> Tuple[Node, bytes]:
        """Internal cached parse implementation."""
        code_bytes = code.encode("utf8")
        tree = self.parser.parse(code_bytes)
        return (tree.root_node, code_bytes)

    def parse(self, code: str) -> Tuple[Node, bytes]:
        """
        Parse source code into a syntax tree. Results are cached using an LRU
        cache keyed by the SHA1 hash of ``code``.

        Args:
            code: Source code as string

        Returns:
            Tuple of (root_node, code_bytes)
        """
        code_hash = hashlib.sha1(code.encode("utf8")).hexdigest()
        return self._parse_cached(code_hash, code)

    def get_node_text(self, node: Node, code_bytes: bytes) -> str:
        """
        Get the text content of a node.

        Args:
            node: Tree-sitter node
            code_bytes: Source code as bytes

        Returns:
            String content of the node
        """
        return code_bytes[node.start_byte:node.end_byte].decode('utf8')

    def get_node_range(self, node: Node) -> Tuple[int, int]:
        """
        Get the line range of a node.

        Returns:
            Tuple of (start_line, end_line) in 1-indexed form
        """
        return (node.start_point[0] + 1, node.end_point[0] + 1)

    def find_child_by_field_name(self, node: Node, field_name: str) -> Optional[Node]:
        """
        Find a child node by field name.

        Args:
            node: Parent node
            field_name: Field name to find

        Returns:
            Child node or None if not found
        """
        if node is None:
            return None
        return node.child_by_field_name(field_name)

    def find_children_by_field_name(self, node: Node, field_name: str, node_type: Optional[str] = None) -> List[Node]:
        """Named children stored under ``field_name``, optionally of one node type."""
        if node is None:
            return []
        children = [c for c in node.children_by_field_name(field_name) if c.is_named]
        if node_type is not None:
            children = [c for c in children if c.type == node_type]
        return children

    def named_children(self, node: Node) -> List[Node]:
        """Named children of ``node`` without comments."""
        if node is None:
            return []
        return [c for c in node.named_children if c.type != 'comment']

    def collect_descendants(self, node: Node, node_types: Tuple[str, ...]) -> List[Node]:
        """
        Collect children of the given types, descending through grouping nodes.

        Go grammars wrap parenthesized spec groups in ``*_list`` nodes in some
        versions and not in others, so both shapes are handled.
        """
        found = []
        for child in self.named_children(node):
            if child.type in node_types:
                found.append(child)
            elif child.type.endswith('_list'):
                found.extend(self.collect_descendants(child, node_types))
        return found
