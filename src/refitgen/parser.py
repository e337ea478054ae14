"""C# source parser using tree-sitter."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

import tree_sitter_c_sharp
from tree_sitter import Language, Node, Parser, Tree

from refitgen.errors import ParserError
from refitgen.models import SourceLocation
from refitgen.syntax import find_nodes_by_type, get_node_text, iter_descendants

logger = logging.getLogger(__name__)

_CSHARP_LANGUAGE = Language(tree_sitter_c_sharp.language())

# Constants
_DEFAULT_ENCODING = "utf-8"
_DEFAULT_PATH = "<memory>"
_CSHARP_EXTENSIONS = [".cs"]

# Line index offset (tree-sitter uses 0-based, we want 1-based)
_LINE_INDEX_OFFSET = 1


@dataclass(frozen=True)
class SyntaxTree:
    """A parsed C# source file.

    Owned by the caller; generator components only read it.
    """

    path: str
    source: str
    tree: Tree = field(repr=False, compare=False)
    source_bytes: bytes = field(repr=False, compare=False)

    @property
    def root(self) -> Node:
        """Return the compilation unit node."""
        return self.tree.root_node

    def descendants(self) -> Iterator[Node]:
        """Yield every node below the root once, in document order."""
        return iter_descendants(self.root)

    def descendants_of_type(self, node_type: str) -> list[Node]:
        """Return every descendant node of the given type, in document order."""
        return find_nodes_by_type(self.root, node_type)

    def text(self, node: Node) -> str:
        """Return the source text spanned by a node."""
        return get_node_text(node, self.source_bytes)

    def location(self, node: Node) -> SourceLocation:
        """Return the source span of a node."""
        return SourceLocation(
            path=self.path,
            line=node.start_point[0] + _LINE_INDEX_OFFSET,
            column=self._character_column(node.start_byte, node.start_point[1]),
            end_line=node.end_point[0] + _LINE_INDEX_OFFSET,
            end_column=self._character_column(node.end_byte, node.end_point[1]),
        )

    def _character_column(self, byte_offset: int, byte_column: int) -> int:
        """Convert a byte column from tree-sitter into a character column."""
        line_start = byte_offset - byte_column
        prefix = self.source_bytes[line_start:byte_offset]
        return len(prefix.decode(_DEFAULT_ENCODING, errors="replace"))


class CSharpParser:
    """Parser for C# source code using tree-sitter."""

    def __init__(self) -> None:
        """Initialise the parser with the C# grammar."""
        self.parser = Parser()
        self.parser.language = _CSHARP_LANGUAGE

    def parse(self, source_code: str, path: str | Path = _DEFAULT_PATH) -> SyntaxTree:
        """Parse a source code string.

        Args:
            source_code: Source code to parse
            path: Path reported in diagnostic locations

        Returns:
            Parsed syntax tree (tree-sitter recovers from syntax errors)

        """
        source_bytes = source_code.encode(_DEFAULT_ENCODING)
        tree = self.parser.parse(source_bytes)
        if tree.root_node.has_error:
            logger.warning("Syntax errors while parsing %s", path)
        return SyntaxTree(
            path=str(path),
            source=source_code,
            tree=tree,
            source_bytes=source_bytes,
        )

    def parse_file(self, file_path: Path) -> SyntaxTree:
        """Read and parse a source file.

        Args:
            file_path: Path of a UTF-8 encoded C# file

        Returns:
            Parsed syntax tree

        Raises:
            ParserError: If the file cannot be read or decoded

        """
        try:
            source_code = file_path.read_text(encoding=_DEFAULT_ENCODING)
        except (OSError, UnicodeDecodeError) as e:
            raise ParserError(f"Failed to read source file {file_path}: {e}") from e
        return self.parse(source_code, file_path)

    @staticmethod
    def is_supported_file(file_path: Path) -> bool:
        """Check if file is supported for parsing.

        Args:
            file_path: Path to check

        Returns:
            True if file extension is supported

        """
        return file_path.suffix.lower() in _CSHARP_EXTENSIONS
