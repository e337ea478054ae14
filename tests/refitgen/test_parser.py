"""Tests for the C# source parser."""

import logging
from pathlib import Path

import pytest

from refitgen.errors import ParserError
from refitgen.parser import CSharpParser


class TestCSharpParser:
    """Test parsing of C# source text and files."""

    def test_parse_returns_syntax_tree(self, parser: CSharpParser) -> None:
        """Test that parsing keeps the source and path."""
        tree = parser.parse("namespace Api { }", "Api.cs")

        assert tree.path == "Api.cs"
        assert tree.source == "namespace Api { }"
        assert tree.root.type == "compilation_unit"

    def test_default_path(self, parser: CSharpParser) -> None:
        """Test the path reported for in-memory sources."""
        assert parser.parse("").path == "<memory>"

    def test_text_and_location(self, parser: CSharpParser) -> None:
        """Test node text and 1-based line locations, including non-ASCII text."""
        tree = parser.parse('// café\nnamespace Api\n{\n    interface IX { }\n}\n')
        interface = tree.descendants_of_type("interface_declaration")[0]

        assert tree.text(interface) == "interface IX { }"
        location = tree.location(interface)
        assert location.line == 4
        assert location.column == 4
        assert location.end_line == 4

    def test_columns_count_characters(self, parser: CSharpParser) -> None:
        """Test that columns are character offsets on lines with non-ASCII text."""
        tree = parser.parse("/* \u00e9\u00e9 */ interface IX { }\n")
        interface = tree.descendants_of_type("interface_declaration")[0]

        location = tree.location(interface)

        assert location.column == 9
        assert location.end_column == 25
        assert str(location) == "<memory>(1,10)"

    def test_descendants_in_document_order(self, parser: CSharpParser) -> None:
        """Test that descendants are yielded in pre-order."""
        tree = parser.parse("using A;\nusing B;\n")

        directives = tree.descendants_of_type("using_directive")

        assert [tree.text(node) for node in directives] == ["using A;", "using B;"]
        assert tree.root not in list(tree.descendants())

    def test_syntax_errors_are_logged(
        self, parser: CSharpParser, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that recoverable syntax errors produce a warning."""
        with caplog.at_level(logging.WARNING, logger="refitgen"):
            tree = parser.parse("namespace Api { interface IX { void ( } ", "Bad.cs")

        assert tree.root.has_error
        assert "Syntax errors while parsing Bad.cs" in caplog.text

    def test_parse_file(self, parser: CSharpParser, tmp_path: Path) -> None:
        """Test that files are read as UTF-8 and keep their path."""
        source_file = tmp_path / "Api.cs"
        source_file.write_text("namespace Api { }", encoding="utf-8")

        tree = parser.parse_file(source_file)

        assert tree.path == str(source_file)
        assert tree.source == "namespace Api { }"

    def test_parse_missing_file(self, parser: CSharpParser, tmp_path: Path) -> None:
        """Test that unreadable files raise ParserError."""
        with pytest.raises(ParserError, match="Failed to read source file"):
            parser.parse_file(tmp_path / "Missing.cs")

    def test_parse_non_utf8_file(self, parser: CSharpParser, tmp_path: Path) -> None:
        """Test that undecodable files raise ParserError."""
        source_file = tmp_path / "Latin.cs"
        source_file.write_bytes(b"// \xff\xfe\xfa\n")

        with pytest.raises(ParserError):
            parser.parse_file(source_file)

    @pytest.mark.parametrize(
        ("filename", "expected"),
        [("Api.cs", True), ("API.CS", True), ("Api.csx", False), ("Api.java", False)],
        ids=["lower", "upper", "script", "other_language"],
    )
    def test_is_supported_file(self, filename: str, expected: bool) -> None:
        """Test the supported file extension check."""
        assert CSharpParser.is_supported_file(Path(filename)) is expected
