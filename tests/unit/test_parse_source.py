"""Unit tests for the parse_source module."""

from pathlib import Path

import tree_sitter

from completion_grader.ast_visitors.parse_source import javascript_language, parse_source, parse_source_file
from completion_grader.models import ParseError, SourceFile
from tests.helpers.temp_files import temp_source_file


def test_parse_source_valid_code() -> None:
    """Test parsing valid JavaScript source code."""
    result = parse_source(SourceFile("app.js", "function foo() { return 1; }\n"))
    assert isinstance(result, tree_sitter.Tree)
    assert result.root_node.type == "program"
    assert result.root_node.named_children[0].type == "function_declaration"


def test_parse_source_accepts_jsx() -> None:
    """JSX elements are part of the grammar."""
    source = "const App = () => <div className='app'><Header title={title} /></div>;\n"
    result = parse_source(SourceFile("App.jsx", source))
    assert isinstance(result, tree_sitter.Tree)


def test_parse_source_accepts_module_syntax() -> None:
    """Top-level import and export statements are allowed."""
    source = 'import React from "react";\nexport const f = () => 1;\nexport default f;\n'
    result = parse_source(SourceFile("module.mjs", source))
    assert isinstance(result, tree_sitter.Tree)


def test_parse_source_empty() -> None:
    """Empty source is a valid, empty program."""
    result = parse_source(SourceFile("empty.js", ""))
    assert isinstance(result, tree_sitter.Tree)
    assert result.root_node.named_child_count == 0


def test_parse_source_syntax_error() -> None:
    """Malformed source yields a ParseError value instead of a partial tree."""
    result = parse_source(SourceFile("broken.js", "function broken( {\n  return 1;\n"))
    assert isinstance(result, ParseError)
    assert result.file == "broken.js"
    assert result.message
    assert result.line_number is not None
    assert result.line_number >= 1


def test_parse_source_unicode() -> None:
    """Test parsing source with non-ASCII characters."""
    source = "// 🎉 greeting\nfunction greet() { return '你好'; }\n"
    result = parse_source(SourceFile("unicode.js", source))
    assert isinstance(result, tree_sitter.Tree)


def test_javascript_language_is_cached() -> None:
    """The compiled grammar is loaded once and shared."""
    assert javascript_language() is javascript_language()


def test_parse_source_file_reads_and_parses() -> None:
    """Files on disk are read as UTF-8 and parsed."""
    with temp_source_file("const double = (x) => x * 2;\n") as path:
        result = parse_source_file(path)
    assert isinstance(result, tree_sitter.Tree)


def test_parse_source_file_missing_file() -> None:
    """A missing file is reported as a ParseError naming the file."""
    result = parse_source_file(Path("/nonexistent/missing.js"))
    assert isinstance(result, ParseError)
    assert result.file == "/nonexistent/missing.js"
    assert "Could not read file" in result.message
    assert result.line_number is None
