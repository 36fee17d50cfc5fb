"""Source parsing for JavaScript and JSX files.

All parsing goes through this module so every caller sees the same grammar
and the same failure semantics. tree-sitter never raises on malformed input;
it recovers by inserting ERROR and missing nodes. Recovered trees are not
trustworthy for completeness analysis, so any tree containing an error is
reported as a ParseError value and the tree itself is discarded.

The javascript grammar covers JSX and module syntax (top-level import and
export), so no separate dialect selection is needed.

Known limitation: tree-sitter is more permissive than a strict module-mode
parser. A few invalid programs, such as a top-level `function(){}`
statement, parse without error nodes and are reported as valid files with
no functions rather than as parse errors.
"""

import logging
from functools import cache
from pathlib import Path

import tree_sitter
import tree_sitter_javascript

from completion_grader.ast_visitors.traversal import iter_preorder
from completion_grader.iteration import first
from completion_grader.models import ParseError, SourceFile, SyntaxTree

logger = logging.getLogger(__name__)


@cache
def javascript_language() -> tree_sitter.Language:
    """Return the compiled JavaScript grammar, loaded once per process."""
    return tree_sitter.Language(tree_sitter_javascript.language())


def _first_error_node(tree: SyntaxTree) -> tree_sitter.Node | None:
    return first(iter_preorder(tree.root_node), lambda node: node.type == "ERROR" or node.is_missing)


def parse_source(source: SourceFile) -> SyntaxTree | ParseError:
    """Parse JavaScript/JSX source text into a syntax tree.

    A new Parser is created per call; parsers hold mutable state and must not
    be shared between worker threads, while the Language is immutable.

    Args:
        source: The source text and the identifier used in error reports

    Returns:
        The syntax tree on success, or a ParseError describing the first
        syntax error found.
    """
    parser = tree_sitter.Parser(javascript_language())
    tree = parser.parse(source.text.encode("utf-8"))

    if not tree.root_node.has_error:
        logger.debug("Parsed %s", source.identifier)
        return tree

    error_node = _first_error_node(tree)
    if error_node is None:
        return ParseError(file=source.identifier, message="Syntax error")

    line_number = error_node.start_point.row + 1
    if error_node.is_missing:
        message = f"Missing {error_node.type!r} at line {line_number}"
    else:
        message = f"Unexpected syntax at line {line_number}"
    return ParseError(file=source.identifier, message=message, line_number=line_number)


def parse_source_file(file_path: Path) -> SyntaxTree | ParseError:
    """Read a UTF-8 source file and parse it.

    Returns:
        The syntax tree on success, or a ParseError on failure (file not
        found, encoding error or syntax error)
    """
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return ParseError(file=str(file_path), message=f"Could not read file: {e}")

    return parse_source(SourceFile(identifier=str(file_path), text=text))
