"""Implemented-vs-stub classification for located functions.

This is a deliberately cheap syntactic heuristic: "has a body" stands in for
"has an implementation". It never inspects what the statements do, so a
function that returns a hard-coded placeholder value is still counted as
implemented. Comments are not statements, so a block holding nothing but a
``// TODO`` comment is a stub.
"""

from tree_sitter import Node

from completion_grader.models import FunctionKind, FunctionNode, FunctionRecord

BLOCK_NODE_TYPE = "statement_block"
_NON_STATEMENT_NODE_TYPES = frozenset({"comment", "html_comment"})

# A concise arrow body is a single expression
CONCISE_BODY_LINE_COUNT = 1


def count_block_statements(block: Node) -> int:
    """Count the top-level statements in a statement block, ignoring comments."""
    return sum(1 for child in block.named_children if child.type not in _NON_STATEMENT_NODE_TYPES)


def _body_line_count(node: FunctionNode) -> int:
    match node.kind:
        case FunctionKind.DECLARATION:
            return count_block_statements(node.body)
        case FunctionKind.ARROW if node.body.type == BLOCK_NODE_TYPE:
            return count_block_statements(node.body)
        case FunctionKind.ARROW:
            # () => expr can never be empty, even when expr is `undefined`
            return CONCISE_BODY_LINE_COUNT


def is_implemented(node: FunctionNode) -> bool:
    """Whether a function has at least one statement (or an expression body)."""
    return _body_line_count(node) > 0


def classify_function(node: FunctionNode) -> FunctionRecord:
    """Classify a located function and measure its body.

    Args:
        node: Function located in a syntax tree that is still alive

    Returns:
        FunctionRecord with implemented status and the number of top-level
        statements in the body (1 for a concise arrow).
    """
    line_count = _body_line_count(node)
    return FunctionRecord(
        name=node.name,
        implemented=line_count > 0,
        file=node.file,
        line_count=line_count,
        kind=node.kind,
        line_number=node.line_number,
    )
