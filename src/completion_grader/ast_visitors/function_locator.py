"""Locate function-like constructs in JavaScript syntax trees.

Two constructs are recognised:

    - Function declarations: ``function name(...) { ... }``, including async
      and generator forms, plus ``export default function () {}``, which may
      have no name. The body is always a statement block.
    - Arrow functions: ``(...) => expr`` or ``(...) => { ... }``. The body is
      either a bare expression (concise form) or a statement block.

Methods, getters/setters and plain function expressions are intentionally not
counted. Every part of the tree is searched, so functions nested inside other
functions, object literals, class bodies and callback arguments are all found.

Results come back in document order (a pre-order walk), which keeps the
downstream report deterministic for a given input.
"""

import logging

from tree_sitter import Node

from completion_grader.ast_visitors.traversal import iter_preorder
from completion_grader.models import FunctionKind, FunctionNode, SyntaxTree

logger = logging.getLogger(__name__)

DECLARATION_NODE_TYPES = frozenset({"function_declaration", "generator_function_declaration"})
# Older grammar releases call function_expression "function"
FUNCTION_EXPRESSION_NODE_TYPES = frozenset({"function_expression", "function", "generator_function"})
ARROW_NODE_TYPE = "arrow_function"

# Parent node type -> field holding the binding name, for arrows assigned directly to a name
_ARROW_BINDING_NAME_FIELDS = {
    "variable_declarator": "name",  # const f = () => ...
    "pair": "key",  # { f: () => ... }
    "field_definition": "property",  # class A { f = () => ... }
}
_NAMEABLE_KEY_TYPES = frozenset(
    {"identifier", "property_identifier", "private_property_identifier", "string"}
)


def _node_text(node: Node) -> str:
    return node.text.decode("utf-8") if node.text is not None else ""


def _declaration_name(node: Node) -> str | None:
    name_node = node.child_by_field_name("name")
    return _node_text(name_node) if name_node is not None else None


def _arrow_binding_name(node: Node) -> str | None:
    """Name an arrow after the variable, property or class field it is assigned to."""
    parent = node.parent
    if parent is None or parent.type not in _ARROW_BINDING_NAME_FIELDS:
        return None

    value = parent.child_by_field_name("value")
    if value is None or value.id != node.id:
        return None

    name_node = parent.child_by_field_name(_ARROW_BINDING_NAME_FIELDS[parent.type])
    if name_node is None or name_node.type not in _NAMEABLE_KEY_TYPES:
        return None  # destructuring patterns, computed keys
    return _node_text(name_node).strip("'\"`")


def _is_default_export_function(node: Node) -> bool:
    """Whether a function expression is really ``export default function [name]() {}``."""
    parent = node.parent
    return node.type in FUNCTION_EXPRESSION_NODE_TYPES and parent is not None and parent.type == "export_statement"


def _to_function_node(node: Node, file: str) -> FunctionNode | None:
    """Build a FunctionNode if this tree node is a recognised function construct."""
    if node.type in DECLARATION_NODE_TYPES or _is_default_export_function(node):
        kind = FunctionKind.DECLARATION
        name = _declaration_name(node)
    elif node.type == ARROW_NODE_TYPE:
        kind = FunctionKind.ARROW
        name = _arrow_binding_name(node)
    else:
        return None

    body = node.child_by_field_name("body")
    if body is None:
        return None

    return FunctionNode(
        kind=kind,
        name=name,
        body=body,
        file=file,
        line_number=node.start_point.row + 1,
    )


def locate_functions(tree: SyntaxTree, file: str) -> tuple[FunctionNode, ...]:
    """Find every function declaration and arrow function in a syntax tree.

    Args:
        tree: Parsed JavaScript module
        file: Identifier of the source file, copied onto each FunctionNode

    Returns:
        FunctionNodes in document order, at any nesting depth.
    """
    functions: list[FunctionNode] = []
    for node in iter_preorder(tree.root_node):
        function_node = _to_function_node(node, file)
        if function_node is not None:
            functions.append(function_node)

    logger.debug("Located %d function(s) in %s", len(functions), file)
    return tuple(functions)
