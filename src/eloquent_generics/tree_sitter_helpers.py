# --- Tree-sitter plumbing ----------------------------------------------------
from typing import Optional

from tree_sitter import Node


def node_text(source_bytes: bytes, node: Node) -> str:
    """
    Converts a node's [start_byte:end_byte] into the corresponding string.
    Tree-sitter nodes only store byte offsets, so we slice the original source.
    """
    return source_bytes[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def node_point(node: Node) -> tuple[int, int]:
    """
    Returns the (line, column) of a node's start in 0-based coordinates.
    """
    return (node.start_point[0], node.start_point[1])


def significant_children(node: Node) -> list[Node]:
    """Named children, minus comments (tree-sitter treats them as extras that can appear anywhere)."""
    return [child for child in node.named_children if child.type != "comment"]


def first_significant_child(node: Node) -> Optional[Node]:
    children = significant_children(node)
    return children[0] if children else None


def line_indent(source_bytes: bytes, start_byte: int) -> str:
    """
    Whitespace between the start of the line and `start_byte`,
    or "" if something other than whitespace precedes it.
    """
    line_start = source_bytes.rfind(b"\n", 0, start_byte) + 1
    prefix = source_bytes[line_start:start_byte]
    if prefix.strip():
        return ""
    return prefix.decode("utf-8", errors="replace")
