import logging
from typing import Optional

import tree_sitter_php
from tree_sitter import Language, Node, Parser, Tree

from eloquent_generics.models.ast_models import (
    CallExpression,
    ClassConstantReference,
    DocComment,
    Expression,
    MethodDeclaration,
    OtherExpression,
    OtherStatement,
    ReturnStatement,
    Statement,
    StringLiteral,
)
from eloquent_generics.phpdoc import is_doc_comment, parse_return_tag
from eloquent_generics.tree_sitter_helpers import (
    first_significant_child,
    line_indent,
    node_point,
    node_text,
    significant_children,
)

logger = logging.getLogger(__name__)

CALL_NODE_TYPES = ("member_call_expression", "nullsafe_member_call_expression")
CLASS_LIKE_TYPES = ("class_declaration", "trait_declaration", "interface_declaration", "enum_declaration")
CLASS_REFERENCE_TYPES = ("name", "qualified_name", "relative_scope")
STRING_PART_TYPES = ("string_content", "string_value", "escape_sequence")


# --- Tree-sitter language loading -------------------------------------------

def load_php_language() -> Language:
    """
    Loads the Tree-sitter PHP grammar shipped with the `tree-sitter-php` wheel.
    `language_php` (rather than `language_php_only`) also accepts inline HTML
    around the `<?php` tags.
    """
    try:
        return Language(tree_sitter_php.language_php())
    except (TypeError, ValueError) as exc:
        raise RuntimeError(
            "Could not load PHP grammar.\n"
            "- Install matching `tree-sitter` and `tree-sitter-php` releases "
            "(pip install -U tree-sitter tree-sitter-php)."
        ) from exc


# --- The Indexer -------------------------------------------------------------

class PhpIndexer:
    """
    Walks a Tree-sitter PHP AST and turns every method declaration into a
    MethodDeclaration view: return type, top-level statements, doc comment.
    """

    def __init__(self):
        self.language = load_php_language()
        self.parser = Parser(self.language)

    def parse(self, source: str) -> Tree:
        """
        Parses a single source string into a Tree-sitter tree.
        """
        return self.parser.parse(source.encode("utf-8"))

    def index_source(self, source: str, file_path: Optional[str] = None) -> list[MethodDeclaration]:
        """
        Parses a PHP file and returns its method declarations in document order.
        """
        source_bytes = source.encode("utf-8")
        tree: Tree = self.parse(source)
        root: Node = tree.root_node
        if root.has_error:
            logger.warning("%s: syntax errors, results may be incomplete", file_path or "<source>")

        methods = []
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "method_declaration":
                methods.append(self._method(source_bytes, node))
            # reversed so that pop() visits children left to right
            stack.extend(reversed(node.children))
        return methods

    # -- AST helpers ----------------------------------------------------------

    def _method(self, source_bytes: bytes, node: Node) -> MethodDeclaration:
        name_node = node.child_by_field_name("name")
        body = node.child_by_field_name("body")
        statements = None
        if body is not None:
            statements = [self._statement(source_bytes, s) for s in significant_children(body)]

        doc_comment = self._doc_comment(source_bytes, node)
        line, col = node_point(node)
        return MethodDeclaration(
            name=node_text(source_bytes, name_node) if name_node else "<anonymous>",
            return_type=self._return_type_name(source_bytes, node),
            statements=statements,
            start_byte=node.start_byte,
            line=line,
            col=col,
            indent=line_indent(source_bytes, node.start_byte),
            class_name=self._enclosing_class(source_bytes, node),
            doc_comment=doc_comment,
            return_tag=parse_return_tag(doc_comment.text) if doc_comment else None,
        )

    def _return_type_name(self, source_bytes: bytes, node: Node) -> Optional[str]:
        """
        Text of the declared return type when it is a plain class name
        (`BelongsTo`, `\\Illuminate\\...\\BelongsTo`); None for `?BelongsTo`, `int`, unions...
        """
        ret_node = node.child_by_field_name("return_type")
        if ret_node is None or ret_node.type != "named_type":
            return None
        return node_text(source_bytes, ret_node)

    def _enclosing_class(self, source_bytes: bytes, node: Node) -> Optional[str]:
        parent = node.parent
        while parent is not None:
            if parent.type in CLASS_LIKE_TYPES:
                name_node = parent.child_by_field_name("name")
                return node_text(source_bytes, name_node) if name_node else None
            parent = parent.parent
        return None

    def _doc_comment(self, source_bytes: bytes, node: Node) -> Optional[DocComment]:
        """
        The `/** ... */` comment nearest to the method:
          - one between its attributes and its modifiers (`#[Scope] /** ... */ public function`), or
          - one before the declaration, possibly followed by other comments (`/** ... */ // note`).
        """
        name_node = node.child_by_field_name("name")
        leading = None
        for child in node.children:
            if child.type == "function" or child == name_node:
                break
            # a comment after `#[...]` may be kept inside the attribute list
            candidates = [child]
            if child.type == "attribute_list":
                candidates = [c for group in child.children for c in [group, *group.children]]
            for candidate in candidates:
                if candidate.type == "comment" and is_doc_comment(node_text(source_bytes, candidate)):
                    leading = candidate
        if leading is not None:
            return self._as_doc_comment(source_bytes, leading)

        following = node
        prev = node.prev_sibling
        while prev is not None and prev.type == "comment":
            if source_bytes[prev.end_byte:following.start_byte].strip():
                return None
            if is_doc_comment(node_text(source_bytes, prev)):
                return self._as_doc_comment(source_bytes, prev)
            following = prev
            prev = prev.prev_sibling
        return None

    def _as_doc_comment(self, source_bytes: bytes, node: Node) -> DocComment:
        return DocComment(text=node_text(source_bytes, node), start_byte=node.start_byte, end_byte=node.end_byte)

    def _statement(self, source_bytes: bytes, node: Node) -> Statement:
        if node.type != "return_statement":
            return OtherStatement(node.type)
        expr_node = first_significant_child(node)
        if expr_node is None:
            return ReturnStatement(None)
        return ReturnStatement(self._expression(source_bytes, expr_node))

    def _expression(self, source_bytes: bytes, node: Node) -> Expression:
        node = self._unwrap_parentheses(node)
        if node.type in CALL_NODE_TYPES:
            return self._call_chain(source_bytes, node)
        return self._simple_expression(source_bytes, node)

    def _unwrap_parentheses(self, node: Node) -> Node:
        # return ($this->hasMany(Post::class));
        while node.type == "parenthesized_expression":
            inner = first_significant_child(node)
            if inner is None:
                break
            node = inner
        return node

    def _call_chain(self, source_bytes: bytes, node: Node) -> CallExpression:
        """
        Converts `$this->belongsTo(A::class)->withDefault()->latest()` into linked
        CallExpressions, outermost first. Built with a loop, chains can be long.
        """
        call_nodes = []
        current: Optional[Node] = node
        while current is not None and current.type in CALL_NODE_TYPES:
            call_nodes.append(current)
            current = current.child_by_field_name("object")
            if current is not None:
                # ($this->belongsTo(A::class))->withDefault()
                current = self._unwrap_parentheses(current)

        receiver: Optional[Expression] = None
        if current is not None:
            receiver = self._simple_expression(source_bytes, current)

        for call_node in reversed(call_nodes):
            name_node = call_node.child_by_field_name("name")
            name = None
            if name_node is not None and name_node.type == "name":
                name = node_text(source_bytes, name_node)
            receiver = CallExpression(
                name=name,
                arguments=self._arguments(source_bytes, call_node),
                receiver=receiver,
            )
        return receiver

    def _arguments(self, source_bytes: bytes, call_node: Node) -> list[Expression]:
        args_node = call_node.child_by_field_name("arguments")
        if args_node is None:
            return []

        arguments = []
        for arg in significant_children(args_node):
            if arg.type != "argument":
                # e.g. the `...` of a first-class callable
                arguments.append(OtherExpression(arg.type, node_text(source_bytes, arg)))
                continue
            # named arguments carry a `name` child before the value
            parts = significant_children(arg)
            if not parts:
                continue
            arguments.append(self._simple_expression(source_bytes, parts[-1]))
        return arguments

    def _simple_expression(self, source_bytes: bytes, node: Node) -> Expression:
        """Class constants and string literals; everything else is opaque."""
        text = node_text(source_bytes, node)

        if node.type == "class_constant_access_expression":
            parts = significant_children(node)
            if len(parts) >= 2 and parts[0].type in CLASS_REFERENCE_TYPES:
                return ClassConstantReference(
                    class_name=node_text(source_bytes, parts[0]),
                    constant=node_text(source_bytes, parts[-1]),
                )

        if node.type in ("string", "encapsed_string"):
            value = self._string_value(node, text)
            if value is not None:
                return StringLiteral(value)

        return OtherExpression(node.type, text)

    def _string_value(self, node: Node, text: str) -> Optional[str]:
        # "App\\Models\\{$name}" is not a literal
        if any(child.type not in STRING_PART_TYPES for child in significant_children(node)):
            return None
        if len(text) < 2 or text[-1] not in "'\"":
            return None
        # skip a b'' prefix
        start = text.find(text[-1])
        if start == len(text) - 1:
            return None
        return text[start + 1:-1].replace("\\\\", "\\")
