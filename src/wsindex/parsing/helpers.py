# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tree-sitter node helpers shared by the symbol extractor."""

from __future__ import annotations

import codecs
from collections.abc import Iterator
from typing import Final

from tree_sitter import Node as TSNode

COMMENT_NODE: Final[str] = "comment"
ERROR_NODE: Final[str] = "ERROR"
STRING_NODES: Final[frozenset[str]] = frozenset({"string", "template_string"})


def iter_tree_nodes(node: TSNode) -> Iterator[TSNode]:
    """Visit nodes in depth-first, document order starting from ``node``.

    Args:
        node: Root node used as the traversal starting point.

    Yields:
        TSNode: Nodes in pre-order.
    """

    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        children = current.children
        if children:
            stack.extend(reversed(children))


def node_text(node: TSNode) -> str:
    """Return the source text covered by ``node``."""

    raw = node.text
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw or ""


def significant_children(node: TSNode) -> list[TSNode]:
    """Return the named children of ``node`` that are not comments."""

    return [child for child in node.named_children if child.type != COMMENT_NODE]


def unwrap_parentheses(node: TSNode) -> TSNode:
    """Strip any ``(...)`` wrappers around an expression."""

    current = node
    while current.type == "parenthesized_expression":
        inner = significant_children(current)
        if len(inner) != 1:
            break
        current = inner[0]
    return current


def first_syntax_error(node: TSNode) -> TSNode | None:
    """Return the first ``ERROR`` or missing node below ``node`` in document order."""

    if not node.has_error:
        return None
    for current in iter_tree_nodes(node):
        if current.type == ERROR_NODE or current.is_missing:
            return current
    return None


def preceding_comments(node: TSNode) -> list[TSNode]:
    """Return the run of comment siblings directly before ``node``, in document order.

    A comment trailing another statement on that statement's last line
    belongs to the statement and ends the run.
    """

    comments: list[TSNode] = []
    sibling = node.prev_named_sibling
    while sibling is not None and sibling.type == COMMENT_NODE:
        before = sibling.prev_named_sibling
        if (
            before is not None
            and before.type != COMMENT_NODE
            and before.end_point[0] == sibling.start_point[0]
        ):
            break
        comments.append(sibling)
        sibling = before
    comments.reverse()
    return comments


def string_value(node: TSNode) -> str | None:
    """Return the value of a string literal, or ``None`` for anything else.

    Template literals qualify only when they contain no substitutions.
    """

    if node.type not in STRING_NODES:
        return None
    if node.type == "template_string":
        if any(child.type == "template_substitution" for child in node.named_children):
            return None
        return node_text(node)[1:-1]
    parts: list[str] = []
    for child in node.named_children:
        if child.type == "string_fragment":
            parts.append(node_text(child))
        elif child.type == "escape_sequence":
            parts.append(_decode_escape(node_text(child)))
        else:
            return None
    return "".join(parts)


def _decode_escape(text: str) -> str:
    try:
        return codecs.decode(text, "unicode_escape")
    except UnicodeDecodeError:
        return text[1:]


def property_key(pair: TSNode) -> str | None:
    """Return the literal key of an object ``pair`` node."""

    key = pair.child_by_field_name("key")
    if key is None:
        return None
    if key.type in {"property_identifier", "identifier", "number"}:
        return node_text(key)
    return string_value(key)


__all__ = [
    "COMMENT_NODE",
    "ERROR_NODE",
    "STRING_NODES",
    "first_syntax_error",
    "iter_tree_nodes",
    "node_text",
    "preceding_comments",
    "property_key",
    "significant_children",
    "string_value",
    "unwrap_parentheses",
]
