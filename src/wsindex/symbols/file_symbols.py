# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-file extraction of class registrations and directives."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from tree_sitter import Node as TSNode

from ..constants import (
    CODE_SYNTAX_ERROR,
    CODE_UNRECOGNIZED_REGISTRATION,
    DEFAULT_REGISTRATION_FUNCTIONS,
)
from ..diagnostics.manager import DiagnosticManager
from ..models import Location, Span
from ..parsing.helpers import (
    COMMENT_NODE,
    first_syntax_error,
    iter_tree_nodes,
    node_text,
    preceding_comments,
    property_key,
    significant_children,
    string_value,
    unwrap_parentheses,
)
from ..severity import Severity
from ..sources.files import SourceFile
from .models import ClassRecord, append_unique

LOGGER = logging.getLogger(__name__)

_DIRECTIVE_PATTERN: Final[re.Pattern[str]] = re.compile(r"@(define|tag)\b([^\r\n]*)")
_TAG_LIST: Final[re.Pattern[str]] = re.compile(r"[^\s,]+(?:\s*,\s*[^\s,]+)*")
_TAG_SPLIT: Final[re.Pattern[str]] = re.compile(r"\s*,\s*")
_NAME_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[\w$][\w$.\-]*$")
_FUNCTION_NODES: Final[frozenset[str]] = frozenset({"function_expression", "function", "arrow_function"})

EXPECTED_ARGUMENT_COUNT: Final[str] = "Expected 2 or 3 arguments"
EXPECTED_CLASS_NAME: Final[str] = "Expected 1st argument to be a class name string"
EXPECTED_CLASS_BODY: Final[str] = "Expected 2nd argument to be an object or function returning an object"


class UnrecognizedRegistration(ValueError):
    """Raised while matching a registration call whose shape is not understood."""


@dataclass(slots=True)
class Directives:
    """Names and tags declared by ``@define`` and ``@tag`` comment directives."""

    names: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)

    @classmethod
    def parse(cls, comments: Iterable[str]) -> Directives:
        """Collect directive values from comment texts.

        ``@define`` takes the single name that follows it. ``@tag`` takes a
        comma-separated list which ends at the first gap not bridged by a
        comma, so trailing prose is ignored.
        """
        found = cls()
        for text in comments:
            for match in _DIRECTIVE_PATTERN.finditer(text):
                kind, rest = match.groups()
                rest = rest.replace("*/", " ").strip()
                if kind == "define":
                    head = rest.split(None, 1)[0].rstrip(",") if rest else ""
                    candidates = [head]
                else:
                    listed = _TAG_LIST.match(rest)
                    candidates = _TAG_SPLIT.split(listed.group(0)) if listed else []
                values = [value for value in candidates if _NAME_PATTERN.match(value)]
                append_unique(found.names if kind == "define" else found.tags, values)
        return found


class FileSymbols:
    """Symbol table of one source file.

    Extraction runs once, at construction. Unrecognised registrations are
    reported through the diagnostic manager and skipped.

    Attributes:
        file: Source file the table was built from.
        classes: Class records in declaration order.
    """

    def __init__(
        self,
        file: SourceFile,
        *,
        manager: DiagnosticManager | None = None,
        registration_functions: Iterable[str] = DEFAULT_REGISTRATION_FUNCTIONS,
    ) -> None:
        self.file = file
        self.manager = manager or DiagnosticManager()
        self.registration_functions = frozenset(registration_functions)
        self.classes: list[ClassRecord] = []
        self._names: list[str] = []
        self._aliases: list[str] = []
        self._tags: list[str] = []
        self._extract()

    def __repr__(self) -> str:
        return f"FileSymbols({str(self.path)!r}, classes={len(self.classes)})"

    @property
    def path(self) -> Path:
        return self.file.path

    @property
    def key(self) -> str:
        return self.file.key

    @property
    def names(self) -> tuple[str, ...]:
        """Class names, ``@define`` names and alternate names in first-seen order."""
        return tuple(self._names)

    @property
    def aliases(self) -> tuple[str, ...]:
        return tuple(self._aliases)

    @property
    def tags(self) -> tuple[str, ...]:
        return tuple(self._tags)

    def locate(self, span: Span | tuple[int, int] | Mapping[str, int] | object) -> Location:
        """Map a byte-offset span to a :class:`Location` in this file."""
        start, end = Span.coerce(span)
        line, column = self.file.position(start)
        return Location(start=start, end=end, file=self.file.path, line=line, column=column)

    def _locate_node(self, node: TSNode) -> Location:
        return self.locate(Span(node.start_byte, node.end_byte))

    # ------------------------------------------------------------------
    # Extraction

    def _extract(self) -> None:
        root = self.file.tree.root_node
        error = first_syntax_error(root)
        if error is not None:
            self.manager.report(
                CODE_SYNTAX_ERROR,
                Severity.WARN,
                f"Syntax error in {self.file.name}",
                self._locate_node(error),
            )
        for node in iter_tree_nodes(root):
            if node.type == COMMENT_NODE:
                directives = Directives.parse([node_text(node)])
                append_unique(self._names, directives.names)
                append_unique(self._tags, directives.tags)
            elif node.type == "call_expression" and self._is_registration(node):
                self._register(node)
        LOGGER.debug("extracted %d classes from %s", len(self.classes), self.path)

    def _is_registration(self, call: TSNode) -> bool:
        callee = call.child_by_field_name("function")
        if callee is None:
            return False
        return _compact(node_text(callee)) in self.registration_functions

    def _register(self, call: TSNode) -> None:
        try:
            matched = self._match(call)
        except UnrecognizedRegistration as exc:
            callee = _compact(node_text(call.child_by_field_name("function")))
            self.manager.report(
                CODE_UNRECOGNIZED_REGISTRATION,
                Severity.WARN,
                f"Unrecognized use of {callee} ({exc})",
                self._locate_node(call),
            )
            return
        if matched is None:
            return
        name, body = matched
        record = ClassRecord(name=name, location=self._locate_node(call), origin=self)
        statement = call.parent if call.parent is not None and call.parent.type == "expression_statement" else call
        directives = Directives.parse(node_text(comment) for comment in preceding_comments(statement))
        append_unique(record.alternate_names, (alt for alt in directives.names if alt != name))
        append_unique(record.tags, directives.tags)
        self._read_config(record, body)
        self.classes.append(record)
        append_unique(self._names, record.iter_names())
        append_unique(self._aliases, record.aliases)
        append_unique(self._tags, record.tags)

    def _match(self, call: TSNode) -> tuple[str, TSNode] | None:
        """Return the class name and config object of a registration call.

        Returns ``None`` for anonymous classes.

        Raises:
            UnrecognizedRegistration: If the call does not have the expected shape.
        """
        arguments = call.child_by_field_name("arguments")
        args = [] if arguments is None else significant_children(arguments)
        if len(args) not in (2, 3):
            raise UnrecognizedRegistration(EXPECTED_ARGUMENT_COUNT)
        first = unwrap_parentheses(args[0])
        if first.type == "null":
            return None
        name = string_value(first)
        if not name:
            raise UnrecognizedRegistration(EXPECTED_CLASS_NAME)
        return name, _class_body(unwrap_parentheses(args[1]))

    def _read_config(self, record: ClassRecord, body: TSNode) -> None:
        for pair in body.named_children:
            if pair.type != "pair":
                continue
            key = property_key(pair)
            value = pair.child_by_field_name("value")
            if key is None or value is None:
                continue
            if key == "alternateClassName":
                append_unique(record.alternate_names, _strings(value))
            elif key == "alias":
                append_unique(record.aliases, _strings(value))
            elif key == "xtype":
                append_unique(record.aliases, (f"widget.{xtype}" for xtype in _strings(value)))
            elif key in ("tags", "tag"):
                append_unique(record.tags, _strings(value))


def _compact(text: str) -> str:
    return "".join(text.split())


def _class_body(node: TSNode) -> TSNode:
    """Return the object literal defining a class.

    Raises:
        UnrecognizedRegistration: If ``node`` is neither an object nor a
            function returning one.
    """
    if node.type == "object":
        return node
    if node.type in _FUNCTION_NODES:
        body = node.child_by_field_name("body")
        if body is not None:
            if body.type == "statement_block":
                returned = _returned_object(body)
                if returned is not None:
                    return returned
            else:
                inner = unwrap_parentheses(body)
                if inner.type == "object":
                    return inner
    raise UnrecognizedRegistration(EXPECTED_CLASS_BODY)


def _returned_object(block: TSNode) -> TSNode | None:
    for statement in significant_children(block):
        if statement.type != "return_statement":
            continue
        values = significant_children(statement)
        if values:
            value = unwrap_parentheses(values[0])
            if value.type == "object":
                return value
    return None


def _strings(node: TSNode) -> list[str]:
    value = string_value(node)
    if value is not None:
        return [value]
    if node.type == "array":
        return [item for item in (string_value(child) for child in significant_children(node)) if item]
    return []


__all__ = [
    "EXPECTED_ARGUMENT_COUNT",
    "EXPECTED_CLASS_BODY",
    "EXPECTED_CLASS_NAME",
    "Directives",
    "FileSymbols",
    "UnrecognizedRegistration",
]
