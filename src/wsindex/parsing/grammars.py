# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve packaged Tree-sitter grammars and build parsers for them."""

from __future__ import annotations

import importlib
from threading import Lock
from types import ModuleType
from typing import Any

from tree_sitter import Language as TSLanguage
from tree_sitter import Parser as TSParser

_LANGUAGE_CACHE: dict[str, TSLanguage] = {}
_LANGUAGE_CACHE_LOCK = Lock()


def ensure_language(grammar_name: str) -> TSLanguage | None:
    """Resolve a :class:`Language` for ``grammar_name`` when possible.

    Grammars are loaded from the ``tree_sitter_<name>`` wheel published for
    each language (``tree-sitter-javascript`` for ``"javascript"``).

    Args:
        grammar_name: Canonical Tree-sitter grammar name (e.g., ``"javascript"``).

    Returns:
        Language | None: Compiled grammar if loadable, otherwise ``None``.
    """

    with _LANGUAGE_CACHE_LOCK:
        cached = _LANGUAGE_CACHE.get(grammar_name)
        if cached is not None:
            return cached

    module = _import_language_module(f"tree_sitter_{grammar_name.replace('-', '_')}")
    if module is None:
        return None
    language = _language_from_module(module)
    if language is None:
        return None
    with _LANGUAGE_CACHE_LOCK:
        _LANGUAGE_CACHE.setdefault(grammar_name, language)
        return _LANGUAGE_CACHE[grammar_name]


def build_parser(language: TSLanguage) -> TSParser:
    """Return a parser bound to ``language`` across binding versions."""

    try:
        return TSParser(language)
    except TypeError:
        parser = TSParser()
        _assign_language(parser, language)
        return parser


def _assign_language(parser: Any, language: TSLanguage) -> None:
    setter = getattr(parser, "set_language", None)
    if callable(setter):
        setter(language)
        return
    parser.language = language


def _import_language_module(module_name: str) -> ModuleType | None:
    """Import a packaged Tree-sitter language module when available."""

    try:
        return importlib.import_module(module_name)
    except ModuleNotFoundError:
        return None


def _language_from_module(module: ModuleType) -> TSLanguage | None:
    """Instantiate a ``Language`` object from a packaged module factory."""

    factory = getattr(module, "language", None)
    if not callable(factory):
        return None
    return TSLanguage(factory())


__all__ = ["build_parser", "ensure_language"]
