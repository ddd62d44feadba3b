# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Class registration extraction and the incremental class index."""

from __future__ import annotations

from .catalog import ClassCatalog
from .engine import SymbolFiles, Symbols, SyncResult
from .file_symbols import Directives, FileSymbols, UnrecognizedRegistration
from .models import ClassRecord

__all__ = [
    "ClassCatalog",
    "ClassRecord",
    "Directives",
    "FileSymbols",
    "SymbolFiles",
    "Symbols",
    "SyncResult",
    "UnrecognizedRegistration",
]
