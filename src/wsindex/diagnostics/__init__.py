# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Content diagnostics: records, severities and the emitting manager."""

from __future__ import annotations

from ..severity import Severity
from .manager import DiagnosticManager, Reporter, console_reporter
from .models import Diagnostic

__all__ = ["Diagnostic", "DiagnosticManager", "Reporter", "Severity", "console_reporter"]
