# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diagnostic manager applying per-code severity levels and emission thresholds."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Final

from .. import logging as console
from ..config.models import DiagnosticsConfig, PathMode
from ..filesystem.paths import display_relative_path
from ..models import Location
from ..severity import Severity, coerce_severity, severity_tag
from .models import Diagnostic

LOGGER = logging.getLogger(__name__)

Reporter = Callable[[Diagnostic, str], None]

_CONSOLE_WRITERS: Final[Mapping[Severity, Callable[..., None]]] = {
    Severity.DEBUG: console.debug,
    Severity.INFO: console.info,
    Severity.WARN: console.warn,
    Severity.ERROR: console.fail,
}


def console_reporter(diagnostic: Diagnostic, text: str) -> None:
    """Print ``text`` to the shared Rich console styled by severity."""

    _CONSOLE_WRITERS[diagnostic.severity](text)


class DiagnosticManager:
    """Collect diagnostics and decide which of them surface.

    Every reported diagnostic is kept in :attr:`generated`. A diagnostic
    surfaces (is appended to :attr:`emitted` and passed to the reporter) when
    its effective severity, after :attr:`levels`, is at least the effective
    threshold for its code, after :attr:`thresholds`.
    """

    def __init__(
        self,
        *,
        base_dir: Path | None = None,
        threshold: Severity | str = Severity.WARN,
        levels: Mapping[str, Severity | str] | None = None,
        thresholds: Mapping[str, Severity | str] | None = None,
        path_mode: PathMode | str = PathMode.ABSOLUTE,
        reporter: Reporter | None = None,
    ) -> None:
        self.base_dir = base_dir.resolve() if base_dir is not None else None
        self.threshold = coerce_severity(threshold)
        self.levels: dict[str, Severity | str] = dict(levels or {})
        self.thresholds: dict[str, Severity | str] = dict(thresholds or {})
        self.path_mode = PathMode(path_mode)
        self.reporter: Reporter = reporter or console_reporter
        self.generated: list[Diagnostic] = []
        self.emitted: list[Diagnostic] = []
        self.messages: list[str] = []

    @classmethod
    def from_config(
        cls,
        config: DiagnosticsConfig,
        *,
        base_dir: Path | None = None,
        reporter: Reporter | None = None,
    ) -> DiagnosticManager:
        """Build a manager from the ``diagnostics`` configuration section."""

        return cls(
            base_dir=base_dir,
            threshold=config.threshold,
            levels=config.levels,
            thresholds=config.thresholds,
            path_mode=config.path_mode,
            reporter=reporter,
        )

    def severity_for(self, code: str, default: Severity | str) -> Severity:
        """Return the severity ``code`` is reported at after level overrides."""

        override = self.levels.get(code)
        return coerce_severity(override if override is not None else default)

    def threshold_for(self, code: str) -> Severity:
        """Return the minimum severity ``code`` must reach to surface."""

        override = self.thresholds.get(code)
        return coerce_severity(override if override is not None else self.threshold)

    def is_enabled(self, code: str, default: Severity | str) -> bool:
        return self.severity_for(code, default) >= self.threshold_for(code)

    def report(
        self,
        code: str,
        default_severity: Severity | str,
        message: str,
        location: Location | None = None,
    ) -> Diagnostic:
        """Record a diagnostic and surface it when it passes the threshold.

        Args:
            code: Diagnostic code such as ``"C1000"``.
            default_severity: Severity requested by the reporting code.
            message: Human readable description.
            location: Optional precise location.

        Returns:
            Diagnostic: The recorded diagnostic, surfaced or not.
        """

        default = coerce_severity(default_severity)
        severity = self.severity_for(code, default)
        emitted = severity >= self.threshold_for(code)
        diagnostic = Diagnostic(
            code=code,
            message=message,
            default_severity=default,
            severity=severity,
            location=location,
            emitted=emitted,
        )
        self.generated.append(diagnostic)
        if not emitted:
            LOGGER.debug("suppressed %s: %s", code, message)
            return diagnostic

        text = f"{severity_tag(severity)}: {self.format(diagnostic)}"
        self.emitted.append(diagnostic)
        self.messages.append(text)
        self.reporter(diagnostic, text)
        return diagnostic

    def format(self, diagnostic: Diagnostic) -> str:
        """Render ``diagnostic`` as ``code: message -- path:line:column``."""

        text = f"{diagnostic.code}: {diagnostic.message}"
        location = diagnostic.location
        if location is None:
            return text
        return f"{text} -- {location.describe(self.display_path(location.file))}"

    def display_path(self, path: Path) -> str:
        """Return ``path`` as rendered in diagnostic text for the current path mode."""

        if self.path_mode is PathMode.RELATIVE and self.base_dir is not None:
            return display_relative_path(path, self.base_dir)
        return str(path)

    def clear(self) -> None:
        """Forget every recorded diagnostic."""

        self.generated.clear()
        self.emitted.clear()
        self.messages.clear()


__all__ = ["DiagnosticManager", "Reporter", "console_reporter"]
