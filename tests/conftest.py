# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from wsindex.config.models import PathMode
from wsindex.diagnostics import Diagnostic, DiagnosticManager

from .support import APP_JSON, APPLICATION_JS, MAIN_JS, WORKSPACE_JSON, package_json, write_file


@pytest.fixture
def workspace_dir(tmp_path: Path) -> Path:
    """Build a workspace with one app, the ext framework and local packages."""

    root = tmp_path / "workspace"
    write_file(root / "workspace.json", WORKSPACE_JSON)

    write_file(root / "app" / "app.json", APP_JSON)
    write_file(root / "app" / "app" / "Application.js", APPLICATION_JS)
    write_file(root / "app" / "app" / "view" / "main" / "Main.js", MAIN_JS)

    write_file(
        root / "ext" / "package.json",
        package_json(
            "ext",
            '{"type": "framework", "classpath": "src", "subpkgs": {"dir": "${package.dir}/toolkits"}}',
            version="7.0.0",
        ),
    )
    write_file(root / "ext" / "src" / "Base.js", "Ext.define('Ext.Base', {});\n")
    write_file(
        root / "ext" / "toolkits" / "classic" / "package.json",
        package_json("classic", '{"type": "toolkit", "classpath": "${package.dir}/src"}', version="7.0.0"),
    )
    write_file(
        root / "ext" / "toolkits" / "classic" / "src" / "panel" / "Panel.js",
        "Ext.define('Ext.panel.Panel', {});\n",
    )

    write_file(
        root / "packages" / "local" / "common" / "package.json",
        package_json("common", '{"type": "code", "framework": "ext", "classpath": "${package.dir}/src"}'),
    )
    write_file(
        root / "packages" / "local" / "common" / "src" / "Util.js",
        "Ext.define('Common.Util', { singleton: true });\n",
    )
    write_file(
        root / "packages" / "local" / "theme-wa" / "package.json",
        package_json("theme-wa", '{"type": "theme", "framework": "ext", "toolkit": "classic", "classpath": "src"}'),
    )
    write_file(root / "packages" / "local" / "npm-only" / "package.json", '{"name": "npm-only"}\n')
    return root


@pytest.fixture
def reported() -> list[tuple[Diagnostic, str]]:
    """Collect diagnostics surfaced through :func:`manager`."""
    return []


@pytest.fixture
def manager(reported: list[tuple[Diagnostic, str]]) -> DiagnosticManager:
    """Return a diagnostic manager that records instead of printing."""
    return DiagnosticManager(
        path_mode=PathMode.RELATIVE,
        reporter=lambda diagnostic, text: reported.append((diagnostic, text)),
    )
