# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Builders for on-disk workspace trees used across the test suite."""

from __future__ import annotations

import textwrap
from pathlib import Path

WORKSPACE_JSON = """
{
    // Sencha Cmd workspace descriptor
    "apps": [
        "app"
    ],
    "frameworks": {
        "ext": {
            "path": "ext",
            "version": "7.0.0"
        }
    },
    "packages": {
        /* local packages win over extracted ones */
        "dir": "${workspace.dir}/packages/local,${workspace.dir}/packages",
        "extract": "${workspace.dir}/packages/remote"
    },
}
"""

APP_JSON = """
{
    "name": "WA",
    "framework": "ext",
    "toolkit": "classic",
    "theme": "theme-wa",
    "classpath": [
        "app"
    ],
    "output": {
        "base": "${workspace.dir}/build/${app.name}"
    }
}
"""

APPLICATION_JS = """\
/**
 * The main application class.
 */
Ext.define('WA.Application', {
    extend: 'Ext.app.Application',
    name: 'WA'
});

// The second registration has no class body.
Ext.define('WA.Broken', 'not-an-object');
"""

MAIN_JS = """\
/**
 * @define WA.view.main.Main
 * @define WA.AltMain
 * @tag mainview
 */
Ext.define('WA.view.main.Main', {
    extend: 'Ext.panel.Panel',
    alternateClassName: 'WA.AltMain',
    alias: 'widget.mainview',
    xtype: 'main',
    tags: ['viewmain']
});

Ext.define('WA.MainView', {
    extend: 'WA.view.main.Main'
});
"""


def write_file(path: Path, content: str) -> Path:
    """Create ``path`` (and its parents) with dedented ``content``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
    return path


def package_json(name: str, sencha: str, *, version: str = "1.0.0") -> str:
    """Return a package manifest with the given ``sencha`` section body."""
    return f'{{\n    "name": "{name}",\n    "version": "{version}",\n    "sencha": {sencha}\n}}\n'
