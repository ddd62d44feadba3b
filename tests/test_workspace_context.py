# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for workspace, app and package resolution."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

import pytest

from wsindex.config import ConfigError
from wsindex.diagnostics import DiagnosticManager
from wsindex.workspace import Context, ContextKind

from .support import package_json, write_file


def test_at_checks_manifest_and_format_marker(workspace_dir: Path) -> None:
    assert Context.at(workspace_dir, ContextKind.WORKSPACE)
    assert not Context.at(workspace_dir, ContextKind.APP)
    assert Context.at(workspace_dir / "app")
    assert Context.at(workspace_dir / "ext", ContextKind.PACKAGE)
    assert not Context.at(workspace_dir / "packages" / "local" / "npm-only", ContextKind.PACKAGE)
    assert not Context.at(workspace_dir / "packages")


def test_load_returns_none_without_manifest(workspace_dir: Path, manager: DiagnosticManager) -> None:
    assert Context.load(workspace_dir / "packages", manager) is None
    assert Context.load(None) is None
    assert manager.base_dir is None


def test_load_picks_most_specific_kind(workspace_dir: Path) -> None:
    app = Context.load(workspace_dir / "app")
    framework = Context.load(workspace_dir / "ext")
    toolkit = Context.load(workspace_dir / "ext" / "toolkits" / "classic")

    assert app is not None and app.kind is ContextKind.APP
    assert framework is not None and framework.kind is ContextKind.FRAMEWORK
    assert toolkit is not None and toolkit.kind is ContextKind.TOOLKIT
    assert framework.name == "ext"
    assert framework.version == "7.0.0"
    assert framework.npm_data is not None and "sencha" in framework.npm_data


def test_from_dir_walks_upward(workspace_dir: Path, manager: DiagnosticManager) -> None:
    start = workspace_dir / "app" / "app" / "view" / "main"

    app = Context.from_dir(start, manager)
    workspace = Context.from_dir(start, manager, ContextKind.WORKSPACE)

    assert app is not None and app.kind is ContextKind.APP
    assert app.dir == (workspace_dir / "app").resolve()
    assert app.dir.is_absolute()
    assert workspace is not None and workspace.dir == workspace_dir.resolve()


def test_from_dir_returns_none_outside_any_workspace(tmp_path: Path) -> None:
    lonely = tmp_path / "nothing" / "here"
    lonely.mkdir(parents=True)

    assert Context.from_dir(lonely, kind=ContextKind.WORKSPACE) is None


def test_current_uses_working_directory(workspace_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(workspace_dir / "app" / "app")

    context = Context.current()

    assert context is not None and context.is_app


def test_workspace_binds_manager_base_dir(workspace_dir: Path, manager: DiagnosticManager) -> None:
    workspace = Context.load(workspace_dir, manager)

    assert workspace is not None
    assert workspace.manager is manager
    assert manager.base_dir == workspace.dir


def test_app_properties_inherit_from_workspace(workspace_dir: Path) -> None:
    app = Context.load(workspace_dir / "app")
    assert app is not None

    props = app.get_config_props()

    assert props["app.name"] == "WA"
    assert props["app.dir"] == app.dir.as_posix()
    assert props["toolkit.name"] == "classic"
    assert props["workspace.dir"] == app.workspace.dir.as_posix()
    assert props["workspace.frameworks.ext.path"] == "ext"
    assert props.resolve("app.output.base") == f"{app.workspace.dir.as_posix()}/build/WA"
    assert app.get_prop("app.classpath") == "app"
    assert app.get_prop("missing.key") is None


def test_own_properties_win_over_workspace(workspace_dir: Path) -> None:
    write_file(workspace_dir / "workspace.json", '{"apps": ["app"], "toolkit": "modern"}')
    app = Context.load(workspace_dir / "app")
    assert app is not None

    props = app.get_config_props()

    assert props["toolkit.name"] == "classic"
    assert props["workspace.toolkit"] == "modern"


def test_get_config_props_refresh_rereads_cached_manifest_data(workspace_dir: Path) -> None:
    app = Context.load(workspace_dir / "app")
    assert app is not None
    first = app.get_config_props()

    app.data["name"] = "Changed"

    assert app.get_config_props() is first
    assert app.get_prop("app.name", refresh=True) == "Changed"


def test_classpath_and_files(workspace_dir: Path) -> None:
    app = Context.load(workspace_dir / "app")
    assert app is not None

    assert app.classpath == [(workspace_dir / "app" / "app").resolve()]
    assert app.overrides == []
    assert [app.relativize(path) for path in app.class_files()] == [
        PurePosixPath("app/Application.js"),
        PurePosixPath("app/view/main/Main.js"),
    ]
    assert app.override_files() == []
    assert app.class_files() is not app.class_files()
    assert app.class_files() == app.class_files()


def test_overrides_and_file_entries(workspace_dir: Path) -> None:
    app_dir = workspace_dir / "app"
    write_file(app_dir / "overrides" / "grid" / "Panel.js", "Ext.define('WA.override.grid.Panel', {});\n")
    write_file(app_dir / "lib" / "single.js", "var x = 1;\n")
    write_file(
        app_dir / "app.json",
        '{"name": "WA", "classpath": "${app.dir}/app,lib/single.js,missing", "overrides": ["overrides"]}',
    )
    app = Context.load(app_dir)
    assert app is not None

    assert [path.name for path in app.class_files()] == ["Application.js", "Main.js", "single.js"]
    assert [app.relativize(path) for path in app.override_files()] == [PurePosixPath("overrides/grid/Panel.js")]


def test_missing_classpath_is_fatal(workspace_dir: Path) -> None:
    write_file(workspace_dir / "app" / "app.json", '{"name": "WA"}')
    app = Context.load(workspace_dir / "app")
    assert app is not None

    with pytest.raises(ConfigError, match="classpath"):
        _ = app.classpath


def test_workspace_has_no_classpath(workspace_dir: Path) -> None:
    workspace = Context.load(workspace_dir)
    assert workspace is not None

    with pytest.raises(TypeError):
        _ = workspace.classpath


def test_workspace_only_operations_reject_apps(workspace_dir: Path) -> None:
    app = Context.load(workspace_dir / "app")
    assert app is not None

    with pytest.raises(TypeError):
        _ = app.apps
    with pytest.raises(TypeError):
        app.get_framework("ext")


def test_workspace_apps_reuse_creator(workspace_dir: Path) -> None:
    app = Context.load(workspace_dir / "app")
    assert app is not None

    workspace = app.workspace

    assert workspace.creator is app
    assert workspace.apps == [app]
    assert workspace.apps[0] is app


def test_workspace_appends_unlisted_creator(workspace_dir: Path) -> None:
    extra_dir = workspace_dir / "extra"
    write_file(extra_dir / "app.json", '{"name": "Extra", "classpath": "app"}')
    extra = Context.load(extra_dir)
    assert extra is not None

    apps = extra.workspace.apps

    assert [app.name for app in apps] == ["WA", "Extra"]
    assert apps[-1] is extra


def test_workspace_frameworks(workspace_dir: Path) -> None:
    workspace = Context.load(workspace_dir)
    assert workspace is not None

    ext = workspace.get_framework("ext")

    assert ext.kind is ContextKind.FRAMEWORK
    assert ext.dir == (workspace_dir / "ext").resolve()
    assert workspace.get_framework("ext") is ext
    assert workspace.frameworks == {"ext": ext}
    assert ext.framework is ext


@pytest.mark.parametrize(
    ("frameworks", "message"),
    [
        ("{}", "No framework 'ext'"),
        ('{"ext": {"version": "7"}}', "has no 'path'"),
        ('{"ext": {"path": "nowhere"}}', "does not exist"),
        ('{"ext": {"path": "app"}}', "no package manifest"),
    ],
)
def test_get_framework_failures(workspace_dir: Path, frameworks: str, message: str) -> None:
    write_file(workspace_dir / "workspace.json", f'{{"apps": ["app"], "frameworks": {frameworks}}}')
    workspace = Context.load(workspace_dir)
    assert workspace is not None

    with pytest.raises(ConfigError, match=message):
        workspace.get_framework("ext")


def test_app_framework_toolkit_and_theme(workspace_dir: Path) -> None:
    app = Context.load(workspace_dir / "app")
    assert app is not None

    framework = app.framework
    toolkit = app.toolkit
    theme = app.theme

    assert framework is app.workspace.get_framework("ext")
    assert toolkit is not None and toolkit.kind is ContextKind.TOOLKIT
    assert toolkit.name == "classic"
    assert toolkit.framework is framework
    assert toolkit.toolkit is toolkit
    assert theme is not None and theme.kind is ContextKind.THEME
    assert theme.name == "theme-wa"
    assert theme.toolkit is not None and theme.toolkit.name == "classic"


def test_undeclared_toolkit_and_theme_are_none(workspace_dir: Path) -> None:
    common = Context.load(workspace_dir / "packages" / "local" / "common")
    assert common is not None

    assert common.toolkit is None
    assert common.theme is None
    assert common.framework.name == "ext"


def test_unknown_toolkit_is_fatal(workspace_dir: Path) -> None:
    write_file(
        workspace_dir / "app" / "app.json",
        '{"name": "WA", "framework": "ext", "toolkit": "modern", "classpath": "app"}',
    )
    app = Context.load(workspace_dir / "app")
    assert app is not None

    with pytest.raises(ConfigError, match="modern"):
        _ = app.toolkit


def test_sibling_framework_path(tmp_path: Path) -> None:
    write_file(tmp_path / "workspace.json", "{}")
    write_file(tmp_path / "sdk" / "package.json", package_json("sdk", '{"type": "framework", "classpath": "src"}'))
    write_file(tmp_path / "pkg" / "package.json", package_json("pkg", '{"framework": "../sdk", "classpath": "src"}'))
    package = Context.load(tmp_path / "pkg")
    assert package is not None

    assert package.framework.dir == (tmp_path / "sdk").resolve()
    assert package.framework.kind is ContextKind.FRAMEWORK


def test_unresolvable_framework_is_fatal(workspace_dir: Path) -> None:
    write_file(workspace_dir / "app" / "app.json", '{"name": "WA", "framework": "touch", "classpath": "app"}')
    app = Context.load(workspace_dir / "app")
    assert app is not None

    with pytest.raises(ConfigError, match="touch"):
        _ = app.framework


def test_missing_workspace_is_fatal(tmp_path: Path) -> None:
    write_file(tmp_path / "solo" / "app.json", '{"name": "Solo", "classpath": "app"}')
    app = Context.load(tmp_path / "solo")
    assert app is not None

    with pytest.raises(ConfigError, match="No workspace"):
        _ = app.workspace
    assert app.config.sources.extensions == (".js",)
    assert app.manager.base_dir == app.dir


def test_workspace_package_path(workspace_dir: Path) -> None:
    workspace = Context.load(workspace_dir)
    assert workspace is not None

    package_path = workspace.get_package_path()

    assert [workspace.relativize(path) for path in package_path] == [
        PurePosixPath("packages/local/common"),
        PurePosixPath("packages/local/theme-wa"),
    ]
    assert len({str(path) for path in package_path}) == len(package_path)
    assert all(path.is_dir() for path in package_path)
    assert [package.name for package in workspace.packages] == ["common", "theme-wa"]
    assert workspace.get_package("common") is workspace.packages[0]
    assert workspace.get_package("npm-only") is None


def test_workspace_package_path_default(tmp_path: Path) -> None:
    write_file(tmp_path / "workspace.json", "{}")
    write_file(tmp_path / "packages" / "util" / "package.json", package_json("util", '{"classpath": "src"}'))
    workspace = Context.load(tmp_path)
    assert workspace is not None

    assert workspace.get_package_path() == [(tmp_path / "packages" / "util").resolve()]


def test_package_path_entry_that_is_a_package(workspace_dir: Path) -> None:
    write_file(
        workspace_dir / "app" / "app.json",
        '{"name": "WA", "classpath": "app", "packages": {"dir": "../packages/local/common,../packages/local"}}',
    )
    app = Context.load(workspace_dir / "app")
    assert app is not None

    assert [path.name for path in app.get_package_path()] == ["common", "theme-wa"]


def test_framework_subpackages(workspace_dir: Path) -> None:
    workspace = Context.load(workspace_dir)
    assert workspace is not None
    ext = workspace.get_framework("ext")

    packages = ext.packages

    assert [package.name for package in packages] == ["classic"]
    assert packages[0].creator is ext
    assert packages[0].workspace is workspace


def test_toolkit_has_no_package_path(workspace_dir: Path) -> None:
    toolkit = Context.load(workspace_dir / "ext" / "toolkits" / "classic")
    assert toolkit is not None

    assert toolkit.get_package_path() == []


def test_relativize_against_workspace(workspace_dir: Path) -> None:
    app = Context.load(workspace_dir / "app")
    assert app is not None

    assert app.relativize("app/Application.js", base="workspace") == PurePosixPath("app/app/Application.js")
    assert app.relativize(workspace_dir / "ext", base="this") == PurePosixPath("../ext")
    with pytest.raises(ValueError):
        app.relativize("x", base="elsewhere")  # type: ignore[arg-type]


def test_refresh_drops_cached_values(workspace_dir: Path) -> None:
    app = Context.load(workspace_dir / "app")
    assert app is not None
    assert app.classpath == [(workspace_dir / "app" / "app").resolve()]

    app.data = {"name": "WA", "classpath": "src"}

    assert app.classpath == [(workspace_dir / "app" / "app").resolve()]
    assert app.refresh() is app
    assert app.classpath == [(workspace_dir / "app" / "src").resolve()]


def test_malformed_manifest_is_fatal(workspace_dir: Path) -> None:
    write_file(workspace_dir / "app" / "app.json", '{"name": "WA",, }')

    with pytest.raises(ConfigError):
        Context.load(workspace_dir / "app")


def test_config_is_read_from_workspace_root(workspace_dir: Path) -> None:
    write_file(workspace_dir / ".wsindex.toml", '[sources]\nextensions = ["js", "ts"]\n')
    app = Context.load(workspace_dir / "app")
    assert app is not None

    assert app.config.sources.extensions == (".js", ".ts")
    assert app.config is app.workspace.config
