# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Manifest-bearing directory nodes: workspaces, apps and packages."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from os import PathLike
from pathlib import Path, PurePosixPath
from typing import Any, Final, Literal

from ..config.loader import load_config
from ..config.models import ConfigError, IndexConfig
from ..config.properties import PropertyMap
from ..diagnostics.manager import DiagnosticManager
from ..filesystem.paths import (
    absolutize,
    canonical_key,
    distinct_existing,
    find_upwards,
    relative_posix,
    split_path_list,
)
from ..filesystem.walk import list_subdirectories, walk_files
from ..sources.loader import Sources
from .kinds import KIND_SPECS, LOAD_ORDER, ContextKind, KindSpec
from .manifest import has_format_marker, package_kind, promote_package_manifest, read_manifest

LOGGER = logging.getLogger(__name__)

_Pathish = str | PathLike[str]


class _Unset:
    def __repr__(self) -> str:
        return "<unset>"


_UNSET: Final = _Unset()


class Context:
    """A directory carrying a workspace, app or package manifest.

    Contexts are normally obtained through :meth:`load`, :meth:`from_dir` or
    :meth:`current`. Every derived value (property map, classpath, file lists,
    owning workspace or framework, packages) is computed on first access and
    cached until :meth:`refresh` is called.

    Attributes:
        kind: Kind of manifest the directory carries.
        dir: Absolute, normalised directory path.
        manifest_file: Absolute path of the manifest.
        data: Manifest content; for packages the promoted format section.
        npm_data: Outer package document, ``None`` for other kinds.
        creator: Context this one was resolved from, if any.
    """

    def __init__(
        self,
        kind: ContextKind,
        dir: _Pathish,
        manifest_file: _Pathish,
        data: Mapping[str, Any],
        *,
        npm_data: Mapping[str, Any] | None = None,
        creator: Context | DiagnosticManager | None = None,
    ) -> None:
        self.kind = kind
        self.dir = absolutize(dir)
        self.manifest_file = absolutize(manifest_file, base_dir=self.dir)
        self.data: dict[str, Any] = dict(data)
        self.npm_data: dict[str, Any] | None = dict(npm_data) if npm_data is not None else None
        self.creator: Context | None = creator if isinstance(creator, Context) else None
        self._manager: DiagnosticManager | None = creator if isinstance(creator, DiagnosticManager) else None
        if kind is ContextKind.WORKSPACE:
            if self._manager is None and self.creator is not None:
                self._manager = self.creator._manager
            if self._manager is not None and self._manager.base_dir is None:
                self._manager.base_dir = self.dir
        self._frameworks: dict[str, Context] = {}
        self._reset_cache()

    def _reset_cache(self) -> None:
        self._props: PropertyMap | None = None
        self._classpath: list[Path] | None = None
        self._overrides: list[Path] | None = None
        self._class_files: list[Path] | None = None
        self._override_files: list[Path] | None = None
        self._workspace: Context | None | _Unset = _UNSET
        self._framework: Context | None = None
        self._toolkit: Context | None | _Unset = _UNSET
        self._theme: Context | None | _Unset = _UNSET
        self._apps: list[Context] | None = None
        self._package_path: list[Path] | None = None
        self._packages: list[Context] | None = None
        self._config: IndexConfig | None = None

    def __repr__(self) -> str:
        return f"Context({self.kind.value}, {str(self.dir)!r})"

    # ------------------------------------------------------------------
    # Discovery

    @classmethod
    def at(cls, dir: _Pathish, kind: ContextKind | None = None) -> bool:
        """Return ``True`` when ``dir`` carries a manifest for ``kind`` (any kind when ``None``).

        Raises:
            ConfigError: If a package manifest exists but is malformed.
        """
        return cls._probe(absolutize(dir), kind) is not None

    @classmethod
    def _probe(
        cls,
        directory: Path,
        kind: ContextKind | None,
    ) -> tuple[ContextKind, Path, dict[str, Any] | None] | None:
        for candidate in LOAD_ORDER if kind is None else (kind,):
            spec = KIND_SPECS[candidate]
            manifest = directory / spec.manifest_name
            if not manifest.is_file():
                continue
            if not spec.requires_format_marker:
                return candidate, manifest, None
            data = read_manifest(manifest)
            if has_format_marker(data):
                return candidate, manifest, data
        return None

    @classmethod
    def load(
        cls,
        dir: _Pathish | None,
        creator: Context | DiagnosticManager | None = None,
        kind: ContextKind | None = None,
    ) -> Context | None:
        """Build the context for ``dir`` or return ``None`` if it has no qualifying manifest.

        Args:
            dir: Directory to load.
            creator: Originating context, or the diagnostic manager the new
                context should use.
            kind: Required kind; ``None`` picks the most specific kind present.

        Returns:
            Context | None: Loaded context.

        Raises:
            ConfigError: If the manifest is malformed.
        """
        if dir is None:
            return None
        directory = absolutize(dir)
        probe = cls._probe(directory, kind)
        if probe is None:
            return None
        found, manifest, data = probe
        if data is None:
            data = read_manifest(manifest)
        npm_data = None
        if KIND_SPECS[found].requires_format_marker:
            data, npm_data = promote_package_manifest(data)
            if found is ContextKind.PACKAGE:
                found = package_kind(data)
        context = cls(found, directory, manifest, data, npm_data=npm_data, creator=creator)
        LOGGER.debug("loaded %s from %s", context.kind.value, manifest)
        return context

    @classmethod
    def from_dir(
        cls,
        dir: _Pathish,
        creator: Context | DiagnosticManager | None = None,
        kind: ContextKind | None = None,
    ) -> Context | None:
        """Load the nearest context at or above ``dir``."""
        root = find_upwards(dir, lambda candidate: cls._probe(candidate, kind) is not None)
        return cls.load(root, creator, kind)

    @classmethod
    def current(cls, creator: Context | DiagnosticManager | None = None) -> Context | None:
        """Load the nearest context at or above the working directory."""
        return cls.from_dir(Path.cwd(), creator)

    # ------------------------------------------------------------------
    # Identity

    @property
    def spec(self) -> KindSpec:
        return KIND_SPECS[self.kind]

    @property
    def keyword(self) -> str:
        return self.spec.keyword

    @property
    def name(self) -> str:
        value = self.data.get("name")
        return str(value) if value else self.dir.name

    @property
    def version(self) -> str | None:
        value = self.data.get("version")
        return str(value) if value is not None else None

    @property
    def is_workspace(self) -> bool:
        return self.kind is ContextKind.WORKSPACE

    @property
    def is_app(self) -> bool:
        return self.kind is ContextKind.APP

    @property
    def is_package(self) -> bool:
        return self.kind.is_package

    # ------------------------------------------------------------------
    # Properties

    def get_config_props(self, refresh: bool = False) -> PropertyMap:
        """Return the merged property map for this context.

        The context's own manifest is flattened under each of its kind's
        keywords, followed by ``<keyword>.dir`` and ``toolkit.name``, then the
        owning workspace's properties. Earlier entries win.
        """
        if refresh:
            self._props = None
        if self._props is None:
            self._props = self._gather_props(PropertyMap())
        return self._props

    def get_prop(self, key: str, refresh: bool = False) -> Any:
        return self.get_config_props(refresh).get(key)

    def _gather_props(self, props: PropertyMap) -> PropertyMap:
        for keyword in self.spec.keywords:
            props.flatten(keyword, self.data)
            props.add(f"{keyword}.dir", self.dir.as_posix())
        toolkit = self.data.get("toolkit")
        if isinstance(toolkit, str):
            props.add("toolkit.name", toolkit)
        if not self.is_workspace:
            workspace = self._find_workspace()
            if workspace is not None:
                workspace._gather_props(props)
        return props

    # ------------------------------------------------------------------
    # Code

    @property
    def classpath(self) -> list[Path]:
        """Resolved classpath entries in manifest order.

        Raises:
            ConfigError: If the manifest declares no classpath.
            TypeError: For workspaces, which carry no code.
        """
        self._require_code("classpath")
        if self._classpath is None:
            raw = self.get_config_props().resolve(f"{self.keyword}.classpath")
            if raw is None:
                raise ConfigError(f"{self.kind.label} '{self.name}' at {self.dir} does not declare a classpath")
            self._classpath = self._resolve_path_list(raw)
        return list(self._classpath)

    @property
    def overrides(self) -> list[Path]:
        """Resolved override entries in manifest order; empty when none are declared."""
        self._require_code("overrides")
        if self._overrides is None:
            raw = self.get_config_props().resolve(f"{self.keyword}.overrides")
            self._overrides = [] if raw is None else self._resolve_path_list(raw)
        return list(self._overrides)

    def class_files(self) -> list[Path]:
        if self._class_files is None:
            self._class_files = self._collect_files(self.classpath)
        return list(self._class_files)

    def override_files(self) -> list[Path]:
        if self._override_files is None:
            self._override_files = self._collect_files(self.overrides)
        return list(self._override_files)

    def _resolve_path_list(self, value: Any) -> list[Path]:
        return [absolutize(entry, base_dir=self.dir) for entry in split_path_list(value)]

    def _collect_files(self, entries: list[Path]) -> list[Path]:
        extensions = self.config.sources.extensions
        files: list[Path] = []
        for entry in entries:
            if entry.is_file():
                files.append(entry)
            elif entry.is_dir():
                files.extend(walk_files(entry, extensions))
            else:
                LOGGER.debug("skipping missing path entry %s of %s", entry, self)
        return files

    def _require_code(self, what: str) -> None:
        if not self.spec.has_code:
            raise TypeError(f"{self.kind.label} contexts have no {what}")

    def _require_workspace(self, what: str) -> None:
        if not self.is_workspace:
            raise TypeError(f"{what} is only available on workspaces, not on {self.kind.label.lower()}s")

    # ------------------------------------------------------------------
    # Relationships

    @property
    def workspace(self) -> Context:
        """The owning workspace.

        Raises:
            ConfigError: If no workspace manifest exists at or above :attr:`dir`.
        """
        workspace = self._find_workspace()
        if workspace is None:
            raise ConfigError(f"No workspace found for {self.kind.label.lower()} at {self.dir}")
        return workspace

    def _find_workspace(self) -> Context | None:
        if self.is_workspace:
            return self
        if isinstance(self._workspace, _Unset):
            found = next((ctx for ctx in self._creators() if ctx.is_workspace), None)
            if found is None:
                found = Context.from_dir(self.dir, self, ContextKind.WORKSPACE)
            self._workspace = found
        return self._workspace

    def _creators(self) -> Iterator[Context]:
        current = self.creator
        while current is not None:
            yield current
            current = current.creator

    @property
    def framework(self) -> Context:
        """The framework this context builds on.

        Raises:
            ConfigError: If no framework is declared or it cannot be resolved.
            TypeError: For workspaces, which may declare several frameworks.
        """
        if self.is_workspace:
            raise TypeError("Workspaces have no single framework; use get_framework(name)")
        if self._framework is None:
            self._framework = self._resolve_framework()
        return self._framework

    def _resolve_framework(self) -> Context:
        if self.kind is ContextKind.FRAMEWORK:
            return self
        name = self.data.get("framework")
        if not name:
            owner = next((ctx for ctx in self._creators() if ctx.kind is ContextKind.FRAMEWORK), None)
            if owner is not None:
                return owner
            raise ConfigError(f"{self.kind.label} '{self.name}' at {self.dir} does not declare a framework")
        name = str(name)
        workspace = self._find_workspace()
        if workspace is not None and name in workspace.framework_table:
            return workspace.get_framework(name)
        candidate = absolutize(self.get_config_props().expand(name), base_dir=self.dir)
        if candidate.is_dir():
            framework = Context.load(candidate, self, ContextKind.FRAMEWORK)
            if framework is not None:
                return framework
        raise ConfigError(f"Cannot resolve framework '{name}' for {self.kind.label.lower()} at {self.dir}")

    @property
    def toolkit(self) -> Context | None:
        """The toolkit package named by the manifest, or ``None`` if it names none.

        Raises:
            ConfigError: If the named toolkit is not a package of the framework.
        """
        if self.kind is ContextKind.TOOLKIT:
            return self
        if isinstance(self._toolkit, _Unset):
            name = self.data.get("toolkit")
            toolkit = None
            if name:
                framework = self.framework
                toolkit = framework.get_package(str(name))
                if toolkit is None:
                    raise ConfigError(f"Toolkit '{name}' not found in framework '{framework.name}'")
            self._toolkit = toolkit
        return self._toolkit

    @property
    def theme(self) -> Context | None:
        """The theme package named by the manifest, or ``None`` if it names none.

        Raises:
            ConfigError: If the named theme is found in neither the workspace
                nor the framework.
        """
        if self.kind is ContextKind.THEME:
            return self
        if isinstance(self._theme, _Unset):
            name = self.data.get("theme")
            theme = None
            if name:
                theme = self._find_theme(str(name))
                if theme is None:
                    raise ConfigError(f"Theme '{name}' not found for {self.kind.label.lower()} at {self.dir}")
            self._theme = theme
        return self._theme

    def _find_theme(self, name: str) -> Context | None:
        workspace = self._find_workspace()
        if workspace is not None and workspace is not self:
            found = workspace.get_package(name)
            if found is not None:
                return found
        if self.is_workspace:
            return None
        return self.framework.get_package(name)

    # ------------------------------------------------------------------
    # Workspace members

    @property
    def framework_table(self) -> Mapping[str, Any]:
        """The workspace manifest's ``frameworks`` section."""
        self._require_workspace("framework_table")
        table = self.data.get("frameworks") or {}
        if not isinstance(table, Mapping):
            raise ConfigError(f"'frameworks' in {self.manifest_file} must be an object")
        return table

    def get_framework(self, name: str) -> Context:
        """Return the framework the workspace declares under ``name``.

        Raises:
            ConfigError: If the name is unknown, has no ``path``, or the path
                does not hold a package manifest.
            TypeError: When called on anything but a workspace.
        """
        self._require_workspace("get_framework")
        cached = self._frameworks.get(name)
        if cached is not None:
            return cached
        entry = self.framework_table.get(name)
        if entry is None:
            raise ConfigError(f"No framework '{name}' declared in {self.manifest_file}")
        path = entry.get("path") if isinstance(entry, Mapping) else entry
        if not path:
            raise ConfigError(f"Framework '{name}' in {self.manifest_file} has no 'path'")
        directory = absolutize(self.get_config_props().expand(str(path)), base_dir=self.dir)
        if not directory.is_dir():
            raise ConfigError(f"Framework '{name}' directory does not exist: {directory}")
        framework = Context.load(directory, self, ContextKind.FRAMEWORK)
        if framework is None:
            raise ConfigError(f"Framework '{name}' at {directory} has no package manifest")
        self._frameworks[name] = framework
        return framework

    @property
    def frameworks(self) -> dict[str, Context]:
        self._require_workspace("frameworks")
        return {name: self.get_framework(name) for name in self.framework_table}

    @property
    def apps(self) -> list[Context]:
        """Apps listed by the workspace manifest.

        The app the workspace was resolved from is reused, and appended when
        the manifest does not list it.
        """
        self._require_workspace("apps")
        if self._apps is None:
            origin = self.creator if self.creator is not None and self.creator.is_app else None
            apps: list[Context] = []
            for entry in split_path_list(self.data.get("apps")):
                directory = absolutize(self.get_config_props().expand(entry), base_dir=self.dir)
                if origin is not None and canonical_key(directory) == canonical_key(origin.dir):
                    apps.append(origin)
                    continue
                app = Context.load(directory, self, ContextKind.APP)
                if app is not None:
                    apps.append(app)
            if origin is not None and origin not in apps:
                apps.append(origin)
            self._apps = apps
        return list(self._apps)

    # ------------------------------------------------------------------
    # Packages

    def get_package_path(self) -> list[Path]:
        """Return the package directories reachable from this context.

        Search roots come from the kind's package-path properties. Entries are
        expanded and resolved against :attr:`dir`; missing and duplicate
        directories are dropped, and a root that is not itself a package
        contributes its package subdirectories in name order.
        """
        if self._package_path is None:
            self._package_path = self._resolve_package_path()
        return list(self._package_path)

    def _resolve_package_path(self) -> list[Path]:
        props = self.get_config_props()
        roots: list[Path] = []
        for prop in self.spec.package_path_props:
            value = props.resolve(f"{self.keyword}.{prop}")
            if value is None:
                default = self.spec.package_path_defaults.get(prop)
                if default is None:
                    continue
                value = props.expand(default)
            roots.extend(self._resolve_path_list(value))
        entries: list[Path] = []
        own_key = canonical_key(self.dir)
        for root in distinct_existing(roots):
            if not root.is_dir():
                continue
            if Context.at(root, ContextKind.PACKAGE):
                entries.append(root)
            else:
                entries.extend(sub for sub in list_subdirectories(root) if Context.at(sub, ContextKind.PACKAGE))
        return [entry for entry in distinct_existing(entries) if canonical_key(entry) != own_key]

    @property
    def packages(self) -> list[Context]:
        """Package contexts for every :meth:`get_package_path` entry."""
        if self._packages is None:
            origin = self.creator if self.creator is not None and self.creator.is_package else None
            packages: list[Context] = []
            for directory in self.get_package_path():
                if origin is not None and canonical_key(directory) == canonical_key(origin.dir):
                    packages.append(origin)
                    continue
                package = Context.load(directory, self, ContextKind.PACKAGE)
                if package is not None:
                    packages.append(package)
            self._packages = packages
        return list(self._packages)

    @property
    def package_catalog(self) -> dict[str, Context]:
        catalog: dict[str, Context] = {}
        for package in self.packages:
            catalog.setdefault(package.name, package)
        return catalog

    def get_package(self, name: str) -> Context | None:
        return self.package_catalog.get(name)

    # ------------------------------------------------------------------
    # Services

    @property
    def config(self) -> IndexConfig:
        """Configuration loaded from the workspace root (or this directory when there is no workspace)."""
        if self._config is None:
            workspace = self._find_workspace()
            if workspace is not None and workspace is not self:
                self._config = workspace.config
            else:
                self._config = load_config(self.dir)
        return self._config

    @property
    def manager(self) -> DiagnosticManager:
        """Diagnostic manager shared by everything resolved from the same workspace."""
        if self._manager is None:
            workspace = self._find_workspace()
            if workspace is not None and workspace is not self:
                self._manager = workspace.manager
            else:
                self._manager = DiagnosticManager.from_config(self.config.diagnostics, base_dir=self.dir)
        return self._manager

    def relativize(self, path: _Pathish, base: Literal["this", "workspace"] = "this") -> PurePosixPath:
        """Return ``path`` relative to this context's directory or its workspace's."""
        if base == "workspace":
            root = self.workspace.dir
        elif base == "this":
            root = self.dir
        else:
            raise ValueError(f"base must be 'this' or 'workspace', not {base!r}")
        return relative_posix(absolutize(path, base_dir=self.dir), root)

    def refresh(self) -> Context:
        """Drop every cached derived value so the next access re-resolves it."""
        self._frameworks.clear()
        self._reset_cache()
        LOGGER.debug("refreshed %s", self)
        return self

    async def load_sources(self, sources: Sources | None = None) -> Sources:
        """Load this context's class and override files into ``sources``.

        A new :class:`~wsindex.sources.Sources` bound to the workspace and
        manager is created when none is given.
        """
        self._require_code("sources")
        if sources is None:
            sources = Sources(self._find_workspace(), self.manager, config=self.config)
        return await sources.load(self)


__all__ = ["Context"]
