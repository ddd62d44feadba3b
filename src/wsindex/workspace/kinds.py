# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Context kinds and the per-kind behaviour table."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Final

from ..constants import MANIFEST_SUFFIX


class ContextKind(str, Enum):
    """Enumerate the kinds of manifest-bearing directories."""

    WORKSPACE = "workspace"
    APP = "app"
    PACKAGE = "package"
    FRAMEWORK = "framework"
    TOOLKIT = "toolkit"
    THEME = "theme"

    @property
    def spec(self) -> KindSpec:
        return KIND_SPECS[self]

    @property
    def label(self) -> str:
        return "App" if self is ContextKind.APP else self.value.capitalize()

    @property
    def is_package(self) -> bool:
        """Return ``True`` for packages and their specialisations."""
        return self in PACKAGE_FAMILY


@dataclass(frozen=True, slots=True)
class KindSpec:
    """Behaviour of one :class:`ContextKind`.

    Attributes:
        keywords: Property prefixes the manifest is flattened under; the first
            one names the kind's own properties (``app.classpath``).
        manifest_name: File name of the manifest recognised for the kind.
        requires_format_marker: Whether the manifest must carry the package
            format marker to qualify.
        package_path_props: Properties naming sub-package search roots.
        package_path_defaults: Values used when a search-root property is unset.
        has_code: Whether the kind contributes a classpath and overrides.
    """

    keywords: tuple[str, ...]
    manifest_name: str
    requires_format_marker: bool = False
    package_path_props: tuple[str, ...] = ()
    package_path_defaults: Mapping[str, str] = field(default_factory=dict)
    has_code: bool = True

    @property
    def keyword(self) -> str:
        return self.keywords[0]


def _manifest(keyword: str) -> str:
    return f"{keyword}{MANIFEST_SUFFIX}"


_PACKAGE_MANIFEST: Final[str] = _manifest(ContextKind.PACKAGE.value)
_SUBPACKAGE_PROPS: Final[tuple[str, ...]] = ("subpkgs", "subpkgs.dir")

KIND_SPECS: Final[Mapping[ContextKind, KindSpec]] = {
    ContextKind.WORKSPACE: KindSpec(
        keywords=("workspace",),
        manifest_name=_manifest(ContextKind.WORKSPACE.value),
        package_path_props=("packages.extract", "packages.dir"),
        package_path_defaults={"packages.dir": "${workspace.dir}/packages"},
        has_code=False,
    ),
    ContextKind.APP: KindSpec(
        keywords=("app",),
        manifest_name=_manifest(ContextKind.APP.value),
        package_path_props=("packages.extract", "packages.dir"),
    ),
    ContextKind.PACKAGE: KindSpec(
        keywords=("package",),
        manifest_name=_PACKAGE_MANIFEST,
        requires_format_marker=True,
        package_path_props=_SUBPACKAGE_PROPS,
    ),
    ContextKind.FRAMEWORK: KindSpec(
        keywords=("framework", "package"),
        manifest_name=_PACKAGE_MANIFEST,
        requires_format_marker=True,
        package_path_props=_SUBPACKAGE_PROPS,
    ),
    ContextKind.TOOLKIT: KindSpec(
        keywords=("toolkit", "package"),
        manifest_name=_PACKAGE_MANIFEST,
        requires_format_marker=True,
    ),
    ContextKind.THEME: KindSpec(
        keywords=("theme", "package"),
        manifest_name=_PACKAGE_MANIFEST,
        requires_format_marker=True,
    ),
}

PACKAGE_FAMILY: Final[frozenset[ContextKind]] = frozenset(
    {ContextKind.PACKAGE, ContextKind.FRAMEWORK, ContextKind.TOOLKIT, ContextKind.THEME}
)

# Kinds tried, most specific first, when a directory is loaded without a kind.
LOAD_ORDER: Final[tuple[ContextKind, ...]] = (ContextKind.APP, ContextKind.PACKAGE, ContextKind.WORKSPACE)

# Values of a package manifest's ``type`` that select a specialised kind.
PACKAGE_TYPES: Final[Mapping[str, ContextKind]] = {
    "framework": ContextKind.FRAMEWORK,
    "toolkit": ContextKind.TOOLKIT,
    "theme": ContextKind.THEME,
}


__all__ = ["KIND_SPECS", "LOAD_ORDER", "PACKAGE_FAMILY", "PACKAGE_TYPES", "ContextKind", "KindSpec"]
