# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for manifest reading and package normalisation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from wsindex.config import ConfigError
from wsindex.workspace import ContextKind, read_manifest, strip_json_comments
from wsindex.workspace.manifest import has_format_marker, package_kind, promote_package_manifest


def test_strip_json_comments_keeps_markers_inside_strings() -> None:
    text = """
    {
        // line comment
        "url": "http://example.com/*not-a-comment*/",
        /* block
           comment */
        "escaped": "quote \\" // still string",
        "list": [1, 2,],
    }
    """

    data = json.loads(strip_json_comments(text))

    assert data == {
        "url": "http://example.com/*not-a-comment*/",
        "escaped": 'quote " // still string',
        "list": [1, 2],
    }


def test_strip_json_comments_preserves_line_numbers() -> None:
    text = '{\n/* one\ntwo */\n"a": 1\n}'

    assert strip_json_comments(text).count("\n") == text.count("\n")


def test_read_manifest_reports_malformed_json(tmp_path: Path) -> None:
    path = tmp_path / "app.json"
    path.write_text('{"name": }', encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid JSON"):
        read_manifest(path)


def test_read_manifest_requires_an_object(tmp_path: Path) -> None:
    path = tmp_path / "app.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ConfigError, match="JSON object"):
        read_manifest(path)


def test_read_manifest_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        read_manifest(tmp_path / "missing.json")


def test_promote_package_manifest_falls_back_to_outer_name() -> None:
    outer = {"name": "ext", "version": "7.0.0", "sencha": {"type": "framework", "version": "7.0.1"}}

    data, npm_data = promote_package_manifest(outer)

    assert data == {"type": "framework", "name": "ext", "version": "7.0.1"}
    assert npm_data == outer
    assert has_format_marker(outer)
    assert not has_format_marker({"name": "plain-npm"})


@pytest.mark.parametrize(
    ("declared", "expected"),
    [
        ("framework", ContextKind.FRAMEWORK),
        ("Toolkit", ContextKind.TOOLKIT),
        ("theme", ContextKind.THEME),
        ("code", ContextKind.PACKAGE),
        (None, ContextKind.PACKAGE),
    ],
)
def test_package_kind_refines_by_type(declared: str | None, expected: ContextKind) -> None:
    assert package_kind({"type": declared}) is expected
