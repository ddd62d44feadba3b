# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diagnostic records produced while indexing a workspace."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from ..models import Location
from ..severity import Severity


class Diagnostic(BaseModel):
    """A single content diagnostic.

    ``default_severity`` is the severity requested by the reporting code and
    ``severity`` the effective one after per-code level overrides.
    """

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    default_severity: Severity
    severity: Severity
    location: Location | None = None
    emitted: bool = False

    @property
    def file(self) -> str | None:
        if self.location is None:
            return None
        return str(self.location.file)


__all__ = ["Diagnostic"]
