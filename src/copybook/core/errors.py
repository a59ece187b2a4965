#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations


class ValidationError(ValueError):
    """Raised when request input cannot be rendered (empty, oversized, wrong type)."""


class ConfigurationError(RuntimeError):
    """Raised when a font type cannot be resolved to a usable face."""


class RenderError(RuntimeError):
    """Raised when drawing, encoding or document assembly fails."""

    def __init__(self, message: str, *, page_index: int | None = None) -> None:
        super().__init__(message)
        self.page_index = page_index


__all__ = ["ConfigurationError", "RenderError", "ValidationError"]
