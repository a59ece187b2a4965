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

from .bounds import MAX_TEXT_CHARS
from .errors import ValidationError


def require_text(value: object, *, label: str = "text") -> str:
    """Validate that value is a string with at least one non-whitespace character."""
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be a string")
    if not value.strip():
        raise ValidationError(f"{label} cannot be empty")
    return value


def require_character_count(
    count: int,
    *,
    label: str = "text",
    max_chars: int = MAX_TEXT_CHARS,
) -> int:
    """Validate a whitespace-stripped character count against the request cap."""
    if count <= 0:
        raise ValidationError(f"{label} cannot be empty")
    if count > max_chars:
        raise ValidationError(
            f"{label} is too long (maximum {max_chars} characters): {count} characters"
        )
    return count


def clamp_int(value: int, *, min_val: int, max_val: int) -> int:
    """Clamp an integer into [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def clamp_float(value: float, *, min_val: float, max_val: float) -> float:
    """Clamp a float into [min_val, max_val]."""
    return max(min_val, min(max_val, value))
