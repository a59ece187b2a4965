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

import io
import math
from pathlib import Path

from PIL import Image

from ..core.bounds import MAX_EXPORT_QUALITY, MIN_EXPORT_QUALITY
from ..core.errors import RenderError
from ..core.validation import clamp_float

MIME_TYPES = {"png": "image/png", "jpeg": "image/jpeg"}
_MAX_PNG_COMPRESSION = 9
_MAX_JPEG_QUALITY = 95


def png_compress_level(quality: float) -> int:
    """Map a 0-1 quality onto zlib's 0-9 scale; higher quality compresses less."""
    quality = clamp_float(quality, min_val=0.0, max_val=1.0)
    return math.floor((1 - quality) * _MAX_PNG_COMPRESSION)


def jpeg_quality(quality: float) -> int:
    quality = clamp_float(quality, min_val=MIN_EXPORT_QUALITY, max_val=MAX_EXPORT_QUALITY)
    return max(1, round(quality * _MAX_JPEG_QUALITY))


def export_png(image: Image.Image, quality: float = 0.9) -> bytes:
    buffer = io.BytesIO()
    try:
        image.save(buffer, format="PNG", compress_level=png_compress_level(quality))
    except (OSError, ValueError) as exc:
        raise RenderError(f"failed to encode PNG: {exc}") from exc
    return buffer.getvalue()


def export_jpeg(image: Image.Image, quality: float = 0.9) -> bytes:
    buffer = io.BytesIO()
    if image.mode != "RGB":
        image = image.convert("RGB")
    try:
        image.save(buffer, format="JPEG", quality=jpeg_quality(quality))
    except (OSError, ValueError) as exc:
        raise RenderError(f"failed to encode JPEG: {exc}") from exc
    return buffer.getvalue()


def encode_image(image: Image.Image, fmt: str, quality: float) -> tuple[bytes, str]:
    if fmt == "jpeg":
        return export_jpeg(image, quality), MIME_TYPES["jpeg"]
    if fmt == "png":
        return export_png(image, quality), MIME_TYPES["png"]
    raise ValueError(f"unsupported image format: {fmt}")


def save_to_file(data: bytes, path: str | Path) -> Path:
    target = Path(path)
    if target.parent and not target.parent.exists():
        target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)
    return target
