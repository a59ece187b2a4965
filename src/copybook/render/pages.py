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

import concurrent.futures
import functools
import os
from collections.abc import Sequence
from dataclasses import dataclass

from ..core.errors import ConfigurationError, RenderError
from .characters import render_sheet
from .fonts import FontRegistry
from .geometry import fit_placement, page_bounds, page_count, rows_for_slice
from .options import GridRequest, PracticeOptions
from .spec import DocumentSpec
from .types import Document, Page

_RENDER_JOBS_ENV = "COPYBOOK_RENDER_JOBS"
_DEFAULT_RENDER_WORKERS_CAP = 8
_MIN_PAGES_PER_WORKER = 2

ANSWER_HEADING = "参考答案"
ANSWER_HEADING_ASCII = "Answer key"
ANSWER_HEADING_SIZE = 16.0
PRACTICE_HEADING = "练习 {copy}"
PRACTICE_HEADING_ASCII = "Practice {copy}"
PRACTICE_HEADING_SIZE = 14.0


@dataclass(frozen=True)
class PageTask:
    index: int
    characters: tuple[str, ...]
    row_count: int
    opacity: float
    heading: str | None = None
    heading_ascii: str | None = None
    heading_size: float = PRACTICE_HEADING_SIZE


def slice_characters(
    characters: Sequence[str], chars_per_page: int
) -> list[tuple[str, ...]]:
    """Cut the stream into consecutive page slices; concatenated they equal the input."""
    total = len(characters)
    slices: list[tuple[str, ...]] = []
    for page_idx in range(page_count(total, chars_per_page)):
        start, end = page_bounds(page_idx, chars_per_page, total)
        if end <= start:
            break
        slices.append(tuple(characters[start:end]))
    return slices


def paginate(
    characters: Sequence[str],
    request: GridRequest,
    *,
    chars_per_page: int,
    spec: DocumentSpec,
    fonts: FontRegistry,
    title: str | None = None,
    jobs: int | str | None = None,
) -> Document:
    """Split characters into fixed-size pages and render one grid per page.

    Each page's grid is shrunk to the rows its slice needs, so a short final
    page does not carry a block of empty cells.
    """
    title = title or spec.info.title
    tasks = [
        PageTask(
            index=index,
            characters=chunk,
            row_count=rows_for_slice(len(chunk), request.chars_per_row, request.row_count),
            opacity=request.opacity,
        )
        for index, chunk in enumerate(slice_characters(characters, chars_per_page))
    ]
    pages = _render_tasks(tasks, request=request, spec=spec, fonts=fonts, jobs=jobs, footer=True)
    return Document(
        pages=tuple(pages),
        title=title,
        subject=f"{title} - 多页字帖",
        total_characters=len(characters),
        characters_drawn=sum(page.characters_drawn for page in pages),
        font_family=fonts.family(request.font_type),
    )


def single_page(
    characters: Sequence[str],
    request: GridRequest,
    *,
    spec: DocumentSpec,
    fonts: FontRegistry,
    title: str | None = None,
) -> Document:
    title = title or spec.info.title
    task = PageTask(
        index=0,
        characters=tuple(characters),
        row_count=request.row_count,
        opacity=request.opacity,
    )
    pages = _render_tasks([task], request=request, spec=spec, fonts=fonts, jobs=1, footer=False)
    drawn = pages[0].characters_drawn
    return Document(
        pages=tuple(pages),
        title=title,
        subject=f"{title} - {drawn}个汉字",
        total_characters=len(characters),
        characters_drawn=drawn,
        font_family=fonts.family(request.font_type),
    )


def practice_pages(
    characters: Sequence[str],
    options: PracticeOptions,
    *,
    spec: DocumentSpec,
    fonts: FontRegistry,
    jobs: int | str | None = None,
) -> Document:
    """Answer sheet (optional) followed by ``copies`` faint tracing sheets."""
    request = options.grid
    chunk = tuple(characters)
    tasks: list[PageTask] = []
    if options.include_answer:
        tasks.append(
            PageTask(
                index=0,
                characters=chunk,
                row_count=request.row_count,
                opacity=1.0,
                heading=ANSWER_HEADING,
                heading_ascii=ANSWER_HEADING_ASCII,
                heading_size=ANSWER_HEADING_SIZE,
            )
        )
    for copy in range(1, options.copies + 1):
        tasks.append(
            PageTask(
                index=len(tasks),
                characters=chunk,
                row_count=request.row_count,
                opacity=options.guide_opacity,
                heading=PRACTICE_HEADING.format(copy=copy),
                heading_ascii=PRACTICE_HEADING_ASCII.format(copy=copy),
            )
        )
    pages = _render_tasks(tasks, request=request, spec=spec, fonts=fonts, jobs=jobs, footer=False)
    return Document(
        pages=tuple(pages),
        title=options.title,
        subject=f"{options.title} - {options.copies}份练习",
        total_characters=len(chunk),
        characters_drawn=pages[0].characters_drawn if pages else 0,
        font_family=fonts.family(request.font_type),
    )


def _render_tasks(
    tasks: Sequence[PageTask],
    *,
    request: GridRequest,
    spec: DocumentSpec,
    fonts: FontRegistry,
    jobs: int | str | None,
    footer: bool,
) -> list[Page]:
    if not tasks:
        return []
    worker = functools.partial(
        _render_page,
        request=request,
        spec=spec,
        fonts=fonts,
        total_pages=len(tasks),
        footer=footer,
    )
    workers = resolve_render_workers(len(tasks), jobs)
    if workers <= 1:
        return [worker(task) for task in tasks]

    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(worker, tasks))


def _render_page(
    task: PageTask,
    *,
    request: GridRequest,
    spec: DocumentSpec,
    fonts: FontRegistry,
    total_pages: int,
    footer: bool,
) -> Page:
    try:
        sheet = render_sheet(
            task.characters,
            chars_per_row=request.chars_per_row,
            row_count=task.row_count,
            font_type=request.font_type,
            spec=spec,
            fonts=fonts,
            opacity=task.opacity,
        )
    except (ConfigurationError, RenderError):
        raise
    except (OSError, ValueError, TypeError, MemoryError) as exc:
        raise RenderError(
            f"failed to render page {task.index + 1}: {exc}", page_index=task.index
        ) from exc

    pdf = spec.pdf
    placement = fit_placement(
        sheet.layout.total_width,
        sheet.layout.total_height,
        area_x=pdf.margin_left_pt,
        area_y=pdf.margin_top_pt,
        area_w=pdf.content_w,
        area_h=pdf.content_h,
    )
    footer_label = None
    if footer:
        footer_label = pdf.footer_label.format(page=task.index + 1, total=total_pages)
    return Page(
        index=task.index,
        characters=task.characters,
        layout=sheet.layout,
        image=sheet.image,
        placement=placement,
        characters_drawn=sheet.characters_drawn,
        footer_label=footer_label,
        heading=task.heading,
        heading_ascii=task.heading_ascii,
        heading_size=task.heading_size,
    )


def resolve_render_workers(task_count: int, requested: int | str | None = None) -> int:
    """Worker count for page rendering.

    An explicit ``requested`` value wins over ``COPYBOOK_RENDER_JOBS``; both
    accept ``auto`` or a positive integer.
    """
    if requested is None:
        raw = os.environ.get(_RENDER_JOBS_ENV, "")
        source = _RENDER_JOBS_ENV
    else:
        raw = str(requested)
        source = "render_jobs"
    raw = raw.strip().lower()

    explicit = False
    workers: int | None = None
    if raw and raw != "auto":
        try:
            parsed = int(raw)
        except ValueError:
            raise ValueError(f"{source} must be a positive integer or 'auto'") from None
        if parsed > 0:
            workers = parsed
            explicit = True

    cpu = os.cpu_count() or 1
    if workers is None:
        workers = min(cpu, _DEFAULT_RENDER_WORKERS_CAP)

    workers = max(1, min(workers, cpu, task_count))
    if not explicit:
        workers = min(workers, max(1, task_count // _MIN_PAGES_PER_WORKER))
    return max(1, workers)
