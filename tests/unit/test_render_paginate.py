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


import os
import unittest
from unittest import mock

from copybook.core.errors import RenderError
from copybook.render.options import GridRequest, PracticeOptions
from copybook.render.pages import (
    paginate,
    practice_pages,
    resolve_render_workers,
    single_page,
    slice_characters,
)
from tests.test_support import POEM_320, SAMPLE_TEXT, fallback_fonts, fast_spec, temp_env

REQUEST = GridRequest(chars_per_row=10, row_count=15)


class TestSliceCharacters(unittest.TestCase):
    def test_exact_chunks(self) -> None:
        slices = slice_characters(tuple(POEM_320), 150)
        self.assertEqual([len(chunk) for chunk in slices], [150, 150, 20])
        self.assertEqual("".join("".join(chunk) for chunk in slices), POEM_320)

    def test_exact_multiple_has_no_empty_tail(self) -> None:
        slices = slice_characters(tuple("字" * 300), 150)
        self.assertEqual([len(chunk) for chunk in slices], [150, 150])

    def test_empty_stream(self) -> None:
        self.assertEqual(slice_characters((), 150), [])


class TestPaginate(unittest.TestCase):
    def setUp(self) -> None:
        self.spec = fast_spec()
        self.fonts = fallback_fonts()

    def _paginate(self, text: str = POEM_320, **kwargs):
        return paginate(
            tuple(text),
            kwargs.pop("request", REQUEST),
            chars_per_page=kwargs.pop("chars_per_page", 150),
            spec=self.spec,
            fonts=self.fonts,
            jobs=kwargs.pop("jobs", 1),
            **kwargs,
        )

    def test_three_pages_for_320_characters(self) -> None:
        document = self._paginate()
        self.assertEqual(document.total_pages, 3)
        self.assertEqual([page.index for page in document.pages], [0, 1, 2])
        self.assertEqual([len(page.characters) for page in document.pages], [150, 150, 20])
        self.assertEqual([page.layout.row_count for page in document.pages], [15, 15, 2])
        self.assertEqual(document.characters_drawn, 320)
        self.assertEqual(document.total_characters, 320)

    def test_pages_concatenate_to_input(self) -> None:
        document = self._paginate()
        joined = "".join("".join(page.characters) for page in document.pages)
        self.assertEqual(joined, POEM_320)

    def test_footer_labels(self) -> None:
        document = self._paginate()
        self.assertEqual(
            [page.footer_label for page in document.pages],
            ["第 1 页 / 共 3 页", "第 2 页 / 共 3 页", "第 3 页 / 共 3 页"],
        )

    def test_metadata(self) -> None:
        document = self._paginate(title="静夜思")
        self.assertEqual(document.title, "静夜思")
        self.assertEqual(document.subject, "静夜思 - 多页字帖")
        self.assertEqual(
            document.metadata(),
            {
                "total_pages": 3,
                "characters_drawn": 320,
                "total_characters": 320,
                "font_family": "serif",
            },
        )

    def test_placements_centered_in_content_area(self) -> None:
        pdf = self.spec.pdf
        for page in self._paginate().pages:
            with self.subTest(page=page.index):
                placement = page.placement
                left = placement.x - pdf.margin_left_pt
                right = pdf.width_pt - pdf.margin_right_pt - (placement.x + placement.width)
                top = placement.y - pdf.margin_top_pt
                bottom = pdf.height_pt - pdf.margin_bottom_pt - (placement.y + placement.height)
                self.assertAlmostEqual(left, right, places=6)
                self.assertAlmostEqual(top, bottom, places=6)
                self.assertGreaterEqual(min(left, top), -1e-9)

    def test_undersized_grid_truncates_silently(self) -> None:
        request = GridRequest(chars_per_row=5, row_count=5)
        document = self._paginate(request=request, chars_per_page=50)
        self.assertEqual(document.total_pages, 7)
        self.assertEqual(document.pages[0].characters_drawn, 25)
        self.assertLess(document.characters_drawn, document.total_characters)

    def test_idempotent(self) -> None:
        first = self._paginate(text=POEM_320[:60], chars_per_page=50)
        second = self._paginate(text=POEM_320[:60], chars_per_page=50)
        self.assertEqual(first.metadata(), second.metadata())
        for left, right in zip(first.pages, second.pages):
            self.assertEqual(left.layout, right.layout)
            self.assertEqual(left.placement, right.placement)
            self.assertEqual(left.image.tobytes(), right.image.tobytes())

    def test_thread_pool_keeps_page_order(self) -> None:
        serial = self._paginate(text=POEM_320[:200], chars_per_page=50, jobs=1)
        parallel = self._paginate(text=POEM_320[:200], chars_per_page=50, jobs=4)
        self.assertEqual(
            [page.characters for page in serial.pages],
            [page.characters for page in parallel.pages],
        )
        self.assertEqual(
            [page.footer_label for page in serial.pages],
            [page.footer_label for page in parallel.pages],
        )

    def test_page_failure_aborts_document(self) -> None:
        failure = OSError("disk full")
        with mock.patch("copybook.render.pages.render_sheet", side_effect=failure):
            with self.assertRaises(RenderError) as ctx:
                self._paginate()
        self.assertIs(ctx.exception.__cause__, failure)
        self.assertEqual(ctx.exception.page_index, 0)
        self.assertIn("page 1", str(ctx.exception))


class TestSinglePage(unittest.TestCase):
    def test_single_page_has_no_footer(self) -> None:
        document = single_page(
            tuple(SAMPLE_TEXT), REQUEST, spec=fast_spec(), fonts=fallback_fonts()
        )
        self.assertEqual(document.total_pages, 1)
        self.assertIsNone(document.pages[0].footer_label)
        self.assertEqual(document.pages[0].layout.row_count, 15)
        self.assertEqual(document.subject, "汉字字帖 - 4个汉字")

    def test_subject_counts_drawn_characters(self) -> None:
        request = GridRequest(chars_per_row=2, row_count=1)
        document = single_page(
            tuple(SAMPLE_TEXT), request, spec=fast_spec(), fonts=fallback_fonts(), title="T"
        )
        self.assertEqual(document.characters_drawn, 2)
        self.assertEqual(document.subject, "T - 2个汉字")


class TestPracticePages(unittest.TestCase):
    def _practice(self, **kwargs):
        options = PracticeOptions(grid=GridRequest(chars_per_row=4, row_count=2), **kwargs)
        return practice_pages(
            tuple(SAMPLE_TEXT), options, spec=fast_spec(), fonts=fallback_fonts(), jobs=1
        )

    def test_answer_page_then_copies(self) -> None:
        document = self._practice(copies=3)
        self.assertEqual(document.total_pages, 4)
        self.assertEqual(
            [page.heading for page in document.pages],
            ["参考答案", "练习 1", "练习 2", "练习 3"],
        )
        self.assertEqual(
            [page.heading_ascii for page in document.pages],
            ["Answer key", "Practice 1", "Practice 2", "Practice 3"],
        )
        self.assertEqual(document.pages[0].heading_size, 16.0)
        self.assertEqual(document.pages[1].heading_size, 14.0)
        self.assertTrue(all(page.footer_label is None for page in document.pages))
        self.assertEqual(document.subject, "汉字练习册 - 3份练习")

    def test_without_answer_page(self) -> None:
        document = self._practice(copies=2, include_answer=False)
        self.assertEqual(document.total_pages, 2)
        self.assertEqual([page.heading for page in document.pages], ["练习 1", "练习 2"])
        self.assertEqual([page.index for page in document.pages], [0, 1])

    def test_answer_page_differs_from_copies(self) -> None:
        options = PracticeOptions(grid=GridRequest(chars_per_row=1, row_count=1), copies=1)
        document = practice_pages(
            ("A",), options, spec=fast_spec(), fonts=fallback_fonts(), jobs=1
        )
        answer, copy = document.pages
        self.assertNotEqual(answer.image.tobytes(), copy.image.tobytes())


class TestResolveRenderWorkers(unittest.TestCase):
    def test_explicit_request_wins(self) -> None:
        with mock.patch("copybook.render.pages.os.cpu_count", return_value=8):
            self.assertEqual(resolve_render_workers(10, 3), 3)
            self.assertEqual(resolve_render_workers(2, 6), 2)
            self.assertEqual(resolve_render_workers(10, 1), 1)

    def test_environment_value(self) -> None:
        with mock.patch("copybook.render.pages.os.cpu_count", return_value=8):
            with temp_env({"COPYBOOK_RENDER_JOBS": "5"}):
                self.assertEqual(resolve_render_workers(10), 5)
            with temp_env({"COPYBOOK_RENDER_JOBS": "auto"}):
                # auto keeps at least two pages per worker
                self.assertEqual(resolve_render_workers(4), 2)
                self.assertEqual(resolve_render_workers(1), 1)

    def test_unset_environment_is_auto(self) -> None:
        with mock.patch("copybook.render.pages.os.cpu_count", return_value=2):
            with temp_env({}):
                os.environ.pop("COPYBOOK_RENDER_JOBS", None)
                self.assertEqual(resolve_render_workers(100), 2)

    def test_invalid_value(self) -> None:
        with temp_env({"COPYBOOK_RENDER_JOBS": "lots"}):
            with self.assertRaisesRegex(ValueError, "COPYBOOK_RENDER_JOBS"):
                resolve_render_workers(4)
        with self.assertRaisesRegex(ValueError, "render_jobs"):
            resolve_render_workers(4, "x")


if __name__ == "__main__":
    unittest.main()
