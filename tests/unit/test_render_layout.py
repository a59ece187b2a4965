import unittest

from copybook.render.geometry import (
    compute_layout,
    fit_placement,
    font_size_for_cell,
    page_bounds,
    page_count,
    rows_for_slice,
)

# A4 at 300 dpi
PAGE_W = 2480
PAGE_H = 3507


class TestComputeLayout(unittest.TestCase):
    """Tests for compute_layout."""

    def test_ten_by_ten_on_a4(self) -> None:
        layout = compute_layout(PAGE_W, PAGE_H, 10, 10, padding=40)
        # width binds: (2480 - 80) // 10 = 240, height would allow 342
        self.assertEqual(layout.cell_size, 240)
        self.assertEqual(layout.total_width, 2480)
        self.assertEqual(layout.total_height, 2480)
        self.assertEqual(layout.capacity, 100)

    def test_height_binds_for_tall_grid(self) -> None:
        layout = compute_layout(PAGE_W, PAGE_H, 10, 15, padding=40)
        # (3507 - 80) // 15 = 228 < 240
        self.assertEqual(layout.cell_size, 228)
        self.assertEqual(layout.total_width, 10 * 228 + 80)
        self.assertEqual(layout.total_height, 15 * 228 + 80)

    def test_sheet_default_grid(self) -> None:
        layout = compute_layout(PAGE_W, PAGE_H, 15, 5, padding=40)
        self.assertEqual(layout.cell_size, 160)
        self.assertEqual((layout.total_width, layout.total_height), (2480, 880))

    def test_square_cells_always_fit_the_page(self) -> None:
        for chars_per_row in range(1, 21):
            for row_count in range(1, 31):
                with self.subTest(chars_per_row=chars_per_row, row_count=row_count):
                    layout = compute_layout(
                        PAGE_W, PAGE_H, chars_per_row, row_count, padding=40
                    )
                    self.assertGreater(layout.cell_size, 0)
                    self.assertEqual(
                        layout.total_width, chars_per_row * layout.cell_size + 80
                    )
                    self.assertEqual(layout.total_height, row_count * layout.cell_size + 80)
                    self.assertLessEqual(layout.total_width, PAGE_W)
                    self.assertLessEqual(layout.total_height, PAGE_H)

    def test_cell_origin_is_row_major(self) -> None:
        layout = compute_layout(PAGE_W, PAGE_H, 10, 10, padding=40)
        self.assertEqual(layout.cell_origin(0), (40, 40))
        self.assertEqual(layout.cell_origin(9), (40 + 9 * 240, 40))
        self.assertEqual(layout.cell_origin(10), (40, 280))

    def test_metadata(self) -> None:
        layout = compute_layout(PAGE_W, PAGE_H, 10, 10, padding=40)
        self.assertEqual(
            layout.metadata(),
            {
                "cell_size": 240,
                "total_width": 2480,
                "total_height": 2480,
                "chars_per_row": 10,
                "row_count": 10,
            },
        )

    def test_rejects_bad_input(self) -> None:
        cases = (
            {"args": (PAGE_W, PAGE_H, 0, 10), "padding": 40},
            {"args": (PAGE_W, PAGE_H, 10, 0), "padding": 40},
            {"args": (PAGE_W, PAGE_H, 10, 10), "padding": -1},
            {"args": (100, 100, 20, 30), "padding": 40},
        )
        for case in cases:
            with self.subTest(case=case):
                with self.assertRaises(ValueError):
                    compute_layout(*case["args"], padding=case["padding"])


class TestFontSize(unittest.TestCase):
    def test_ninety_percent_of_cell(self) -> None:
        self.assertEqual(font_size_for_cell(240), 216)
        self.assertEqual(font_size_for_cell(228), 205)

    def test_never_below_one(self) -> None:
        self.assertEqual(font_size_for_cell(1), 1)


class TestPaging(unittest.TestCase):
    """Tests for page_count, page_bounds and rows_for_slice."""

    def test_page_count(self) -> None:
        self.assertEqual(page_count(320, 150), 3)
        self.assertEqual(page_count(300, 150), 2)
        self.assertEqual(page_count(1, 150), 1)
        self.assertEqual(page_count(0, 150), 0)

    def test_page_count_rejects_zero_chunk(self) -> None:
        with self.assertRaises(ValueError):
            page_count(10, 0)

    def test_page_bounds(self) -> None:
        self.assertEqual(page_bounds(0, 150, 320), (0, 150))
        self.assertEqual(page_bounds(1, 150, 320), (150, 300))
        self.assertEqual(page_bounds(2, 150, 320), (300, 320))
        self.assertEqual(page_bounds(3, 150, 320), (450, 450))

    def test_rows_for_slice(self) -> None:
        self.assertEqual(rows_for_slice(150, 10, 15), 15)
        self.assertEqual(rows_for_slice(20, 10, 15), 2)
        self.assertEqual(rows_for_slice(21, 10, 15), 3)
        self.assertEqual(rows_for_slice(400, 10, 15), 15)


class TestFitPlacement(unittest.TestCase):
    def test_scales_and_centers(self) -> None:
        placement = fit_placement(
            2480, 2480, area_x=40, area_y=40, area_w=515.28, area_h=761.89
        )
        self.assertAlmostEqual(placement.scale, 515.28 / 2480)
        self.assertAlmostEqual(placement.width, 515.28)
        self.assertAlmostEqual(placement.height, 515.28)
        self.assertAlmostEqual(placement.x, 40)
        self.assertAlmostEqual(placement.y, 40 + (761.89 - 515.28) / 2)

    def test_height_bound(self) -> None:
        placement = fit_placement(100, 400, area_x=0, area_y=0, area_w=200, area_h=200)
        self.assertAlmostEqual(placement.scale, 0.5)
        self.assertAlmostEqual(placement.x, 75)
        self.assertAlmostEqual(placement.y, 0)

    def test_rejects_empty_image(self) -> None:
        with self.assertRaises(ValueError):
            fit_placement(0, 10, area_x=0, area_y=0, area_w=10, area_h=10)


if __name__ == "__main__":
    unittest.main()
