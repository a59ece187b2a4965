import unittest
from unittest import mock

from PIL import ImageFont

from copybook.render import grid
from copybook.render.spec import GridStyleSpec
from copybook.render.surface import Surface, dash_segments, to_rgb
from copybook.render.types import Layout

GUIDE_RGB = (0xDC, 0xEA, 0xDC)
BORDER_RGB = (0x2D, 0x7A, 0x2D)


class TestDashSegments(unittest.TestCase):
    def test_horizontal_pattern(self) -> None:
        segments = list(dash_segments((0.0, 0.0), (10.0, 0.0), (2, 2)))
        self.assertEqual(
            [(start[0], end[0]) for start, end in segments],
            [(0.0, 2.0), (4.0, 6.0), (8.0, 10.0)],
        )

    def test_last_dash_is_clipped(self) -> None:
        segments = list(dash_segments((0.0, 0.0), (0.0, 5.0), (2, 2)))
        self.assertEqual(segments[-1], ((0.0, 4.0), (0.0, 5.0)))

    def test_degenerate_inputs(self) -> None:
        self.assertEqual(list(dash_segments((3.0, 3.0), (3.0, 3.0), (2, 2))), [])
        self.assertEqual(
            list(dash_segments((0.0, 0.0), (5.0, 0.0), (0, 2))),
            [((0.0, 0.0), (5.0, 0.0))],
        )


class TestSurface(unittest.TestCase):
    def test_to_rgb(self) -> None:
        self.assertEqual(to_rgb("#2d7a2d"), BORDER_RGB)
        self.assertEqual(to_rgb((1, 2, 3)), (1, 2, 3))

    def test_rejects_empty_surface(self) -> None:
        with self.assertRaises(ValueError):
            Surface(0, 10)

    def test_translucent_text_blends_over_the_page(self) -> None:
        font = ImageFont.load_default(size=40)

        def darkest(opacity: float) -> int:
            surface = Surface(60, 60)
            surface.fill_text("A", (30, 30), font=font, color="#000000", opacity=opacity)
            return min(channel for pixel in surface.finalize().getdata() for channel in pixel)

        self.assertEqual(darkest(1.0), 0)
        self.assertGreaterEqual(darkest(0.2), 195)
        self.assertLess(darkest(0.5), darkest(0.2))
        self.assertEqual(darkest(0.0), 255)


class TestDrawGrid(unittest.TestCase):
    def test_one_cell_per_slot_in_row_major_order(self) -> None:
        layout = Layout(
            cell_size=40,
            total_width=140,
            total_height=100,
            padding=10,
            chars_per_row=3,
            row_count=2,
        )
        surface = Surface(layout.total_width, layout.total_height)
        with mock.patch.object(grid, "draw_rice_cell") as draw_cell:
            grid.draw_grid(surface, layout, GridStyleSpec())
        origins = [call.args[1:3] for call in draw_cell.call_args_list]
        self.assertEqual(origins, [(10, 10), (50, 10), (90, 10), (10, 50), (50, 50), (90, 50)])

    def test_cell_pixels(self) -> None:
        surface = Surface(60, 60)
        grid.draw_rice_cell(surface, 10, 10, 40, GridStyleSpec())
        image = surface.finalize()
        self.assertEqual(image.getpixel((10, 20)), BORDER_RGB)
        self.assertEqual(image.getpixel((15, 30)), GUIDE_RGB)
        self.assertEqual(image.getpixel((5, 5)), (255, 255, 255))


if __name__ == "__main__":
    unittest.main()
