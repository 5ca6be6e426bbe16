"""
Unit tests for pixel color sampling.
"""

import pytest
from PIL import Image

from IS_Libs.EraserLib.eraser_models import InvalidInputError, PixelBuffer
from IS_Libs.EraserLib.pixel_sampling import get_pixel_color, view_to_image_coords


class TestGetPixelColor:
    """Tests for get_pixel_color function."""

    def setup_method(self):
        self.image = Image.new("RGBA", (4, 3), (0, 0, 0, 255))
        self.image.putpixel((3, 2), (10, 20, 30, 0))

    def test_samples_pil_image(self):
        assert get_pixel_color(self.image, 3, 2) == (10, 20, 30)
        assert get_pixel_color(self.image, 0, 0) == (0, 0, 0)

    def test_samples_rgb_image(self):
        rgb = Image.new("RGB", (2, 2), (7, 8, 9))
        assert get_pixel_color(rgb, 1, 1) == (7, 8, 9)

    def test_samples_grayscale_image(self):
        gray = Image.new("L", (2, 2), 77)
        assert get_pixel_color(gray, 0, 1) == (77, 77, 77)

    def test_samples_pixel_buffer(self):
        buffer = PixelBuffer.from_image(self.image)
        assert get_pixel_color(buffer, 3, 2) == (10, 20, 30)

    @pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (4, 0), (0, 3)])
    def test_out_of_bounds_raises(self, x, y):
        with pytest.raises(InvalidInputError):
            get_pixel_color(self.image, x, y)

    def test_rejects_unknown_surface(self):
        with pytest.raises(TypeError):
            get_pixel_color([[0, 0, 0]], 0, 0)


class TestViewToImageCoords:
    """Tests for view_to_image_coords function."""

    def test_scales_down_view(self):
        assert view_to_image_coords(50, 25, (100, 50), (400, 200)) == (200, 100)

    def test_floors_fractional_positions(self):
        assert view_to_image_coords(10.9, 3.2, (200, 200), (100, 100)) == (5, 1)

    def test_identity_scale(self):
        assert view_to_image_coords(3, 4, (10, 10), (10, 10)) == (3, 4)

    def test_rejects_empty_view(self):
        with pytest.raises(ValueError):
            view_to_image_coords(1, 1, (0, 10), (10, 10))
