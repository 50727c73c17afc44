"""
Tests for image file operations.
"""

import pytest

from photool.io import find_images, format_for_path, load_image, save_image
from photool.processing import DecodeFailure


class TestImageFiles:

    def test_save_and_load(self, tmp_path, image):
        path = save_image(image, tmp_path / "deep" / "dir" / "image.png")
        assert path.exists()
        assert load_image(path).equals(image)

    def test_load_from_bytes(self, image):
        assert load_image(image.encode()).equals(image)

    def test_missing_file(self, tmp_path):
        with pytest.raises(DecodeFailure):
            load_image(tmp_path / "nope.png")

    def test_format_from_suffix(self):
        assert format_for_path("a.JPG") == "JPEG"
        assert format_for_path("b.tiff") == "TIFF"
        assert format_for_path("c.unknown") == "PNG"

    def test_jpeg_output(self, tmp_path, image):
        path = save_image(image, tmp_path / "photo.jpg")
        assert path.read_bytes()[:2] == b"\xff\xd8"

    def test_find_images(self, tmp_path, image):
        save_image(image, tmp_path / "b.png")
        save_image(image, tmp_path / "sub" / "a.jpg")
        (tmp_path / "readme.md").write_text("x")

        found = find_images(tmp_path)
        assert [p.name for p in found] == ["b.png", "a.jpg"]

    def test_find_images_missing_dir(self, tmp_path):
        with pytest.raises(ValueError):
            find_images(tmp_path / "missing")
