"""
Tests for the command line interface.
"""

import pytest
from click.testing import CliRunner

from cli import main
from photool.io import load_image, save_image
from photool.processing.color import grayscale, sepia


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def input_file(tmp_path, image):
    return save_image(image, tmp_path / "input.png")


def invoke(runner, *args):
    return runner.invoke(main, ["--no-delay", "--quiet", *[str(a) for a in args]])


class TestCatalogCommands:
    """Test informational commands."""

    def test_effects_lists_categories(self, runner):
        result = runner.invoke(main, ["effects"])
        assert result.exit_code == 0
        assert "Basic:" in result.output
        assert "soft-focus" in result.output
        assert "Quick effects:" in result.output

    def test_effects_search(self, runner):
        result = runner.invoke(main, ["effects", "--search", "VINT"])
        assert result.exit_code == 0
        assert "vintage-film" in result.output
        assert "sepia" not in result.output

    def test_effects_search_without_match(self, runner):
        result = runner.invoke(main, ["effects", "-s", "zzz"])
        assert result.exit_code == 0
        assert "No effects match" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["version"])
        assert "Photool v0.1.0" in result.output


class TestEditCommands:
    """Test commands that write images."""

    def test_apply_chain(self, runner, input_file, tmp_path, image):
        output = tmp_path / "out.png"
        result = invoke(runner, "apply", input_file, output, "sepia", "grayscale")
        assert result.exit_code == 0, result.output
        assert load_image(output).equals(grayscale(sepia(image)))

    def test_apply_reports_simulated(self, runner, input_file, tmp_path):
        output = tmp_path / "out.png"
        result = runner.invoke(main, ["--no-delay", "apply", str(input_file), str(output), "pop-art"])
        assert result.exit_code == 0, result.output
        assert "Simulated" in result.output

    def test_adjust(self, runner, input_file, tmp_path, image):
        output = tmp_path / "adjusted.png"
        result = invoke(runner, "adjust", input_file, output, "--contrast", 50, "--brightness", 100)
        assert result.exit_code == 0, result.output
        assert load_image(output).equals(image)

    def test_crop(self, runner, tmp_path, square_image):
        source = save_image(square_image, tmp_path / "square.png")
        output = tmp_path / "cropped.png"
        result = invoke(runner, "crop", source, output, 0.25, 0.25, 0.5, 0.5)
        assert result.exit_code == 0, result.output
        assert load_image(output).size == (200, 200)

    def test_crop_rejects_sub_pixel_area(self, runner, input_file, tmp_path):
        output = tmp_path / "cropped.png"
        result = invoke(runner, "crop", input_file, output, 0.5, 0.5, 0.001, 0.5)
        assert result.exit_code == 1
        assert "Invalid crop region" in result.output
        assert not output.exists()

    def test_crop_rejects_rect_past_the_edge(self, runner, tmp_path, square_image):
        source = save_image(square_image, tmp_path / "square.png")
        output = tmp_path / "cropped.png"
        result = invoke(runner, "crop", source, output, 0.9, 0, 0.2, 0.2)
        assert result.exit_code == 1
        assert "Invalid crop region" in result.output
        assert not output.exists()

    def test_rotate(self, runner, input_file, tmp_path, image):
        output = tmp_path / "rotated.png"
        result = invoke(runner, "rotate", input_file, output, "--times", 3)
        assert result.exit_code == 0, result.output
        assert load_image(output).size == (image.height, image.width)

    def test_flip(self, runner, input_file, tmp_path, image):
        output = tmp_path / "flipped.png"
        result = invoke(runner, "flip", input_file, output)
        assert result.exit_code == 0, result.output
        assert (load_image(output).pixels == image.pixels[:, ::-1]).all()

    def test_compare(self, runner, input_file, tmp_path, image):
        edited = save_image(sepia(image), tmp_path / "edited.png")
        output = tmp_path / "compare.png"
        result = invoke(runner, "compare", input_file, edited, output, "--position", 0)
        assert result.exit_code == 0, result.output
        assert load_image(output).equals(image)

    def test_unreadable_input(self, runner, tmp_path):
        bogus = tmp_path / "bogus.png"
        bogus.write_bytes(b"not an image")
        result = invoke(runner, "apply", bogus, tmp_path / "out.png", "sepia")
        assert result.exit_code == 1
        assert "Could not process image" in result.output


class TestBatch:
    """Test directory processing."""

    def test_batch_preserves_structure(self, runner, tmp_path, image, make_image):
        source = tmp_path / "in"
        save_image(image, source / "a.png")
        save_image(make_image(8, 6, seed=3), source / "nested" / "b.png")
        (source / "notes.txt").write_text("skip me")

        target = tmp_path / "out"
        result = invoke(runner, "batch", source, target, "grayscale")
        assert result.exit_code == 0, result.output
        assert load_image(target / "a.png").equals(grayscale(image))
        assert (target / "nested" / "b.png").exists()
        assert not (target / "notes.txt").exists()

    def test_batch_counts_failures(self, runner, tmp_path, image):
        source = tmp_path / "in"
        save_image(image, source / "good.png")
        (source / "bad.png").write_bytes(b"broken")

        result = invoke(runner, "batch", source, tmp_path / "out", "sepia")
        assert result.exit_code == 1
        assert "1 image(s) could not be processed" in result.output
        assert (tmp_path / "out" / "good.png").exists()
