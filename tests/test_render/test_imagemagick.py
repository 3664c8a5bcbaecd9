"""Tests for ImageMagick argument construction and invocation."""

import shutil
import subprocess

import pytest

from docrender.config.schema import ImageConfig, ImageMagickOptions
from docrender.errors.exceptions import ConfigurationError, RenderError
from docrender.render import (
    ImageMagickRenderer,
    available_renderers,
    build_imagemagick_args,
    create_renderer,
)


def _renderer(fmt="png", dpi=300, quality=90, **options):
    return ImageMagickRenderer(ImageConfig(format=fmt, dpi=dpi, quality=quality, options=options))


class TestBuildArgs:
    def test_minimal_png(self):
        args = _renderer().build_args("/in/doc.pdf", 1, "/out/page.png")
        assert args == [
            "-density", "300",
            "/in/doc.pdf[0]",
            "-background", "white",
            "-flatten",
            "/out/page.png",
        ]

    def test_page_index_is_zero_based(self):
        args = _renderer().build_args("doc.pdf", 5, "out.png")
        assert "doc.pdf[4]" in args

    def test_density_precedes_input(self):
        args = _renderer(dpi=150).build_args("doc.pdf", 1, "out.png")
        assert args.index("-density") < args.index("doc.pdf[0]")
        assert args[args.index("-density") + 1] == "150"

    def test_jpeg_quality(self):
        args = _renderer(fmt="jpg", quality=85).build_args("doc.pdf", 1, "out.jpg")
        assert args[-3:] == ["-quality", "85", "out.jpg"]

    def test_png_has_no_quality(self):
        assert "-quality" not in _renderer(quality=85).build_args("doc.pdf", 1, "out.png")

    def test_full_filter_pipeline_order(self):
        r = _renderer(
            fmt="jpg", rotation=90, brightness=110, saturation=80, contrast=10,
            background="black",
        )
        args = r.build_args("doc.pdf", 2, "out.jpg")
        assert args == [
            "-density", "300",
            "doc.pdf[1]",
            "-background", "black",
            "-flatten",
            "-rotate", "90",
            "-modulate", "110,80",
            "-brightness-contrast", "0,10",
            "-quality", "90",
            "out.jpg",
        ]

    def test_brightness_only_uses_neutral_saturation(self):
        args = _renderer(brightness=120).build_args("doc.pdf", 1, "out.png")
        assert args[args.index("-modulate") + 1] == "120,100"

    def test_saturation_only_uses_neutral_brightness(self):
        args = _renderer(saturation=50).build_args("doc.pdf", 1, "out.png")
        assert args[args.index("-modulate") + 1] == "100,50"

    @pytest.mark.parametrize(
        "options,flag",
        [
            ({"rotation": 0}, "-rotate"),
            ({"brightness": 100}, "-modulate"),
            ({"saturation": 100}, "-modulate"),
            ({"brightness": 100, "saturation": 100}, "-modulate"),
            ({"contrast": 0}, "-brightness-contrast"),
        ],
    )
    def test_neutral_filters_omitted(self, options, flag):
        assert flag not in _renderer(**options).build_args("doc.pdf", 1, "out.png")

    def test_module_function_matches_method(self):
        settings = ImageConfig(format="jpg").finalize()
        options = ImageMagickOptions(contrast=-20)
        args = build_imagemagick_args(settings, options, "d.pdf", 1, "o.jpg")
        assert args[-5:] == ["-brightness-contrast", "0,-20", "-quality", "90", "o.jpg"]

    def test_deterministic(self):
        r = _renderer(rotation=90, contrast=5)
        assert r.build_args("d.pdf", 1, "o.png") == r.build_args("d.pdf", 1, "o.png")


class TestParameters:
    def test_default(self):
        assert _renderer().parameters() == ["background=white"]

    def test_neutral_values_listed(self):
        assert _renderer(brightness=100).parameters() == ["background=white", "brightness=100"]

    def test_file_extension(self):
        assert _renderer(fmt="jpeg").file_extension == "jpg"


class TestConstruction:
    def test_invalid_option_rejected(self):
        with pytest.raises(ConfigurationError):
            _renderer(brightness=500)

    def test_invalid_format_rejected(self):
        with pytest.raises(ConfigurationError):
            _renderer(fmt="tiff")

    def test_default_config(self):
        assert ImageMagickRenderer().settings.format == "png"


class TestRender:
    def test_missing_binary(self, tmp_path):
        r = ImageMagickRenderer(binary="definitely-not-magick")
        with pytest.raises(RenderError, match="not found"):
            r.render(tmp_path / "doc.pdf", 1, tmp_path / "out.png")

    def test_command_failure(self, tmp_path, monkeypatch):
        monkeypatch.setattr(shutil, "which", lambda name: "/usr/bin/magick")

        def fail(*args, **kwargs):
            raise subprocess.CalledProcessError(1, args[0], output="", stderr="no images")

        monkeypatch.setattr(subprocess, "run", fail)
        with pytest.raises(RenderError) as exc_info:
            ImageMagickRenderer().render(tmp_path / "doc.pdf", 3, tmp_path / "out.png")
        assert exc_info.value.page_num == 3
        assert "no images" in exc_info.value.output

    def test_invokes_binary_with_args(self, tmp_path, monkeypatch):
        monkeypatch.setattr(shutil, "which", lambda name: "/usr/bin/magick")
        seen = {}

        def fake_run(cmd, **kwargs):
            seen["cmd"] = cmd
            return subprocess.CompletedProcess(cmd, 0, "", "")

        monkeypatch.setattr(subprocess, "run", fake_run)
        ImageMagickRenderer().render("doc.pdf", 1, "out.png")
        assert seen["cmd"][0] == "/usr/bin/magick"
        assert seen["cmd"][1:] == ["-density", "300", "doc.pdf[0]", "-background", "white",
                                   "-flatten", "out.png"]

    @pytest.mark.skipif(shutil.which("magick") is None, reason="ImageMagick not installed")
    def test_real_render(self, sample_pdf, tmp_path):
        out = tmp_path / "page.png"
        ImageMagickRenderer(ImageConfig(dpi=72)).render(sample_pdf, 1, out)
        assert out.read_bytes().startswith(b"\x89PNG")


class TestCreateRenderer:
    def test_imagemagick(self):
        assert isinstance(create_renderer("imagemagick"), ImageMagickRenderer)

    def test_pymupdf(self):
        from docrender.render.mupdf import PyMuPDFRenderer

        assert isinstance(create_renderer("pymupdf"), PyMuPDFRenderer)

    def test_unknown(self):
        with pytest.raises(ConfigurationError, match="imagemagick, pymupdf"):
            create_renderer("ghostscript")

    def test_available_renderers(self):
        assert available_renderers() == ["imagemagick", "pymupdf"]

    def test_pymupdf_receives_config(self):
        renderer = create_renderer("pymupdf", ImageConfig(format="jpeg", dpi=96))
        assert renderer.settings.format == "jpg"
        assert renderer.settings.dpi == 96
