"""Tests for the in-process PyMuPDF renderer."""

import io

import pytest
from PIL import Image

from docrender.config.schema import ImageConfig
from docrender.errors.exceptions import RenderError
from docrender.render.mupdf import PyMuPDFRenderer


def _renderer(fmt="png", dpi=72, quality=90, **options):
    return PyMuPDFRenderer(ImageConfig(format=fmt, dpi=dpi, quality=quality, options=options))


def _open(path):
    return Image.open(io.BytesIO(path.read_bytes()))


class TestPyMuPDFRenderer:
    def test_renders_png(self, sample_pdf, tmp_path):
        out = tmp_path / "p.png"
        _renderer().render(sample_pdf, 1, out)
        img = _open(out)
        assert img.format == "PNG"
        assert img.size == (200, 200)

    def test_dpi_scales_output(self, sample_pdf, tmp_path):
        out = tmp_path / "p.png"
        _renderer(dpi=144).render(sample_pdf, 1, out)
        assert _open(out).size == (400, 400)

    def test_renders_jpeg(self, sample_pdf, tmp_path):
        out = tmp_path / "p.jpg"
        _renderer(fmt="jpg", quality=50).render(sample_pdf, 2, out)
        assert _open(out).format == "JPEG"

    def test_rotation_expands_canvas(self, sample_pdf, tmp_path):
        import pymupdf

        wide = tmp_path / "wide.pdf"
        doc = pymupdf.open()
        doc.new_page(width=300, height=100)
        doc.save(str(wide))
        doc.close()

        out = tmp_path / "p.png"
        _renderer(rotation=90).render(wide, 1, out)
        assert _open(out).size == (100, 300)

    def test_background_flattens(self, sample_pdf, tmp_path):
        out = tmp_path / "p.png"
        _renderer(background="white").render(sample_pdf, 1, out)
        img = _open(out)
        assert img.mode == "RGB"
        assert img.getpixel((0, 0)) == (255, 255, 255)

    def test_brightness_darkens(self, sample_pdf, tmp_path):
        out = tmp_path / "p.png"
        _renderer(brightness=50).render(sample_pdf, 1, out)
        r, g, b = _open(out).getpixel((0, 0))
        assert r < 200

    def test_page_out_of_range(self, sample_pdf, tmp_path):
        with pytest.raises(RenderError, match="out of range"):
            _renderer().render(sample_pdf, 9, tmp_path / "p.png")

    def test_unreadable_document(self, tmp_path):
        bad = tmp_path / "bad.pdf"
        bad.write_bytes(b"not a pdf")
        with pytest.raises(RenderError):
            _renderer().render(bad, 1, tmp_path / "p.png")

    def test_unknown_background(self, sample_pdf, tmp_path):
        with pytest.raises(RenderError, match="background"):
            _renderer(background="not-a-colour").render(sample_pdf, 1, tmp_path / "p.png")

    def test_parameters_match_imagemagick(self):
        from docrender.render import ImageMagickRenderer

        cfg = ImageConfig(options={"contrast": 5, "rotation": 90})
        assert PyMuPDFRenderer(cfg).parameters() == ImageMagickRenderer(cfg).parameters()
