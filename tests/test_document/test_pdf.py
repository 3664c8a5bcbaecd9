"""Tests for PDF document handling."""

import pytest

from docrender.document.pdf import PDFDocument, PDFPage
from docrender.errors.exceptions import DocumentError


class TestPDFDocument:
    def test_open(self, sample_pdf):
        doc = PDFDocument.open(sample_pdf)
        assert doc.page_count == 3
        assert doc.path == sample_pdf

    def test_missing_file(self, tmp_path):
        with pytest.raises(DocumentError, match="not found"):
            PDFDocument.open(tmp_path / "nope.pdf")

    def test_corrupt_file(self, tmp_path):
        bad = tmp_path / "bad.pdf"
        bad.write_bytes(b"definitely not a pdf")
        with pytest.raises(DocumentError):
            PDFDocument.open(bad)

    def test_extract_page(self, sample_pdf):
        page = PDFDocument.open(sample_pdf).extract_page(2)
        assert isinstance(page, PDFPage)
        assert page.number == 2

    @pytest.mark.parametrize("page_num", [0, -1, 4])
    def test_extract_page_out_of_range(self, sample_pdf, page_num):
        with pytest.raises(DocumentError, match="out of range") as exc_info:
            PDFDocument.open(sample_pdf).extract_page(page_num)
        assert exc_info.value.page_num == page_num

    def test_extract_all_pages(self, sample_pdf):
        pages = PDFDocument.open(sample_pdf).extract_all_pages()
        assert [p.number for p in pages] == [1, 2, 3]

    def test_context_manager(self, sample_pdf):
        with PDFDocument.open(sample_pdf) as doc:
            assert doc.page_count == 3


class TestPDFPage:
    def test_to_image_uses_cache(self, sample_pdf, renderer, cache_store):
        page = PDFDocument.open(sample_pdf).extract_page(1)
        assert page.to_image(renderer, cache_store) == page.to_image(renderer, cache_store)
        assert renderer.call_count == 1

    def test_to_image_without_cache(self, sample_pdf, renderer):
        page = PDFDocument.open(sample_pdf).extract_page(3)
        page.to_image(renderer)
        page.to_image(renderer)
        assert renderer.calls == [(str(sample_pdf), 3), (str(sample_pdf), 3)]
