import json

import pytest

try:
    import fitz
except Exception:  # pragma: no cover
    fitz = None

try:
    import pdfplumber
except Exception:  # pragma: no cover
    pdfplumber = None

from docstruct.config import LayoutConfig
from docstruct.layout.models import Heading
from docstruct.layout.pdf_source import load_pdf
from docstruct.layout.pipeline import DocumentAnalyzer
from docstruct.layout.runner import main

BODY_LINES = [
    "This is a test paragraph with some content.",
    "It continues on a second line of body text.",
    "A third line keeps the page well above the",
    "threshold used to flag scanned documents.",
]


@pytest.fixture
def sample_pdf(tmp_path):
    """Generates a simple one-page PDF with a title and a paragraph."""
    if fitz is None:
        pytest.skip("PyMuPDF not available")
    pdf_path = tmp_path / "test.pdf"
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((50, 60), "Test Title", fontsize=20, fontname="hebo")
    for i, line in enumerate(BODY_LINES):
        page.insert_text((50, 110 + 15 * i), line, fontsize=12, fontname="helv")
    doc.set_metadata({"title": "Sample", "author": "Tester"})
    doc.save(str(pdf_path))
    doc.close()
    return pdf_path


def test_pymupdf_tokens_are_y_up(sample_pdf):
    pages, meta = load_pdf(sample_pdf, backend="pymupdf")
    assert meta == {"title": "Sample", "author": "Tester"}
    assert len(pages) == 1
    page = pages[0]
    assert page.page_number == 1
    by_text = {t.text.strip(): t for t in page.tokens}
    title = by_text["Test Title"]
    first = by_text[BODY_LINES[0]]
    assert title.y > first.y
    assert abs(title.y - (page.height - 60)) < 1.0
    assert title.font_size == 20.0
    assert "bold" in title.font_name.lower()


@pytest.mark.skipif(pdfplumber is None, reason="pdfplumber not available")
def test_pdfplumber_backend_reads_words(sample_pdf):
    pages, meta = load_pdf(sample_pdf, backend="pdfplumber")
    assert meta["title"] == "Sample"
    words = [t.text for t in pages[0].tokens]
    assert "Title" in words
    assert "paragraph" in words
    title = next(t for t in pages[0].tokens if t.text == "Title")
    para = next(t for t in pages[0].tokens if t.text == "paragraph")
    assert title.y > para.y


def test_analyze_pdf_finds_heading_and_text(sample_pdf):
    doc = DocumentAnalyzer(LayoutConfig()).analyze_pdf(sample_pdf)
    assert not doc.is_scanned
    assert doc.title == "Sample"
    assert doc.body_font_size == 12.0
    headings = [c for c in doc.content if isinstance(c, Heading)]
    assert [h.text for h in headings] == ["Test Title"]
    assert headings[0].level == 2
    assert BODY_LINES[0] in doc.pages[0].text


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_pdf(tmp_path / "non_existent.pdf")


def test_unknown_backend_raises(sample_pdf):
    with pytest.raises(ValueError):
        load_pdf(sample_pdf, backend="ocr")


def test_runner_prints_document_json(sample_pdf, capsys):
    assert main([str(sample_pdf), "--indent", "0"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["isScanned"] is False
    assert data["pageCount"] == 1
    assert data["content"][0]["type"] == "heading"


def test_runner_reports_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.pdf")]) == 1
    assert "Error" in capsys.readouterr().err
