from __future__ import annotations

import logging
from pathlib import Path

try:
    import fitz
except ImportError:
    fitz = None

try:
    import pdfplumber
except ImportError:
    pdfplumber = None

from .models import PageInput
from .tokens import normalize_glyph_runs

logger = logging.getLogger(__name__)

BACKENDS = ("pymupdf", "pdfplumber")


def _glyph_run(text: str, x: float, baseline: float, size: float, width: float, height: float, font: str, page_h: float) -> dict:
    # Text layers are y-down; tokens are y-up from the page bottom.
    return {
        "str": text,
        "transform": [size, 0.0, 0.0, size, x, page_h - baseline],
        "width": width,
        "height": height,
        "fontName": font,
    }


def _pymupdf_page_runs(page) -> list[dict]:
    page_h = float(page.rect.height)
    runs: list[dict] = []
    d = page.get_text("dict")
    for b in d.get("blocks", []):
        for l in b.get("lines", []) or []:
            for s in l.get("spans", []) or []:
                text = s.get("text")
                if text is None:
                    continue
                try:
                    x0, y0, x1, y1 = (float(v) for v in s["bbox"])
                    ox, oy = (float(v) for v in s.get("origin", (x0, y1)))
                    size = float(s.get("size", 0.0))
                except Exception:
                    continue
                runs.append(_glyph_run(text, ox, oy, size, x1 - x0, y1 - y0, str(s.get("font") or "unknown"), page_h))
    return runs


def _load_with_pymupdf(pdf_path: Path) -> tuple[list[PageInput], dict]:
    if fitz is None:
        raise ImportError("PyMuPDF (fitz) not installed.")
    pages: list[PageInput] = []
    doc = fitz.open(str(pdf_path))
    try:
        meta = dict(doc.metadata or {})
        for i, page in enumerate(doc):
            pages.append(
                PageInput(
                    page_number=i + 1,
                    width=float(page.rect.width),
                    height=float(page.rect.height),
                    tokens=normalize_glyph_runs(_pymupdf_page_runs(page)),
                )
            )
    finally:
        doc.close()
    return pages, {"title": meta.get("title") or "", "author": meta.get("author") or ""}


def _load_with_pdfplumber(pdf_path: Path) -> tuple[list[PageInput], dict]:
    if pdfplumber is None:
        raise ImportError("`pdfplumber` package is not available.")
    pages: list[PageInput] = []
    with pdfplumber.open(str(pdf_path)) as pd:
        meta = dict(pd.metadata or {})
        for pg in pd.pages:
            page_h = float(pg.height)
            runs: list[dict] = []
            for w in pg.extract_words(extra_attrs=["fontname", "size"]):
                try:
                    x0, x1 = float(w["x0"]), float(w["x1"])
                    top, bottom = float(w["top"]), float(w["bottom"])
                    size = float(w.get("size", 0.0))
                except Exception:
                    continue
                runs.append(_glyph_run(w.get("text"), x0, bottom, size, x1 - x0, bottom - top, str(w.get("fontname") or "unknown"), page_h))
            pages.append(
                PageInput(
                    page_number=pg.page_number,
                    width=float(pg.width),
                    height=page_h,
                    tokens=normalize_glyph_runs(runs),
                )
            )
    return pages, {"title": str(meta.get("Title") or ""), "author": str(meta.get("Author") or "")}


def load_pdf(pdf_path, backend: str = "pymupdf") -> tuple[list[PageInput], dict]:
    """
    Read a PDF's text layer into per-page token lists.
    Returns (pages, {"title", "author"}).
    """
    pdf_path = Path(pdf_path)
    if not pdf_path.exists():
        raise FileNotFoundError(f"file not found: {pdf_path}")
    if backend not in BACKENDS:
        raise ValueError(f"unknown backend {backend!r}; expected one of {BACKENDS}")
    loader = _load_with_pymupdf if backend == "pymupdf" else _load_with_pdfplumber
    pages, meta = loader(pdf_path)
    logger.info("loaded %d pages from %s via %s", len(pages), pdf_path.name, backend)
    return pages, meta
