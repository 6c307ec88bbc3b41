from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, List, Optional, Sequence, TypeVar

from ..config import LayoutConfig, load_config
from .aggregator import (
    PageStats,
    assemble_page_content,
    collect_page_stats,
    is_scanned,
    merge_stats,
    pick_body_font_size,
    scanned_content,
)
from .block_classifier import build_blocks, build_page_text
from .equations import detect_equations
from .figures import detect_figures
from .layout_analysis import detect_columns, sequence_tokens
from .models import Document, Page, PageInput
from .tables import detect_table, table_to_lines, table_tokens
from .tokens import usable_tokens

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class DocumentAnalyzer:
    """
    Two-pass analysis of a document's text layer.

    Pass 1 collects per-page font statistics and reduces them to the body and
    max font sizes and the scanned verdict. Pass 2 runs the page detectors and
    the paragraph/heading builder with the body size passed in. Both passes
    fan out over pages; only the reduction between them needs every page.
    """

    def __init__(self, cfg: Optional[LayoutConfig] = None):
        self.cfg = cfg or load_config()

    def _map_pages(self, fn: Callable[[T], R], items: Sequence[T]) -> List[R]:
        results: List[Optional[R]] = [None] * len(items)
        workers = max(1, int(self.cfg.workers or 1))
        if workers == 1 or len(items) <= 1:
            for i, item in enumerate(items):
                results[i] = fn(item)
            return results  # type: ignore[return-value]
        with ThreadPoolExecutor(max_workers=workers) as ex:
            futures = {ex.submit(fn, item): i for i, item in enumerate(items)}
            for fut in as_completed(futures):
                results[futures[fut]] = fut.result()
        return results  # type: ignore[return-value]

    def _prepare(self, pages: Sequence[PageInput]) -> list[PageInput]:
        cfg = self.cfg
        selected = list(pages)
        if cfg.max_pages is not None and len(selected) > cfg.max_pages:
            logger.info("capping %d pages to %d", len(selected), cfg.max_pages)
            selected = selected[: max(0, cfg.max_pages)]
        out: list[PageInput] = []
        for p in selected:
            toks = usable_tokens(p.tokens)
            if cfg.max_tokens_per_page is not None:
                toks = toks[: max(0, cfg.max_tokens_per_page)]
            out.append(PageInput(page_number=p.page_number, width=p.width, height=p.height, tokens=toks))
        return out

    def _page_stats(self, page: PageInput) -> PageStats:
        return collect_page_stats(page.tokens)

    def analyze_page(self, page: PageInput, body_font_size: float):
        """Run the page detectors and builder; returns (Page, content items)."""
        cfg = self.cfg
        tokens = page.tokens
        columns = detect_columns(tokens, page.width, cfg)
        table = detect_table(tokens, cfg)
        figures = detect_figures(tokens, cfg)
        equations = detect_equations(tokens, cfg)

        if table is not None:
            # Table pages: pipe-joined rows for the page text; whatever is
            # left outside the grid still becomes paragraphs and headings.
            text = "".join(line + "\n" for line in table_to_lines(table))
            in_table = {id(t) for t in table_tokens(table)}
            rest = [t for t in tokens if id(t) not in in_table]
            placed = sequence_tokens(rest, [], cfg)
        else:
            placed = sequence_tokens(tokens, columns, cfg)
            text = build_page_text(placed, cfg)

        result = Page(
            page_number=page.page_number,
            width=page.width,
            height=page.height,
            tokens=tokens,
            columns=len(columns),
            has_table=table is not None,
            table=table,
            figures=figures,
            equations=equations,
            text=text,
        )
        blocks = build_blocks(placed, body_font_size, page.page_number, page.width, cfg)
        return result, assemble_page_content(result, blocks, cfg)

    def analyze(self, pages: Sequence[PageInput], title: str = "Unknown", author: str = "Unknown") -> Document:
        cfg = self.cfg
        prepared = self._prepare(pages)

        totals = merge_stats(self._map_pages(self._page_stats, prepared))
        body = pick_body_font_size(totals, cfg)
        scanned = is_scanned(totals.text_length, len(prepared), cfg)
        logger.info(
            "analyzing %d pages: body font %.1f, max font %.1f, %d chars%s",
            len(prepared), body, totals.max_font_size, totals.text_length,
            " (scanned)" if scanned else "",
        )

        doc = Document(
            title=title or "Unknown",
            author=author or "Unknown",
            page_count=len(prepared),
            is_scanned=scanned,
            body_font_size=body,
            max_font_size=totals.max_font_size,
        )
        if scanned:
            doc.pages = [
                Page(page_number=p.page_number, width=p.width, height=p.height, tokens=p.tokens)
                for p in prepared
            ]
            doc.content = scanned_content(cfg)
            return doc

        analyzed = self._map_pages(lambda p: self.analyze_page(p, body), prepared)
        for page, items in analyzed:
            doc.pages.append(page)
            doc.content.extend(items)
        return doc

    def analyze_pdf(self, pdf_path, backend: str = "pymupdf") -> Document:
        from .pdf_source import load_pdf

        pages, meta = load_pdf(Path(pdf_path), backend=backend)
        return self.analyze(pages, title=meta.get("title") or "Unknown", author=meta.get("author") or "Unknown")
