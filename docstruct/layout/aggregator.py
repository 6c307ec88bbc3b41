from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Union

from ..config import LayoutConfig
from .models import (
    EquationItem,
    FigureItem,
    Heading,
    Page,
    Paragraph,
    TableItem,
    Token,
)
from .text_utils import _round1

logger = logging.getLogger(__name__)

_DEFAULT_CFG = LayoutConfig()


@dataclass
class PageStats:
    # font size -> character count, in first-seen order
    char_counts: dict[float, int] = field(default_factory=dict)
    max_font_size: float = 0.0
    text_length: int = 0


def collect_page_stats(tokens: Iterable[Token]) -> PageStats:
    stats = PageStats()
    for t in tokens:
        if t.font_size <= 0:
            continue
        n = len(t.text.strip())
        size = _round1(t.font_size)
        stats.char_counts[size] = stats.char_counts.get(size, 0) + n
        stats.text_length += n
        if t.font_size > stats.max_font_size:
            stats.max_font_size = t.font_size
    return stats


def merge_stats(parts: Iterable[PageStats]) -> PageStats:
    """Fold per-page stats in page order; first-seen size order is preserved."""
    total = PageStats()
    for s in parts:
        for size, n in s.char_counts.items():
            total.char_counts[size] = total.char_counts.get(size, 0) + n
        total.text_length += s.text_length
        total.max_font_size = max(total.max_font_size, s.max_font_size)
    return total


def pick_body_font_size(stats: PageStats, cfg: Optional[LayoutConfig] = None) -> float:
    """The size carrying the most characters; ties go to the size seen first."""
    cfg = cfg or _DEFAULT_CFG
    best_size: Optional[float] = None
    best_count = -1
    for size, n in stats.char_counts.items():
        if n > best_count:
            best_size, best_count = size, n
    if best_size is None or best_count <= 0:
        return float(cfg.default_body_font_size)
    return float(best_size)


def is_scanned(total_text_length: int, page_count: int, cfg: Optional[LayoutConfig] = None) -> bool:
    cfg = cfg or _DEFAULT_CFG
    if total_text_length < cfg.scanned_min_total_chars:
        return True
    if page_count > 0 and total_text_length / page_count < cfg.scanned_min_chars_per_page:
        return True
    return False


def scanned_content(cfg: Optional[LayoutConfig] = None) -> list[Paragraph]:
    cfg = cfg or _DEFAULT_CFG
    return [Paragraph(text=cfg.scanned_notice, page_number=0)]


ContentItem = Union[Heading, Paragraph, TableItem, FigureItem, EquationItem]


def assemble_page_content(
    page: Page,
    blocks: list[Union[Heading, Paragraph]],
    cfg: Optional[LayoutConfig] = None,
) -> list[ContentItem]:
    """
    Lay out one page's content items.

    Grouped order (default): text blocks in reading order, then the table,
    then figures, then equations, each in detection order. Positional order
    sorts the same items by their anchor y, top of the page first.
    """
    cfg = cfg or _DEFAULT_CFG
    items: list[ContentItem] = list(blocks)
    if page.has_table and page.table is not None:
        top = max((c.y for row in page.table.rows for c in row), default=None)
        items.append(TableItem(table=page.table, page_number=page.page_number, y=top))
    for fig in page.figures:
        items.append(FigureItem(figure=fig, page_number=page.page_number, y=fig.y))
    for i, eq in enumerate(page.equations):
        items.append(EquationItem(equation=eq, index=i, page_number=page.page_number, y=eq.y))

    if cfg.content_order == "positional":
        items.sort(key=lambda it: (it.y is None, -(it.y or 0.0)))
    return items
