from __future__ import annotations

import logging
from typing import Optional

from ..config import LayoutConfig
from .models import Table, Token
from .text_utils import _is_blank, _round_half_up, _trimmed_len

logger = logging.getLogger(__name__)

_DEFAULT_CFG = LayoutConfig()


def _group_rows(tokens: list[Token], tolerance: float) -> list[list[Token]]:
    # A token joins the first row whose anchor y is within tolerance.
    anchors: list[float] = []
    rows: list[list[Token]] = []
    for t in tokens:
        for i, y in enumerate(anchors):
            if abs(y - t.y) < tolerance:
                rows[i].append(t)
                break
        else:
            anchors.append(t.y)
            rows.append([t])
    return rows


def _is_candidate_row(row: list[Token], cfg: LayoutConfig) -> bool:
    substantial = sum(1 for t in row if _trimmed_len(t.text) > cfg.substantial_min_chars)
    return cfg.table_min_cells <= substantial <= cfg.table_max_cells


def detect_table(tokens: list[Token], cfg: Optional[LayoutConfig] = None) -> Optional[Table]:
    """
    Look for a rectangular, visually aligned grid among the page tokens.

    Returns None when there are too few candidate rows (usually a multi-column
    text page rather than a table), when rows disagree on column count, or when
    any cell drifts too far from its column's mean x.
    """
    cfg = cfg or _DEFAULT_CFG
    meaningful = [
        t for t in tokens
        if (not _is_blank(t.text))
        and t.width > cfg.table_min_cell_width
        and t.font_size > cfg.table_min_font_size
    ]
    if not meaningful:
        return None

    rows = [r for r in _group_rows(meaningful, cfg.table_row_tolerance) if _is_candidate_row(r, cfg)]
    if len(rows) < cfg.table_min_rows:
        return None

    rows = [sorted(r, key=lambda t: t.x) for r in rows]
    counts = [len(r) for r in rows]
    n_cols = _round_half_up(sum(counts) / len(counts))
    if any(c != n_cols for c in counts):
        logger.debug("table rejected: column counts %s", counts)
        return None

    col_means = [sum(r[i].x for r in rows) / len(rows) for i in range(n_cols)]
    for r in rows:
        for i, cell in enumerate(r):
            if abs(cell.x - col_means[i]) >= cfg.table_align_tolerance:
                logger.debug("table rejected: cell %r off column mean %.1f", cell.text, col_means[i])
                return None

    rows.sort(key=lambda r: -max(t.y for t in r))
    grid = [[t for t in r if not _is_blank(t.text)] for r in rows]
    logger.debug("table detected: %d rows x %d columns", len(grid), n_cols)
    return Table(rows=grid)


def table_to_lines(table: Optional[Table]) -> list[str]:
    """Render each row as its cell texts joined by ' | '."""
    if table is None:
        return []
    out: list[str] = []
    for row in table.rows:
        cells = [c.text.strip() for c in row if c.text.strip()]
        if cells:
            out.append(" | ".join(cells))
    return out


def table_tokens(table: Optional[Table]) -> list[Token]:
    if table is None:
        return []
    return [c for row in table.rows for c in row]
