from __future__ import annotations

import logging
from functools import cmp_to_key
from typing import Optional

from ..config import LayoutConfig
from .models import Column, PlacedToken, Token
from .text_utils import _round_to_step, _trimmed_len

logger = logging.getLogger(__name__)

_DEFAULT_CFG = LayoutConfig()


def detect_columns(tokens: list[Token], page_width: float, cfg: Optional[LayoutConfig] = None) -> list[Column]:
    """
    Cluster the left edges of substantial tokens into column bands.
    Returns an empty or single-element list for single-column pages.
    """
    cfg = cfg or _DEFAULT_CFG
    if not tokens:
        return []

    xs = sorted({
        t.x
        for t in tokens
        if _trimmed_len(t.text) > cfg.substantial_min_chars and t.width > cfg.substantial_min_width
    })

    # Each cluster is [center, members]; center is the running mean.
    clusters: list[list] = []
    for x in xs:
        best = None
        best_dist = cfg.column_cluster_threshold
        for c in clusters:
            dist = abs(c[0] - x)
            if dist < best_dist:
                best, best_dist = c, dist
        if best is None:
            clusters.append([x, [x]])
        else:
            best[1].append(x)
            best[0] = sum(best[1]) / len(best[1])

    significant = sorted(
        (c for c in clusters if len(c[1]) >= cfg.column_min_members),
        key=lambda c: c[0],
    )

    columns: list[Column] = []
    for i, (center, _) in enumerate(significant):
        end_x = (center + significant[i + 1][0]) / 2.0 if i + 1 < len(significant) else float(page_width)
        columns.append(Column(start_x=center - cfg.column_band_margin, end_x=end_x, center_x=center))
    if len(columns) > 1:
        logger.debug("detected %d columns at %s", len(columns), [c.center_x for c in columns])
    return columns


def _column_index(token: Token, columns: list[Column]) -> int:
    cx = token.center_x
    last = len(columns) - 1
    for i, col in enumerate(columns):
        if col.start_x <= cx < col.end_x or (i == last and cx == col.end_x):
            return i
    return 0


def assign_columns(tokens: list[Token], columns: list[Column]) -> list[int]:
    if len(columns) <= 1:
        return [0] * len(tokens)
    return [_column_index(t, columns) for t in tokens]


def _line_sorted(tokens: list[Token], tolerance: float) -> list[Token]:
    def cmp(a: Token, b: Token) -> int:
        if abs(a.y - b.y) < tolerance:
            return (a.x > b.x) - (a.x < b.x)
        return (b.y > a.y) - (b.y < a.y)

    return sorted(tokens, key=cmp_to_key(cmp))


def sequence_tokens(
    tokens: list[Token],
    columns: list[Column],
    cfg: Optional[LayoutConfig] = None,
) -> list[PlacedToken]:
    """
    Put tokens into reading order.

    Single column: top to bottom, left to right within a line.
    Multiple columns: each column is sorted on its own, then the columns are
    merged band by band (y rounded to cfg.band_step), left column first.
    """
    cfg = cfg or _DEFAULT_CFG
    if not tokens:
        return []
    if len(columns) <= 1:
        return [PlacedToken(t, None) for t in _line_sorted(tokens, cfg.line_tolerance)]

    groups: list[list[Token]] = [[] for _ in columns]
    for tok, idx in zip(tokens, assign_columns(tokens, columns)):
        groups[idx].append(tok)
    groups = [_line_sorted(g, cfg.line_tolerance) for g in groups]

    bands = sorted({_round_to_step(t.y, cfg.band_step) for t in tokens}, reverse=True)
    out: list[PlacedToken] = []
    for band in bands:
        for col_idx, group in enumerate(groups):
            for tok in group:
                if abs(_round_to_step(tok.y, cfg.band_step) - band) < cfg.band_match_tolerance:
                    out.append(PlacedToken(tok, col_idx))
    return out


def sort_reading_order(tokens: list[Token], columns: list[Column], cfg: Optional[LayoutConfig] = None) -> list[Token]:
    return [p.token for p in sequence_tokens(tokens, columns, cfg)]
