from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class LayoutConfig:
    # Column detection
    column_cluster_threshold: float = 40.0
    column_band_margin: float = 20.0
    column_min_members: int = 3
    substantial_min_chars: int = 3  # trimmed length must exceed this
    substantial_min_width: float = 10.0

    # Reading order / line grouping
    line_tolerance: float = 5.0
    band_step: float = 5.0
    band_match_tolerance: float = 2.0

    # Table detection
    table_row_tolerance: float = 5.0
    table_min_cell_width: float = 5.0
    table_min_font_size: float = 8.0
    table_min_cells: int = 2
    table_max_cells: int = 4
    table_min_rows: int = 5
    table_align_tolerance: float = 30.0

    # Figures
    figure_lookahead: int = 9
    figure_window_above: float = 20.0
    figure_window_below: float = 30.0

    # Equations
    equation_band: float = 10.0
    equation_min_tokens: int = 3

    # Text joining
    paragraph_gap_factor: float = 2.5
    word_gap_factor: float = 0.1

    # Headings
    heading_ratio_h1: float = 1.8
    heading_ratio_h2: float = 1.4
    heading_ratio_h3: float = 1.1
    heading_min_chars: int = 3
    heading_max_chars: int = 120
    heading_short_chars: int = 60
    heading_center_fraction: float = 0.1
    heading_min_score: int = 2
    default_page_width: float = 600.0

    # Document level
    default_body_font_size: float = 10.0
    scanned_min_total_chars: int = 100
    scanned_min_chars_per_page: float = 50.0
    scanned_notice: str = "This is a scanned PDF. Vision model processing needed for full accessibility."
    content_order: str = "grouped"  # "grouped" | "positional"

    # Execution
    workers: int = 1
    max_pages: Optional[int] = None
    max_tokens_per_page: Optional[int] = None


def _env_float(name: str, default: float) -> float:
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def load_config(**overrides) -> LayoutConfig:
    """
    Build a LayoutConfig from DOCSTRUCT_* environment variables.
    Keyword overrides win over the environment.
    """
    base = LayoutConfig()
    content_order = (os.environ.get("DOCSTRUCT_CONTENT_ORDER") or base.content_order).strip().lower()
    if content_order not in ("grouped", "positional"):
        content_order = base.content_order

    values = dict(
        column_cluster_threshold=_env_float("DOCSTRUCT_COLUMN_THRESHOLD", base.column_cluster_threshold),
        line_tolerance=_env_float("DOCSTRUCT_LINE_TOLERANCE", base.line_tolerance),
        table_min_rows=_env_int("DOCSTRUCT_TABLE_MIN_ROWS", base.table_min_rows),
        table_align_tolerance=_env_float("DOCSTRUCT_TABLE_ALIGN_TOLERANCE", base.table_align_tolerance),
        equation_band=_env_float("DOCSTRUCT_EQUATION_BAND", base.equation_band),
        paragraph_gap_factor=_env_float("DOCSTRUCT_PARAGRAPH_GAP_FACTOR", base.paragraph_gap_factor),
        default_body_font_size=_env_float("DOCSTRUCT_DEFAULT_BODY_FONT_SIZE", base.default_body_font_size),
        scanned_min_total_chars=_env_int("DOCSTRUCT_SCANNED_MIN_CHARS", base.scanned_min_total_chars),
        scanned_min_chars_per_page=_env_float("DOCSTRUCT_SCANNED_MIN_CHARS_PER_PAGE", base.scanned_min_chars_per_page),
        content_order=content_order,
        workers=max(1, _env_int("DOCSTRUCT_WORKERS", base.workers) or 1),
        max_pages=_env_int("DOCSTRUCT_MAX_PAGES", base.max_pages),
        max_tokens_per_page=_env_int("DOCSTRUCT_MAX_TOKENS_PER_PAGE", base.max_tokens_per_page),
    )
    values.update(overrides)
    return LayoutConfig(**values)
