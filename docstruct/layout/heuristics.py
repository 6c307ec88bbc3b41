from __future__ import annotations

from typing import Optional

from ..config import LayoutConfig
from .models import Token
from .text_utils import _is_all_caps

_DEFAULT_CFG = LayoutConfig()

_HEAVY_FONT_MARKERS = ("bold", "black", "heavy")


def is_heading_candidate(token: Token, body_font_size: float, cfg: Optional[LayoutConfig] = None) -> bool:
    cfg = cfg or _DEFAULT_CFG
    return token.font_size > body_font_size and len(token.text.strip()) > cfg.heading_min_chars


def _size_level(ratio: float, cfg: LayoutConfig) -> int:
    if ratio >= cfg.heading_ratio_h1:
        return 1
    if ratio >= cfg.heading_ratio_h2:
        return 2
    if ratio >= cfg.heading_ratio_h3:
        return 3
    return 0


def _estimated_center(token: Token) -> float:
    # Estimated from character count alone; the advance width is not used.
    return token.x + len(token.text.strip()) * token.font_size * 0.5


def heading_style_score(token: Token, page_width: float, cfg: Optional[LayoutConfig] = None) -> int:
    cfg = cfg or _DEFAULT_CFG
    t = token.text.strip()
    score = 0
    font = (token.font_name or "").lower()
    if any(m in font for m in _HEAVY_FONT_MARKERS):
        score += 1
    if _is_all_caps(t) and len(t) > cfg.heading_min_chars:
        score += 1
    if abs(_estimated_center(token) - page_width / 2.0) < page_width * cfg.heading_center_fraction:
        score += 1
    if len(t) < cfg.heading_short_chars:
        score += 1
    return score


def heading_level(
    token: Token,
    body_font_size: float,
    page_width: Optional[float] = None,
    cfg: Optional[LayoutConfig] = None,
) -> int:
    """
    Score a token as a heading: 1-3, or 0 for body text.

    The font-size ratio to the body size picks the base level. Style signals
    (heavy font, all caps, centered, short) can lift a base-0 token to level 3.
    Anything longer than cfg.heading_max_chars is body text.
    """
    cfg = cfg or _DEFAULT_CFG
    t = token.text.strip()
    if not t or len(t) > cfg.heading_max_chars:
        return 0
    if body_font_size <= 0:
        return 0
    width = float(page_width) if page_width and page_width > 0 else cfg.default_page_width

    level = _size_level(token.font_size / body_font_size, cfg)
    if level == 0 and heading_style_score(token, width, cfg) >= cfg.heading_min_score:
        level = 3
    return level
