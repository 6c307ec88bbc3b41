from __future__ import annotations

from typing import Optional, Union

from ..config import LayoutConfig
from .heuristics import heading_level, is_heading_candidate
from .models import Heading, Paragraph, PlacedToken
from .text_utils import _is_blank, _is_bullet_text

_DEFAULT_CFG = LayoutConfig()

PARAGRAPH_BREAK = "\n\n"
LINE_BREAK = "\n"
WORD_SPACE = " "


def separator(prev: PlacedToken, item: PlacedToken, cfg: Optional[LayoutConfig] = None) -> str:
    """
    Pick what goes between two adjacent tokens in reading order.

    A column change or a vertical gap above paragraph_gap_factor x font size is
    a paragraph break; a smaller drop beyond the line tolerance is a line
    break; a horizontal gap above word_gap_factor x font size is a space.
    Otherwise the runs belong to the same word.
    """
    cfg = cfg or _DEFAULT_CFG
    a, b = prev.token, item.token
    if prev.column is not None and item.column is not None and prev.column != item.column:
        return PARAGRAPH_BREAK

    horizontal_gap = b.x - (a.x + a.width)
    vertical_gap = a.y - b.y
    paragraph_threshold = b.font_size * cfg.paragraph_gap_factor

    if vertical_gap > paragraph_threshold:
        return PARAGRAPH_BREAK
    if cfg.line_tolerance < vertical_gap <= paragraph_threshold:
        return LINE_BREAK
    if horizontal_gap > b.font_size * cfg.word_gap_factor:
        return WORD_SPACE
    return ""


def build_page_text(placed: list[PlacedToken], cfg: Optional[LayoutConfig] = None) -> str:
    """Plain page text in reading order; bullet glyphs start a '• ' line."""
    cfg = cfg or _DEFAULT_CFG
    out = ""
    prev: Optional[PlacedToken] = None
    after_bullet = False
    for p in placed:
        text = p.token.text
        if _is_blank(text):
            continue
        if _is_bullet_text(text):
            out += "\n• "
            prev, after_bullet = p, True
            continue
        if prev is None:
            out = text.strip()
        elif after_bullet:
            out += text.lstrip()
        else:
            sep = separator(prev, p, cfg)
            out += sep + text.lstrip() if sep else text
        prev, after_bullet = p, False
    return out.strip()


def build_blocks(
    placed: list[PlacedToken],
    body_font_size: float,
    page_number: int,
    page_width: Optional[float] = None,
    cfg: Optional[LayoutConfig] = None,
) -> list[Union[Heading, Paragraph]]:
    """
    Join ordered tokens into Paragraph items and pull out Heading items.

    A token larger than the body size with more than heading_min_chars
    characters is scored; a positive level flushes the open paragraph and
    becomes its own Heading, level 0 is demoted and joined as body text.
    """
    cfg = cfg or _DEFAULT_CFG
    blocks: list[Union[Heading, Paragraph]] = []
    buf = ""
    buf_y: Optional[float] = None
    prev: Optional[PlacedToken] = None
    after_bullet = False

    def flush():
        nonlocal buf, buf_y
        text = buf.strip()
        if text:
            blocks.append(Paragraph(text=text, page_number=page_number, y=buf_y))
        buf, buf_y = "", None

    for p in placed:
        tok = p.token
        if _is_blank(tok.text):
            continue

        if is_heading_candidate(tok, body_font_size, cfg):
            level = heading_level(tok, body_font_size, page_width, cfg)
            if level > 0:
                flush()
                blocks.append(
                    Heading(
                        text=tok.text.strip(),
                        level=level,
                        font_size=tok.font_size,
                        page_number=page_number,
                        y=tok.y,
                    )
                )
                prev, after_bullet = p, False
                continue

        sep = separator(prev, p, cfg) if prev is not None else PARAGRAPH_BREAK
        if sep == PARAGRAPH_BREAK:
            flush()

        if _is_bullet_text(tok.text):
            if buf:
                buf += LINE_BREAK
            else:
                buf_y = tok.y
            buf += tok.text.strip() + " "
            prev, after_bullet = p, True
            continue

        if not buf:
            buf, buf_y = tok.text.strip(), tok.y
        elif after_bullet:
            buf += tok.text.lstrip()
        elif sep:
            buf += sep + tok.text.lstrip()
        else:
            buf += tok.text
        prev, after_bullet = p, False

    flush()
    return blocks
