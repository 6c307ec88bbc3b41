from __future__ import annotations

import logging
from typing import Iterable, Mapping

from .models import Token

logger = logging.getLogger(__name__)


def _glyph_run_to_token(rec: Mapping) -> Token | None:
    text = rec.get("str", rec.get("text"))
    transform = rec.get("transform")
    if text is None or transform is None:
        return None
    try:
        a, _, _, d, e, f = (float(v) for v in list(transform)[:6])
    except Exception:
        return None
    font_size = abs(a) or abs(d)
    try:
        width = float(rec.get("width") or 0.0)
        height = float(rec.get("height") or 0.0)
    except Exception:
        return None
    return Token(
        text=str(text),
        x=e,
        y=f,
        width=width,
        height=height,
        font_size=font_size,
        font_name=str(rec.get("fontName") or rec.get("font_name") or "unknown"),
    )


def normalize_glyph_runs(records: Iterable[Mapping]) -> list[Token]:
    """
    Map raw text-layer glyph runs to Tokens.

    A record looks like ``{"str", "transform": [a, b, c, d, e, f], "width",
    "height", "fontName"}``: (e, f) is the run origin and |a| the font size.
    Records without text or transform, or with unparseable geometry, are dropped.
    """
    out: list[Token] = []
    dropped = 0
    for rec in records or []:
        if not isinstance(rec, Mapping):
            dropped += 1
            continue
        tok = _glyph_run_to_token(rec)
        if tok is None:
            dropped += 1
            continue
        out.append(tok)
    if dropped:
        logger.debug("dropped %d malformed glyph runs", dropped)
    return out


def usable_tokens(tokens: Iterable[Token]) -> list[Token]:
    # font_size 0 is invalid input; detectors never see it.
    return [t for t in tokens if t.font_size > 0]
