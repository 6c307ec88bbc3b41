from __future__ import annotations

import logging
import re
from typing import Optional

from ..config import LayoutConfig
from .models import Figure, Token

logger = logging.getLogger(__name__)

_DEFAULT_CFG = LayoutConfig()

FIGURE_LABEL_RE = re.compile(r"^(Figure|Fig\.?|Image|Diagram)\s+(\d+\.?\d*)", re.IGNORECASE)


def detect_figures(tokens: list[Token], cfg: Optional[LayoutConfig] = None) -> list[Figure]:
    """Find caption labels like 'Figure 3' and gather the caption text that follows."""
    cfg = cfg or _DEFAULT_CFG
    figures: list[Figure] = []
    for i, tok in enumerate(tokens):
        m = FIGURE_LABEL_RE.match(tok.text)
        if not m:
            continue
        parts = [tok.text]
        for nxt in tokens[i + 1:i + 1 + cfg.figure_lookahead]:
            dy = tok.y - nxt.y
            if not (-cfg.figure_window_above < dy < cfg.figure_window_below):
                break
            parts.append(nxt.text)
        figures.append(
            Figure(
                label=m.group(0),
                number=m.group(2),
                caption=" ".join(parts).strip(),
                x=tok.x,
                y=tok.y,
            )
        )
    if figures:
        logger.debug("detected figures %s", [f.label for f in figures])
    return figures
