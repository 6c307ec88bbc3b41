from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from ..config import LayoutConfig
from .models import Equation, Token

logger = logging.getLogger(__name__)

_DEFAULT_CFG = LayoutConfig()

MATH_SYMBOL_RE = re.compile(r"[∑∫∂√∞≈≠≤≥±×÷∈∉⊂⊃∪∩∀∃∇∆Α-Ωα-ω]")
MATH_PATTERN_RE = re.compile(r"^[a-zA-Z]\s*=\s*|^[xy]\^[0-9]|[₀₁₂₃₄₅₆₇₈₉]|[⁰¹²³⁴⁵⁶⁷⁸⁹]")
# One character that may sit inside an equation without being math by itself.
EQUATION_SAFE_RE = re.compile(r"^[a-zA-Z0-9+\-*/=()\[\]{}.,\s]$")


def _is_math_bearing(text: str) -> bool:
    return bool(MATH_SYMBOL_RE.search(text) or MATH_PATTERN_RE.search(text))


@dataclass
class _Span:
    tokens: list[Token] = field(default_factory=list)
    start_y: Optional[float] = None

    def within(self, tok: Token, band: float) -> bool:
        return self.start_y is not None and abs(tok.y - self.start_y) < band


def _close(span: _Span, out: list[Equation], min_tokens: int) -> _Span:
    if len(span.tokens) >= min_tokens:
        out.append(
            Equation(
                text=" ".join(t.text for t in span.tokens),
                tokens=list(span.tokens),
                y=span.start_y,
            )
        )
    return _Span()


def detect_equations(tokens: list[Token], cfg: Optional[LayoutConfig] = None) -> list[Equation]:
    """
    Collect runs of math-bearing tokens into opaque equation spans.

    Tokens are scanned in their original order. A span stays open while
    math-bearing tokens (or single equation-safe characters) arrive within
    cfg.equation_band of the span's first token. Spans shorter than
    cfg.equation_min_tokens are dropped as noise.
    """
    cfg = cfg or _DEFAULT_CFG
    out: list[Equation] = []
    span = _Span()
    for tok in tokens:
        if _is_math_bearing(tok.text):
            if span.start_y is None or span.within(tok, cfg.equation_band):
                if span.start_y is None:
                    span.start_y = tok.y
                span.tokens.append(tok)
            else:
                span = _close(span, out, cfg.equation_min_tokens)
                span.tokens.append(tok)
                span.start_y = tok.y
        elif span.tokens:
            if span.within(tok, cfg.equation_band) and EQUATION_SAFE_RE.match(tok.text):
                span.tokens.append(tok)
            else:
                span = _close(span, out, cfg.equation_min_tokens)
    _close(span, out, cfg.equation_min_tokens)
    if out:
        logger.debug("detected %d equations", len(out))
    return out
