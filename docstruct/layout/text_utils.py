from __future__ import annotations

import math

BULLET_CHARS = frozenset({"•", "◦", "▪", "■", "○", "●"})


def _round_half_up(v: float) -> int:
    # Python's round() is banker's rounding; layout math expects .5 to go up.
    return int(math.floor(float(v) + 0.5))


def _round1(v: float) -> float:
    return _round_half_up(float(v) * 10) / 10.0


def _round_to_step(v: float, step: float) -> float:
    if step <= 0:
        return float(v)
    return _round_half_up(float(v) / step) * step


def _trimmed_len(s: str) -> int:
    return len((s or "").strip())


def _is_blank(s: str) -> bool:
    return not (s or "").strip()


def _is_all_caps(s: str) -> bool:
    t = (s or "").strip()
    if not t:
        return False
    return t == t.upper()


def _is_bullet_text(s: str) -> bool:
    return (s or "").strip() in BULLET_CHARS
