import pytest
from pydantic import ValidationError

from docstruct.layout.models import Token
from docstruct.layout.tokens import normalize_glyph_runs, usable_tokens


def test_glyph_run_maps_transform_to_token():
    recs = [
        {"str": "Hello", "transform": [12.04, 0, 0, 12.04, 72.123, 700.06], "width": 30.26, "height": 12, "fontName": "g_d0_f1"},
    ]
    out = normalize_glyph_runs(recs)
    assert len(out) == 1
    t = out[0]
    assert t.text == "Hello"
    assert t.x == 72.1
    assert t.y == 700.1
    assert t.width == 30.3
    assert t.font_size == 12.0
    assert t.font_name == "g_d0_f1"


def test_negative_scale_gives_positive_font_size():
    out = normalize_glyph_runs([{"str": "x", "transform": [-9.5, 0, 0, -9.5, 10, 10]}])
    assert out[0].font_size == 9.5
    assert out[0].font_name == "unknown"
    assert out[0].width == 0.0


def test_malformed_records_are_dropped():
    recs = [
        {"transform": [10, 0, 0, 10, 1, 1]},  # no text
        {"str": "no position"},
        {"str": "bad", "transform": ["a", 0, 0, 10, 1, 1]},
        {"str": "short", "transform": [10, 0]},
        "not a record",
        {"str": "ok", "transform": [10, 0, 0, 10, 1, 1]},
    ]
    out = normalize_glyph_runs(recs)
    assert [t.text for t in out] == ["ok"]


def test_empty_input():
    assert normalize_glyph_runs([]) == []
    assert normalize_glyph_runs(None) == []


def test_usable_tokens_drops_zero_font_size():
    toks = [
        Token(text="keep", x=0, y=0, font_size=10),
        Token(text="drop", x=0, y=0, font_size=0),
    ]
    assert [t.text for t in usable_tokens(toks)] == ["keep"]


def test_token_is_immutable_and_rounded():
    t = Token(text="a", x=1.26, y=2.24, width=3.35, height=1, font_size=10.04)
    assert (t.x, t.y, t.font_size) == (1.3, 2.2, 10.0)
    with pytest.raises(ValidationError):
        t.x = 5


def test_token_rounding_sends_halves_up():
    t = Token(text="a", x=0.25, y=1.75, width=2.5, font_size=10.25)
    assert (t.x, t.y, t.width, t.font_size) == (0.3, 1.8, 2.5, 10.3)
