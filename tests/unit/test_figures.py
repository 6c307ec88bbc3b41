from docstruct.layout.figures import detect_figures
from docstruct.layout.models import Token


def _tok(text, x, y):
    return Token(text=text, x=x, y=y, width=8.0 * len(text), height=10, font_size=10)


def test_caption_collects_following_tokens_in_window():
    toks = [
        _tok("Some body text", 72, 400),
        _tok("Figure 2:", 72, 300),
        _tok("Results over", 130, 300),
        _tok("time", 72, 290),
        _tok("Next paragraph", 72, 200),
        _tok("stray", 200, 300),
    ]
    figs = detect_figures(toks)
    assert len(figs) == 1
    f = figs[0]
    assert f.label == "Figure 2"
    assert f.number == "2"
    assert f.caption == "Figure 2: Results over time"
    assert (f.x, f.y) == (72, 300)
    assert f.alt_text == ""


def test_label_variants_are_case_insensitive():
    toks = [_tok("FIG. 3", 72, 500), _tok("fig 4.1", 72, 300), _tok("Diagram 7", 72, 100), _tok("image 12", 72, 50)]
    figs = detect_figures(toks)
    assert [f.number for f in figs] == ["3", "4.1", "7", "12"]
    assert figs[0].label == "FIG. 3"


def test_token_above_window_stops_caption():
    toks = [_tok("Figure 1", 72, 300), _tok("header", 72, 330), _tok("not caption", 72, 300)]
    assert detect_figures(toks)[0].caption == "Figure 1"


def test_lookahead_is_limited_to_nine_tokens():
    toks = [_tok("Figure 5", 72, 300)] + [_tok(f"w{i}", 140 + i * 20, 300) for i in range(12)]
    caption = detect_figures(toks)[0].caption
    assert caption.split() == ["Figure", "5"] + [f"w{i}" for i in range(9)]


def test_words_that_only_contain_figure_are_not_labels():
    toks = [_tok("Figures show", 72, 300), _tok("see Figure 1", 72, 280), _tok("Figure", 72, 260)]
    assert detect_figures(toks) == []
    assert detect_figures([]) == []
