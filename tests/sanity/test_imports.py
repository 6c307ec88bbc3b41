import pytest


def test_imports():
    """
    Smoke test to ensure the public modules import without error.
    This catches syntax errors, missing dependencies, or circular imports.
    """
    try:
        from docstruct import DocumentAnalyzer, LayoutConfig, load_config, main
        from docstruct.layout import pdf_source, runner
    except ImportError as e:
        pytest.fail(f"Failed to import core modules: {e}")


def test_analyzer_builds_from_environment():
    from docstruct import DocumentAnalyzer

    analyzer = DocumentAnalyzer()
    doc = analyzer.analyze([])
    assert doc.pages == []
