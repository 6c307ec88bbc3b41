from .config import LayoutConfig, load_config
from .layout import DocumentAnalyzer, main

__all__ = ["DocumentAnalyzer", "LayoutConfig", "load_config", "main"]
