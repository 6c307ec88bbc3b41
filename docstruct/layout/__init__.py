from .runner import main
from .pipeline import DocumentAnalyzer
from .models import Document, Page, PageInput, Token

__all__ = ["DocumentAnalyzer", "Document", "Page", "PageInput", "Token", "main"]
