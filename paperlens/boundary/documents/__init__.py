"""
Document text sources.

Exports: PdfTextProvider
"""

from paperlens.boundary.documents.pdf_text_provider import PdfTextProvider

__all__ = ["PdfTextProvider"]
