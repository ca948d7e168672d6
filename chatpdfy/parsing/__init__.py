"""PDF parsing utilities for document processing.

Transforms uploaded PDFs into plain text for the conversation.

Responsibilities:
    - PDF text extraction with pypdf, page by page
    - Upload validation (size limit, PDF header)
    - File summaries (name, size label, page count)
    - Corpus assembly across an upload batch
"""

from chatpdfy.parsing.extractor import DocumentExtractor, format_file_size
from chatpdfy.parsing.pdf_parser import (
    PageTextBackend,
    PdfBackendUnavailableError,
    PDFPages,
    PDFParseError,
    PypdfBackend,
    parse_pdf,
)

__all__ = [
    "DocumentExtractor",
    "PDFPages",
    "PDFParseError",
    "PageTextBackend",
    "PdfBackendUnavailableError",
    "PypdfBackend",
    "format_file_size",
    "parse_pdf",
]
