"""PDF parsing module using pypdf.

Turns raw PDF bytes into per-page text fragments with validation.
"""

import io
import logging
from typing import Protocol

from pydantic import BaseModel, Field
from pypdf import PageObject, PdfReader
from pypdf.errors import PdfReadError

logger = logging.getLogger(__name__)

PDF_MAGIC_BYTES = b"%PDF"


class PDFPages(BaseModel):
    """Text fragments extracted from every page of a PDF.

    Attributes:
        fragments: One list of text fragments per page, in page order.
    """

    fragments: list[list[str]] = Field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.fragments)


class PDFParseError(Exception):
    """Raised when a single PDF cannot be parsed."""

    pass


class PdfBackendUnavailableError(RuntimeError):
    """Raised when the page-extraction capability is not initialized."""

    pass


class PageTextBackend(Protocol):
    """Capability that turns raw PDF bytes into per-page text fragments."""

    @property
    def available(self) -> bool: ...

    def parse(self, file_content: bytes) -> PDFPages: ...


def _validate_pdf_bytes(file_content: bytes) -> None:
    """Validate PDF file content before parsing.

    Args:
        file_content: Raw bytes of the PDF file.

    Raises:
        PDFParseError: If validation fails.
    """
    if not file_content:
        raise PDFParseError("Empty file provided")

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise PDFParseError("Invalid PDF: file does not start with PDF header")


def _page_fragments(page: PageObject) -> list[str]:
    """Collect the text fragments pypdf reports for one page."""
    fragments: list[str] = []

    def visit(text: str, *_args: object) -> None:
        fragment = text.strip()
        if fragment:
            fragments.append(fragment)

    page.extract_text(visitor_text=visit)
    return fragments


def parse_pdf(file_content: bytes) -> PDFPages:
    """Parse a PDF file and extract text fragments page by page.

    A page whose text cannot be extracted contributes an empty fragment
    list so page numbering stays intact.

    Args:
        file_content: Raw bytes of the PDF file.

    Returns:
        PDFPages with one fragment list per page.

    Raises:
        PDFParseError: If the file is invalid, empty, or corrupt.
    """
    _validate_pdf_bytes(file_content)

    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = list(reader.pages)
    except PdfReadError as e:
        raise PDFParseError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise PDFParseError(f"Failed to read PDF: {e}") from e

    fragments: list[list[str]] = []
    for i, page in enumerate(pages):
        try:
            fragments.append(_page_fragments(page))
        except Exception as e:
            logger.warning(f"Failed to extract text from page {i + 1}: {e}")
            fragments.append([])

    if not any(fragments):
        logger.warning("PDF contains no extractable text (may be scanned/image-based)")

    return PDFPages(fragments=fragments)


class PypdfBackend:
    """Page-extraction capability backed by pypdf."""

    @property
    def available(self) -> bool:
        return True

    def parse(self, file_content: bytes) -> PDFPages:
        return parse_pdf(file_content)
