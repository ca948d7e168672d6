"""Document extraction for upload batches.

Runs every uploaded file through the page-text backend, one file at a time
and one page at a time, and assembles:

- a file-summary turn per extracted file, in upload order
- one shared corpus string made of "--- PDF: <name> ---" blocks

A file that fails to parse is logged, reported as an ExtractionFailure and
left out of both outputs. The remaining files are still processed.
"""

import logging
from collections.abc import Sequence

from chatpdfy.models.schemas import (
    ExtractionBatch,
    ExtractionFailure,
    FileExtraction,
    FileMeta,
    Turn,
    UploadedFile,
)
from chatpdfy.parsing.pdf_parser import (
    PageTextBackend,
    PdfBackendUnavailableError,
    PDFPages,
    PDFParseError,
)

logger = logging.getLogger(__name__)

KIB = 1024
MIB = 1024 * 1024


def format_file_size(size_bytes: int) -> str:
    """Format a byte count as "<n> B", "<n.n> KB" or "<n.n> MB"."""
    if size_bytes < KIB:
        return f"{size_bytes} B"
    if size_bytes < MIB:
        return f"{size_bytes / KIB:.1f} KB"
    return f"{size_bytes / MIB:.1f} MB"


def pages_text(pages: PDFPages) -> str:
    """Join fragments with spaces within a page; end every page with a newline."""
    return "".join(" ".join(fragments) + "\n" for fragments in pages.fragments)


def corpus_block(name: str, text: str) -> str:
    return f"\n--- PDF: {name} ---\n{text}\n"


class DocumentExtractor:
    """Extracts text and summaries from batches of uploaded PDFs."""

    def __init__(self, backend: PageTextBackend | None = None) -> None:
        """Initialize the extractor.

        Args:
            backend: Page-text capability. ``None`` means it has not been
                initialized yet and every batch is refused.
        """
        self._backend = backend

    @property
    def available(self) -> bool:
        return self._backend is not None and self._backend.available

    def extract_file(self, upload: UploadedFile) -> FileExtraction | ExtractionFailure:
        """Extract a single file.

        Args:
            upload: The uploaded file.

        Returns:
            FileExtraction on success, ExtractionFailure if the file could not
            be parsed.
        """
        if self._backend is None:
            raise PdfBackendUnavailableError("PDF backend is not initialized")

        try:
            pages = self._backend.parse(upload.content)
        except PDFParseError as e:
            logger.warning(f"PDF parse error for {upload.name}: {e}")
            return ExtractionFailure(name=upload.name, reason=str(e))

        meta = FileMeta(
            name=upload.name,
            size_label=format_file_size(upload.size),
            page_count=pages.page_count,
        )
        return FileExtraction(
            turn=Turn.file_summary(meta),
            corpus_block=corpus_block(upload.name, pages_text(pages)),
        )

    def extract(self, uploads: Sequence[UploadedFile]) -> ExtractionBatch:
        """Extract a whole upload batch in order.

        Args:
            uploads: Files in the order they were selected.

        Returns:
            ExtractionBatch with summary turns, the trimmed corpus and the
            files that were skipped.

        Raises:
            PdfBackendUnavailableError: If the backend is not initialized.
                Nothing is extracted in that case.
        """
        if not uploads:
            return ExtractionBatch()

        if not self.available:
            logger.error("PDF backend not loaded yet, refusing upload batch")
            raise PdfBackendUnavailableError("PDF backend is not initialized")

        batch = ExtractionBatch()
        blocks: list[str] = []
        for upload in uploads:
            result = self.extract_file(upload)
            if isinstance(result, ExtractionFailure):
                batch.failures.append(result)
                continue
            batch.turns.append(result.turn)
            blocks.append(result.corpus_block)

        batch.corpus = "".join(blocks).strip()
        logger.info(
            f"Extracted {len(batch.turns)} of {len(uploads)} PDF(s), "
            f"{len(batch.corpus)} characters of context"
        )
        return batch
