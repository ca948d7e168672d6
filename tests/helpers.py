"""Test doubles shared across unit and integration tests."""

import asyncio
from collections.abc import Sequence

from chatpdfy.models.schemas import OutgoingMessage
from chatpdfy.parsing.pdf_parser import PDFPages, PDFParseError


def make_pdf(pages: Sequence[str], padding: int = 0) -> bytes:
    """Build a minimal PDF with one line of Helvetica text per page.

    Page text must not contain parentheses or backslashes. ``padding`` adds a
    comment of that many bytes after the header to inflate the file size.
    """
    count = len(pages)
    kids = " ".join(f"{4 + 2 * i} 0 R" for i in range(count))
    objects: list[bytes] = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {count} >>".encode(),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for i, text in enumerate(pages):
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                "/Resources << /Font << /F1 3 0 R >> >> "
                f"/Contents {5 + 2 * i} 0 R >>"
            ).encode()
        )
        stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode()
        objects.append(
            f"<< /Length {len(stream)} >>\nstream\n".encode() + stream + b"\nendstream"
        )

    out = bytearray(b"%PDF-1.4\n")
    if padding:
        out += b"%" + b"x" * padding + b"\n"
    offsets: list[int] = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"

    xref_at = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_at}\n%%EOF\n"
    ).encode()
    return bytes(out)


class FakePageBackend:
    """Page-text backend returning canned fragments keyed by file content."""

    def __init__(self, documents: dict[bytes, list[list[str]]], available: bool = True) -> None:
        self.documents = documents
        self._available = available
        self.parsed: list[bytes] = []

    @property
    def available(self) -> bool:
        return self._available

    def parse(self, file_content: bytes) -> PDFPages:
        self.parsed.append(file_content)
        if file_content not in self.documents:
            raise PDFParseError("Invalid PDF: file does not start with PDF header")
        return PDFPages(fragments=self.documents[file_content])


class ScriptedCompletion:
    """Completion backend answering from a script of replies.

    Every payload is recorded. With ``hold()`` active, calls block until
    ``release()`` so tests can act while a request is in flight.
    """

    def __init__(self, replies: Sequence[str | Exception] = ()) -> None:
        self.replies = list(replies)
        self.payloads: list[list[OutgoingMessage]] = []
        self.started = asyncio.Event()
        self._gate: asyncio.Event | None = None

    def hold(self) -> None:
        self._gate = asyncio.Event()

    def release(self) -> None:
        if self._gate is not None:
            self._gate.set()

    async def complete(self, messages: Sequence[OutgoingMessage]) -> str:
        self.payloads.append(list(messages))
        self.started.set()
        if self._gate is not None:
            await self._gate.wait()
        reply = self.replies.pop(0) if self.replies else "ok"
        if isinstance(reply, Exception):
            raise reply
        return reply
