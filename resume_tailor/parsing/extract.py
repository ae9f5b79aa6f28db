from __future__ import annotations

import logging
from io import BytesIO

from docx import Document
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from resume_tailor.core.errors import EmptyExtraction, UnsupportedFormat

from .file_security import PDF_MIME, WORD_MIME_TYPES, normalize_mime_type, validate_upload_signature
from .models import ExtractedDocument

logger = logging.getLogger(__name__)

PDF_DISABLED_MESSAGE = 'PDF support is limited. Please upload DOCX instead, or use the "Paste Text" option.'
UNSUPPORTED_MESSAGE = "Unsupported file type. Please upload DOCX file."
TOO_LITTLE_TEXT_MESSAGE = (
    "Could not extract enough text from file. "
    "Please make sure your resume contains text (not just images)."
)


def _extract_docx(content: bytes) -> tuple[str, int]:
    try:
        document = Document(BytesIO(content))
    except Exception as exc:  # python-docx raises a mix of zip/xml/key errors
        raise UnsupportedFormat("Unable to read this Word document. Please upload DOCX or paste text.") from exc

    lines = [p.text.strip() for p in document.paragraphs if p.text and p.text.strip()]
    for table in document.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text and cell.text.strip()]
            if cells:
                lines.append(" | ".join(cells))
    return "\n".join(lines), len(document.paragraphs)


def _extract_pdf(content: bytes) -> tuple[str, int, list[str]]:
    warnings: list[str] = []
    try:
        reader = PdfReader(BytesIO(content))
        pages: list[str] = []
        for index, page in enumerate(reader.pages, start=1):
            page_text = (page.extract_text() or "").strip()
            if page_text:
                pages.append(page_text)
            else:
                warnings.append(f"No extractable text on page {index}.")
    except PdfReadError as exc:
        raise UnsupportedFormat("Unable to extract text from this PDF file.") from exc
    return "\n\n".join(pages), len(reader.pages), warnings


def extract_document(
    content: bytes,
    mime_type: str,
    filename: str = "",
    *,
    pdf_enabled: bool = False,
) -> ExtractedDocument:
    mime = normalize_mime_type(mime_type)

    if mime == PDF_MIME and not pdf_enabled:
        raise UnsupportedFormat(PDF_DISABLED_MESSAGE)
    if mime != PDF_MIME and mime not in WORD_MIME_TYPES:
        raise UnsupportedFormat(UNSUPPORTED_MESSAGE)

    validate_upload_signature(mime_type=mime, content=content)

    if mime == PDF_MIME:
        text, page_count, warnings = _extract_pdf(content)
        doc = ExtractedDocument(
            source_type="pdf",
            mime_type=mime,
            filename=filename,
            text=text,
            pages=page_count,
            warnings=warnings,
        )
    else:
        text, paragraph_count = _extract_docx(content)
        doc = ExtractedDocument(
            source_type="docx",
            mime_type=mime,
            filename=filename,
            text=text,
            paragraphs=paragraph_count,
        )

    logger.info(
        "document_extracted source_type=%s filename=%s characters=%s warnings=%s",
        doc.source_type,
        filename or "-",
        doc.characters,
        len(doc.warnings),
    )
    return doc


def extract_text(content: bytes, mime_type: str, filename: str = "", *, pdf_enabled: bool = False) -> str:
    return extract_document(content, mime_type, filename, pdf_enabled=pdf_enabled).text


def ensure_min_length(text: str | None, minimum: int, message: str = TOO_LITTLE_TEXT_MESSAGE) -> str:
    clean = (text or "").strip()
    if len(clean) < minimum:
        raise EmptyExtraction(message)
    return clean
