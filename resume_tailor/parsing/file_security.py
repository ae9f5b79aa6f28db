from __future__ import annotations

from io import BytesIO
from zipfile import BadZipFile, ZipFile

from resume_tailor.core.errors import UnsupportedFormat

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DOC_MIME = "application/msword"
PDF_MIME = "application/pdf"

WORD_MIME_TYPES = {DOCX_MIME, DOC_MIME}

PDF_MAGIC = b"%PDF-"
OLE_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
ZIP_MAGICS = (b"PK\x03\x04", b"PK\x05\x06", b"PK\x07\x08")


def normalize_mime_type(mime_type: str | None) -> str:
    return (mime_type or "").split(";")[0].strip().lower()


def _is_zip_payload(content: bytes) -> bool:
    return any(content.startswith(prefix) for prefix in ZIP_MAGICS)


def _zip_has_paths(content: bytes, prefixes: tuple[str, ...]) -> bool:
    try:
        with ZipFile(BytesIO(content)) as archive:
            names = archive.namelist()
    except BadZipFile:
        return False
    return any(any(name.startswith(prefix) for prefix in prefixes) for name in names)


def validate_upload_signature(*, mime_type: str, content: bytes) -> None:
    mime = normalize_mime_type(mime_type)

    if mime == PDF_MIME:
        if not content.startswith(PDF_MAGIC):
            raise UnsupportedFormat("File signature does not match PDF content.")
        return

    if mime == DOC_MIME and content.startswith(OLE_MAGIC):
        raise UnsupportedFormat("Legacy .doc files are not supported. Please upload DOCX or paste text.")

    if mime in WORD_MIME_TYPES:
        if not _is_zip_payload(content) or not _zip_has_paths(content, ("word/",)):
            raise UnsupportedFormat("File signature does not match DOCX content.")
        return

    raise UnsupportedFormat("Unsupported file type. Please upload DOCX file.")
