from __future__ import annotations

import re
import unicodedata
from io import BytesIO
from urllib.parse import quote

from docx import Document
from docx.document import Document as DocumentObject
from docx.shared import Pt

from resume_tailor.prompts.common import join_present
from resume_tailor.schemas.generation import GeneratedEducation, GeneratedExperience, GeneratedResume
from resume_tailor.schemas.profile import Profile

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

SECTION_ORDER = ("PROFESSIONAL SUMMARY", "EXPERIENCE", "SKILLS", "EDUCATION")

_WHITESPACE_RE = re.compile(r"\s+")
_UNSAFE_FILENAME_RE = re.compile(r'["\\\x00-\x1f\x7f]')


def export_filename(profile: Profile) -> str:
    name = profile.personal_info.full_name or "Resume"
    return f"Resume_{_WHITESPACE_RE.sub('_', name.strip())}.docx"


def content_disposition(filename: str) -> str:
    """Attachment header with a latin-1 safe fallback name and the exact UTF-8 name (RFC 5987)."""
    ascii_name = unicodedata.normalize("NFKD", filename).encode("ascii", "ignore").decode("ascii")
    ascii_name = _UNSAFE_FILENAME_RE.sub("", ascii_name)
    if ascii_name in ("", "Resume_.docx"):
        ascii_name = "Resume.docx"
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename, safe='')}"


def _contact_line(profile: Profile) -> str:
    info = profile.personal_info
    location = join_present([info.address.city, info.address.state, info.address.country])
    return " | ".join([info.email, info.phone, location])


def _add_heading(doc: DocumentObject, title: str) -> None:
    paragraph = doc.add_heading(title, level=1)
    paragraph.paragraph_format.space_before = Pt(10)
    paragraph.paragraph_format.space_after = Pt(5)


def _add_experience(doc: DocumentObject, experiences: list[GeneratedExperience]) -> None:
    for exp in experiences:
        title = doc.add_paragraph()
        run = title.add_run(exp.position)
        run.bold = True
        run.font.size = Pt(12)

        meta = doc.add_paragraph()
        run = meta.add_run(f"{exp.company} | {exp.period}")
        run.italic = True
        run.font.size = Pt(11)

        for achievement in exp.achievements:
            doc.add_paragraph(achievement, style="List Bullet")


def _add_education(doc: DocumentObject, education: list[GeneratedEducation]) -> None:
    for edu in education:
        paragraph = doc.add_paragraph()
        paragraph.add_run(f"{edu.degree} in {edu.field}").bold = True
        paragraph.add_run(f" - {edu.school} ({edu.year})")


def build_resume_document(resume: GeneratedResume, profile: Profile) -> DocumentObject:
    doc = Document()

    header = doc.add_paragraph()
    name_run = header.add_run(profile.personal_info.full_name)
    name_run.bold = True
    name_run.font.size = Pt(16)

    contact = doc.add_paragraph()
    contact.add_run(_contact_line(profile)).font.size = Pt(10)

    summary_title, experience_title, skills_title, education_title = SECTION_ORDER

    _add_heading(doc, summary_title)
    doc.add_paragraph(resume.summary)

    _add_heading(doc, experience_title)
    _add_experience(doc, resume.experience)

    _add_heading(doc, skills_title)
    doc.add_paragraph(", ".join(resume.skills))

    _add_heading(doc, education_title)
    _add_education(doc, resume.education)

    return doc


def export_resume_docx(resume: GeneratedResume, profile: Profile) -> bytes:
    buffer = BytesIO()
    build_resume_document(resume, profile).save(buffer)
    return buffer.getvalue()
