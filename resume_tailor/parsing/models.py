from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

SourceType = Literal["docx", "pdf"]


class ExtractedDocument(BaseModel):
    source_type: SourceType
    mime_type: str
    filename: str = ""
    text: str
    pages: int | None = None
    paragraphs: int | None = None
    warnings: list[str] = Field(default_factory=list)

    @property
    def characters(self) -> int:
        return len(self.text.strip())
