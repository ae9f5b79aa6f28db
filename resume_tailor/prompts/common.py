from __future__ import annotations


def na(value: str | None) -> str:
    text = (value or "").strip()
    return text or "N/A"


def join_present(parts: list[str], sep: str = ", ") -> str:
    return sep.join(part.strip() for part in parts if part and part.strip())


def period(start: str, end: str, current: bool) -> str:
    finish = "Present" if current else (end or "").strip()
    return f"{(start or '').strip()} - {finish}".strip()
