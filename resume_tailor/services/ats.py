from __future__ import annotations

import math
import re

from resume_tailor.schemas.requests import AtsCheckResponse

_NON_WORD_RE = re.compile(r"[^\w\s]")

MAX_KEYWORDS = 20
MIN_KEYWORD_LEN = 4


def extract_keywords(text: str, limit: int = MAX_KEYWORDS) -> list[str]:
    words = _NON_WORD_RE.sub(" ", (text or "").lower()).split()
    seen: dict[str, None] = {}
    for word in words:
        if len(word) >= MIN_KEYWORD_LEN and word not in seen:
            seen[word] = None
    return list(seen)[:limit]


def check_ats(resume_text: str, job_description: str) -> AtsCheckResponse:
    """Local keyword overlap between a resume and a job description.

    A job keyword counts as matched when any resume keyword contains it.
    """
    jd_keywords = extract_keywords(job_description)
    resume_keywords = extract_keywords(resume_text)

    matched = [kw for kw in jd_keywords if any(kw in rk for rk in resume_keywords)]
    missing = [kw for kw in jd_keywords if kw not in matched]
    score = math.floor(len(matched) / len(jd_keywords) * 100 + 0.5) if jd_keywords else 0

    return AtsCheckResponse(score=score, matched_keywords=matched, missing_keywords=missing)
