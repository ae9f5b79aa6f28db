from __future__ import annotations

from resume_tailor.schemas.profile import Profile

from .common import join_present, na, period

RESUME_OUTPUT_EXAMPLE = """{
  "resume": {
    "summary": "professional summary here",
    "experience": [
      {
        "company": "Company Name",
        "position": "Job Title",
        "period": "MM/YYYY - MM/YYYY",
        "achievements": ["bullet point 1", "bullet point 2", "bullet point 3"]
      }
    ],
    "skills": ["skill1", "skill2", "skill3"],
    "education": [
      {
        "degree": "Degree",
        "field": "Field",
        "school": "School Name",
        "year": "Year"
      }
    ]
  },
  "email": "Professional email/cover letter here (3-4 paragraphs, reference specific JD requirements)",
  "atsScore": 85,
  "matchedKeywords": ["keyword1", "keyword2"],
  "missingKeywords": ["keyword1", "keyword2"]
}"""

RESUME_RULES = """1. ATS COMPLIANCE (CRITICAL):
   - Use standard section headers: PROFESSIONAL SUMMARY, EXPERIENCE, SKILLS, EDUCATION
   - No tables, columns, text boxes, or graphics
   - Simple bullet points (•)
   - Standard fonts only
   - Keywords naturally integrated (not keyword stuffed)

2. CONTENT STRATEGY:
   - Write a compelling 2-3 sentence professional summary highlighting relevant experience
   - Select and prioritize experiences most relevant to this job
   - Only use roles listed in the candidate profile; never invent employers or positions
   - Rewrite achievement bullets to match job requirements
   - Use action verbs and quantify results where possible
   - Include relevant keywords from the job description naturally

3. SCORING:
   - atsScore is an integer from 0 to 100 estimating keyword and requirement coverage
   - matchedKeywords lists job description keywords the resume covers
   - missingKeywords lists important job description keywords the candidate lacks"""


def render_contact(profile: Profile) -> str:
    info = profile.personal_info
    online = profile.online_presence
    location = join_present([info.address.city, info.address.state, info.address.country])
    lines = [
        f"Name: {na(info.full_name)}",
        f"Email: {na(info.email)}",
        f"Phone: {na(info.phone)}",
        f"LinkedIn: {na(online.linkedin)}",
        f"Location: {na(location)}",
    ]
    for label, value in (("GitHub", online.github), ("Portfolio", online.portfolio), ("Website", online.website)):
        if value.strip():
            lines.append(f"{label}: {value.strip()}")
    return "\n".join(lines)


def render_experience(profile: Profile) -> str:
    blocks: list[str] = []
    for i, exp in enumerate(profile.work_experience, start=1):
        header = f"{i}. {na(exp.position)} at {na(exp.company)}"
        if exp.employment_type != "Full-time":
            header += f" ({exp.employment_type})"
        if exp.location.strip():
            header += f", {exp.location.strip()}"
        bullets = "\n".join(f"   - {ach}" for ach in exp.achievements if ach.strip())
        blocks.append(
            f"{header}\n"
            f"   {period(exp.start_date, exp.end_date, exp.current)}\n"
            f"   Achievements:\n"
            f"{bullets}"
        )
    return "\n\n".join(blocks) if blocks else "N/A"


def render_education(profile: Profile) -> str:
    lines = []
    for edu in profile.education:
        line = f"{na(edu.degree)} in {na(edu.field_of_study)}, {na(edu.institution)} ({na(edu.end_date)})"
        if edu.gpa.strip():
            line += f", GPA {edu.gpa.strip()}"
        lines.append(line)
    return "\n".join(lines) if lines else "N/A"


def render_extras(profile: Profile) -> str:
    sections: list[str] = []
    if profile.projects:
        lines = []
        for project in profile.projects:
            tech = ", ".join(project.technologies)
            line = f"- {na(project.name)}: {project.description.strip()}".rstrip(": ")
            if tech:
                line += f" [{tech}]"
            lines.append(line)
        sections.append("PROJECTS:\n" + "\n".join(lines))
    if profile.certifications:
        lines = [
            f"- {join_present([cert.name, cert.issuing_organization, cert.issue_date], sep=' | ')}"
            for cert in profile.certifications
        ]
        sections.append("CERTIFICATIONS:\n" + "\n".join(lines))
    if profile.languages:
        langs = ", ".join(f"{lang.language} ({lang.proficiency})" for lang in profile.languages if lang.language)
        if langs:
            sections.append(f"LANGUAGES: {langs}")
    return "\n\n".join(sections)


def build_resume_prompt(job_description: str, profile: Profile) -> str:
    summary = profile.professional_summary.strip()
    extras = render_extras(profile)
    parts = [
        "You are an expert resume writer specializing in ATS-optimized resumes.",
        f"JOB DESCRIPTION:\n{(job_description or '').strip() or 'N/A'}",
        f"CANDIDATE PROFILE:\n{render_contact(profile)}",
    ]
    if summary:
        parts.append(f"CURRENT SUMMARY:\n{summary}")
    parts.extend(
        [
            f"WORK EXPERIENCE:\n{render_experience(profile)}",
            "SKILLS:\n"
            f"Technical: {', '.join(profile.skills.technical)}\n"
            f"Soft Skills: {', '.join(profile.skills.soft)}",
            f"EDUCATION:\n{render_education(profile)}",
        ]
    )
    if extras:
        parts.append(extras)
    parts.extend(
        [
            "TASK:\nCreate an ATS-optimized resume tailored to this job description. Follow these rules:",
            RESUME_RULES,
            "4. OUTPUT FORMAT:\n"
            "Return ONLY valid JSON in this exact structure (no markdown, no code blocks):\n"
            f"{RESUME_OUTPUT_EXAMPLE}",
            "Generate the resume now:",
        ]
    )
    return "\n\n".join(parts)
