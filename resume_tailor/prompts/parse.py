from __future__ import annotations

import json

from resume_tailor.schemas.profile import (
    Award,
    Certification,
    Education,
    Language,
    Profile,
    Project,
    VolunteerExperience,
    WorkExperience,
)

FLAT_PROFILE_EXAMPLE = """{
  "fullName": "Full Name",
  "email": "email@example.com",
  "phone": "phone number",
  "linkedin": "LinkedIn URL if found",
  "location": "City, State",
  "experience": [
    {
      "company": "Company Name",
      "position": "Job Title",
      "startDate": "YYYY-MM",
      "endDate": "YYYY-MM or empty if current",
      "current": false,
      "achievements": [
        "Achievement bullet point 1",
        "Achievement bullet point 2"
      ]
    }
  ],
  "skills": {
    "technical": ["skill1", "skill2"],
    "soft": ["skill1", "skill2"]
  },
  "education": [
    {
      "school": "University Name",
      "degree": "Degree Type",
      "field": "Field of Study",
      "graduationYear": "YYYY"
    }
  ],
  "certifications": ["cert1", "cert2"]
}"""


def _detailed_profile_example() -> str:
    example = Profile(
        work_experience=[WorkExperience(start_date="YYYY-MM", end_date="YYYY-MM", achievements=[""])],
        education=[Education(start_date="YYYY-MM", end_date="YYYY-MM")],
        projects=[Project()],
        certifications=[Certification()],
        awards=[Award()],
        volunteer_experience=[VolunteerExperience()],
        languages=[Language()],
    ).to_wire(exclude={"schema_version", "updated_at"})
    return json.dumps(example, indent=2)


DETAILED_PROFILE_EXAMPLE = _detailed_profile_example()


def build_parse_prompt(resume_text: str) -> str:
    return (
        "You are an expert at parsing resumes. Extract structured information from this resume text.\n\n"
        f"RESUME TEXT:\n{resume_text}\n\n"
        "TASK:\n"
        "Parse this resume and extract all information into a structured JSON format. "
        "Be thorough and extract everything you can find.\n\n"
        "IMPORTANT: Return ONLY valid JSON (no markdown, no code blocks) in this EXACT structure:\n"
        f"{FLAT_PROFILE_EXAMPLE}\n\n"
        "Extract the information now:"
    )


def build_detailed_parse_prompt(resume_text: str) -> str:
    return (
        "You are an expert at parsing resumes. Extract ALL structured information from this resume text "
        "into a comprehensive JSON format.\n\n"
        f"RESUME TEXT:\n{resume_text}\n\n"
        "TASK:\n"
        "Parse this resume thoroughly and extract ALL information. Include every detail you find.\n\n"
        "IMPORTANT: Return ONLY valid JSON (no markdown, no code blocks) in this EXACT structure:\n"
        f"{DETAILED_PROFILE_EXAMPLE}\n\n"
        "employmentType is one of: Full-time, Part-time, Contract, Freelance, Internship. "
        "When a role is current, set current to true and leave endDate empty.\n"
        "Extract ALL information. Leave arrays empty [] if no data found. Be thorough!"
    )
