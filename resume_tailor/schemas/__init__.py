from .generation import GeneratedEducation, GeneratedExperience, GeneratedResume, GenerationResult
from .migration import LegacyProfile, upgrade_profile
from .profile import Profile, WorkExperience, blank_profile

__all__ = [
    "GeneratedEducation",
    "GeneratedExperience",
    "GeneratedResume",
    "GenerationResult",
    "LegacyProfile",
    "Profile",
    "WorkExperience",
    "blank_profile",
    "upgrade_profile",
]
