"""
Section parsers for resume text.
"""

from .contact_parser import ContactInfo, ContactParser
from .education_parser import EducationParser
from .skills_parser import SkillsParser

__all__ = [
    "ContactInfo",
    "ContactParser",
    "EducationParser",
    "SkillsParser",
]
