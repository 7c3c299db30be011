"""
Contact information parser for resumes.

Extracts the candidate name, email address and phone number.

The name heuristic takes the first non-empty line of the document. It
misfires on resumes that open with a logo caption, an address block or a
section title; lines of 50 characters or more are rejected as header noise.
"""

import re
from dataclasses import dataclass
from typing import Optional

from resumatch.utils.constants import NAME_MAX_LENGTH, UNKNOWN_NAME


@dataclass
class ContactInfo:
    """Extracted contact information from a resume."""

    name: str = UNKNOWN_NAME
    email: Optional[str] = None
    phone: Optional[str] = None


class ContactParser:
    """Parser for extracting contact information from resume text."""

    EMAIL_PATTERN = re.compile(
        r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"
    )

    # Optional country code, then 3-3-4 digits with flexible separators
    PHONE_PATTERN = re.compile(
        r"(\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}"
    )

    def parse(self, text: str) -> ContactInfo:
        """Extract all contact fields from text."""
        return ContactInfo(
            name=self.extract_name(text),
            email=self.extract_email(text),
            phone=self.extract_phone(text),
        )

    def extract_name(self, text: str) -> str:
        for line in text.split("\n"):
            candidate = line.strip()
            if candidate:
                return candidate if len(candidate) < NAME_MAX_LENGTH else UNKNOWN_NAME
        return UNKNOWN_NAME

    def extract_email(self, text: str) -> Optional[str]:
        match = self.EMAIL_PATTERN.search(text)
        return match.group(0) if match else None

    def extract_phone(self, text: str) -> Optional[str]:
        match = self.PHONE_PATTERN.search(text)
        return match.group(0).strip() if match else None

    def has_email(self, text: str) -> bool:
        return self.EMAIL_PATTERN.search(text) is not None

    def has_phone(self, text: str) -> bool:
        return self.PHONE_PATTERN.search(text) is not None
