"""
Education parser for resumes.

Keeps every line that mentions a degree keyword. This is a line-level
heuristic: a line such as "Mentored Master's students" is kept, and a degree
written without a listed keyword ("Licence", "Diplom") is missed.
"""

from typing import Optional

from ..vocabulary import DEFAULT_VOCABULARY, Vocabulary


class EducationParser:
    """Parser for extracting education lines from resume text."""

    def __init__(self, vocabulary: Optional[Vocabulary] = None):
        self.vocabulary = vocabulary or DEFAULT_VOCABULARY

    def extract(self, text: str) -> list[str]:
        """Return trimmed degree lines, deduplicated in first-seen order."""
        entries: dict[str, None] = {}
        for line in text.split("\n"):
            if any(degree in line for degree in self.vocabulary.degree_keywords):
                entries.setdefault(line.strip(), None)
        return list(entries)
