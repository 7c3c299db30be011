"""
Skills parser for resumes and job descriptions.

Matches the text against a fixed skill vocabulary by case-insensitive
substring search. Results come back in vocabulary order, not text order.

Substring matching over-matches: "Java" is found inside "JavaScript" and
"AI" inside ordinary words such as "maintain".
"""

from typing import Optional

from ..vocabulary import DEFAULT_VOCABULARY, Vocabulary


class SkillsParser:
    """Parser for extracting vocabulary skills from text."""

    def __init__(self, vocabulary: Optional[Vocabulary] = None):
        self.vocabulary = vocabulary or DEFAULT_VOCABULARY
        self._lowered = [(skill, skill.lower()) for skill in self.vocabulary.skills]

    def extract(self, text: str) -> list[str]:
        """
        Find vocabulary skills mentioned in text.

        Returns:
            Canonical vocabulary spellings, deduplicated, in vocabulary order.
        """
        text_lower = text.lower()
        found: dict[str, None] = {}
        for skill, lowered in self._lowered:
            if lowered in text_lower:
                found.setdefault(skill, None)
        return list(found)
