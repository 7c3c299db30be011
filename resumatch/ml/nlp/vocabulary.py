"""
Versioned vocabularies used by the parser and keyword analyzer.

Vocabularies are passed to the components that use them instead of being
read from module globals, so tests and deployments can substitute their own.
"""

from dataclasses import dataclass, field

from resumatch.utils.constants import (
    DEGREE_KEYWORDS,
    SKILL_VOCABULARY,
    STOP_WORDS,
    VOCABULARY_VERSION,
)


@dataclass(frozen=True)
class Vocabulary:
    """Skill list, degree markers and stop words, tagged with a version."""

    version: str = VOCABULARY_VERSION
    skills: tuple[str, ...] = SKILL_VOCABULARY
    degree_keywords: tuple[str, ...] = DEGREE_KEYWORDS
    stop_words: frozenset[str] = field(default=STOP_WORDS)

    def __post_init__(self) -> None:
        # Lists are accepted for convenience and frozen here
        object.__setattr__(self, "skills", tuple(self.skills))
        object.__setattr__(self, "degree_keywords", tuple(self.degree_keywords))
        object.__setattr__(
            self, "stop_words", frozenset(w.lower() for w in self.stop_words)
        )


DEFAULT_VOCABULARY = Vocabulary()
