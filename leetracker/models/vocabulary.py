"""Reference vocabulary models (tags, languages, difficulties)."""

from typing import List
from pydantic import Field

from leetracker.models.base import CamelModel
from leetracker.models.problem import Problem


class VocabularyEntry(CamelModel):
    """A tag, language or difficulty with its usage count."""

    id: int
    name: str
    problem_count: int = Field(0, description="Number of problems referencing this entry")


class VocabularyDetail(VocabularyEntry):
    """Vocabulary entry including the problems that reference it."""

    problems: List[Problem] = Field(default_factory=list)
