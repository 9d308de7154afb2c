"""Pydantic models for flashcard generation."""

from typing import Optional

from pydantic import BaseModel

DEFAULT_COUNT = 5
DEFAULT_LEVEL = "beginner"


class FlashcardPair(BaseModel):
    """Simple question/answer flashcard."""

    question: str
    answer: str


class GenerationRequest(BaseModel):
    """A validated request for a new set of flashcards."""

    username: str
    topic: str
    count: int = DEFAULT_COUNT
    level: str = DEFAULT_LEVEL

    @classmethod
    def with_defaults(
        cls,
        username: str,
        topic: str,
        count: Optional[int] = 0,
        level: Optional[str] = "",
    ) -> "GenerationRequest":
        """Fill in the default count and level for unset or non-positive values."""
        return cls(
            username=username,
            topic=topic,
            count=count if count and count > 0 else DEFAULT_COUNT,
            level=level or DEFAULT_LEVEL,
        )
