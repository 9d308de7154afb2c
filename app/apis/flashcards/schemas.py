from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from app.modules.flashcards.models.flashcards import FlashcardPair


class GenerateRequest(BaseModel):
    username: str = ""
    topic: str = ""
    count: Optional[int] = Field(default=None, description="Number of cards; 5 when unset or not positive")
    level: Optional[str] = Field(default=None, description="Difficulty; beginner when unset or empty")


class GenerateResponse(BaseModel):
    flashcards: list[FlashcardPair] = Field(default_factory=list)


class FlashcardRead(BaseModel):
    id: int
    topic: str
    question: str
    answer: str

    model_config = {"from_attributes": True}
