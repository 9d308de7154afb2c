from .flashcards import FlashcardPair, GenerationRequest

__all__ = [
    "FlashcardPair",
    "GenerationRequest",
]
