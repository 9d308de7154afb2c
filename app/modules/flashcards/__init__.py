"""Flashcards module exports."""

from .models.flashcards import FlashcardPair, GenerationRequest
from .prompts import FlashcardPrompt, build_prompt
from .normalizer import normalize
from .client import OpenRouterClient
from .main import FlashcardsService

__all__ = [
    "FlashcardPair",
    "GenerationRequest",
    "FlashcardPrompt",
    "build_prompt",
    "normalize",
    "OpenRouterClient",
    "FlashcardsService",
]
