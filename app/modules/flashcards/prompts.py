"""Prompt rendering for flashcard generation."""

from __future__ import annotations

from dataclasses import dataclass


SYSTEM_PROMPT = (
    "You are a flashcard generator and an expert educator. "
    "Write accurate, concise, study-friendly flashcards: each question is "
    "clear and atomic, each answer is correct and short. "
    "Return only a valid JSON array of objects with question and answer "
    "fields. No markdown, no code fences, no commentary."
)


@dataclass(frozen=True)
class FlashcardPrompt:
    system: str
    user: str

    def messages(self) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": self.system},
            {"role": "user", "content": self.user},
        ]


def _build_instruction(topic: str, count: int, level: str) -> str:
    return (
        f"Generate exactly {count} high-quality flashcards for learning "
        f"{topic} at {level} level. "
        "Return ONLY a valid JSON array with this exact format: "
        '[{"question": "...", "answer": "..."}]. No other text.'
    )


def build_prompt(topic: str, count: int, level: str) -> FlashcardPrompt:
    return FlashcardPrompt(
        system=SYSTEM_PROMPT,
        user=_build_instruction(topic, count, level),
    )
