"""Turns raw model output into flashcard pairs.

Models are asked for a bare JSON array but routinely wrap it in a code fence
or drop the outer brackets. The stages below undo exactly those two
deviations and nothing else:

1. ``clean_raw_output`` trims whitespace and a surrounding code fence.
2. ``parse_candidates`` parses a JSON array of objects whose values are all
   strings, retrying once with the text wrapped in ``[...]``.
3. ``select_pairs`` keeps candidates that carry both a question and an answer.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from app.core.errors import UnparsableGenerationOutput
from app.core.logging import get_logger

from .models.flashcards import FlashcardPair


logger = get_logger(__name__)

FENCE = "```"
FENCE_OPENERS = ("```json", "```JSON", FENCE)


def clean_raw_output(raw: str) -> str:
    text = raw.strip()
    for opener in FENCE_OPENERS:
        if text.startswith(opener):
            text = text[len(opener):]
            if text.endswith(FENCE):
                text = text[: -len(FENCE)]
            logger.info("Stripped code fence from generation output")
            return text.strip()
    return text


def _load_object_array(text: str) -> Optional[list[dict[str, Any]]]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, list):
        return None
    for item in data:
        if not isinstance(item, dict):
            return None
        if not all(isinstance(value, str) for value in item.values()):
            return None
    return data


def parse_candidates(text: str, raw: Optional[str] = None) -> list[dict[str, Any]]:
    """Parse ``text`` as a JSON array of objects with string-valued fields.

    Raises:
        UnparsableGenerationOutput: if neither the text nor the text wrapped
            in array brackets is such an array. The exception carries ``raw``
            when given, else ``text``.
    """
    candidates = _load_object_array(text)
    if candidates is not None:
        logger.info("Parsed generation output on first try")
        return candidates

    logger.warning("First parse failed, retrying with array brackets")
    candidates = _load_object_array(f"[{text}]")
    if candidates is not None:
        logger.info("Parsed generation output after wrapping in brackets")
        return candidates

    logger.error(f"Could not parse generation output: {text!r}")
    raise UnparsableGenerationOutput(raw=text if raw is None else raw)


def _field(candidate: dict[str, Any], name: str) -> Optional[str]:
    value = candidate.get(name)
    if isinstance(value, str) and value.strip():
        return value
    return None


def select_pairs(candidates: list[dict[str, Any]]) -> list[FlashcardPair]:
    pairs: list[FlashcardPair] = []
    for index, candidate in enumerate(candidates, start=1):
        question = _field(candidate, "question")
        answer = _field(candidate, "answer")
        if question is None or answer is None:
            logger.warning(f"Card {index} missing question or answer, skipped")
            continue
        pairs.append(FlashcardPair(question=question, answer=answer))
    return pairs


def normalize(raw: str) -> list[FlashcardPair]:
    candidates = parse_candidates(clean_raw_output(raw), raw=raw)
    pairs = select_pairs(candidates)
    logger.info(f"Kept {len(pairs)}/{len(candidates)} candidate cards")
    return pairs
