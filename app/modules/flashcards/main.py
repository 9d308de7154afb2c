"""Flashcards service class.

Ties user lookup, prompt rendering, the generation call, normalization and
persistence together. The store and the generation client are injected so
API handlers, the CLI and tests can each supply their own.
"""

from __future__ import annotations

from typing import Protocol, Optional

from app.core.errors import InvalidRequest, StorageError, UserNotFound
from app.core.logging import get_logger
from app.modules.flashcards.client import GenerationClient
from app.modules.flashcards.models.flashcards import FlashcardPair, GenerationRequest
from app.modules.flashcards.normalizer import normalize
from app.modules.flashcards.prompts import build_prompt


logger = get_logger(__name__)


class Store(Protocol):
    async def get_user_id(self, username: str) -> Optional[int]: ...

    async def upsert_user(self, username: str): ...

    async def add_flashcard(
        self, *, user_id: int, topic: str, question: str, answer: str
    ): ...

    async def list_flashcards(self, username: str) -> list: ...


def _is_blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


class FlashcardsService:
    """Generates, stores and lists flashcards for registered users."""

    def __init__(self, store: Store, client: GenerationClient) -> None:
        self.store = store
        self.client = client

    async def upsert_user(self, username: str):
        if _is_blank(username):
            raise InvalidRequest("Username required")
        user = await self.store.upsert_user(username)
        logger.info(f"User {username!r} resolved to id {user.id}")
        return user

    async def create_flashcards(
        self,
        username: str,
        topic: str,
        count: Optional[int] = 0,
        level: Optional[str] = "",
    ) -> list[FlashcardPair]:
        if _is_blank(username) or _is_blank(topic):
            raise InvalidRequest()

        req = GenerationRequest.with_defaults(username, topic, count, level)
        logger.info(
            f"Flashcard request: username={req.username!r} topic={req.topic!r} "
            f"count={req.count} level={req.level!r}"
        )

        user_id = await self.store.get_user_id(req.username)
        if user_id is None:
            logger.warning(f"User {req.username!r} not found")
            raise UserNotFound()
        logger.info(f"Found user with id {user_id}")

        prompt = build_prompt(req.topic, req.count, req.level)
        logger.debug(f"Prompt: {prompt.user}")

        raw = await self.client.generate(prompt.system, prompt.user)
        pairs = normalize(raw)

        stored = await self._persist(user_id, req.topic, pairs)
        logger.info(f"Stored {stored}/{len(pairs)} cards for {req.username!r}")
        return pairs

    async def _persist(
        self, user_id: int, topic: str, pairs: list[FlashcardPair]
    ) -> int:
        stored = 0
        for index, pair in enumerate(pairs, start=1):
            try:
                await self.store.add_flashcard(
                    user_id=user_id,
                    topic=topic,
                    question=pair.question,
                    answer=pair.answer,
                )
            except StorageError as e:
                logger.error(f"Insert failed for card {index}: {e}")
                continue
            stored += 1
        return stored

    async def list_flashcards(self, username: str) -> list:
        cards = await self.store.list_flashcards(username)
        logger.info(f"Loaded {len(cards)} flashcards for {username!r}")
        return cards
