from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db.base import get_session
from app.core.db_services import FlashcardStore
from app.modules.flashcards.client import GenerationClient
from app.modules.flashcards.main import FlashcardsService


async def get_store(session: AsyncSession = Depends(get_session)) -> FlashcardStore:
    return FlashcardStore(session)


def get_generation_client(request: Request) -> GenerationClient:
    """Shared client built in the app lifespan."""
    return request.app.state.generation_client


def get_flashcards_service(
    store: FlashcardStore = Depends(get_store),
    client: GenerationClient = Depends(get_generation_client),
) -> FlashcardsService:
    return FlashcardsService(store, client)
