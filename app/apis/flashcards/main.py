from __future__ import annotations

from fastapi import APIRouter, Depends, status

from app.apis.deps import get_flashcards_service
from app.modules.flashcards.main import FlashcardsService
from .schemas import (
    GenerateRequest,
    GenerateResponse,
    FlashcardRead,
)


router = APIRouter()


@router.post(
    "/flashcards",
    response_model=GenerateResponse,
    status_code=status.HTTP_200_OK,
    tags=["flashcards"],
)
async def generate_flashcards(
    req: GenerateRequest,
    service: FlashcardsService = Depends(get_flashcards_service),
) -> GenerateResponse:
    pairs = await service.create_flashcards(
        username=req.username,
        topic=req.topic,
        count=req.count,
        level=req.level,
    )
    return GenerateResponse(flashcards=pairs)


@router.get(
    "/flashcards/{username}",
    response_model=list[FlashcardRead],
    tags=["flashcards"],
)
async def list_flashcards(
    username: str,
    service: FlashcardsService = Depends(get_flashcards_service),
) -> list[FlashcardRead]:
    cards = await service.list_flashcards(username)
    return [
        FlashcardRead(id=c.id, topic=c.topic, question=c.question, answer=c.answer)
        for c in cards
    ]
