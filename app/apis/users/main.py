from fastapi import APIRouter, Depends, status

from app.apis.deps import get_flashcards_service
from app.modules.flashcards.main import FlashcardsService
from .schemas import UserCreate, UserRead


router = APIRouter()


@router.post(
    "/user",
    response_model=UserRead,
    status_code=status.HTTP_200_OK,
    tags=["users"],
)
async def create_or_get_user(
    req: UserCreate,
    service: FlashcardsService = Depends(get_flashcards_service),
) -> UserRead:
    """Register a username, or return the existing id if it is taken."""
    user = await service.upsert_user(req.username)
    return UserRead(id=user.id, username=user.username)
