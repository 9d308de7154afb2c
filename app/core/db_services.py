"""Database gateway for users and generated flashcards."""

from __future__ import annotations

from typing import Optional
from sqlalchemy import select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db.schemas.auth import User
from app.core.db.schemas.flashcards import Flashcard
from app.core.errors import StorageError
from app.core.logging import get_logger


logger = get_logger(__name__)


class FlashcardStore:
    """Parameterized reads and writes over the ``users``/``flashcards`` tables.

    Every write commits on its own so that a failed row never takes the rest
    of the session down with it.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def ping(self) -> bool:
        """Return True when the database answers a trivial query."""
        try:
            await self.session.execute(text("SELECT 1"))
            return True
        except (SQLAlchemyError, OSError) as e:
            logger.warning(f"Database ping failed: {e}")
            await self.session.rollback()
            return False

    async def get_user_id(self, username: str) -> Optional[int]:
        try:
            result = await self.session.execute(
                select(User.id).where(User.username == username)
            )
            user_id = result.scalar_one_or_none()
            # End the read transaction before the caller waits on generation
            await self.session.commit()
            return user_id
        except SQLAlchemyError as e:
            logger.error(f"User lookup failed for {username!r}: {e}")
            raise StorageError() from e

    async def upsert_user(self, username: str) -> User:
        """Return the user named ``username``, creating it on first sight."""
        try:
            result = await self.session.execute(
                select(User).where(User.username == username)
            )
            user = result.scalar_one_or_none()
            if user:
                return user

            user = User(username=username)
            self.session.add(user)
            try:
                await self.session.commit()
            except IntegrityError:
                # Lost a race with a concurrent upsert of the same name
                await self.session.rollback()
                result = await self.session.execute(
                    select(User).where(User.username == username)
                )
                return result.scalar_one()

            await self.session.refresh(user)
            return user
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"User upsert failed for {username!r}: {e}")
            raise StorageError() from e

    async def add_flashcard(
        self,
        *,
        user_id: int,
        topic: str,
        question: str,
        answer: str,
    ) -> Flashcard:
        card = Flashcard(
            user_id=user_id,
            topic=topic,
            question=question,
            answer=answer,
        )
        self.session.add(card)
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StorageError(f"Failed to store flashcard: {e}") from e
        return card

    async def list_flashcards(self, username: str) -> list[Flashcard]:
        """All cards owned by ``username``, newest first."""
        try:
            result = await self.session.execute(
                select(Flashcard)
                .join(User, Flashcard.user_id == User.id)
                .where(User.username == username)
                .order_by(Flashcard.created_at.desc(), Flashcard.id.desc())
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Flashcard listing failed for {username!r}: {e}")
            raise StorageError() from e
