import os
from types import SimpleNamespace

import pytest

# Settings are read at import time; point them at throwaway values first.
os.environ.setdefault("SUPABASE_DB_URL", "sqlite+aiosqlite://")
os.environ.setdefault("OPENROUTER_API_KEY", "test-key")

from app.core.errors import StorageError  # noqa: E402


class FakeStore:
    """In-memory stand-in for FlashcardStore."""

    def __init__(self, fail_questions=()):
        self.users = {}
        self.cards = []
        self.fail_questions = set(fail_questions)

    async def ping(self):
        return True

    async def get_user_id(self, username):
        user = self.users.get(username)
        return user.id if user else None

    async def upsert_user(self, username):
        if username not in self.users:
            self.users[username] = SimpleNamespace(
                id=len(self.users) + 1, username=username
            )
        return self.users[username]

    async def add_flashcard(self, *, user_id, topic, question, answer):
        if question in self.fail_questions:
            raise StorageError("disk full")
        card = SimpleNamespace(
            id=len(self.cards) + 1,
            user_id=user_id,
            topic=topic,
            question=question,
            answer=answer,
        )
        self.cards.append(card)
        return card

    async def list_flashcards(self, username):
        user = self.users.get(username)
        if not user:
            return []
        owned = [c for c in self.cards if c.user_id == user.id]
        return list(reversed(owned))


class FakeClient:
    """Generation client returning canned text and recording every call."""

    def __init__(self, raw="[]", error=None):
        self.raw = raw
        self.error = error
        self.calls = []

    async def generate(self, system_instruction, user_instruction):
        self.calls.append((system_instruction, user_instruction))
        if self.error is not None:
            raise self.error
        return self.raw


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def client():
    return FakeClient(
        raw='[{"question": "Q1", "answer": "A1"}, {"question": "Q2", "answer": "A2"}]'
    )
