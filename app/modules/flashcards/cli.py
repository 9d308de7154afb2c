from __future__ import annotations

import argparse
import asyncio
import json

from app.core.logging import setup_logging
from app.modules.flashcards.client import OpenRouterClient
from app.modules.flashcards.models.flashcards import GenerationRequest
from app.modules.flashcards.normalizer import normalize
from app.modules.flashcards.prompts import build_prompt


async def _preview(topic: str, count: int, level: str) -> list[dict]:
    req = GenerationRequest.with_defaults("cli", topic, count, level)
    prompt = build_prompt(req.topic, req.count, req.level)
    client = OpenRouterClient.from_settings()
    raw = await client.generate(prompt.system, prompt.user)
    return [pair.model_dump() for pair in normalize(raw)]


async def _list(username: str) -> list[dict]:
    # Database settings are only required for this command
    from app.core.db.base import async_session_maker
    from app.core.db_services import FlashcardStore

    async with async_session_maker() as session:
        cards = await FlashcardStore(session).list_flashcards(username)
        return [
            {"id": c.id, "topic": c.topic, "question": c.question, "answer": c.answer}
            for c in cards
        ]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="flashcards-gen", description="Flashcards generator CLI"
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    sub = parser.add_subparsers(dest="cmd", required=True)

    g = sub.add_parser("generate", help="Preview a flashcard set without storing it")
    g.add_argument("--topic", "-t", required=True, help="Topic to study")
    g.add_argument("--count", "-n", type=int, default=0, help="Number of cards")
    g.add_argument("--level", "-l", default="", help="Difficulty level")

    ls = sub.add_parser("list", help="Print stored flashcards for a user")
    ls.add_argument("username", help="Owner of the flashcards")

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if args.cmd == "generate":
        if not args.topic.strip():
            raise SystemExit("--topic must not be empty")
        result = asyncio.run(_preview(args.topic, args.count, args.level))
        print(json.dumps({"flashcards": result}, indent=2, ensure_ascii=False))
        return 0
    if args.cmd == "list":
        result = asyncio.run(_list(args.username))
        print(json.dumps(result, indent=2, ensure_ascii=False))
        return 0

    parser.print_help()
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
