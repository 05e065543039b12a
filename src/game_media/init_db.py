"""Create the database tables and optionally seed games.

Usage:
    python -m game_media.init_db --game "Celeste" --game "Hades"
"""
from __future__ import annotations

import argparse
import logging

from game_media.core.logging import setup_logging
from game_media.db.session import SessionLocal, create_tables
from game_media.models import Game
from game_media.repositories import GameRepository

logger = logging.getLogger(__name__)


def init_db(game_names: list[str] | None = None) -> list[Game]:
    """Create all tables and insert one game per name."""
    create_tables()
    created: list[Game] = []
    if not game_names:
        return created

    with SessionLocal() as session:
        repo = GameRepository(session)
        for name in game_names:
            created.append(repo.add(Game(name=name)))
        session.commit()
        for game in created:
            logger.info("Seeded game %s (%s)", game.name, game.id)
    return created


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--game", action="append", default=[], help="Name of a game to seed")
    args = parser.parse_args(argv)

    setup_logging()
    init_db(args.game)
    logger.info("Database initialized.")


if __name__ == "__main__":
    main()
