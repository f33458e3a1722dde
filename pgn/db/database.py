"""Generate database session"""

import os
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from pgn.db.schema import Base

DATABASE_URL = os.environ.get("PGN_DATABASE_URL", "sqlite:///pgn_games.db")


def make_session_factory(url: str = DATABASE_URL) -> sessionmaker[Session]:
    """Engine + session factory for the given database. All tables are created if missing."""
    engine = create_engine(url)
    # Ensure all tables are created
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine)


def get_db(
    session_factory: sessionmaker[Session] | None = None,
) -> Generator[Session, None, None]:
    db = (session_factory or make_session_factory())()
    try:
        yield db
    finally:
        db.close()
