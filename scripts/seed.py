from sqlmodel import Session

from app.core.config import settings
from app.core.logging_config import setup_logging
from app.db.session import build_engine, init_db
from app.db.repositories.games import GameRepository
from app.features.games.services import GameService

from app.db.seed import load_seed_yaml, seed_games


def run_seed(seed_path: str = "app/db/seed_data.yaml") -> int:
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    engine = build_engine(settings.DATABASE_URL)
    init_db(engine)
    try:
        with Session(engine) as session:
            svc = GameService(repo=GameRepository(session))
            return seed_games(svc, load_seed_yaml(seed_path))
    finally:
        engine.dispose()


if __name__ == "__main__":
    run_seed()
