"""
➡️ But : Configurer la base et gérer les sessions de base de données.

build_engine() : connexion à la base (sqlite:///games.db par défaut).

init_db() : crée les tables à partir des modèles SQLModel.

get_session() : dépendance FastAPI qui ouvre une session sur l'engine de l'application,
la fournit aux routes, puis la ferme proprement.

L'engine est créé une seule fois par create_app() et rangé dans app.state.

🔹 Avantages :

Un seul endroit pour gérer les connexions DB.

Réutilisable par injection (Depends(get_session)).
"""

from typing import Any, Dict, Iterator, Optional

from fastapi import Request
from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

# Import all models for creating all tables
from app.db.models.games import Game  # noqa: F401


def build_engine(url: str, *, echo: bool = False) -> Engine:
    assert url, "DATABASE_URL must be set"

    is_sqlite = url.startswith("sqlite:")
    in_memory = is_sqlite and (url in ("sqlite://", "sqlite:///:memory:"))

    connect_args: Dict[str, Any] = {}
    kwargs: Dict[str, Any] = {}
    if is_sqlite:
        # Requis pour SQLite quand utilisé dans un app serveur (multi-threads)
        connect_args["check_same_thread"] = False
    if in_memory:
        # une seule connexion partagée, sinon chaque session voit une base vide
        kwargs["poolclass"] = StaticPool

    return create_engine(
        url,
        echo=echo,
        connect_args=connect_args,
        pool_pre_ping=not is_sqlite,  # ping utile pour Postgres/MySQL ; inutile pour SQLite
        **kwargs,
    )


def init_db(engine: Engine) -> None:
    """
    Crée les tables si elles n'existent pas.
    En prod avec Alembic, préfère des migrations.
    """
    SQLModel.metadata.create_all(engine)


def get_engine(request: Request) -> Engine:
    engine: Optional[Engine] = getattr(request.app.state, "engine", None)
    assert engine is not None, "engine not initialised, use create_app()"
    return engine


def get_session(request: Request) -> Iterator[Session]:
    """
    Dépendance FastAPI : fournit une session par requête.
    Utilisation :
        def route(..., session: Session = Depends(get_session)):
            ...
    """
    with Session(get_engine(request)) as session:
        yield session
