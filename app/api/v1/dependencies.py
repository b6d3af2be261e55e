"""
➡️ But : Centraliser les dépendances réutilisables des routes.

Exemples :

get_game_repository() : crée un GameRepository à partir d’une session DB.

get_game_service() : crée un GameService prêt à l'emploi.

🔹 Avantages :

Routes plus propres (pas de code dupliqué).

Facile à injecter dans plusieurs endpoints (Depends()), ou à surcharger dans les tests
(app.dependency_overrides).
"""

from fastapi import Depends
from sqlmodel import Session

from app.db.session import get_session

from app.db.repositories.games import GameRepository
from app.features.games.services import GameService


# -----------------------------
# Repositories
# -----------------------------
def get_game_repository(session: Session = Depends(get_session)) -> GameRepository:
    return GameRepository(session)


# -----------------------------
# Game service
# -----------------------------
def get_game_service(
    game_repo: GameRepository = Depends(get_game_repository),
) -> GameService:
    return GameService(repo=game_repo)
