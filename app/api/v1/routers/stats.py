from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_game_service
from app.features.games.schemas import StatsOut
from app.features.games.services import GameService

router = APIRouter(
    prefix="/stats",
    tags=["stats"],
)

@router.get(
    "",
    summary="Statistiques de la collection",
    description="Nombre de jeux, temps de jeu total, jeux terminés et moyenne Metacritic (1 décimale).",
    response_model=StatsOut,
)
def get_stats(svc: GameService = Depends(get_game_service)):
    return svc.stats()
