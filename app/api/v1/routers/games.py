"""
➡️ But : Définir les endpoints de l’API pour la collection de jeux.

Les routes réceptionnent les requêtes, appellent GameService
et traduisent les erreurs métier en réponses HTTP :

GameValidationError → 400 {"errors": [...]}

InvalidGameIdError → 400 {"error": "ID invalide"}

GameNotFoundError → 404 {"error": "Jeu non trouvé"}
"""

from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.api.v1.dependencies import get_game_service
from app.features.games.schemas import GameCandidate, GameOut
from app.features.games.services import (
    GameService,
    GameValidationError,
    GameNotFoundError,
    InvalidGameIdError,
)

router = APIRouter(
    prefix="/games",
    tags=["games"],
    responses={404: {"description": "Not Found"}},
)

INVALID_ID = "ID invalide"
NOT_FOUND = "Jeu non trouvé"

# Corps JSON libre (absent → None), vérifié par validate_game()
def _candidate_body():
    return Body(
        None,
        description="Jeu candidat",
        examples=GameCandidate.model_config["json_schema_extra"]["examples"],
    )

# -------- Helpers --------

def _error_response(exc: Exception) -> JSONResponse:
    if isinstance(exc, GameValidationError):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": exc.errors})
    if isinstance(exc, InvalidGameIdError):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": INVALID_ID})
    if isinstance(exc, GameNotFoundError):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": NOT_FOUND})
    raise exc

# -----------------------------
# Collection
# -----------------------------
@router.post(
    "",
    summary="Ajouter un jeu",
    status_code=status.HTTP_201_CREATED,
    response_model=GameOut,
    responses={400: {"description": "Erreurs de validation"}},
)
def create_game(
    payload: Any = _candidate_body(),
    svc: GameService = Depends(get_game_service),
):
    try:
        return svc.create(payload)
    except GameValidationError as e:
        return _error_response(e)

@router.get(
    "",
    summary="Lister les jeux",
    description="Du plus récent au plus ancien. Filtres optionnels par genre, plateforme et statut "
                "(`termine=true` pour les jeux terminés, toute autre valeur pour les autres).",
    response_model=List[GameOut],
)
def list_games(
    genre: Optional[str] = Query(None, description="Genre exact", examples=["RPG"]),
    plateforme: Optional[str] = Query(None, description="Plateforme exacte", examples=["PC"]),
    termine: Optional[str] = Query(None, description="Jeu terminé ?", examples=["true"]),
    svc: GameService = Depends(get_game_service),
):
    done = None if termine is None else termine == "true"
    return svc.list(genre=genre or None, plateforme=plateforme or None, termine=done)

@router.get(
    "/export",
    summary="Exporter la collection en JSON",
    response_model=List[GameOut],
)
def export_games(request: Request, svc: GameService = Depends(get_game_service)):
    games = svc.export()
    return JSONResponse(
        content=jsonable_encoder(games),
        headers={"Content-Disposition": f'attachment; filename="{request.app.state.settings.EXPORT_FILENAME}"'},
    )

# -----------------------------
# Un jeu
# -----------------------------
@router.get(
    "/{game_id}",
    summary="Récupérer un jeu",
    response_model=GameOut,
    responses={400: {"description": "ID invalide"}},
)
def get_game(game_id: str, svc: GameService = Depends(get_game_service)):
    try:
        return svc.get(game_id)
    except GameNotFoundError as e:
        return _error_response(e)

@router.put(
    "/{game_id}",
    summary="Remplacer un jeu",
    description="Remplacement complet : titre, genre et plateforme sont obligatoires. "
                "`favorite` est conservé s'il est omis.",
    response_model=GameOut,
    responses={400: {"description": "ID invalide ou erreurs de validation"}},
)
def update_game(
    game_id: str,
    payload: Any = _candidate_body(),
    svc: GameService = Depends(get_game_service),
):
    try:
        return svc.update(game_id, payload)
    except (GameNotFoundError, GameValidationError) as e:
        return _error_response(e)

@router.delete(
    "/{game_id}",
    summary="Supprimer un jeu",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={400: {"description": "ID invalide"}},
)
def delete_game(game_id: str, svc: GameService = Depends(get_game_service)):
    try:
        svc.delete(game_id)
    except GameNotFoundError as e:
        return _error_response(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post(
    "/{game_id}/favorite",
    summary="Basculer le statut favori",
    response_model=GameOut,
    responses={400: {"description": "ID invalide"}},
)
def toggle_favorite(game_id: str, svc: GameService = Depends(get_game_service)):
    try:
        return svc.toggle_favorite(game_id)
    except GameNotFoundError as e:
        return _error_response(e)
