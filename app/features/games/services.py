import logging
import re
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError

from app.db.models.base import utcnow
from app.db.models.games import Game
from app.db.repositories.games import GameRepository
from app.features.games.mapper import (
    next_modification,
    to_output,
    to_storage_create,
    to_storage_update,
)
from app.features.games.schemas import GameCandidate, GameOut, StatsOut
from app.features.games.validation import validate_game

logger = logging.getLogger(__name__)

_ID_RE = re.compile(r"^[0-9]+$")
_MAX_ID = 2**63 - 1


class GameValidationError(Exception):
    """Jeu candidat refusé : un message par règle violée."""

    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = list(errors)


class GameNotFoundError(LookupError):
    """Aucun jeu ne correspond à l'identifiant."""
    pass


class InvalidGameIdError(GameNotFoundError):
    """Identifiant mal formé (ne peut correspondre à aucun jeu)."""
    pass


class GameService:
    """
    Service métier Game : validation, valeurs par défaut, horodatage.

    - create / update : valident le corps complet (remplacement, pas de mise à jour partielle)
    - toggle_favorite : seul chemin dédié au changement de favori
    - stats : agrégats sur toute la collection
    """

    def __init__(self, repo: GameRepository, clock: Callable[[], datetime] = utcnow):
        self.repo = repo
        self.clock = clock

    # -------- Helpers --------

    @staticmethod
    def _parse_id(game_id: Any) -> int:
        raw = str(game_id).strip()
        if not _ID_RE.match(raw):
            raise InvalidGameIdError("INVALID_GAME_ID")
        value = int(raw)
        if value < 1 or value > _MAX_ID:
            raise InvalidGameIdError("INVALID_GAME_ID")
        return value

    def _get_game_or_404(self, game_id: Any) -> Game:
        game = self.repo.get(self._parse_id(game_id))
        if not game:
            raise GameNotFoundError("GAME_NOT_FOUND")
        return game

    @staticmethod
    def _validated_candidate(payload: Any) -> GameCandidate:
        errors = validate_game(payload, is_partial=False)
        if errors:
            raise GameValidationError(errors)
        try:
            return GameCandidate.model_validate(payload)
        except ValidationError as e:
            fields: List[str] = []
            for err in e.errors():
                field = str(err["loc"][0]) if err.get("loc") else "body"
                if field not in fields:
                    fields.append(field)
            raise GameValidationError([f'"{f}" est invalide.' for f in fields])

    # -------- Reads --------

    def list(
        self,
        *,
        genre: Optional[str] = None,
        plateforme: Optional[str] = None,
        termine: Optional[bool] = None,
    ) -> List[GameOut]:
        games = self.repo.list_filtered(genre=genre, plateforme=plateforme, termine=termine)
        return [to_output(g) for g in games]

    def export(self) -> List[GameOut]:
        return self.list()

    def get(self, game_id: Any) -> GameOut:
        return to_output(self._get_game_or_404(game_id))

    def stats(self) -> StatsOut:
        totals = self.repo.totals()
        avg = 0.0
        if totals.total_games > 0:
            # arrondi au dixième, les égalités vers le haut
            avg = float(
                Decimal(totals.metacritic_sum / totals.total_games).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
            )
        return StatsOut(
            totalGames=totals.total_games,
            totalPlayTime=totals.total_play_time,
            completedGames=totals.completed_games,
            avgMetacritic=avg,
        )

    # -------- Writes --------

    def create(self, payload: Any) -> GameOut:
        try:
            candidate = self._validated_candidate(payload)
        except GameValidationError as e:
            logger.info("Game rejected on create: %s", e.errors)
            raise
        game = self.repo.create(**to_storage_create(candidate, self.clock()))
        logger.info("Game %s created (%s)", game.id, game.titre)
        return to_output(game)

    def update(self, game_id: Any, payload: Any) -> GameOut:
        game = self._get_game_or_404(game_id)
        try:
            candidate = self._validated_candidate(payload)
        except GameValidationError as e:
            logger.info("Game %s rejected on update: %s", game.id, e.errors)
            raise
        game = self.repo.update(game, **to_storage_update(candidate, game, self.clock()))
        logger.info("Game %s updated", game.id)
        return to_output(game)

    def delete(self, game_id: Any) -> None:
        game = self._get_game_or_404(game_id)
        deleted_id = game.id
        self.repo.delete(game)
        logger.info("Game %s deleted", deleted_id)

    def toggle_favorite(self, game_id: Any) -> GameOut:
        game = self._get_game_or_404(game_id)
        changes: Dict[str, Any] = {
            "favorite": not bool(game.favorite),
            "date_modification": next_modification(game.date_modification, self.clock()),
        }
        game = self.repo.update(game, **changes)
        logger.info("Game %s favorite=%s", game.id, game.favorite)
        return to_output(game)
