from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from app.db.models.base import as_utc
from app.db.models.games import Game
from app.features.games.schemas import GameCandidate, GameOut


def next_modification(previous: Optional[datetime], now: datetime) -> datetime:
    """date_modification ne recule jamais et change à chaque mutation (UTC)."""
    now = as_utc(now)
    if previous is None:
        return now
    previous = as_utc(previous)
    if now > previous:
        return now
    return previous + timedelta(microseconds=1)


def _storage_fields(candidate: GameCandidate) -> Dict[str, Any]:
    # présence explicite : un 0 fourni par le client est conservé
    return {
        "titre": candidate.titre,
        "genre": list(candidate.genre),
        "plateforme": list(candidate.plateforme),
        "editeur": candidate.editeur if candidate.editeur is not None else "",
        "developpeur": candidate.developpeur if candidate.developpeur is not None else "",
        "annee_sortie": candidate.annee_sortie,
        "metacritic_score": candidate.metacritic_score,
        "temps_jeu_heures": candidate.temps_jeu_heures if candidate.temps_jeu_heures is not None else 0,
        "termine": candidate.termine if candidate.termine is not None else False,
    }


def to_storage_create(candidate: GameCandidate, now: datetime) -> Dict[str, Any]:
    fields = _storage_fields(candidate)
    fields["favorite"] = False
    now = as_utc(now)
    fields["date_ajout"] = now
    fields["date_modification"] = now
    return fields


def to_storage_update(candidate: GameCandidate, existing: Game, now: datetime) -> Dict[str, Any]:
    """Remplacement complet, sauf id / date_ajout ; favorite conservé s'il est omis."""
    fields = _storage_fields(candidate)
    if candidate.favorite is None:
        fields["favorite"] = bool(existing.favorite)
    else:
        fields["favorite"] = candidate.favorite
    fields["date_modification"] = next_modification(existing.date_modification, now)
    return fields


def to_output(game: Game) -> GameOut:
    return GameOut(
        id=str(game.id),
        titre=game.titre,
        genre=list(game.genre or []),
        plateforme=list(game.plateforme or []),
        editeur=game.editeur if game.editeur is not None else "",
        developpeur=game.developpeur if game.developpeur is not None else "",
        annee_sortie=game.annee_sortie,
        metacritic_score=game.metacritic_score,
        temps_jeu_heures=game.temps_jeu_heures if game.temps_jeu_heures is not None else 0,
        termine=bool(game.termine),
        favorite=bool(game.favorite),
        date_ajout=game.date_ajout,
        date_modification=game.date_modification,
    )
